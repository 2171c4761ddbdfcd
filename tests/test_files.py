"""Tests for perch.files: file URLs, containment, reads."""

import logging
from pathlib import Path

import pytest

from perch.files import NOT_FOUND_RESPONSE, file_url_to_path, is_parent, read_file


class TestFileUrlToPath:
    def test_local_path(self) -> None:
        assert file_url_to_path("file:///opt/frontend") == Path("/opt/frontend")

    def test_localhost(self) -> None:
        assert file_url_to_path("file://localhost/opt/frontend") == Path("/opt/frontend")

    def test_percent_encoded(self) -> None:
        assert file_url_to_path("file:///opt/my%20frontend") == Path("/opt/my frontend")

    def test_round_trip_with_as_uri(self, tmp_path) -> None:
        assert file_url_to_path(tmp_path.as_uri()) == tmp_path

    def test_not_a_file_url(self) -> None:
        with pytest.raises(ValueError, match="Not a file URL"):
            file_url_to_path("https://example.com/frontend")

    def test_remote_host(self) -> None:
        with pytest.raises(ValueError, match="remote host"):
            file_url_to_path("file://fileserver/share/frontend")

    def test_no_path(self) -> None:
        with pytest.raises(ValueError, match="no path"):
            file_url_to_path("file:")


class TestIsParent:
    def test_child(self) -> None:
        assert is_parent(Path("/opt/frontend"), Path("/opt/frontend/main.js"))

    def test_nested_child(self) -> None:
        assert is_parent(Path("/opt/frontend"), Path("/opt/frontend/a/b/c.js"))

    def test_same_path_is_not_parent(self) -> None:
        assert not is_parent(Path("/opt/frontend"), Path("/opt/frontend"))

    def test_sibling_with_shared_prefix(self) -> None:
        assert not is_parent(Path("/opt/frontend"), Path("/opt/frontend-evil/main.js"))

    def test_dot_dot_escape(self) -> None:
        assert not is_parent(Path("/opt/frontend"), Path("/opt/frontend/../../etc/passwd"))

    def test_dot_dot_back_inside(self) -> None:
        assert is_parent(Path("/opt/frontend"), Path("/opt/frontend/a/../main.js"))


class TestReadFile:
    def test_reads_bytes(self, tmp_path) -> None:
        target = tmp_path / "main.js"
        target.write_bytes(b"console.log(1)")
        assert read_file(target) == b"console.log(1)"

    def test_empty_file(self, tmp_path) -> None:
        target = tmp_path / "empty.js"
        target.write_bytes(b"")
        assert read_file(target) == b""

    def test_missing_file(self, tmp_path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="perch.files"):
            assert read_file(tmp_path / "missing.js") is None
        assert "Failed to read" in caplog.text

    def test_directory(self, tmp_path) -> None:
        assert read_file(tmp_path) is None

    def test_embedded_nul(self, tmp_path) -> None:
        assert read_file(tmp_path / "bad\x00name.js") is None


def test_not_found_response_is_minimal_http() -> None:
    assert NOT_FOUND_RESPONSE.startswith(b"HTTP/1.1 404 Not Found")
