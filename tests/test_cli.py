"""Tests for perch.cli: CLI entrypoint and argument parsing."""

import pytest

from perch.cli import main


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_resolve_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "--help"])
        assert exc_info.value.code == 0

    def test_mime_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["mime", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_resolve_missing_url(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve"])
        assert exc_info.value.code == 2

    def test_mime_missing_names(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["mime"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "perch" in captured.out


class TestMime:
    def test_prints_one_per_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["mime", "x.JS", "noext", "a.b.svg"])

        lines = capsys.readouterr().out.splitlines()
        assert lines == ["application/javascript", "text/html", "image/svg+xml"]


class TestResolve:
    def test_bundled_to_output_file(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
        bundle = tmp_path / "bundle"
        bundle.mkdir()
        (bundle / "inspector.html").write_bytes(b"<html>")
        out = tmp_path / "out.html"

        main(["resolve", "bundled/inspector.html", "--bundle", str(bundle), "-o", str(out)])

        assert out.read_bytes() == b"<html>"
        assert "bundled text/html" in capsys.readouterr().err

    def test_file_override(self, tmp_path) -> None:
        (tmp_path / "main.js").write_bytes(b"1;")
        out = tmp_path / "out.js"

        main(
            [
                "resolve",
                "devtools://devtools/bundled/serve_file/40/main.js",
                "--custom-devtools-frontend",
                tmp_path.as_uri(),
                "--output",
                str(out),
            ]
        )

        assert out.read_bytes() == b"1;"

    def test_no_body_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "other/thing"])
        assert exc_info.value.code == 1
        assert "unhandled" in capsys.readouterr().err

    def test_missing_bundle_directory_exits_two(self, tmp_path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "bundled/a.js", "--bundle", str(tmp_path / "missing")])
        assert exc_info.value.code == 2

    def test_invalid_mount_exits_two(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["resolve", "bundled/a.js", "--bundled-path", "a/b"])
        assert exc_info.value.code == 2
