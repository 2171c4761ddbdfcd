"""Tests for perch.http.response: immutable Response with chainable API."""

import dataclasses

import pytest

from perch.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()

        assert response.body == b""
        assert response.status == 200
        assert response.content_type == "text/html"
        assert response.headers == ()

    def test_with_status_returns_new(self) -> None:
        original = Response(b"x")
        changed = original.with_status(404)

        assert changed.status == 404
        assert original.status == 200

    def test_with_header_appends(self) -> None:
        response = Response().with_header("A", "1").with_header("B", "2")
        assert response.headers == (("A", "1"), ("B", "2"))

    def test_body_bytes_from_str(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Response().status = 500  # type: ignore[misc]
