"""
test_transport.py — Tests for the HTTP helper.

requests.get is mocked; nothing leaves the process.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from conftest import fake_response
from yt_transcript_scraper.errors import ErrorKind, TranscriptError
from yt_transcript_scraper.transport import USER_AGENT, build_headers, http_get


class TestBuildHeaders:

    def test_user_agent_only(self) -> None:
        assert build_headers() == {"User-Agent": USER_AGENT}

    def test_with_language(self) -> None:
        assert build_headers("fr") == {"User-Agent": USER_AGENT, "Accept-Language": "fr"}


class TestHttpGet:

    @patch("yt_transcript_scraper.transport.requests.get")
    def test_plain_get(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response("body")

        response = http_get("https://example.com/x")

        assert response.text == "body"
        mock_get.assert_called_once_with(
            "https://example.com/x", headers={"User-Agent": USER_AGENT}, timeout=None,
        )

    @patch("yt_transcript_scraper.transport.requests.get")
    def test_non_success_status_is_returned(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response("gone", status_code=410)
        assert http_get("https://example.com/x").status_code == 410

    def test_uses_session_when_given(self) -> None:
        session = MagicMock()
        session.get.return_value = fake_response("ok")

        http_get("https://example.com/x", headers={"User-Agent": "t"}, session=session, timeout=5)

        session.get.assert_called_once_with("https://example.com/x", headers={"User-Agent": "t"}, timeout=5)

    @patch("yt_transcript_scraper.transport.requests.get")
    def test_request_exception_is_wrapped(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(TranscriptError) as exc_info:
            http_get("https://example.com/x")

        assert exc_info.value.kind is ErrorKind.REQUEST_FAILED
        assert exc_info.value.http_status == 502
        assert "connection refused" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
