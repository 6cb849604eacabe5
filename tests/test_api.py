"""
test_api.py — Tests for the FastAPI web API endpoints.

Uses FastAPI's TestClient (backed by httpx) so tests run in-process without
needing a live server.  Fetching is mocked so these tests are fast and don't
require network access.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from conftest import VIDEO_ID, build_watch_page, fake_response, make_track
from yt_transcript_scraper.api import app
from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.page import CaptionTrack
from yt_transcript_scraper.transport import WATCH_URL
from yt_transcript_scraper.video_info import VideoInfo


@pytest.fixture()
def client() -> TestClient:
    """Create a fresh TestClient for each test."""
    return TestClient(app)


_SAMPLE_TEXT = "Hello world\nSecond line"
_SAMPLE_JSON = {
    "video_id": VIDEO_ID,
    "video_details": None,
    "segment_count": 1,
    "segments": [{"text": "Hello world", "offset": 0.0, "duration": 1.5, "lang": "en"}],
    "related_videos": [],
}


class TestHealth:

    def test_health_returns_ok(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestTranscriptEndpoint:
    """GET /transcript/{video_id} with extract() mocked."""

    @patch("yt_transcript_scraper.api.extract")
    def test_text_format(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.return_value = _SAMPLE_TEXT

        resp = client.get(f"/transcript/{VIDEO_ID}")

        assert resp.status_code == 200
        assert resp.text == _SAMPLE_TEXT
        mock_extract.assert_called_once_with(VIDEO_ID, lang=None, fmt="text")

    @patch("yt_transcript_scraper.api.extract")
    def test_json_format_with_lang(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.return_value = _SAMPLE_JSON

        resp = client.get(f"/transcript/{VIDEO_ID}?format=json&lang=en")

        assert resp.status_code == 200
        assert resp.json()["segment_count"] == 1
        mock_extract.assert_called_once_with(VIDEO_ID, lang="en", fmt="json")

    def test_invalid_format_returns_422(self, client: TestClient) -> None:
        resp = client.get(f"/transcript/{VIDEO_ID}?format=xml")
        assert resp.status_code == 422


class TestGarbledFeed:
    """A real extract() run over a feed whose timings don't parse."""

    @patch("yt_transcript_scraper.transport.http_get")
    def test_json_format_reports_unparsed_times_as_null(
        self, mock_get: MagicMock, client: TestClient
    ) -> None:
        track = make_track("en")
        pages = {
            WATCH_URL.format(video_id=VIDEO_ID): fake_response(build_watch_page([track])),
            track["baseUrl"]: fake_response('<text start="abc" dur="1">hi</text>'),
        }
        mock_get.side_effect = lambda url, **kwargs: pages[url]

        resp = client.get(f"/transcript/{VIDEO_ID}?format=json")

        assert resp.status_code == 200
        [segment] = resp.json()["segments"]
        assert segment == {"text": "hi", "offset": None, "duration": 1.0, "lang": "en"}


class TestErrors:
    """TranscriptError kinds map to their HTTP status and a typed body."""

    @patch("yt_transcript_scraper.api.extract")
    def test_language_not_available(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.side_effect = TranscriptError.language_not_available("xx", ["fr", "en"], VIDEO_ID)

        resp = client.get(f"/transcript/{VIDEO_ID}?lang=xx")

        assert resp.status_code == 400
        body = resp.json()
        assert body["kind"] == "language_not_available"
        assert body["available_langs"] == ["en", "fr"]

    @patch("yt_transcript_scraper.api.extract")
    def test_too_many_requests(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.side_effect = TranscriptError.too_many_requests(VIDEO_ID)

        resp = client.get(f"/transcript/{VIDEO_ID}")

        assert resp.status_code == 429
        assert resp.json()["kind"] == "too_many_requests"

    @patch("yt_transcript_scraper.api.extract")
    def test_disabled(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.side_effect = TranscriptError.disabled(VIDEO_ID)

        resp = client.get(f"/transcript/{VIDEO_ID}")

        assert resp.status_code == 404
        assert "error" in resp.json()


class TestInfoEndpoint:

    @patch("yt_transcript_scraper.api.fetch_video_info")
    def test_info(self, mock_info: MagicMock, client: TestClient) -> None:
        mock_info.return_value = VideoInfo(
            video_id=VIDEO_ID,
            video_details=None,
            caption_tracks=[CaptionTrack("https://x?v=a&lang=en", ".en", "en")],
        )

        resp = client.get(f"/info/{VIDEO_ID}?lang=en")

        assert resp.status_code == 200
        data = resp.json()
        assert data["caption_tracks"][0]["language_code"] == "en"
        assert data["related_videos"] == []
        mock_info.assert_called_once_with(VIDEO_ID, "en")

    @patch("yt_transcript_scraper.api.fetch_video_info")
    def test_unavailable(self, mock_info: MagicMock, client: TestClient) -> None:
        mock_info.side_effect = TranscriptError.video_unavailable(VIDEO_ID)

        resp = client.get(f"/info/{VIDEO_ID}")

        assert resp.status_code == 404
        assert resp.json()["kind"] == "video_unavailable"
