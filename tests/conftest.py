"""
conftest.py — Shared builders for fake watch pages and caption feeds.

The builders produce HTML shaped like a real watch page: the player
response (with "captions": ... ,"videoDetails") and the initial data (with
"twoColumnWatchNextResults": ... },"currentVideoEndpoint":) embedded in
<script> tags.  Tests tweak the pieces they care about via keyword args.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

VIDEO_ID = "dQw4w9WgXcQ"


def make_track(lang: str, kind: str | None = None, video_id: str = VIDEO_ID) -> dict:
    """A captionTracks entry as it appears in the player response."""
    track = {
        "baseUrl": f"https://www.youtube.com/api/timedtext?v={video_id}&lang={lang}",
        "name": {"simpleText": f"Language {lang}"},
        "vssId": f".{lang}" if kind is None else f"a.{lang}",
        "languageCode": lang,
        "isTranslatable": True,
    }
    if kind is not None:
        track["kind"] = kind
    return track


def make_compact_video(video_id: str, title: str = "A related video", **overrides) -> dict:
    """A secondaryResults entry wrapping a compactVideoRenderer."""
    renderer = {
        "videoId": video_id,
        "title": {"simpleText": title},
        "thumbnail": {"thumbnails": [
            {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg", "width": 120},
            {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg", "width": 480},
        ]},
        "lengthText": {"simpleText": "3:33"},
        "channelThumbnail": {"thumbnails": [{"url": "https://yt3.ggpht.com/channel.jpg"}]},
        "viewCountText": {"simpleText": "1,234 views"},
        "longBylineText": {"runs": [{
            "text": "Some Channel",
            "navigationEndpoint": {
                "commandMetadata": {"webCommandMetadata": {"url": "/@somechannel"}},
            },
        }]},
    }
    renderer.update(overrides)
    return {"compactVideoRenderer": renderer}


def make_watch_next(related: list[dict] | None = None, with_details: bool = True) -> dict:
    """A twoColumnWatchNextResults object."""
    contents: list[dict] = [
        {"videoPrimaryInfoRenderer": {"title": {"runs": [{"text": "Never Gonna Give You Up"}]}}},
    ]
    if with_details:
        contents.append({"videoSecondaryInfoRenderer": {
            "attributedDescription": {"content": "The official video."},
            "owner": {"videoOwnerRenderer": {"title": {"runs": [{
                "text": "Rick Astley",
                "navigationEndpoint": {
                    "commandMetadata": {"webCommandMetadata": {"url": "/@RickAstleyYT"}},
                },
            }]}}},
        }})
    return {
        "results": {"results": {"contents": contents}},
        "secondaryResults": {"secondaryResults": {"results": related or []}},
    }


def build_watch_page(
    tracks: list[dict] | None = None,
    *,
    captions: dict | str | None = "default",
    watch_next: dict | str | None = "default",
    playable: bool = True,
    extra: str = "",
) -> str:
    """
    Assemble a watch page.

    captions="default" wraps `tracks` in a playerCaptionsTracklistRenderer;
    pass a dict to embed a custom caption object, a str to embed raw text,
    or None to leave the caption block out entirely.  watch_next works the
    same way against make_watch_next().
    """
    player: list[str] = ['{"responseContext":{}']
    if playable:
        player.append('"playabilityStatus":{"status":"OK"}')
    if captions is not None:
        if captions == "default":
            captions = {"playerCaptionsTracklistRenderer": {"captionTracks": tracks or []}}
        raw = captions if isinstance(captions, str) else json.dumps(captions)
        player.append(f'"captions":{raw}')
    player.append(f'"videoDetails":{{"videoId":"{VIDEO_ID}"}}}}')

    html = [
        "<!DOCTYPE html><html><head><title>YouTube</title></head><body>",
        f"<script>var ytInitialPlayerResponse = {','.join(player)};</script>",
    ]
    if watch_next is not None:
        if watch_next == "default":
            watch_next = make_watch_next()
        raw = watch_next if isinstance(watch_next, str) else json.dumps(watch_next)
        html.append(
            '<script>var ytInitialData = {"contents":{"twoColumnWatchNextResults":'
            f'{raw}}},"currentVideoEndpoint":{{"clickTrackingParams":"x"}}}};</script>'
        )
    html.append(extra)
    html.append("</body></html>")
    return "\n".join(html)


def build_feed(*segments: tuple[str, str, str]) -> str:
    """A timedtext body from (start, dur, text) tuples."""
    body = "".join(f'<text start="{s}" dur="{d}">{t}</text>' for s, d, t in segments)
    return f'<?xml version="1.0" encoding="utf-8" ?><transcript>{body}</transcript>'


def fake_response(text: str = "", status_code: int = 200) -> MagicMock:
    """Mimics the bits of requests.Response the package reads."""
    response = MagicMock()
    response.text = text
    response.content = text.encode("utf-8")
    response.status_code = status_code
    response.ok = status_code < 400
    return response


@pytest.fixture()
def video_id() -> str:
    return VIDEO_ID
