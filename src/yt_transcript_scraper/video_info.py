"""
video_info.py — Fetch a watch page and assemble everything we can read off it.

One GET to https://www.youtube.com/watch?v=<id> gives us the caption track
list, the related-video sidebar and the video's title/description/owner.
This module runs the page.py extractors over that response and decides which
failure kind (if any) the page represents:

    CAPTCHA page                        → TOO_MANY_REQUESTS
    no caption block, not playable      → VIDEO_UNAVAILABLE
    no caption block, playable          → success, empty caption_tracks
    caption block without captionTracks → NOT_AVAILABLE
    otherwise                           → success
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

from yt_transcript_scraper import page, transport
from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.ids import parse_video_id
from yt_transcript_scraper.page import CaptionTrack, RelatedVideo, VideoDetails

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VideoInfo:
    """
    Everything read from a single watch page.

    Attributes:
        video_id:       The resolved 11-character video ID.
        video_details:  Title/description/owner, or None if the page didn't
                        include a secondary info block.
        caption_tracks: Caption tracks in the order YouTube lists them.
                        Empty when captions are disabled on the video.
        related_videos: Sidebar videos in page order, never including
                        video_id itself.
    """
    video_id: str
    video_details: VideoDetails | None
    caption_tracks: list[CaptionTrack] = field(default_factory=list)
    related_videos: list[RelatedVideo] = field(default_factory=list)

    @property
    def languages(self) -> list[str]:
        """Language codes of the caption tracks, in host order."""
        return [track.language_code for track in self.caption_tracks]

    def find_track(self, lang: str) -> CaptionTrack | None:
        """First caption track whose language code equals `lang`."""
        return next(
            (track for track in self.caption_tracks if track.language_code == lang),
            None,
        )

    def to_dict(self) -> dict:
        return {
            "video_id": self.video_id,
            "video_details": self.video_details.to_dict() if self.video_details else None,
            "caption_tracks": [track.to_dict() for track in self.caption_tracks],
            "related_videos": [video.to_dict() for video in self.related_videos],
        }


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def parse_video_page(html: str, video_id: str) -> VideoInfo:
    """
    Build a VideoInfo from an already-downloaded watch page.

    Split out from fetch_video_info() so saved pages can be parsed offline.

    Raises:
        TranscriptError: TOO_MANY_REQUESTS, VIDEO_UNAVAILABLE, NOT_AVAILABLE,
            or EXTRACTION (malformed related-video entry).
    """
    # A CAPTCHA interstitial wins over anything else the body may contain.
    if page.CAPTCHA_MARKER in html:
        logger.warning("Got a CAPTCHA page for %s", video_id)
        raise TranscriptError.too_many_requests(video_id)

    watch_next = page.find_watch_next_results(html)
    if watch_next is None:
        logger.debug("No watch-next block for %s; related videos and details left empty", video_id)
    video_details = page.extract_video_details(watch_next)
    related_videos = page.extract_related_videos(watch_next, video_id)

    if not page.has_caption_block(html):
        if page.PLAYABILITY_MARKER not in html:
            raise TranscriptError.video_unavailable(video_id)
        logger.debug("No caption block for %s; captions are disabled", video_id)
        return VideoInfo(video_id, video_details, [], related_videos)

    renderer = page.find_caption_renderer(html)
    if renderer is None:
        logger.debug("Caption block for %s has no track list renderer", video_id)
        return VideoInfo(video_id, video_details, [], related_videos)

    caption_tracks = page.parse_caption_tracks(renderer)
    if caption_tracks is None:
        raise TranscriptError.not_available(video_id)

    return VideoInfo(video_id, video_details, caption_tracks, related_videos)


def fetch_video_info(
    url_or_id: str,
    lang: str | None = None,
    *,
    session: requests.Session | None = None,
) -> VideoInfo:
    """
    Download a video's watch page and extract its caption tracks, related
    videos and details.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        lang:      Optional language hint, sent as Accept-Language.  It only
                   affects how YouTube localises the page; it does not
                   filter the caption tracks.
        session:   Optional requests.Session for connection reuse.

    Returns:
        A VideoInfo.  caption_tracks is empty when the video is playable but
        has captions turned off.

    Raises:
        TranscriptError: INVALID_IDENTIFIER, REQUEST_FAILED, plus any kind
            raised by parse_video_page().
    """
    video_id = parse_video_id(url_or_id)
    response = transport.http_get(
        transport.WATCH_URL.format(video_id=video_id),
        headers=transport.build_headers(lang),
        session=session,
    )
    info = parse_video_page(response.text, video_id)
    logger.debug(
        "Video %s: %d caption track(s), %d related video(s)",
        video_id, len(info.caption_tracks), len(info.related_videos),
    )
    return info
