"""
extractor.py — Transcript orchestration and output formatting.

This is the public face of yt-transcript-scraper.  It chains the pieces
together:

    1. Resolving URLs / IDs          → parse_video_id()   (ids.py)
    2. Reading the watch page        → fetch_video_info() (video_info.py)
    3. Picking and fetching a track  → fetch_transcript()
    4. Formatting output             → format_text(), format_json(), format_doc()
    5. One-call convenience          → extract()

At most two requests are made per call, one after the other: the watch page,
then the chosen caption feed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable

import requests

from yt_transcript_scraper.captions import TranscriptSegment, get_transcript
from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.ids import parse_video_id
from yt_transcript_scraper.page import RelatedVideo, VideoDetails
from yt_transcript_scraper.video_info import fetch_video_info

logger = logging.getLogger(__name__)

__all__ = [
    "VideoTranscript",
    "extract",
    "fetch_transcript",
    "format_doc",
    "format_json",
    "format_text",
    "parse_video_id",
]


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VideoTranscript:
    """
    A transcript plus the page metadata fetched alongside it.

    Attributes:
        video_id:       The resolved 11-character video ID.
        video_details:  Title/description/owner, or None if unavailable.
        transcript:     Segments in chronological (feed) order.
        related_videos: Sidebar videos from the watch page.
    """
    video_id: str
    video_details: VideoDetails | None
    transcript: list[TranscriptSegment] = field(default_factory=list)
    related_videos: list[RelatedVideo] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Transcript fetching
# ---------------------------------------------------------------------------

def fetch_transcript(
    url_or_id: str,
    lang: str | None = None,
    *,
    session: requests.Session | None = None,
) -> VideoTranscript:
    """
    Fetch the transcript of a single YouTube video.

    Without `lang` the first caption track YouTube lists is used (usually the
    uploader's own track, or the auto-generated one).  With `lang` the first
    track whose language code matches exactly is used.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        lang:      Optional language code such as "en" or "pt-BR".  Also
                   sent as Accept-Language on the page request.
        session:   Optional requests.Session for connection reuse.

    Returns:
        A VideoTranscript.

    Raises:
        TranscriptError with kind:
            INVALID_IDENTIFIER      The input isn't a video reference.
            TOO_MANY_REQUESTS       YouTube served a CAPTCHA.
            VIDEO_UNAVAILABLE       The video is gone, private or never existed.
            LANGUAGE_NOT_AVAILABLE  `lang` was given and no track matches it.
            DISABLED                No `lang` given and the video has no tracks.
            NOT_AVAILABLE           Empty caption block, or the feed fetch failed.
            REQUEST_FAILED          A request couldn't be made.
            EXTRACTION              The page data had an unexpected shape.
    """
    info = fetch_video_info(url_or_id, lang, session=session)

    if lang:
        track = info.find_track(lang)
        if track is None:
            raise TranscriptError.language_not_available(lang, info.languages, info.video_id)
    elif info.caption_tracks:
        track = info.caption_tracks[0]
    else:
        raise TranscriptError.disabled(info.video_id)

    logger.debug("Using caption track %s (%s) for %s", track.track_id, track.language_code, info.video_id)
    transcript = get_transcript(track.base_url, session=session)

    return VideoTranscript(
        video_id=info.video_id,
        video_details=info.video_details,
        transcript=transcript,
        related_videos=info.related_videos,
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(transcript: Iterable[TranscriptSegment]) -> str:
    """
    Plain text, one line per segment, no timestamps.

    Text is emitted exactly as YouTube escaped it.
    """
    return "\n".join(segment.text for segment in transcript)


def format_json(result: VideoTranscript) -> dict:
    """
    Build a JSON-serialisable dict from a fetched transcript.

    Returns:
        A dict with keys: video_id, video_details, segment_count, segments,
        related_videos.  Each segment has: text, offset, duration, lang.
    """
    segments = [segment.to_dict() for segment in result.transcript]
    return {
        "video_id": result.video_id,
        "video_details": result.video_details.to_dict() if result.video_details else None,
        "segment_count": len(segments),
        "segments": segments,
        "related_videos": [video.to_dict() for video in result.related_videos],
    }


# A new paragraph starts in the "doc" format whenever a segment's offset is
# this many seconds past the start of the current paragraph.
_DOC_PARAGRAPH_INTERVAL_SECS = 30


def _seconds_to_mmss(seconds: float) -> str:
    """92.5 → "01:32".  Values past an hour keep counting minutes ("61:01")."""
    if not math.isfinite(seconds):
        return "--:--"
    total = int(seconds)
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


def format_doc(transcript: Iterable[TranscriptSegment]) -> str:
    """
    Render segments as a markdown document of ~30-second paragraphs.

    Each paragraph is prefixed with a bold **[MM:SS]** marker and paragraphs
    are separated by blank lines.  Segments whose offset isn't a number
    (a garbled feed) are appended to the current paragraph, and a paragraph
    that starts on one is marked [--:--].

    Returns:
        The markdown text, or "" for an empty transcript.
    """
    paragraphs: list[str] = []
    current_texts: list[str] = []
    paragraph_start: float | None = None

    for segment in transcript:
        if paragraph_start is None:
            paragraph_start = segment.offset
            current_texts.append(segment.text)
        elif segment.offset - paragraph_start >= _DOC_PARAGRAPH_INTERVAL_SECS:
            paragraphs.append(f"**[{_seconds_to_mmss(paragraph_start)}]** {' '.join(current_texts)}")
            paragraph_start = segment.offset
            current_texts = [segment.text]
        else:
            current_texts.append(segment.text)

    if current_texts and paragraph_start is not None:
        paragraphs.append(f"**[{_seconds_to_mmss(paragraph_start)}]** {' '.join(current_texts)}")

    return "\n\n".join(paragraphs)


# ---------------------------------------------------------------------------
# High-level convenience function
# ---------------------------------------------------------------------------

def extract(
    url_or_id: str,
    lang: str | None = None,
    fmt: str = "text",
) -> str | dict:
    """
    One-call interface: resolve → fetch → format.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        lang:      Optional language code.
        fmt:       "text", "json" or "doc".

    Returns:
        A string for "text" and "doc", a dict for "json".

    Raises:
        ValueError:      If fmt is not one of the known formats.
        TranscriptError: On any extraction failure.
    """
    if fmt not in ("text", "json", "doc"):
        raise ValueError(f"Unknown format {fmt!r}; expected 'text', 'json', or 'doc'")

    result = fetch_transcript(url_or_id, lang)

    if fmt == "json":
        return format_json(result)
    if fmt == "doc":
        return format_doc(result.transcript)
    return format_text(result.transcript)
