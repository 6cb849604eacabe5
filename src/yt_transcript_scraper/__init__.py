"""
yt_transcript_scraper — Scrape YouTube transcripts, video details and related
videos straight from the watch page.  No API key, no login.

Public API:
    fetch_transcript()   URL/ID → VideoTranscript (segments + details + related).
    fetch_video_info()   URL/ID → VideoInfo (caption tracks + details + related).
    get_transcript()     Caption track URL → list of TranscriptSegment.
    parse_video_id()     Parse a YouTube URL or pass through an 11-char ID.
    parse_feed()         Parse a timedtext body you already have.
    extract()            High-level one-call interface (URL → formatted output).

Errors:
    Every failure is a TranscriptError.  Branch on `exc.kind` (an ErrorKind):
    INVALID_IDENTIFIER, TOO_MANY_REQUESTS, VIDEO_UNAVAILABLE, DISABLED,
    NOT_AVAILABLE, LANGUAGE_NOT_AVAILABLE, REQUEST_FAILED, EXTRACTION.

Usage:
    from yt_transcript_scraper import fetch_transcript
    result = fetch_transcript("https://www.youtube.com/watch?v=dQw4w9WgXcQ", lang="en")
    for segment in result.transcript:
        print(segment.offset, segment.text)
"""

from yt_transcript_scraper.captions import (
    TranscriptSegment,
    get_transcript,
    parse_feed,
)
from yt_transcript_scraper.errors import ErrorKind, TranscriptError
from yt_transcript_scraper.extractor import (
    VideoTranscript,
    extract,
    fetch_transcript,
    format_doc,
    format_json,
    format_text,
)
from yt_transcript_scraper.ids import parse_video_id
from yt_transcript_scraper.page import (
    CaptionTrack,
    RelatedVideo,
    VideoDetails,
    convert_view_count,
)
from yt_transcript_scraper.video_info import VideoInfo, fetch_video_info

__all__ = [
    "fetch_transcript",
    "fetch_video_info",
    "get_transcript",
    "parse_video_id",
    "parse_feed",
    "extract",
    "format_text",
    "format_json",
    "format_doc",
    "convert_view_count",
    "CaptionTrack",
    "RelatedVideo",
    "VideoDetails",
    "VideoInfo",
    "TranscriptSegment",
    "VideoTranscript",
    "ErrorKind",
    "TranscriptError",
]
