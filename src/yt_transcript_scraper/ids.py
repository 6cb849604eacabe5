"""
ids.py — Turn whatever the caller typed into an 11-character video ID.
"""

from __future__ import annotations

import re

from yt_transcript_scraper.errors import TranscriptError

# Covers:
#   - https://www.youtube.com/watch?v=VIDEO_ID (v= anywhere in the query)
#   - https://youtu.be/VIDEO_ID
#   - https://www.youtube.com/embed/VIDEO_ID, /e/, /v/, /shorts/, /live/
#   - channel-scoped paths such as youtube.com/user/NAME/u/1/VIDEO_ID
# The ID is the 11 characters after the marker, stopping at ", &, ?, / or
# whitespace.
_URL_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?|shorts|live)/|.*[?&]v=)|youtu\.be/)"
    r"(?P<id>[^\"&?/\s]{11})",
    re.IGNORECASE,
)

VIDEO_ID_LENGTH = 11


def parse_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL, or pass an 11-char ID through.

    Any input that is exactly 11 characters long is returned unchanged, with
    no further validation.  Otherwise the known URL shapes are tried.

    Raises:
        TranscriptError: kind INVALID_IDENTIFIER if nothing matches.
    """
    if len(url_or_id) == VIDEO_ID_LENGTH:
        return url_or_id

    match = _URL_PATTERN.search(url_or_id)
    if match:
        return match.group("id")

    raise TranscriptError.invalid_identifier(url_or_id)
