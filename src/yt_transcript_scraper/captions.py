"""
captions.py — Caption feed parsing.

A caption track's baseUrl returns an XML-ish "timedtext" document:

    <transcript>
      <text start="0.5" dur="2.1">Hello there</text>
      ...
    </transcript>

We don't run it through an XML parser.  The body is pattern-matched element
by element, and the text is kept exactly as YouTube escaped it (entities such
as &amp;#39; are NOT decoded).
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass
from urllib.parse import parse_qs, urlparse

import requests

from yt_transcript_scraper import transport
from yt_transcript_scraper.errors import TranscriptError

logger = logging.getLogger(__name__)

# One <text> element.  Attribute order is fixed in YouTube's output.
_TEXT_ELEMENT = re.compile(r'<text start="([^"]*)" dur="([^"]*)">([^<]*)</text>')

# Leading numeric prefix, the way JavaScript's parseFloat reads a string.
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class TranscriptSegment:
    """
    One timed unit of transcript text.

    Attributes:
        text:     Raw caption text, entity-escaped as delivered.
        offset:   Start time in seconds (NaN if the feed value was garbage).
        duration: Length in seconds (NaN if the feed value was garbage).
        lang:     The `lang` query parameter of the track URL, if it had one.

    to_dict() reports a non-finite offset or duration as None, since JSON has
    no NaN or Infinity.
    """
    text: str
    offset: float
    duration: float
    lang: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("offset", "duration"):
            if not math.isfinite(data[key]):
                data[key] = None
        return data


def _parse_float(value: str) -> float:
    """Lenient float parse: "1.5s" -> 1.5, "-Infinity" -> -inf, "abc" -> nan.  Never raises."""
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return math.nan
    return float(match.group(0))


def parse_feed(xml_text: str, lang: str | None = None) -> list[TranscriptSegment]:
    """
    Turn a timedtext body into segments, in document order.

    An empty body or one with no <text> elements yields an empty list.

    Args:
        xml_text: The raw feed body.
        lang:     Language tag to stamp on every segment.
    """
    return [
        TranscriptSegment(
            text=text,
            offset=_parse_float(start),
            duration=_parse_float(dur),
            lang=lang,
        )
        for start, dur, text in _TEXT_ELEMENT.findall(xml_text)
    ]


def _query_param(url: str, name: str) -> str | None:
    values = parse_qs(urlparse(url).query).get(name)
    return values[0] if values else None


def get_transcript(
    track_url: str,
    *,
    session: requests.Session | None = None,
) -> list[TranscriptSegment]:
    """
    Fetch one caption track URL and parse it.

    Works with any track URL, including ones obtained out-of-band.  The video
    ID used in error messages and the language stamped on segments both come
    from the URL's own query string (`v` and `lang`).

    Raises:
        TranscriptError: NOT_AVAILABLE when the feed answers with a non-2xx
            status, REQUEST_FAILED when the request can't be made at all.
    """
    response = transport.http_get(track_url, headers=transport.build_headers(), session=session)
    if not response.ok:
        video_id = _query_param(track_url, "v")
        logger.warning("Caption feed for %s returned HTTP %s", video_id, response.status_code)
        raise TranscriptError.not_available(video_id)

    segments = parse_feed(response.text, lang=_query_param(track_url, "lang"))
    logger.debug("Parsed %d caption segments", len(segments))
    return segments
