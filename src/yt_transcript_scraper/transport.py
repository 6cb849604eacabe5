"""
transport.py — The two HTTP GETs this package makes.

Everything network-facing goes through http_get(), which keeps the rest of
the code free of requests-specific details and gives tests a single seam to
patch.  There is no retry logic here: a failed request surfaces immediately
as a TranscriptError and the caller decides whether to try again.
"""

from __future__ import annotations

import logging

import requests

from yt_transcript_scraper.errors import TranscriptError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Sent on every request.  YouTube serves a different (script-only) page to
# clients it doesn't recognise as a desktop browser.
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/85.0.4183.83 Safari/537.36,gzip(gfe)"
)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def build_headers(lang: str | None = None) -> dict[str, str]:
    """Fixed User-Agent, plus Accept-Language when a language hint is given."""
    headers = {"User-Agent": USER_AGENT}
    if lang:
        headers["Accept-Language"] = lang
    return headers


def http_get(
    url: str,
    *,
    headers: dict[str, str] | None = None,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> requests.Response:
    """
    Issue a single GET request.

    The response is returned whatever its status code; callers decide what a
    non-2xx status means for them.

    Args:
        url:     Absolute URL to fetch.
        headers: Request headers (defaults to build_headers()).
        session: Optional requests.Session for connection reuse.
        timeout: Optional timeout in seconds, passed through to requests.

    Raises:
        TranscriptError: kind REQUEST_FAILED when requests itself raises
            (DNS failure, refused connection, timeout, ...).
    """
    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, headers=headers or build_headers(), timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("GET %s failed: %s", url, exc)
        raise TranscriptError.request_failed(url, str(exc)) from exc

    logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
    return response
