"""
errors.py — Error taxonomy for yt-transcript-scraper.

There is exactly one exception class, TranscriptError.  What went wrong is
carried by its `kind` attribute (an ErrorKind member), so callers branch on
`exc.kind` instead of on isinstance() checks:

    try:
        fetch_transcript(url, lang="fr")
    except TranscriptError as exc:
        if exc.kind is ErrorKind.LANGUAGE_NOT_AVAILABLE:
            print(exc.available_langs)

Every error also carries an `http_status` so the FastAPI error handler can
translate library-level errors into the right HTTP response code without a
separate mapping table.

Kinds:
    INVALID_IDENTIFIER      (400)  Input is neither an 11-char ID nor a known URL.
    TOO_MANY_REQUESTS       (429)  YouTube answered with a CAPTCHA page.
    VIDEO_UNAVAILABLE       (404)  Page has no playability status at all.
    DISABLED                (404)  Page is playable but has no caption tracks.
    NOT_AVAILABLE           (404)  Caption block empty, or track fetch failed.
    LANGUAGE_NOT_AVAILABLE  (400)  No caption track in the requested language.
    REQUEST_FAILED          (502)  The HTTP request itself failed.
    EXTRACTION              (502)  Embedded page data had an unexpected shape.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Closed set of failure kinds.  Values double as stable wire names."""

    INVALID_IDENTIFIER = "invalid_identifier"
    TOO_MANY_REQUESTS = "too_many_requests"
    VIDEO_UNAVAILABLE = "video_unavailable"
    DISABLED = "disabled"
    NOT_AVAILABLE = "not_available"
    LANGUAGE_NOT_AVAILABLE = "language_not_available"
    REQUEST_FAILED = "request_failed"
    EXTRACTION = "extraction"


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.TOO_MANY_REQUESTS: 429,
    ErrorKind.VIDEO_UNAVAILABLE: 404,
    ErrorKind.DISABLED: 404,
    ErrorKind.NOT_AVAILABLE: 404,
    ErrorKind.LANGUAGE_NOT_AVAILABLE: 400,
    ErrorKind.REQUEST_FAILED: 502,
    ErrorKind.EXTRACTION: 502,
}


class TranscriptError(Exception):
    """
    The only exception raised by this package.

    Attributes:
        kind:            Which failure this is (an ErrorKind).
        message:         Human-readable description of what went wrong.
        http_status:     Suggested HTTP status code for the API layer.
        video_id:        The video the failure relates to, when known.
        lang:            The requested language (LANGUAGE_NOT_AVAILABLE only).
        available_langs: Sorted language codes that do exist
                         (LANGUAGE_NOT_AVAILABLE only).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        video_id: str | None = None,
        lang: str | None = None,
        available_langs: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.http_status = _HTTP_STATUS[kind]
        self.video_id = video_id
        self.lang = lang
        self.available_langs = available_langs or []

    def __repr__(self) -> str:
        return f"TranscriptError(kind={self.kind.value!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """JSON-friendly view used by the API and the CLI's --json output."""
        data: dict = {"kind": self.kind.value, "error": self.message}
        if self.video_id is not None:
            data["video_id"] = self.video_id
        if self.kind is ErrorKind.LANGUAGE_NOT_AVAILABLE:
            data["lang"] = self.lang
            data["available_langs"] = self.available_langs
        return data

    # -----------------------------------------------------------------------
    # Constructors, one per kind
    # -----------------------------------------------------------------------

    @classmethod
    def invalid_identifier(cls, raw: str) -> TranscriptError:
        return cls(
            ErrorKind.INVALID_IDENTIFIER,
            f"Impossible to retrieve a YouTube video ID from {raw!r}",
        )

    @classmethod
    def too_many_requests(cls, video_id: str | None = None) -> TranscriptError:
        return cls(
            ErrorKind.TOO_MANY_REQUESTS,
            "YouTube is receiving too many requests from this IP and now "
            "requires solving a captcha to continue",
            video_id=video_id,
        )

    @classmethod
    def video_unavailable(cls, video_id: str) -> TranscriptError:
        return cls(
            ErrorKind.VIDEO_UNAVAILABLE,
            f"The video is no longer available ({video_id})",
            video_id=video_id,
        )

    @classmethod
    def disabled(cls, video_id: str) -> TranscriptError:
        return cls(
            ErrorKind.DISABLED,
            f"Transcript is disabled on this video ({video_id})",
            video_id=video_id,
        )

    @classmethod
    def not_available(cls, video_id: str | None) -> TranscriptError:
        return cls(
            ErrorKind.NOT_AVAILABLE,
            f"No transcripts are available for this video ({video_id})",
            video_id=video_id,
        )

    @classmethod
    def language_not_available(
        cls,
        lang: str,
        available_langs: list[str],
        video_id: str,
    ) -> TranscriptError:
        available = sorted(available_langs)
        return cls(
            ErrorKind.LANGUAGE_NOT_AVAILABLE,
            f"No transcripts are available in {lang} for this video ({video_id}). "
            f"Available languages: {', '.join(available)}",
            video_id=video_id,
            lang=lang,
            available_langs=available,
        )

    @classmethod
    def request_failed(cls, url: str, reason: str) -> TranscriptError:
        return cls(ErrorKind.REQUEST_FAILED, f"Request to {url} failed: {reason}")

    @classmethod
    def extraction(cls, message: str, video_id: str | None = None) -> TranscriptError:
        return cls(ErrorKind.EXTRACTION, message, video_id=video_id)
