"""
api.py — FastAPI REST API for yt-transcript-scraper.

Endpoints:
    GET /transcript/{video_id}  — Fetch a transcript (text, JSON or markdown doc).
    GET /info/{video_id}        — Caption tracks, details and related videos.
    GET /health                 — Simple health-check for load balancers / monitoring.

Run with:
    uvicorn yt_transcript_scraper.api:app

The global exception handler catches any TranscriptError and converts it to
an HTTP response using the status code stored on the exception.
"""

from __future__ import annotations

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.extractor import extract
from yt_transcript_scraper.video_info import fetch_video_info

app = FastAPI(
    title="YouTube Transcript Scraper API",
    description="Transcripts, video details and related videos scraped from YouTube watch pages.",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """
    Translate any TranscriptError into an HTTP error response.

    The body carries the error kind so clients can branch on it, plus the
    structured fields for LANGUAGE_NOT_AVAILABLE.
    """
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

# response_model=None because the return type depends on `format`.
@app.get("/transcript/{video_id}", response_model=None)
def get_transcript(
    video_id: str,
    format: str = Query(
        default="text",
        description="Output format: 'text' for plain transcript, 'json' for structured data "
                    "with timestamps and metadata, 'doc' for a readable markdown document.",
        pattern="^(text|json|doc)$",
    ),
    lang: str = Query(
        default="",
        description="Caption language code (e.g. 'fr'). Empty uses the first available track.",
    ),
) -> PlainTextResponse | JSONResponse:
    """
    Fetch the transcript for a single YouTube video.

    **video_id** is the 11-character YouTube video identifier
    (e.g. `dQw4w9WgXcQ`).
    """
    result = extract(video_id, lang=lang or None, fmt=format)

    if isinstance(result, dict):
        return JSONResponse(content=result)
    return PlainTextResponse(content=result)


@app.get("/info/{video_id}")
def get_info(
    video_id: str,
    lang: str = Query(
        default="",
        description="Accept-Language hint sent with the page request.",
    ),
) -> JSONResponse:
    """
    Return the caption tracks, video details and related videos for a video.
    """
    video_info = fetch_video_info(video_id, lang or None)
    return JSONResponse(content=video_info.to_dict())


@app.get("/health")
async def health() -> dict:
    """Returns HTTP 200 with {"status": "ok"}."""
    return {"status": "ok"}
