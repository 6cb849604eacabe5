"""
cli.py — Command-line interface for yt-transcript-scraper.

Provides the `yt-transcript` command group (registered as a console script
in pyproject.toml):

    get   Fetch a video's transcript.
    info  Show a video's details, caption tracks and related videos.
    feed  Fetch a caption track URL directly.

Usage examples:
    yt-transcript get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    yt-transcript get dQw4w9WgXcQ --lang fr --format json -o rick.json
    yt-transcript info https://youtu.be/dQw4w9WgXcQ
    yt-transcript feed "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en"
"""

from __future__ import annotations

import json
import logging
import sys

import click

from yt_transcript_scraper.captions import get_transcript
from yt_transcript_scraper.errors import TranscriptError
from yt_transcript_scraper.extractor import extract, format_doc, format_text
from yt_transcript_scraper.video_info import fetch_video_info

_FORMATS = ["text", "json", "doc"]


def _emit(text: str, output: str | None) -> None:
    """Write to `output` if given, otherwise to stdout."""
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Written to {output}", err=True)
    else:
        click.echo(text)


def _fail(exc: TranscriptError) -> None:
    # No traceback: the message already says what went wrong.
    click.echo(f"Error: {exc.message}", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests and parsing decisions to stderr.")
def main(verbose: bool) -> None:
    """
    YouTube Transcript Scraper — transcripts, details and related videos
    straight from the watch page.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ---------------------------------------------------------------------------
# Subcommand: get
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--format", "-f",
    "fmt",
    type=click.Choice(_FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: plain text, JSON with timestamps and metadata, or a markdown document.",
)
@click.option("--lang", "-l", default=None, help="Caption language code (e.g. 'fr'). Defaults to the first track.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Write output to a file instead of stdout.")
def get(video: str, fmt: str, lang: str | None, output: str | None) -> None:
    """
    Fetch a YouTube video transcript.

    VIDEO can be a full YouTube URL or an 11-character video ID.
    """
    try:
        result = extract(video, lang=lang, fmt=fmt.lower())
    except TranscriptError as exc:
        _fail(exc)
        return

    if isinstance(result, dict):
        text = json.dumps(result, indent=2, ensure_ascii=False)
    else:
        text = result
    _emit(text, output)


# ---------------------------------------------------------------------------
# Subcommand: info
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option("--lang", "-l", default=None, help="Accept-Language hint for the page request.")
@click.option("--json", "as_json", is_flag=True, help="Print the full info as JSON.")
def info(video: str, lang: str | None, as_json: bool) -> None:
    """
    Show a video's details, caption tracks and related videos.
    """
    try:
        video_info = fetch_video_info(video, lang)
    except TranscriptError as exc:
        _fail(exc)
        return

    if as_json:
        click.echo(json.dumps(video_info.to_dict(), indent=2, ensure_ascii=False))
        return

    details = video_info.video_details
    click.echo(f"Video: {video_info.video_id}")
    if details:
        click.echo(f"  Title: {details.title or '-'}")
        click.echo(f"  Owner: {details.owner_name or '-'} ({details.owner_url or '-'})")

    click.echo()
    if not video_info.caption_tracks:
        click.echo("Caption tracks: none (captions are disabled)")
    else:
        click.echo("Caption tracks:")
        for track in video_info.caption_tracks:
            generated = " [auto-generated]" if track.kind == "asr" else ""
            click.echo(f"  {track.language_code}  {track.name or ''}{generated}")

    if video_info.related_videos:
        click.echo()
        click.echo("Related videos:")
        for related in video_info.related_videos:
            click.echo(f"  [{related.length_text}] {related.title} ({related.channel_text})")
            click.echo(f"    ID: {related.video_id}  views: {related.view_count:,}")


# ---------------------------------------------------------------------------
# Subcommand: feed
# ---------------------------------------------------------------------------

@main.command()
@click.argument("track_url")
@click.option(
    "--format", "-f",
    "fmt",
    type=click.Choice(_FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Write output to a file instead of stdout.")
def feed(track_url: str, fmt: str, output: str | None) -> None:
    """
    Fetch a caption track URL (a timedtext link) directly.
    """
    try:
        segments = get_transcript(track_url)
    except TranscriptError as exc:
        _fail(exc)
        return

    fmt = fmt.lower()
    if fmt == "json":
        text = json.dumps([segment.to_dict() for segment in segments], indent=2, ensure_ascii=False)
    elif fmt == "doc":
        text = format_doc(segments)
    else:
        text = format_text(segments)
    _emit(text, output)
