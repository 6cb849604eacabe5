"""
page.py — Pull structured data out of a YouTube watch page.

YouTube has no public API for any of this.  The watch page embeds large JSON
objects inside <script> tags, and we locate the two we care about with
literal string anchors rather than an HTML/JS parser:

    "captions":  ... ,"videoDetails          → caption track list
    "twoColumnWatchNextResults": ... },"currentVideoEndpoint":
                                             → related videos + video details

The anchors are not guaranteed to be unique and the text between them is not
guaranteed to be valid JSON, so every locator here returns None instead of
raising when something doesn't line up.

Once parsed, the JSON is an undocumented, versionless tree.  Navigation goes
through dig(), which returns a default instead of raising.  The one deliberate
exception is related-video mapping: a related-video entry that is missing a
required field fails the whole call with an EXTRACTION error.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Any

from yt_transcript_scraper.errors import TranscriptError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Anchors (must match the page byte-for-byte)
# ---------------------------------------------------------------------------

CAPTIONS_MARKER = '"captions":'
CAPTIONS_END_MARKER = ',"videoDetails'
WATCH_NEXT_MARKER = '"twoColumnWatchNextResults":'
WATCH_NEXT_END_MARKER = '},"currentVideoEndpoint":'

# Page-level markers used to classify a page that has no caption block.
CAPTCHA_MARKER = 'class="g-recaptcha"'
PLAYABILITY_MARKER = '"playabilityStatus":'

_NON_DIGITS = re.compile(r"\D")


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CaptionTrack:
    """
    One selectable transcript source for a video.

    Attributes:
        base_url:        Timedtext feed URL for this track.
        track_id:        YouTube's vssId (e.g. ".en" or "a.en" for auto-generated).
        language_code:   BCP-47-ish code such as "en" or "pt-BR".
        kind:            "asr" for auto-generated tracks, otherwise None.
        is_translatable: Whether YouTube offers machine translation of it.
        name:            Display name ("English (auto-generated)"), if present.
    """
    base_url: str
    track_id: str
    language_code: str
    kind: str | None = None
    is_translatable: bool = False
    name: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> CaptionTrack:
        return cls(
            base_url=data.get("baseUrl", ""),
            track_id=data.get("vssId", ""),
            language_code=data.get("languageCode", ""),
            kind=data.get("kind"),
            is_translatable=bool(data.get("isTranslatable", False)),
            name=dig(data, "name", "simpleText") or dig(data, "name", "runs", 0, "text"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RelatedVideo:
    """A sidebar entry from the watch page."""
    video_id: str
    title: str
    thumbnail_url: str
    length_text: str
    channel_thumbnail_url: str
    view_count: int
    channel_id: str
    channel_text: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class VideoDetails:
    """
    Title, description and owner of the video.

    Individual fields are None when YouTube left them out of the page.
    """
    title: str | None
    description: str | None
    owner_name: str | None
    owner_url: str | None

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Defensive navigation
# ---------------------------------------------------------------------------

def dig(data: Any, *path: str | int, default: Any = None) -> Any:
    """
    Walk `path` through nested dicts/lists, returning `default` on any miss.

        dig(item, "title", "runs", 0, "text")

    A missing key, an out-of-range index, or a step into something that
    isn't a container all short-circuit to `default`.
    """
    for step in path:
        try:
            data = data[step]
        except (KeyError, IndexError, TypeError):
            return default
    if data is None:
        return default
    return data


def convert_view_count(view_count: str | None) -> int:
    """
    Turn YouTube's localised view-count text into an int.

    "1,234 views" → 1234, "1.234.567 Aufrufe" → 1234567.
    None, "" and text without any digits all give 0.
    """
    digits = _NON_DIGITS.sub("", view_count or "")
    return int(digits) if digits else 0


# ---------------------------------------------------------------------------
# Caption block
# ---------------------------------------------------------------------------

def has_caption_block(html: str) -> bool:
    """True if the "captions": anchor appears anywhere in the page."""
    return CAPTIONS_MARKER in html


def find_caption_renderer(html: str) -> dict | None:
    """
    Return the playerCaptionsTracklistRenderer object, or None.

    None covers three cases: the anchor is absent, the text up to
    ,"videoDetails isn't valid JSON, or it parses but has no renderer.
    """
    parts = html.split(CAPTIONS_MARKER, 1)
    if len(parts) < 2:
        return None

    raw = parts[1].split(CAPTIONS_END_MARKER, 1)[0].replace("\n", "")
    try:
        block = json.loads(raw)
    except ValueError:
        logger.debug("Caption block is not valid JSON (%d chars)", len(raw))
        return None

    renderer = dig(block, "playerCaptionsTracklistRenderer")
    return renderer if isinstance(renderer, dict) else None


def parse_caption_tracks(renderer: dict) -> list[CaptionTrack] | None:
    """
    Map the renderer's captionTracks into CaptionTrack objects.

    Returns None when the renderer has no captionTracks field at all, which
    is how YouTube marks "caption block present but empty".
    """
    if "captionTracks" not in renderer:
        return None
    return [
        CaptionTrack.from_json(track)
        for track in renderer["captionTracks"] or []
        if isinstance(track, dict)
    ]


# ---------------------------------------------------------------------------
# Watch-next block
# ---------------------------------------------------------------------------

def find_watch_next_results(html: str) -> dict | None:
    """
    Return the parsed twoColumnWatchNextResults object, or None.

    The object runs from just after the start anchor to the first
    },"currentVideoEndpoint": that follows it.  The closing brace in that end
    anchor belongs to the enclosing "contents" object, so the slice ends on
    the watch-next object's own closing brace.
    """
    start = html.find(WATCH_NEXT_MARKER)
    if start < 0:
        return None
    finish = html.find(WATCH_NEXT_END_MARKER, start)
    if finish < 0:
        return None

    raw = html[start + len(WATCH_NEXT_MARKER):finish]
    try:
        data = json.loads(raw)
    except ValueError:
        logger.debug("Watch-next block is not valid JSON (%d chars)", len(raw))
        return None
    return data if isinstance(data, dict) else None


def extract_related_videos(watch_next: dict | None, video_id: str) -> list[RelatedVideo]:
    """
    List the compact-video entries of the sidebar, excluding `video_id` itself.

    A missing results path gives an empty list.  Entries that are not
    compactVideoRenderers (ads, playlists, "show more" continuations) are
    skipped.

    Raises:
        TranscriptError: EXTRACTION if a compact video entry lacks one of the
            fields we map.  One bad entry fails the whole call; it is not
            skipped.
    """
    results = dig(watch_next, "secondaryResults", "secondaryResults", "results")
    if not isinstance(results, list):
        return []

    related: list[RelatedVideo] = []
    for item in results:
        renderer = dig(item, "compactVideoRenderer")
        if not isinstance(renderer, dict) or renderer.get("videoId") == video_id:
            continue
        related.append(_to_related_video(renderer, video_id))
    return related


def _to_related_video(renderer: dict, video_id: str) -> RelatedVideo:
    try:
        thumbnails = renderer["thumbnail"]["thumbnails"]
        byline = renderer["longBylineText"]["runs"][0]
        return RelatedVideo(
            video_id=renderer["videoId"],
            title=renderer["title"]["simpleText"],
            # Thumbnails are listed smallest first.
            thumbnail_url=thumbnails[-1]["url"],
            length_text=dig(renderer, "lengthText", "simpleText", default="00:00"),
            channel_thumbnail_url=renderer["channelThumbnail"]["thumbnails"][0]["url"],
            view_count=convert_view_count(renderer["viewCountText"].get("simpleText")),
            channel_id=byline["navigationEndpoint"]["commandMetadata"]["webCommandMetadata"]["url"],
            channel_text=byline["text"],
        )
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        logger.warning("Related video entry has an unexpected shape: %r", exc)
        raise TranscriptError.extraction(
            f"Unexpected related-video data on watch page ({video_id}): {exc!r}",
            video_id=video_id,
        ) from exc


def _first_renderer(contents: list, key: str) -> dict | None:
    for item in contents:
        renderer = dig(item, key)
        if renderer:
            return renderer
    return None


def extract_video_details(watch_next: dict | None) -> VideoDetails | None:
    """
    Read title, description and owner from the primary/secondary info renderers.

    Returns None when there is no videoSecondaryInfoRenderer.  Any other
    missing field just leaves that attribute as None.
    """
    contents = dig(watch_next, "results", "results", "contents")
    if not isinstance(contents, list):
        return None

    secondary = _first_renderer(contents, "videoSecondaryInfoRenderer")
    if secondary is None:
        return None
    primary = _first_renderer(contents, "videoPrimaryInfoRenderer")

    owner_run = dig(secondary, "owner", "videoOwnerRenderer", "title", "runs", 0)
    return VideoDetails(
        title=dig(primary, "title", "runs", 0, "text"),
        description=dig(secondary, "attributedDescription", "content"),
        owner_name=dig(owner_run, "text"),
        owner_url=dig(owner_run, "navigationEndpoint", "commandMetadata", "webCommandMetadata", "url"),
    )
