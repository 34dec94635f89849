"""
Field mapping from raw client payloads to the flat result models.

Each field is described by its ordered lookup strategies. The first entries
follow the InnerTube layout (``basic_info``, ``metadata``, ``info``); later
entries cover the flat info dictionaries produced by yt-dlp.
"""

from typing import Any, Dict, List, Optional, Sequence

from yt_normalizer.core.payloads import (
    Lookup,
    at,
    dig,
    extract,
    resolve_transcript_body,
    timedtext_text,
    to_int,
    to_text,
    MISSING,
)
from yt_normalizer.models.schemas import (
    ChannelSummary,
    ChannelVideo,
    FeedVideo,
    PlaylistItem,
    PlaylistSummary,
    SearchEntry,
    TimestampedSegment,
    TranscriptSegment,
    VideoSummary,
)
from yt_normalizer.utils.helpers import compact_date, epoch_to_iso, format_timestamp
from yt_normalizer.utils.logger import logging


def _availability_is(expected: str):
    return lambda value: value == expected if isinstance(value, str) else None


def _first_of_list(value: Any) -> Any:
    if isinstance(value, (list, tuple)) and value:
        return value[0]
    return None


def _string_only(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _date_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return compact_date(value) or value
    return epoch_to_iso(value)


def _map(payload: Any, fields: Dict[str, Sequence[Lookup]], defaults: Dict[str, Any]) -> Dict[str, Any]:
    return {name: extract(payload, lookups, defaults[name]) for name, lookups in fields.items()}


# -------------------------------------------------------------------------
# Videos
# -------------------------------------------------------------------------

VIDEO_FIELDS: Dict[str, Sequence[Lookup]] = {
    "video_id": (at("basic_info", "id"), at("id")),
    "title": (at("basic_info", "title"), at("title")),
    "description": (at("basic_info", "short_description"), at("description")),
    "author": (at("basic_info", "author"), at("uploader"), at("channel")),
    "channel_id": (at("basic_info", "channel_id"), at("channel_id")),
    "duration": (at("basic_info", "duration", convert=to_int), at("duration", convert=to_int)),
    "view_count": (at("basic_info", "view_count", convert=to_int), at("view_count", convert=to_int)),
    "like_count": (at("basic_info", "like_count", convert=to_int), at("like_count", convert=to_int)),
    "published_at": (
        at("basic_info", "start_timestamp", convert=_date_text),
        at("timestamp", convert=_date_text),
        at("upload_date", convert=_date_text),
    ),
    "thumbnails": (at("basic_info", "thumbnail"), at("thumbnails")),
    "is_live": (at("basic_info", "is_live"), at("is_live")),
    "is_private": (at("basic_info", "is_private"), at("availability", convert=_availability_is("private"))),
    "is_unlisted": (at("basic_info", "is_unlisted"), at("availability", convert=_availability_is("unlisted"))),
    "category": (at("basic_info", "category"), at("categories", convert=_first_of_list)),
    "keywords": (at("basic_info", "keywords"), at("tags")),
    "embed_html": (at("basic_info", "embed", "iframe_url", convert=_string_only),),
}

VIDEO_DEFAULTS: Dict[str, Any] = {
    "video_id": "",
    "title": "",
    "description": "",
    "author": "",
    "channel_id": "",
    "duration": 0,
    "view_count": 0,
    "like_count": 0,
    "published_at": "",
    "thumbnails": [],
    "is_live": False,
    "is_private": False,
    "is_unlisted": False,
    "category": "",
    "keywords": [],
    "embed_html": None,
}


def video_summary(info: Any, video_id: str) -> VideoSummary:
    """Map a video info payload; the requested ID backs up a missing one."""
    fields = _map(info, VIDEO_FIELDS, VIDEO_DEFAULTS)
    fields["video_id"] = fields["video_id"] or video_id
    fields["keywords"] = [str(keyword) for keyword in fields["keywords"]]
    return VideoSummary(**fields)


# Search hits, channel tabs, feeds and playlist entries share this vocabulary
ENTRY_FIELDS: Dict[str, Sequence[Lookup]] = {
    "video_id": (at("id"), at("video_id")),
    "title": (at("title", "text"), at("title")),
    "description": (at("snippets", 0, "text"), at("description_snippet", "text"), at("description")),
    "author": (at("author", "name"), at("uploader"), at("channel")),
    "channel_id": (at("author", "id"), at("channel_id"), at("uploader_id")),
    "duration": (at("duration", "seconds", convert=to_int), at("duration", convert=to_int)),
    "view_count": (
        at("view_count", "text"),
        at("short_view_count", "text"),
        at("view_count", convert=to_text),
    ),
    "published_at": (
        at("published", "text"),
        at("timestamp", convert=_date_text),
        at("upload_date", convert=_date_text),
    ),
    "thumbnails": (at("thumbnails"),),
}

ENTRY_DEFAULTS: Dict[str, Any] = {
    "video_id": "",
    "title": "",
    "description": "",
    "author": "",
    "channel_id": "",
    "duration": 0,
    "view_count": "0",
    "published_at": "",
    "thumbnails": [],
}


def _entry_fields(hit: Any, names: Sequence[str]) -> Dict[str, Any]:
    return {name: extract(hit, ENTRY_FIELDS[name], ENTRY_DEFAULTS[name]) for name in names}


def search_entry(hit: Any) -> SearchEntry:
    return SearchEntry(**_entry_fields(hit, SearchEntry.model_fields))


def channel_video(hit: Any) -> ChannelVideo:
    return ChannelVideo(**_entry_fields(hit, ChannelVideo.model_fields))


def feed_video(hit: Any) -> FeedVideo:
    return FeedVideo(**_entry_fields(hit, FeedVideo.model_fields))


def playlist_item(item: Any, position: int) -> PlaylistItem:
    fields = _entry_fields(item, ("video_id", "title", "author", "channel_id", "duration", "thumbnails"))
    return PlaylistItem(position=position, **fields)


def video_list(payload: Any) -> List[Any]:
    """List of video entries from a search, tab or feed payload."""
    return extract(payload, (at("videos"), at("entries"), at("results")), [])


def playlist_entries(playlist: Any) -> List[Any]:
    return extract(playlist, (at("items"), at("videos"), at("entries")), [])


# -------------------------------------------------------------------------
# Channels and playlists
# -------------------------------------------------------------------------

CHANNEL_FIELDS: Dict[str, Sequence[Lookup]] = {
    "channel_id": (at("metadata", "external_id"), at("channel_id"), at("id")),
    "title": (at("metadata", "title"), at("channel"), at("title"), at("uploader")),
    "description": (at("metadata", "description"), at("description")),
    "subscriber_count": (
        at("metadata", "subscriber_count", convert=to_text),
        at("header", "subscribers", "text"),
        at("channel_follower_count", convert=to_text),
    ),
    "video_count": (at("metadata", "video_count", convert=to_int), at("playlist_count", convert=to_int)),
    "view_count": (at("metadata", "view_count", convert=to_text), at("view_count", convert=to_text)),
    "thumbnails": (at("metadata", "thumbnail"), at("metadata", "avatar"), at("thumbnails")),
    "banners": (at("header", "banner"), at("header", "banner", "image")),
    "is_verified": (at("metadata", "is_verified"), at("channel_is_verified")),
    "custom_url": (at("metadata", "vanity_channel_url"), at("uploader_url"), at("channel_url")),
}

CHANNEL_DEFAULTS: Dict[str, Any] = {
    "channel_id": "",
    "title": "",
    "description": "",
    "subscriber_count": "N/A",
    "video_count": 0,
    "view_count": "N/A",
    "thumbnails": [],
    "banners": [],
    "is_verified": False,
    "custom_url": "",
}


def channel_summary(channel: Any, channel_id: str) -> ChannelSummary:
    fields = _map(channel, CHANNEL_FIELDS, CHANNEL_DEFAULTS)
    fields["channel_id"] = fields["channel_id"] or channel_id
    return ChannelSummary(**fields)


PLAYLIST_FIELDS: Dict[str, Sequence[Lookup]] = {
    "playlist_id": (at("id"), at("info", "id")),
    "title": (at("info", "title"), at("title")),
    "description": (at("info", "description"), at("description")),
    "author": (at("info", "author", "name"), at("uploader"), at("channel")),
    "channel_id": (at("info", "author", "id"), at("channel_id"), at("uploader_id")),
    "video_count": (at("info", "total_items", convert=to_int), at("playlist_count", convert=to_int)),
    "view_count": (
        at("info", "view_count", convert=to_text),
        at("info", "views", convert=to_text),
        at("view_count", convert=to_text),
    ),
    "last_updated": (at("info", "last_updated"), at("modified_date", convert=_date_text)),
    "thumbnails": (at("info", "thumbnails"), at("thumbnails")),
    "is_editable": (at("info", "is_editable"),),
    "privacy": (at("info", "privacy"), at("availability")),
}

PLAYLIST_DEFAULTS: Dict[str, Any] = {
    "playlist_id": "",
    "title": "",
    "description": "",
    "author": "",
    "channel_id": "",
    "video_count": 0,
    "view_count": "N/A",
    "last_updated": "",
    "thumbnails": [],
    "is_editable": False,
    "privacy": "unknown",
}


def playlist_summary(playlist: Any, playlist_id: str) -> PlaylistSummary:
    fields = _map(playlist, PLAYLIST_FIELDS, PLAYLIST_DEFAULTS)
    fields["playlist_id"] = fields["playlist_id"] or playlist_id
    return PlaylistSummary(**fields)


# -------------------------------------------------------------------------
# Transcripts
# -------------------------------------------------------------------------

def caption_tracks(info: Any) -> List[Any]:
    """
    Caption tracks of a video info payload.

    InnerTube payloads carry ``captions.caption_tracks``; yt-dlp info dicts
    carry ``subtitles`` and ``automatic_captions`` keyed by language, which
    are turned into tracks with manual subtitles first.
    """
    tracks = dig(info, "captions", "caption_tracks")
    if isinstance(tracks, (list, tuple)):
        return list(tracks)

    languages: List[str] = []
    for key in ("subtitles", "automatic_captions"):
        by_language = dig(info, key)
        if isinstance(by_language, dict):
            languages.extend(code for code in by_language if code not in languages)
    return [{"language_code": code} for code in languages]


TRACK_LANGUAGE = (at("language_code"), at("languageCode"), at("code"))


def track_language(track: Any) -> str:
    return extract(track, TRACK_LANGUAGE, "")


def select_caption_track(tracks: Sequence[Any], language: str) -> Any:
    """
    Pick the track whose language code matches case-insensitively.

    Falls back to the first track when nothing matches.
    """
    wanted = language.lower()
    for track in tracks:
        if track_language(track).lower() == wanted:
            return track

    logging.warning(
        f"No caption track for language '{language}', falling back to '{track_language(tracks[0])}'"
    )
    return tracks[0]


SEGMENT_TEXT = (at("snippet", "text"), at("text"), Lookup((), timedtext_text))
SEGMENT_OFFSET = (
    at("start_ms", convert=to_int),
    at("offset", convert=to_int),
    at("tStartMs", convert=to_int),
)
SEGMENT_DURATION = (at("duration", convert=to_int), at("dDurationMs", convert=to_int))


def transcript_segment(raw: Any) -> TranscriptSegment:
    """Normalize one raw segment to text, offset and duration in milliseconds."""
    text = extract(raw, SEGMENT_TEXT, "")
    offset = extract(raw, SEGMENT_OFFSET, 0)

    duration = extract(raw, SEGMENT_DURATION, None)
    if duration is None:
        start = at("start_ms", convert=to_int).resolve(raw)
        end = at("end_ms", convert=to_int).resolve(raw)
        duration = end - start if start is not MISSING and end is not MISSING else 0

    return TranscriptSegment(text=text, offset=max(offset, 0), duration=max(duration, 0))


def transcript_segments(body: Any) -> List[TranscriptSegment]:
    resolved = resolve_transcript_body(body)
    logging.debug(f"Transcript body shape: {resolved.shape.value} ({len(resolved.segments)} segments)")
    return [transcript_segment(raw) for raw in resolved.segments]


def timestamped_segment(segment: TranscriptSegment) -> TimestampedSegment:
    return TimestampedSegment(
        timestamp=format_timestamp(segment.offset),
        text=segment.text,
        start_time_ms=segment.offset,
        duration_ms=segment.duration,
    )
