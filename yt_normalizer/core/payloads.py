"""
Defensive access to loosely typed client payloads.

Upstream payloads have no versioned schema: the same value can live at
different paths depending on the client release or backend, and a payload may
be a mapping or an object with attributes. Every field is therefore read
through an ordered list of ``Lookup`` strategies; the first one yielding a
usable value wins and the last resort is a type-appropriate default.

Structural families (transcript bodies, related-video feeds) are resolved to
a tagged shape so callers can tell which variant matched, including the
explicit ``MISSING`` variant.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

PathKey = Union[str, int]


class _Missing:
    """Sentinel for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()


def dig(payload: Any, *path: PathKey) -> Any:
    """
    Walk ``path`` through mappings, attributes and sequence indexes.

    Never raises: any step that cannot be resolved returns ``MISSING``.
    """
    current = payload
    for key in path:
        if current is None or current is MISSING:
            return MISSING
        if isinstance(key, int):
            if isinstance(current, (list, tuple)) and -len(current) <= key < len(current):
                current = current[key]
                continue
            return MISSING
        if isinstance(current, dict):
            if key not in current:
                return MISSING
            current = current[key]
            continue
        try:
            current = getattr(current, key)
        except Exception:
            return MISSING
    return current


@dataclass(frozen=True)
class Lookup:
    """One extraction strategy: a path and an optional converter."""

    path: Tuple[PathKey, ...]
    convert: Optional[Callable[[Any], Any]] = None

    def resolve(self, payload: Any) -> Any:
        value = dig(payload, *self.path)
        if value is MISSING or value is None:
            return MISSING
        if self.convert is not None:
            try:
                value = self.convert(value)
            except (TypeError, ValueError, OverflowError):
                return MISSING
            if value is None:
                return MISSING
        return value


def at(*path: PathKey, convert: Optional[Callable[[Any], Any]] = None) -> Lookup:
    """Shorthand for building a ``Lookup``."""
    return Lookup(tuple(path), convert)


def _fits(value: Any, default: Any) -> bool:
    """Check that a resolved value has the type family of the default."""
    if default is None:
        return True
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, str):
        return isinstance(value, str) and value != ""
    if isinstance(default, list):
        return isinstance(value, (list, tuple))
    return isinstance(value, type(default))


def extract(payload: Any, lookups: Sequence[Lookup], default: Any) -> Any:
    """
    Return the first lookup result that fits the default's type, else the default.

    Empty strings are treated as absent so that a blank primary field falls
    through to its alternates.
    """
    for lookup in lookups:
        value = lookup.resolve(payload)
        if value is MISSING:
            continue
        if _fits(value, default):
            return list(value) if isinstance(default, list) else value
    return copy.copy(default)


def to_int(value: Any) -> Optional[int]:
    """Parse ints, floats and numeric strings; anything else gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return None
        return int(float(cleaned))
    return None


def to_text(value: Any) -> Optional[str]:
    """Render numbers as strings; strings pass through."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(int(value))
    return None


# -------------------------------------------------------------------------
# Transcript bodies
# -------------------------------------------------------------------------

class TranscriptBodyShape(str, Enum):
    """Known layouts of a fetched transcript body."""
    NESTED = "nested"
    TOP_LEVEL = "top_level"
    SEGMENT_LIST = "segment_list"
    TIMEDTEXT = "timedtext"
    MISSING = "missing"


@dataclass(frozen=True)
class TranscriptBody:
    shape: TranscriptBodyShape
    segments: List[Any]


def timedtext_text(event: Any) -> Optional[str]:
    """Joined ``segs[].utf8`` runs of a json3 event, stripped; None without runs."""
    runs = dig(event, "segs")
    if not isinstance(runs, (list, tuple)):
        return None
    return "".join(run.get("utf8", "") for run in runs if isinstance(run, dict)).strip()


def _timedtext_events(payload: Any) -> Any:
    events = dig(payload, "events")
    if not isinstance(events, (list, tuple)):
        return MISSING
    # Line-break events ({"aAppend": 1, "segs": [{"utf8": "\n"}]}) carry no text
    return [event for event in events if timedtext_text(event)]


TRANSCRIPT_BODY_STRATEGIES: Tuple[Tuple[TranscriptBodyShape, Callable[[Any], Any]], ...] = (
    (TranscriptBodyShape.NESTED,
     lambda body: dig(body, "transcript", "content", "body", "initial_segments")),
    (TranscriptBodyShape.TOP_LEVEL,
     lambda body: dig(body, "content", "body", "initial_segments")),
    (TranscriptBodyShape.SEGMENT_LIST,
     lambda body: body if isinstance(body, (list, tuple)) else MISSING),
    (TranscriptBodyShape.TIMEDTEXT, _timedtext_events),
)


def resolve_transcript_body(body: Any) -> TranscriptBody:
    """Find the segment list in a transcript body; the first present shape wins."""
    for shape, strategy in TRANSCRIPT_BODY_STRATEGIES:
        segments = strategy(body)
        if isinstance(segments, (list, tuple)):
            return TranscriptBody(shape, list(segments))
    return TranscriptBody(TranscriptBodyShape.MISSING, [])


# -------------------------------------------------------------------------
# Related videos
# -------------------------------------------------------------------------

class RelatedSource(str, Enum):
    """Where related videos were found in a video info payload."""
    RELATED_VIDEOS = "related_videos"
    WATCH_NEXT_FEED = "watch_next_feed"
    SECONDARY_RESULTS = "secondary_results"
    MISSING = "missing"


@dataclass(frozen=True)
class RelatedFeed:
    source: RelatedSource
    videos: List[Any]


RELATED_STRATEGIES: Tuple[Tuple[RelatedSource, Tuple[PathKey, ...]], ...] = (
    (RelatedSource.RELATED_VIDEOS, ("related_videos",)),
    (RelatedSource.WATCH_NEXT_FEED, ("watch_next_feed",)),
    (RelatedSource.SECONDARY_RESULTS, ("secondary_info", "results")),
)


def resolve_related_feed(info: Any) -> RelatedFeed:
    for source, path in RELATED_STRATEGIES:
        videos = dig(info, *path)
        if isinstance(videos, (list, tuple)):
            return RelatedFeed(source, list(videos))
    return RelatedFeed(RelatedSource.MISSING, [])
