"""
Tests for defensive payload access and shape resolution.
"""

from types import SimpleNamespace

import pytest

from yt_normalizer.core.payloads import (
    MISSING,
    RelatedSource,
    TranscriptBodyShape,
    at,
    dig,
    extract,
    resolve_related_feed,
    resolve_transcript_body,
    timedtext_text,
    to_int,
    to_text,
)


def test_dig_mixed_payload():
    payload = {"info": SimpleNamespace(author={"name": "Rick Astley"}, items=[{"id": "a"}, {"id": "b"}])}

    assert dig(payload, "info", "author", "name") == "Rick Astley"
    assert dig(payload, "info", "items", -1, "id") == "b"


@pytest.mark.parametrize("path", [
    ("missing",),
    ("info", "missing"),
    ("info", "items", 5),
    ("info", "author", 0),
    ("none", "deeper"),
])
def test_dig_never_raises(path):
    payload = {"info": SimpleNamespace(author={"name": "x"}, items=[]), "none": None}

    assert dig(payload, *path) is MISSING


def test_missing_is_falsy_singleton():
    assert not MISSING
    assert type(MISSING)() is MISSING


def test_extract_first_usable_strategy_wins():
    payload = {"primary": "", "secondary": "fallback", "tertiary": "unused"}

    assert extract(payload, (at("primary"), at("secondary"), at("tertiary")), "") == "fallback"


def test_extract_type_mismatch_falls_through():
    payload = {"count": "lots", "other_count": 7}

    assert extract(payload, (at("count"), at("other_count")), 0) == 7
    assert extract({"flag": "yes"}, (at("flag"),), False) is False
    assert extract({"count": True}, (at("count"),), 0) == 0


def test_extract_default_when_nothing_resolves():
    default = []

    value = extract({}, (at("a"), at("b")), default)

    assert value == []
    assert value is not default


def test_extract_copies_lists():
    source = [{"url": "x"}]

    value = extract({"thumbnails": source}, (at("thumbnails"),), [])

    assert value == source
    assert value is not source


def test_lookup_converter_failure_is_missing():
    assert at("n", convert=to_int).resolve({"n": "12abc"}) is MISSING
    assert at("n", convert=to_int).resolve({"n": "1,234"}) == 1234


@pytest.mark.parametrize("value,expected", [
    (5, 5),
    (5.9, 5),
    ("42", 42),
    (" 3000 ", 3000),
    ("", None),
    (True, None),
    ([1], None),
])
def test_to_int(value, expected):
    assert to_int(value) == expected


def test_to_text():
    assert to_text(1500000) == "1500000"
    assert to_text("3.5M") == "3.5M"
    assert to_text(None) is None
    assert to_text(False) is None


@pytest.mark.parametrize("body,shape", [
    ({"transcript": {"content": {"body": {"initial_segments": [{"text": "a"}]}}}}, TranscriptBodyShape.NESTED),
    ({"content": {"body": {"initial_segments": [{"text": "a"}]}}}, TranscriptBodyShape.TOP_LEVEL),
    ([{"text": "a"}], TranscriptBodyShape.SEGMENT_LIST),
    ({"events": [{"segs": [{"utf8": "a"}]}, {"tStartMs": 0}]}, TranscriptBodyShape.TIMEDTEXT),
])
def test_resolve_transcript_body(body, shape):
    resolved = resolve_transcript_body(body)

    assert resolved.shape is shape
    assert len(resolved.segments) == 1


@pytest.mark.parametrize("body", [None, {}, "text", {"transcript": {"content": None}}])
def test_resolve_transcript_body_missing(body):
    resolved = resolve_transcript_body(body)

    assert resolved.shape is TranscriptBodyShape.MISSING
    assert resolved.segments == []


def test_nested_transcript_body_wins_over_top_level():
    body = {
        "transcript": {"content": {"body": {"initial_segments": [{"text": "nested"}]}}},
        "content": {"body": {"initial_segments": [{"text": "top"}]}},
    }

    assert resolve_transcript_body(body).segments == [{"text": "nested"}]


def test_resolve_related_feed_order():
    info = SimpleNamespace(
        related_videos=[{"id": "r"}],
        watch_next_feed=[{"id": "w"}],
        secondary_info={"results": [{"id": "s"}]},
    )

    feed = resolve_related_feed(info)

    assert feed.source is RelatedSource.RELATED_VIDEOS
    assert feed.videos == [{"id": "r"}]


def test_resolve_related_feed_missing():
    feed = resolve_related_feed({"related_videos": None})

    assert feed.source is RelatedSource.MISSING
    assert feed.videos == []


def test_timedtext_skips_blank_events():
    body = {"events": [
        {"tStartMs": 0, "segs": [{"utf8": "We're no"}]},
        {"tStartMs": 1500, "aAppend": 1, "segs": [{"utf8": "\n"}]},
        {"tStartMs": 2000, "segs": []},
        {"tStartMs": 3000, "segs": [{"utf8": "strangers"}]},
    ]}

    resolved = resolve_transcript_body(body)

    assert resolved.shape is TranscriptBodyShape.TIMEDTEXT
    assert [timedtext_text(event) for event in resolved.segments] == ["We're no", "strangers"]


def test_timedtext_text():
    assert timedtext_text({"segs": [{"utf8": "never "}, {"utf8": "gonna"}, "junk"]}) == "never gonna"
    assert timedtext_text({"tStartMs": 0}) is None
