"""
Tests for payload-to-model field mapping.
"""

from types import SimpleNamespace

from yt_normalizer.core.normalizers import (
    caption_tracks,
    channel_summary,
    playlist_item,
    playlist_summary,
    search_entry,
    select_caption_track,
    timestamped_segment,
    transcript_segment,
    video_list,
    video_summary,
)
from yt_normalizer.models.schemas import TranscriptSegment


def test_video_summary_blank_title_falls_through():
    info = {"basic_info": {"title": ""}, "title": "From the flat payload"}

    assert video_summary(info, "abc").title == "From the flat payload"


def test_video_summary_attribute_payload():
    info = SimpleNamespace(basic_info=SimpleNamespace(id="abc", title="Attr", duration="212", keywords=None))

    summary = video_summary(info, "ignored")

    assert summary.video_id == "abc"
    assert summary.title == "Attr"
    assert summary.duration == 212
    assert summary.keywords == []


def test_video_summary_epoch_timestamp():
    summary = video_summary({"timestamp": 1256453853}, "abc")

    assert summary.published_at == "2009-10-25T06:57:33Z"


def test_search_entry_ytdlp_flat_entry():
    entry = search_entry({
        "id": "dQw4w9WgXcQ",
        "title": "Never Gonna Give You Up",
        "description": None,
        "channel": "Rick Astley",
        "channel_id": "UC1",
        "duration": 212.0,
        "view_count": 1400000000,
    })

    assert entry.to_dict() == {
        "videoId": "dQw4w9WgXcQ",
        "title": "Never Gonna Give You Up",
        "description": "",
        "author": "Rick Astley",
        "channelId": "UC1",
        "duration": 212,
        "viewCount": "1400000000",
        "publishedAt": "",
        "thumbnails": [],
    }


def test_search_entry_empty_hit_uses_defaults():
    assert search_entry({}).view_count == "0"


def test_playlist_item_position():
    item = playlist_item({"id": "a", "title": {"text": "A"}}, 4)

    assert item.position == 4
    assert item.title == "A"


def test_video_list_alternates():
    assert video_list({"videos": [1]}) == [1]
    assert video_list({"entries": [2]}) == [2]
    assert video_list(SimpleNamespace(results=[3])) == [3]
    assert video_list(None) == []


def test_channel_summary_ytdlp_payload():
    summary = channel_summary({
        "channel_id": "UC1",
        "channel": "Rick Astley",
        "channel_follower_count": 3500000,
        "channel_is_verified": True,
        "uploader_url": "https://www.youtube.com/@RickAstley",
    }, "@RickAstley")

    assert summary.channel_id == "UC1"
    assert summary.title == "Rick Astley"
    assert summary.subscriber_count == "3500000"
    assert summary.view_count == "N/A"
    assert summary.is_verified is True
    assert summary.custom_url == "https://www.youtube.com/@RickAstley"


def test_playlist_summary_defaults():
    summary = playlist_summary({}, "PL123")

    assert summary.playlist_id == "PL123"
    assert summary.privacy == "unknown"
    assert summary.view_count == "N/A"


def test_caption_tracks_from_ytdlp_info():
    info = {"subtitles": {"en": []}, "automatic_captions": {"en": [], "de": []}}

    assert caption_tracks(info) == [{"language_code": "en"}, {"language_code": "de"}]
    assert caption_tracks({}) == []


def test_select_caption_track():
    tracks = [{"language_code": "de"}, SimpleNamespace(language_code="en")]

    assert select_caption_track(tracks, "EN") is tracks[1]
    assert select_caption_track(tracks, "fr") is tracks[0]


def test_transcript_segment_clamps_negative_values():
    segment = transcript_segment({"text": "x", "start_ms": "-5", "end_ms": "-10"})

    assert segment.offset == 0
    assert segment.duration == 0


def test_timestamped_segment():
    item = timestamped_segment(TranscriptSegment(text="never gonna let you down", offset=65000, duration=3000))

    assert item.to_dict() == {
        "timestamp": "1:05",
        "text": "never gonna let you down",
        "startTimeMs": 65000,
        "durationMs": 3000,
    }
