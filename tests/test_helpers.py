"""
Tests for helper utilities and error types.
"""

import pytest
from pydantic import BaseModel, ValidationError

from yt_normalizer.config import Config, _int_env
from yt_normalizer.utils.error_handling import (
    OperationError,
    TranscriptUnavailableError,
    YouTubeServiceError,
    describe_error,
    is_input_error,
    operation,
)
from yt_normalizer.models.schemas import SearchParams, TranscriptParams, VideoSummary
from yt_normalizer.utils.helpers import compact_date, epoch_to_iso, format_timestamp, normalize_video_id


@pytest.mark.parametrize("url,expected", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ?si=abc", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("  dQw4w9WgXcQ ", "dQw4w9WgXcQ"),
    ("not-a-url", "not-a-url"),
])
def test_normalize_video_id(url, expected):
    assert normalize_video_id(url) == expected


@pytest.mark.parametrize("offset_ms,expected", [
    (0, "0:00"),
    (999, "0:00"),
    (65000, "1:05"),
    (545000, "9:05"),
    (3663000, "61:03"),
])
def test_format_timestamp(offset_ms, expected):
    assert format_timestamp(offset_ms) == expected


def test_dates():
    assert compact_date("20091025") == "2009-10-25"
    assert compact_date("2009-10-25") is None
    assert epoch_to_iso(0) == "1970-01-01T00:00:00Z"
    assert epoch_to_iso("0") is None


def test_describe_error():
    assert describe_error(ValueError("bad")) == "bad"
    assert describe_error(KeyError()) == "KeyError"


def test_transcript_unavailable_is_operation_error():
    error = TranscriptUnavailableError("abc")

    assert isinstance(error, OperationError)
    assert error.operation == "get transcript"
    assert error.video_id == "abc"


@pytest.mark.asyncio
async def test_operation_wraps_unexpected_errors():
    @operation("do things")
    async def failing():
        raise RuntimeError("socket closed")

    with pytest.raises(OperationError) as exc_info:
        await failing()

    assert str(exc_info.value) == "Failed to do things: socket closed"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert failing.operation_name == "do things"


@pytest.mark.asyncio
async def test_operation_passes_service_and_input_errors():
    @operation("validate")
    async def invalid():
        SearchParams(query="rick", max_results=0)

    @operation("outer")
    async def nested():
        raise TranscriptUnavailableError()

    with pytest.raises(ValidationError):
        await invalid()
    with pytest.raises(YouTubeServiceError, match="^Failed to get transcript: "):
        await nested()


@pytest.mark.asyncio
async def test_operation_wraps_result_model_errors():
    """Upstream data that cannot build a result model is an operation failure."""
    @operation("get video")
    async def build():
        return VideoSummary(video_id="abc", embed_html={"url": "x"})

    with pytest.raises(OperationError, match="^Failed to get video: ") as exc_info:
        await build()

    assert isinstance(exc_info.value.__cause__, ValidationError)


def test_is_input_error():
    class Strict(BaseModel):
        n: int

    with pytest.raises(ValidationError) as input_error:
        TranscriptParams(video_id=" ")
    with pytest.raises(ValidationError) as other_error:
        Strict(n="not a number")

    assert is_input_error(input_error.value)
    assert not is_input_error(other_error.value)


def test_int_env(monkeypatch):
    monkeypatch.setenv("YT_TEST_INT", "25")
    assert _int_env("YT_TEST_INT", 5) == 25

    monkeypatch.setenv("YT_TEST_INT", "-1")
    assert _int_env("YT_TEST_INT", 5) == 5

    monkeypatch.setenv("YT_TEST_INT", "many")
    assert _int_env("YT_TEST_INT", 5) == 5


def test_client_options_skip_missing_cookie_file(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "YOUTUBE_COOKIE_FILE", str(tmp_path / "missing.txt"))
    assert "cookiefile" not in Config.get_client_options()

    cookies = tmp_path / "cookies.txt"
    cookies.write_text("# Netscape HTTP Cookie File\n")
    monkeypatch.setattr(Config, "YOUTUBE_COOKIE_FILE", str(cookies))
    assert Config.get_client_options()["cookiefile"] == str(cookies)
