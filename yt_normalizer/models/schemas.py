"""
Data models for the YouTube normalization service.

Parameter models validate operation input. Result models are the flat,
JSON-shaped objects returned to callers; they serialize with camelCase keys.
"""
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from yt_normalizer.config import config
from yt_normalizer.utils.helpers import normalize_video_id


class OperationParams(BaseModel):
    """Base for operation input models."""


class VideoParams(OperationParams):
    """Input for operations addressed by video ID."""
    video_id: str

    @field_validator('video_id')
    def validate_video_id(cls, v):
        v = normalize_video_id(v)
        if not v:
            raise ValueError('video_id must be a non-empty string')
        return v


class SearchParams(OperationParams):
    """Input for video search."""
    query: str
    max_results: int = Field(default=config.DEFAULT_SEARCH_RESULTS, gt=0)

    @field_validator('query')
    def validate_query(cls, v):
        if not v.strip():
            raise ValueError('query must be a non-empty string')
        return v


class TranscriptParams(VideoParams):
    """Input for transcript operations."""
    language: str = config.DEFAULT_LANGUAGE

    @field_validator('language')
    def validate_language(cls, v):
        return v.strip() or config.DEFAULT_LANGUAGE


class SearchTranscriptParams(TranscriptParams):
    """Input for searching inside a transcript."""
    query: str

    @field_validator('query')
    def validate_query(cls, v):
        if not v.strip():
            raise ValueError('query must be a non-empty string')
        return v


class ChannelParams(OperationParams):
    """Input for channel operations."""
    channel_id: str
    max_results: int = Field(default=config.DEFAULT_LIST_RESULTS, gt=0)

    @field_validator('channel_id')
    def validate_channel_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('channel_id must be a non-empty string')
        return v


class PlaylistParams(OperationParams):
    """Input for playlist operations."""
    playlist_id: str
    max_results: int = Field(default=config.DEFAULT_LIST_RESULTS, gt=0)

    @field_validator('playlist_id')
    def validate_playlist_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('playlist_id must be a non-empty string')
        return v


class TrendingParams(OperationParams):
    """Input for the trending feed."""
    region_code: str = config.DEFAULT_REGION
    max_results: int = Field(default=config.DEFAULT_SEARCH_RESULTS, gt=0)

    @field_validator('region_code')
    def validate_region_code(cls, v):
        return v.strip().upper() or config.DEFAULT_REGION


class RelatedParams(VideoParams):
    """Input for related videos."""
    max_results: int = Field(default=config.DEFAULT_SEARCH_RESULTS, gt=0)


class ResultModel(BaseModel):
    """Base for result models: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Dump the JSON-shaped result with camelCase keys."""
        return self.model_dump(by_alias=True)


class VideoSummary(ResultModel):
    """Full details of a single video."""
    video_id: str
    title: str = ""
    description: str = ""
    author: str = ""
    channel_id: str = ""
    duration: int = 0
    view_count: int = 0
    like_count: int = 0
    published_at: str = ""
    thumbnails: List[Any] = []
    is_live: bool = False
    is_private: bool = False
    is_unlisted: bool = False
    category: str = ""
    keywords: List[str] = []
    embed_html: Optional[str] = None


class SearchEntry(ResultModel):
    """One hit of a video search; narrower than VideoSummary."""
    video_id: str = ""
    title: str = ""
    description: str = ""
    author: str = ""
    channel_id: str = ""
    duration: int = 0
    view_count: str = "0"
    published_at: str = ""
    thumbnails: List[Any] = []


class SearchResultSet(ResultModel):
    query: str
    total_results: int
    videos: List[SearchEntry] = []


class TranscriptSegment(ResultModel):
    """One timed unit of a transcript; offset and duration in milliseconds."""
    text: str = ""
    offset: int = Field(default=0, ge=0)
    duration: int = Field(default=0, ge=0)


class TranscriptResult(ResultModel):
    video_id: str
    language: str
    transcript: List[TranscriptSegment] = []


class TranscriptSearchResult(ResultModel):
    video_id: str
    query: str
    language: str
    matches: List[TranscriptSegment] = []
    total_matches: int = 0


class TimestampedSegment(ResultModel):
    timestamp: str
    text: str = ""
    start_time_ms: int = 0
    duration_ms: int = 0


class TimestampedTranscript(ResultModel):
    video_id: str
    language: str
    timestamped_transcript: List[TimestampedSegment] = []


class ChannelSummary(ResultModel):
    """Channel metadata."""
    channel_id: str
    title: str = ""
    description: str = ""
    subscriber_count: str = "N/A"
    video_count: int = 0
    view_count: str = "N/A"
    thumbnails: List[Any] = []
    banners: List[Any] = []
    is_verified: bool = False
    custom_url: str = ""


class ChannelVideo(ResultModel):
    video_id: str = ""
    title: str = ""
    description: str = ""
    duration: int = 0
    view_count: str = "0"
    published_at: str = ""
    thumbnails: List[Any] = []


class ChannelVideoList(ResultModel):
    channel_id: str
    total_results: int
    videos: List[ChannelVideo] = []


class PlaylistSummary(ResultModel):
    """Playlist metadata."""
    playlist_id: str
    title: str = ""
    description: str = ""
    author: str = ""
    channel_id: str = ""
    video_count: int = 0
    view_count: str = "N/A"
    last_updated: str = ""
    thumbnails: List[Any] = []
    is_editable: bool = False
    privacy: str = "unknown"


class PlaylistItem(ResultModel):
    """A playlist entry; position is 1-based in source order."""
    position: int = Field(ge=1)
    video_id: str = ""
    title: str = ""
    author: str = ""
    channel_id: str = ""
    duration: int = 0
    thumbnails: List[Any] = []


class PlaylistItemList(ResultModel):
    playlist_id: str
    total_results: int
    videos: List[PlaylistItem] = []


class FeedVideo(ResultModel):
    """Entry of the trending and related feeds."""
    video_id: str = ""
    title: str = ""
    description: str = ""
    author: str = ""
    channel_id: str = ""
    duration: int = 0
    view_count: str = "0"
    published_at: str = ""
    thumbnails: List[Any] = []


class TrendingVideoList(ResultModel):
    region_code: str
    total_results: int
    videos: List[FeedVideo] = []


class RelatedVideoList(ResultModel):
    video_id: str
    total_results: int
    videos: List[FeedVideo] = []
