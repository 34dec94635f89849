"""
API routes for the YouTube normalization service.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, Path, Query

from yt_normalizer.config import config
from yt_normalizer.core.service import YouTubeService
from yt_normalizer.models.schemas import (
    ChannelSummary,
    ChannelVideoList,
    PlaylistItemList,
    PlaylistSummary,
    RelatedVideoList,
    SearchResultSet,
    TimestampedTranscript,
    TranscriptResult,
    TranscriptSearchResult,
    TrendingVideoList,
    VideoSummary,
)

router = APIRouter(prefix="/api/v1", tags=["youtube"])


@lru_cache(maxsize=1)
def get_service() -> YouTubeService:
    """Process-wide service; its client is created on the first request."""
    return YouTubeService()


@router.get("/videos/search", response_model=SearchResultSet)
async def search_videos(
    query: str = Query(..., min_length=1, description="Search query"),
    max_results: int = Query(config.DEFAULT_SEARCH_RESULTS, gt=0, alias="maxResults"),
    service: YouTubeService = Depends(get_service),
):
    """Search for videos."""
    return await service.search_videos(query, max_results)


@router.get("/videos/trending", response_model=TrendingVideoList)
async def get_trending_videos(
    region_code: str = Query(config.DEFAULT_REGION, alias="regionCode"),
    max_results: int = Query(config.DEFAULT_SEARCH_RESULTS, gt=0, alias="maxResults"),
    service: YouTubeService = Depends(get_service),
):
    """Get trending videos for a region."""
    return await service.get_trending_videos(region_code, max_results)


@router.get("/videos/{video_id}", response_model=VideoSummary)
async def get_video(
    video_id: str = Path(..., description="YouTube video ID"),
    service: YouTubeService = Depends(get_service),
):
    """Get video details."""
    return await service.get_video(video_id)


@router.get("/videos/{video_id}/related", response_model=RelatedVideoList)
async def get_related_videos(
    video_id: str = Path(..., description="YouTube video ID"),
    max_results: int = Query(config.DEFAULT_SEARCH_RESULTS, gt=0, alias="maxResults"),
    service: YouTubeService = Depends(get_service),
):
    return await service.get_related_videos(video_id, max_results)


@router.get("/videos/{video_id}/transcript", response_model=TranscriptResult)
async def get_transcript(
    video_id: str = Path(..., description="YouTube video ID"),
    language: str = Query(config.DEFAULT_LANGUAGE, description="Preferred caption language"),
    service: YouTubeService = Depends(get_service),
):
    """
    Get the transcript of a video.

    - Falls back to the first caption track when the language is unavailable
    - Returns 404 when the video has no captions
    """
    return await service.get_transcript(video_id, language)


@router.get("/videos/{video_id}/transcript/search", response_model=TranscriptSearchResult)
async def search_transcript(
    video_id: str = Path(..., description="YouTube video ID"),
    query: str = Query(..., min_length=1),
    language: str = Query(config.DEFAULT_LANGUAGE),
    service: YouTubeService = Depends(get_service),
):
    """Search within a video transcript."""
    return await service.search_transcript(video_id, query, language)


@router.get("/videos/{video_id}/transcript/timestamped", response_model=TimestampedTranscript)
async def get_timestamped_transcript(
    video_id: str = Path(..., description="YouTube video ID"),
    language: str = Query(config.DEFAULT_LANGUAGE),
    service: YouTubeService = Depends(get_service),
):
    return await service.get_timestamped_transcript(video_id, language)


@router.get("/channels/{channel_id}", response_model=ChannelSummary)
async def get_channel(
    channel_id: str = Path(..., description="YouTube channel ID or @handle"),
    service: YouTubeService = Depends(get_service),
):
    """Get channel details."""
    return await service.get_channel(channel_id)


@router.get("/channels/{channel_id}/videos", response_model=ChannelVideoList)
async def list_channel_videos(
    channel_id: str = Path(..., description="YouTube channel ID or @handle"),
    max_results: int = Query(config.DEFAULT_LIST_RESULTS, gt=0, alias="maxResults"),
    service: YouTubeService = Depends(get_service),
):
    """List videos uploaded by a channel."""
    return await service.list_videos(channel_id, max_results)


@router.get("/playlists/{playlist_id}", response_model=PlaylistSummary)
async def get_playlist(
    playlist_id: str = Path(..., description="YouTube playlist ID"),
    service: YouTubeService = Depends(get_service),
):
    """Get playlist details."""
    return await service.get_playlist(playlist_id)


@router.get("/playlists/{playlist_id}/items", response_model=PlaylistItemList)
async def get_playlist_items(
    playlist_id: str = Path(..., description="YouTube playlist ID"),
    max_results: int = Query(config.DEFAULT_LIST_RESULTS, gt=0, alias="maxResults"),
    service: YouTubeService = Depends(get_service),
):
    """Get the videos of a playlist with their 1-based position."""
    return await service.get_playlist_items(playlist_id, max_results)
