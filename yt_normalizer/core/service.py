"""
Unified YouTube service: read-only operations returning normalized results.
"""

import inspect
from typing import Any, Optional

from yt_normalizer.config import config
from yt_normalizer.core.client import ClientProvider
from yt_normalizer.core.normalizers import (
    caption_tracks,
    channel_summary,
    channel_video,
    feed_video,
    playlist_entries,
    playlist_item,
    playlist_summary,
    search_entry,
    select_caption_track,
    timestamped_segment,
    track_language,
    transcript_segments,
    video_list,
    video_summary,
)
from yt_normalizer.core.payloads import resolve_related_feed
from yt_normalizer.models.schemas import (
    ChannelParams,
    ChannelSummary,
    ChannelVideoList,
    PlaylistItemList,
    PlaylistParams,
    PlaylistSummary,
    RelatedParams,
    RelatedVideoList,
    SearchParams,
    SearchResultSet,
    SearchTranscriptParams,
    TimestampedTranscript,
    TranscriptParams,
    TranscriptResult,
    TranscriptSearchResult,
    TrendingParams,
    TrendingVideoList,
    VideoParams,
    VideoSummary,
)
from yt_normalizer.utils.error_handling import TranscriptUnavailableError, operation
from yt_normalizer.utils.logger import logging


async def _resolve(value: Any) -> Any:
    """Await payload accessors that may be sync or async."""
    if inspect.isawaitable(value):
        return await value
    return value


def _accessor(payload: Any, name: str):
    accessor = getattr(payload, name, None)
    if not callable(accessor):
        raise AttributeError(f"Payload does not provide {name}()")
    return accessor


class YouTubeService:
    """
    Read-only YouTube operations over a lazily created client.

    Every operation validates its input, waits for the shared client, calls
    it once (twice for transcripts) and maps the payload with default chains.
    Failures are raised as OperationError with a "Failed to <operation>: "
    prefix.
    """

    def __init__(self, provider: Optional[ClientProvider] = None):
        self._provider = provider or ClientProvider()

    @property
    def provider(self) -> ClientProvider:
        return self._provider

    @operation("get video")
    async def get_video(self, video_id: str) -> VideoSummary:
        """Get video details."""
        params = VideoParams(video_id=video_id)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching video {params.video_id}")
        info = await client.get_info(params.video_id)
        return video_summary(info, params.video_id)

    @operation("search videos")
    async def search_videos(self, query: str, max_results: int = config.DEFAULT_SEARCH_RESULTS) -> SearchResultSet:
        """
        Search for videos.

        The client returns a single page; results are not truncated to
        ``max_results`` here.
        """
        params = SearchParams(query=query, max_results=max_results)
        client = await self._provider.ensure_ready()

        logging.info(f"Searching videos for '{params.query}'")
        results = await client.search(params.query, type="video")
        videos = [search_entry(hit) for hit in video_list(results)]

        return SearchResultSet(query=params.query, total_results=len(videos), videos=videos)

    @operation("get transcript")
    async def get_transcript(self, video_id: str, language: str = config.DEFAULT_LANGUAGE) -> TranscriptResult:
        """
        Get the transcript of a video.

        Args:
            video_id: YouTube video ID
            language: Preferred caption language; the first track is used when absent

        Returns:
            TranscriptResult with the resolved language and ordered segments

        Raises:
            TranscriptUnavailableError: The video has no caption tracks
            OperationError: Fetching or parsing the transcript failed
        """
        params = TranscriptParams(video_id=video_id, language=language)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching transcript for {params.video_id} ({params.language})")
        info = await client.get_info(params.video_id)

        tracks = caption_tracks(info)
        if not tracks:
            logging.warning(f"No caption tracks for video {params.video_id}")
            raise TranscriptUnavailableError(params.video_id)

        resolved_language = track_language(select_caption_track(tracks, params.language)) or params.language

        body = await _resolve(_accessor(info, "get_transcript")(resolved_language))
        segments = transcript_segments(body)

        return TranscriptResult(video_id=params.video_id, language=resolved_language, transcript=segments)

    @operation("search transcript")
    async def search_transcript(
        self, video_id: str, query: str, language: str = config.DEFAULT_LANGUAGE
    ) -> TranscriptSearchResult:
        """
        Find transcript segments containing ``query`` (case-insensitive).

        Transcript failures keep their "Failed to get transcript: " message.
        """
        params = SearchTranscriptParams(video_id=video_id, query=query, language=language)
        result = await self.get_transcript(params.video_id, params.language)

        needle = params.query.lower()
        matches = [segment for segment in result.transcript if needle in segment.text.lower()]

        return TranscriptSearchResult(
            video_id=params.video_id,
            query=params.query,
            language=result.language,
            matches=matches,
            total_matches=len(matches),
        )

    @operation("get timestamped transcript")
    async def get_timestamped_transcript(
        self, video_id: str, language: str = config.DEFAULT_LANGUAGE
    ) -> TimestampedTranscript:
        params = TranscriptParams(video_id=video_id, language=language)
        result = await self.get_transcript(params.video_id, params.language)

        return TimestampedTranscript(
            video_id=params.video_id,
            language=result.language,
            timestamped_transcript=[timestamped_segment(segment) for segment in result.transcript],
        )

    @operation("get channel")
    async def get_channel(self, channel_id: str) -> ChannelSummary:
        """Get channel details."""
        params = ChannelParams(channel_id=channel_id)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching channel {params.channel_id}")
        channel = await client.get_channel(params.channel_id)
        return channel_summary(channel, params.channel_id)

    @operation("list channel videos")
    async def list_videos(self, channel_id: str, max_results: int = config.DEFAULT_LIST_RESULTS) -> ChannelVideoList:
        """
        List the uploads of a channel.

        The whole videos tab is fetched and mapped, then truncated to
        ``max_results``; the client is never asked for a smaller page.
        """
        params = ChannelParams(channel_id=channel_id, max_results=max_results)
        client = await self._provider.ensure_ready()

        logging.info(f"Listing videos of channel {params.channel_id}")
        channel = await client.get_channel(params.channel_id)
        videos_tab = await _resolve(_accessor(channel, "get_videos")())

        videos = [channel_video(video) for video in video_list(videos_tab)][:params.max_results]

        return ChannelVideoList(channel_id=params.channel_id, total_results=len(videos), videos=videos)

    @operation("get playlist")
    async def get_playlist(self, playlist_id: str) -> PlaylistSummary:
        """Get playlist details."""
        params = PlaylistParams(playlist_id=playlist_id)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching playlist {params.playlist_id}")
        playlist = await client.get_playlist(params.playlist_id)
        return playlist_summary(playlist, params.playlist_id)

    @operation("get playlist items")
    async def get_playlist_items(
        self, playlist_id: str, max_results: int = config.DEFAULT_LIST_RESULTS
    ) -> PlaylistItemList:
        """Get playlist entries in source order, numbered from 1."""
        params = PlaylistParams(playlist_id=playlist_id, max_results=max_results)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching items of playlist {params.playlist_id}")
        playlist = await client.get_playlist(params.playlist_id)

        items = [
            playlist_item(entry, position)
            for position, entry in enumerate(playlist_entries(playlist), start=1)
        ][:params.max_results]

        return PlaylistItemList(playlist_id=params.playlist_id, total_results=len(items), videos=items)

    @operation("get trending videos")
    async def get_trending_videos(
        self, region_code: str = config.DEFAULT_REGION, max_results: int = config.DEFAULT_SEARCH_RESULTS
    ) -> TrendingVideoList:
        params = TrendingParams(region_code=region_code, max_results=max_results)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching trending videos for {params.region_code}")
        trending = await client.get_trending(params.region_code)
        videos = [feed_video(video) for video in video_list(trending)[:params.max_results]]

        return TrendingVideoList(region_code=params.region_code, total_results=len(videos), videos=videos)

    @operation("get related videos")
    async def get_related_videos(
        self, video_id: str, max_results: int = config.DEFAULT_SEARCH_RESULTS
    ) -> RelatedVideoList:
        """
        Videos related to a given video; empty when the payload carries none.

        The feed is read from InnerTube-style info payloads (``related_videos``,
        ``watch_next_feed``, ``secondary_info.results``). yt-dlp info dicts carry
        none of these, so with the default client the result is always empty.
        """
        params = RelatedParams(video_id=video_id, max_results=max_results)
        client = await self._provider.ensure_ready()

        logging.info(f"Fetching related videos for {params.video_id}")
        info = await client.get_info(params.video_id)

        feed = resolve_related_feed(info)
        logging.debug(f"Related videos source: {feed.source.value}")
        videos = [feed_video(video) for video in feed.videos[:params.max_results]]

        return RelatedVideoList(video_id=params.video_id, total_results=len(videos), videos=videos)
