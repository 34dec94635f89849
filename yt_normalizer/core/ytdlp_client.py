"""
Default underlying client built on yt-dlp.

yt-dlp is synchronous, so every extraction runs in a worker thread and the
event loop stays free for other calls. Listing calls fetch a single bounded
page (``page_size`` entries) using flat extraction.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

from yt_dlp import YoutubeDL

from yt_normalizer.utils.logger import logging

BASE_URL = "https://www.youtube.com"
CAPTION_FORMAT = "json3"


def video_url(video_id: str) -> str:
    if video_id.startswith(("http://", "https://")):
        return video_id
    return f"{BASE_URL}/watch?v={video_id}"


def channel_url(channel_id: str) -> str:
    if channel_id.startswith(("http://", "https://")):
        return channel_id.rstrip("/")
    if channel_id.startswith("@"):
        return f"{BASE_URL}/{channel_id}"
    return f"{BASE_URL}/channel/{channel_id}"


def playlist_url(playlist_id: str) -> str:
    if playlist_id.startswith(("http://", "https://")):
        return playlist_id
    return f"{BASE_URL}/playlist?list={playlist_id}"


class VideoInfo(dict):
    """yt-dlp info dict with the transcript accessor attached."""

    def __init__(self, data: Dict[str, Any], client: "YtDlpClient"):
        super().__init__(data)
        self._client = client

    async def get_transcript(self, language_code: Optional[str] = None) -> Dict[str, Any]:
        return await self._client.fetch_transcript(self, language_code)


class ChannelInfo(dict):
    """Channel videos tab; the first page of uploads is already loaded."""

    async def get_videos(self) -> Dict[str, List[Any]]:
        return {"videos": list(self.get("entries") or [])}


class YtDlpClient:
    """Exposes the client capabilities on top of yt-dlp."""

    def __init__(self, options: Dict[str, Any]):
        """
        Initialize the yt-dlp handles.

        Args:
            options: Client options (page sizes, quiet flag, optional cookie file)
        """
        self.page_size = options.get("page_size", 100)
        self.search_page_size = options.get("search_page_size", 20)

        base_opts = {
            "quiet": options.get("quiet", True),
            "no_warnings": True,
            "skip_download": True,
        }
        if options.get("cookiefile"):
            base_opts["cookiefile"] = options["cookiefile"]

        self._ydl = YoutubeDL(dict(base_opts))
        self._flat_ydl = YoutubeDL({
            **base_opts,
            "extract_flat": "in_playlist",
            "playlistend": self.page_size,
        })

    async def _extract(self, ydl: YoutubeDL, url: str) -> Dict[str, Any]:
        logging.debug(f"Extracting {url}")
        info = await asyncio.to_thread(ydl.extract_info, url, download=False)
        if not info:
            raise ValueError(f"No data returned for {url}")
        if "entries" in info:
            info["entries"] = [entry for entry in info["entries"] or [] if entry]
        return info

    async def get_info(self, video_id: str) -> VideoInfo:
        info = await self._extract(self._ydl, video_url(video_id))
        return VideoInfo(info, self)

    async def search(self, query: str, type: str = "video") -> Dict[str, List[Any]]:
        if type != "video":
            raise ValueError(f"Unsupported search type: {type}")
        info = await self._extract(self._flat_ydl, f"ytsearch{self.search_page_size}:{query}")
        return {"videos": info.get("entries", [])}

    async def get_channel(self, channel_id: str) -> ChannelInfo:
        info = await self._extract(self._flat_ydl, f"{channel_url(channel_id)}/videos")
        return ChannelInfo(info)

    async def get_playlist(self, playlist_id: str) -> Dict[str, Any]:
        return await self._extract(self._flat_ydl, playlist_url(playlist_id))

    async def get_trending(self, region_code: Optional[str] = None) -> Dict[str, List[Any]]:
        url = f"{BASE_URL}/feed/trending"
        if region_code:
            url = f"{url}?gl={region_code}"
        info = await self._extract(self._flat_ydl, url)
        return {"videos": info.get("entries", [])}

    async def fetch_transcript(self, info: Dict[str, Any], language_code: Optional[str] = None) -> Dict[str, Any]:
        """
        Download the json3 caption track for a video.

        Manual subtitles are preferred over automatic captions; without a
        matching language the first available track is used.

        Args:
            info: yt-dlp info dict of the video
            language_code: Preferred caption language

        Returns:
            Parsed json3 timedtext document
        """
        formats = self._caption_formats(info, language_code)
        caption = next((fmt for fmt in formats if fmt.get("ext") == CAPTION_FORMAT), None)
        if caption is None or not caption.get("url"):
            raise ValueError(f"No {CAPTION_FORMAT} caption format available")

        logging.info(f"Downloading captions for {info.get('id', 'unknown video')}")
        return await asyncio.to_thread(self._download_json, caption["url"])

    @staticmethod
    def _caption_formats(info: Dict[str, Any], language_code: Optional[str]) -> List[Dict[str, Any]]:
        tracks = [info.get("subtitles") or {}, info.get("automatic_captions") or {}]

        if language_code:
            wanted = language_code.lower()
            for by_language in tracks:
                for code, formats in by_language.items():
                    if code.lower() == wanted:
                        return formats

        for by_language in tracks:
            for formats in by_language.values():
                return formats
        return []

    def _download_json(self, url: str) -> Dict[str, Any]:
        response = self._ydl.urlopen(url)
        try:
            return json.loads(response.read().decode("utf-8"))
        finally:
            response.close()


def create_client(options: Dict[str, Any]) -> YtDlpClient:
    """Factory used by the client provider."""
    return YtDlpClient(options)
