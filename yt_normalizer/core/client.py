"""
Lazy acquisition of the shared YouTube client.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Union

from yt_normalizer.config import config
from yt_normalizer.utils.error_handling import InitializationError, describe_error
from yt_normalizer.utils.logger import logging


class YouTubeClient(Protocol):
    """Capabilities the service needs from the underlying client."""

    async def get_info(self, video_id: str) -> Any: ...

    async def search(self, query: str, type: str = "video") -> Any: ...

    async def get_channel(self, channel_id: str) -> Any: ...

    async def get_playlist(self, playlist_id: str) -> Any: ...

    async def get_trending(self, region_code: Optional[str] = None) -> Any: ...


ClientFactory = Callable[[Dict[str, Any]], Union[YouTubeClient, Awaitable[YouTubeClient]]]


def default_client_factory(options: Dict[str, Any]) -> YouTubeClient:
    """Create the yt-dlp backed client."""
    from yt_normalizer.core.ytdlp_client import create_client

    return create_client(options)


class ClientProvider:
    """
    Hands out a single client per provider, created on first use.

    Concurrent first callers share one pending initialization and observe the
    same client or the same failure. A failed initialization leaves the
    provider unready so the next call starts a fresh attempt.
    """

    def __init__(
        self,
        factory: Optional[ClientFactory] = None,
        options: Optional[Dict[str, Any]] = None,
    ):
        self._factory = factory or default_client_factory
        self._options = options if options is not None else config.get_client_options()
        self._client: Optional[YouTubeClient] = None
        self._pending: Optional[asyncio.Future] = None

    @property
    def ready(self) -> bool:
        return self._client is not None

    async def ensure_ready(self) -> YouTubeClient:
        """Return the shared client, creating it if needed."""
        if self._client is not None:
            return self._client

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._initialize())

        # Shielded so a cancelled waiter does not cancel the attempt for the others
        return await asyncio.shield(self._pending)

    async def _initialize(self) -> YouTubeClient:
        logging.info("Initializing YouTube client")
        try:
            client = self._factory(self._options)
            if inspect.isawaitable(client):
                client = await client
        except Exception as e:
            self._pending = None
            logging.error(f"YouTube client initialization failed: {describe_error(e)}")
            raise InitializationError(e) from e

        self._client = client
        self._pending = None
        logging.info("YouTube client ready")
        return client
