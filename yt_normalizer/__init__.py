"""
YouTube Normalizer.

Normalizes video, search, channel, playlist and transcript data from an
unofficial YouTube client into stable, flat result objects.
"""

from yt_normalizer.config import config

__version__ = config.APP_VERSION
