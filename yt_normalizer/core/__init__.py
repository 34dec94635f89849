"""
Core functionality for the YouTube normalization service.

This package contains the lazy client provider, the default yt-dlp client,
payload extraction strategies and the service operations.
"""
