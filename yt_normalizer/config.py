"""
Configuration settings for the YouTube normalization service.
"""

import os
from typing import Dict, Any
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


def _int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Normalizer"
    APP_VERSION = "0.2.0"

    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    LOG_DIR = Path(os.getenv("LOG_DIR", BASE_DIR / "logs"))

    # Operation defaults
    DEFAULT_LANGUAGE = "en"
    DEFAULT_REGION = "US"
    DEFAULT_SEARCH_RESULTS = 20
    DEFAULT_LIST_RESULTS = 50

    # Underlying client
    YOUTUBE_PAGE_SIZE = _int_env("YOUTUBE_PAGE_SIZE", 100)
    YOUTUBE_SEARCH_PAGE_SIZE = _int_env("YOUTUBE_SEARCH_PAGE_SIZE", 20)
    YOUTUBE_COOKIE_FILE = os.getenv("YOUTUBE_COOKIE_FILE")

    # HTTP adapter
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = _int_env("API_PORT", 8000)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

        if cls.YOUTUBE_COOKIE_FILE and not Path(cls.YOUTUBE_COOKIE_FILE).is_file():
            print(f"WARNING: YOUTUBE_COOKIE_FILE {cls.YOUTUBE_COOKIE_FILE} does not exist.")
            print("Requests will be sent without cookies.")

    @classmethod
    def get_client_options(cls) -> Dict[str, Any]:
        """Options handed to the underlying client factory."""
        options = {
            "page_size": cls.YOUTUBE_PAGE_SIZE,
            "search_page_size": cls.YOUTUBE_SEARCH_PAGE_SIZE,
            "quiet": cls.LOG_LEVEL != "DEBUG",
        }
        if cls.YOUTUBE_COOKIE_FILE and Path(cls.YOUTUBE_COOKIE_FILE).is_file():
            options["cookiefile"] = cls.YOUTUBE_COOKIE_FILE
        return options


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
