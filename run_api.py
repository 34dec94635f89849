"""
FastAPI server entry point for the YouTube Normalizer.
"""

import os
import argparse
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv

from yt_normalizer.config import config
from yt_normalizer.utils.logger import logging

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{config.APP_NAME} API")
    parser.add_argument("--host", default=config.API_HOST, help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=config.API_PORT, help="Port to bind the server to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=config.LOG_LEVEL.lower() if config.LOG_LEVEL.lower() in LOG_LEVELS else "info",
        help="Log level for uvicorn and the service logger",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Run the FastAPI server."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    config.initialize()
    logging.setLevel(args.log_level.upper())

    options = config.get_client_options()
    print(f"Starting {config.APP_NAME} API server v{config.APP_VERSION}")
    print(f"Environment: {os.getenv('ENVIRONMENT', 'development')}")
    print(f"Binding to: {args.host}:{args.port} (routes under /api/v1)")
    print(f"yt-dlp page size: {options['page_size']}, cookies: {'yes' if 'cookiefile' in options else 'no'}")

    uvicorn.run(
        "yt_normalizer.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
