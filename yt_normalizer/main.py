"""
Command line entry point for one-shot YouTube Normalizer operations.
"""

import sys
import json
import asyncio
import argparse
from typing import List, Optional

from dotenv import load_dotenv

from yt_normalizer.config import config
from yt_normalizer.core.service import YouTubeService
from yt_normalizer.utils.error_handling import YouTubeServiceError
from yt_normalizer.utils.logger import logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="YouTube Normalizer")
    commands = parser.add_subparsers(dest="command", required=True)

    video = commands.add_parser("video", help="Get video details")
    video.add_argument("video_id", help="YouTube video ID or URL")

    search = commands.add_parser("search", help="Search for videos")
    search.add_argument("query")
    search.add_argument("--max-results", type=int, default=config.DEFAULT_SEARCH_RESULTS)

    for name, help_text in (
        ("transcript", "Get a video transcript"),
        ("timestamps", "Get a transcript with M:SS timestamps"),
    ):
        transcript = commands.add_parser(name, help=help_text)
        transcript.add_argument("video_id", help="YouTube video ID or URL")
        transcript.add_argument("--language", default=config.DEFAULT_LANGUAGE)

    search_transcript = commands.add_parser("search-transcript", help="Search within a transcript")
    search_transcript.add_argument("video_id", help="YouTube video ID or URL")
    search_transcript.add_argument("query")
    search_transcript.add_argument("--language", default=config.DEFAULT_LANGUAGE)

    channel = commands.add_parser("channel", help="Get channel details")
    channel.add_argument("channel_id")

    channel_videos = commands.add_parser("channel-videos", help="List channel videos")
    channel_videos.add_argument("channel_id")
    channel_videos.add_argument("--max-results", type=int, default=config.DEFAULT_LIST_RESULTS)

    playlist = commands.add_parser("playlist", help="Get playlist details")
    playlist.add_argument("playlist_id")

    playlist_items = commands.add_parser("playlist-items", help="List playlist videos")
    playlist_items.add_argument("playlist_id")
    playlist_items.add_argument("--max-results", type=int, default=config.DEFAULT_LIST_RESULTS)

    trending = commands.add_parser("trending", help="Get trending videos")
    trending.add_argument("--region", default=config.DEFAULT_REGION)
    trending.add_argument("--max-results", type=int, default=config.DEFAULT_SEARCH_RESULTS)

    related = commands.add_parser("related", help="Get related videos")
    related.add_argument("video_id", help="YouTube video ID or URL")
    related.add_argument("--max-results", type=int, default=config.DEFAULT_SEARCH_RESULTS)

    return parser


async def run_command(service: YouTubeService, args: argparse.Namespace):
    """Dispatch parsed arguments to the matching service operation."""
    if args.command == "video":
        return await service.get_video(args.video_id)
    if args.command == "search":
        return await service.search_videos(args.query, args.max_results)
    if args.command == "transcript":
        return await service.get_transcript(args.video_id, args.language)
    if args.command == "timestamps":
        return await service.get_timestamped_transcript(args.video_id, args.language)
    if args.command == "search-transcript":
        return await service.search_transcript(args.video_id, args.query, args.language)
    if args.command == "channel":
        return await service.get_channel(args.channel_id)
    if args.command == "channel-videos":
        return await service.list_videos(args.channel_id, args.max_results)
    if args.command == "playlist":
        return await service.get_playlist(args.playlist_id)
    if args.command == "playlist-items":
        return await service.get_playlist_items(args.playlist_id, args.max_results)
    if args.command == "trending":
        return await service.get_trending_videos(args.region, args.max_results)
    if args.command == "related":
        return await service.get_related_videos(args.video_id, args.max_results)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, service: Optional[YouTubeService] = None) -> int:
    """Main function to run the application from command line."""
    args = build_parser().parse_args(argv)

    # Load environment variables
    load_dotenv()

    service = service or YouTubeService()
    try:
        result = asyncio.run(run_command(service, args))
    except (YouTubeServiceError, ValueError) as e:
        logging.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
