"""Main entry point for the topic repositories summary.

Reads the cached topic query response, refreshing it from GitHub when it is
older than the configured TTL, and prints the summary.
"""
import argparse
import asyncio
import logging
import sys
import time
from typing import List, Optional
from topic_stars.application.fetch_orchestrator import FetchOrchestrator
from topic_stars.config import Settings, load_settings
from topic_stars.domain.errors import ConfigError, PayloadFormatError
from topic_stars.infrastructure.file_store import FileCacheStore
from topic_stars.infrastructure.github_client import GitHubTopicClient
from topic_stars.infrastructure.request_log import FileRequestLog
from topic_stars.presentation.formatter import format_repositories


logger = logging.getLogger(__name__)


def now_millis() -> int:
    return int(time.time() * 1000)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show the most starred GitHub repositories for a topic."
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="query GitHub even if the cached data is fresh"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="enable debug logging"
    )
    return parser.parse_args(argv)


async def main(args: argparse.Namespace, settings: Optional[Settings] = None) -> int:
    """Refresh the cache if needed and print the summary.
    
    Returns:
        Process exit code
    """
    try:
        if settings is None:
            settings = load_settings()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    
    store = FileCacheStore(settings.data_file, settings.timestamp_file)
    request_log = FileRequestLog(settings.log_file)
    github_client = None
    if settings.access_token:
        github_client = GitHubTopicClient(
            settings.access_token,
            timeout_seconds=settings.request_timeout
        )
    
    orchestrator = FetchOrchestrator(
        store=store,
        request_log=request_log,
        query=settings.query,
        ttl_millis=settings.ttl_millis,
        client=github_client
    )
    
    try:
        outcome = await orchestrator.refresh_if_needed(now_millis(), force=args.refresh)
    except ConfigError as e:
        logger.error(f"{e}. Set PERSONAL_ACCESS_TOKEN in the environment or .env file")
        return 1
    finally:
        if github_client is not None:
            await github_client.close()
    
    if outcome.record is None:
        logger.error("No cached data available and the fetch failed")
        return 1
    
    if outcome.failure is not None:
        logger.warning(
            f"Showing cached data written at {outcome.record.written_at}; "
            f"refresh failed: {outcome.failure}"
        )
    
    try:
        repositories = outcome.record.repositories()
    except PayloadFormatError as e:
        logger.error(f"Cached data cannot be displayed: {e}")
        return 1
    
    print(format_repositories(repositories, topic=settings.query.name))
    return 0


def run(argv: Optional[List[str]] = None) -> None:
    """Console script entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(asyncio.run(main(args)))


if __name__ == "__main__":
    run()
