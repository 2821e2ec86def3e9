#!/usr/bin/env python3
"""
Pair Directory - Main Entry Point

Usage:
    # List every resolved pair
    python main.py pairs

    # Ranked search
    python main.py search sol

    # Ignore the cache and fetch again
    python main.py refresh

    # Kraken instead of Coinbase
    PAIR_SOURCE=kraken python main.py pairs
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from core.config import Settings, init_settings
from core.pairs import PairDirectory

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO"):
    """Configure logging"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve tradable crypto pairs and search them by partial text"
    )
    parser.add_argument("--config", help="YAML settings file (default: environment variables)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("pairs", help="List every resolved pair")

    search_parser = subparsers.add_parser("search", help="Ranked search by partial text")
    search_parser.add_argument("query", help="Text to look for, e.g. sol or btc/usd")
    search_parser.add_argument("--limit", type=int, help="Maximum results (default from settings)")

    subparsers.add_parser("refresh", help="Fetch pairs again, ignoring the cache")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    if args.command == "search" and args.limit is not None:
        settings.search.max_results = args.limit

    directory = PairDirectory.from_settings(settings)

    if args.command == "refresh":
        pairs = await directory.refresh()
    else:
        pairs = await directory.resolve()

    if not pairs:
        print("No pair data available yet, try again later.")
        return 0

    if args.command == "pairs":
        for pair in pairs:
            print(pair.display)
    elif args.command == "search":
        for pair in directory.search(args.query):
            print(f"{pair.display}\t{pair.symbol}")
    else:
        print(f"Refreshed {len(pairs)} pairs from {settings.directory.source}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    # Load environment variables
    load_dotenv()

    args = parse_args(argv)
    settings = init_settings(args.config)
    setup_logging(settings.log_level)

    logger.debug(
        f"Source: {settings.directory.source}, cache: {settings.cache.backend} "
        f"({settings.directory.cache_version})"
    )
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
