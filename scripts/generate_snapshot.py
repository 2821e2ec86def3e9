#!/usr/bin/env python3
"""
Generate the pair snapshot (tokens.json) from the configured exchange.

Run at build time so clients can skip the live API call on cold start:

    python scripts/generate_snapshot.py
    PAIR_SOURCE=kraken python scripts/generate_snapshot.py --output public/tokens.json
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import init_settings
from core.errors import PairDirectoryError
from integrations.exchanges import create_source
from integrations.snapshot import write_snapshot
import logging

logger = logging.getLogger(__name__)


async def generate_snapshot(source_name: str, quote_currency: str, output: Path,
                            timeout: float = 30.0) -> int:
    """Fetch normalized pairs and write them to output. Returns the pair count."""
    source = create_source(source_name, quote_currency=quote_currency, timeout=timeout)

    logger.info(f"Fetching pairs from {source.name}...")
    pairs = await source.fetch_pairs()

    write_snapshot(pairs, output)
    logger.info(f"Generated {output} with {len(pairs)} pairs")
    return len(pairs)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Write the static pair snapshot file")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--output", help="Snapshot path (default: directory.snapshot_path)")
    args = parser.parse_args(argv)

    settings = init_settings(args.config)
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    output = Path(args.output or settings.directory.snapshot_path)

    try:
        asyncio.run(generate_snapshot(
            settings.directory.source,
            settings.directory.quote_currency,
            output,
            timeout=settings.directory.request_timeout,
        ))
    except (PairDirectoryError, OSError) as e:
        logger.error(f"Error generating snapshot: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
