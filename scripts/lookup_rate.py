#!/usr/bin/env python
"""
Look up the sales tax rate for one Washington address.

Usage:
    python scripts/lookup_rate.py [--retry] [--debug] [--json-logs] STREET CITY ZIP

Example (the Space Needle):
    python scripts/lookup_rate.py "400 Broad St" Seattle 98109
"""

import argparse
import asyncio
import sys

from wataxrate import Success, get, get_with_retries
from wataxrate.core.config import get_settings
from wataxrate.core.logging import bind_context, clear_context, configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Look up a WA sales tax rate")
    parser.add_argument("street", help="Street address, e.g. '400 Broad St'")
    parser.add_argument("city", help="City name")
    parser.add_argument("zip", help="ZIP or ZIP+4 code")
    parser.add_argument(
        "--retry",
        action="store_true",
        help="Retry transient failures with a per-attempt timeout",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--debug", action="store_true", help="Log request and response details")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """Run the lookup and print the outcome."""
    lookup = get_with_retries if args.retry else get
    bind_context(street=args.street, city=args.city, zip=args.zip)
    try:
        result = await lookup(args.street, args.city, args.zip)
    finally:
        clear_context()

    if isinstance(result, Success):
        info = result.value
        print(f"Rate:          {info.rate} ({info.percentage}%)")
        print(f"Location code: {info.location_code}")
        print(f"State rate:    {info.state_rate}")
        print(f"Local rate:    {info.local_rate}")
        if info.jurisdiction is not None:
            print(f"Jurisdiction:  {info.jurisdiction.name}")
        print(f"Match:         {info.result_code.name}")
        return 0

    print(f"ERROR: {result.error}", file=sys.stderr)
    if result.error.details:
        print(f"  {result.error.details}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(
        json_format=args.json_logs or settings.log_json,
        log_level="DEBUG" if args.debug else settings.log_level,
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
