#!/usr/bin/env python3
"""
Command-line privacy scan.

Usage:
    privacy-scan "Jane Smith" --city-state "Austin, TX" --email jane@example.com
"""

import argparse
import logging
import sys
from typing import List, Optional

from config.settings import ScanSettings
from errors import InvalidSubjectError
from scanner import ExposureScanner


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="privacy-scan",
        description="Find a person's listings on data-broker sites and score the privacy risk.",
    )
    ap.add_argument("name", help="Full name to search for")
    ap.add_argument("--city-state", help='Location, e.g. "Austin, TX"')
    ap.add_argument("--email", help="Email address to include in the search")
    ap.add_argument("--phone", help="Phone number (at least 10 digits)")
    ap.add_argument("--env-file", help="Path to a .env file with API keys")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = ScanSettings.from_env(args.env_file)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    scanner = ExposureScanner(settings=settings)
    try:
        assessment = scanner.assess(args.name, args.city_state, args.email, args.phone)
    except InvalidSubjectError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(assessment.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
