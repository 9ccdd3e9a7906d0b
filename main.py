#!/usr/bin/env python3
"""
eventbrite - command line demo for the Eventbrite API client

Checks that a token can reach the API, or performs a single GET and prints
the normalized {code, headers, body} response as JSON.
"""

import argparse
import json
import os
import sys
from pathlib import Path

from eventbrite import EventbriteClient, EventbriteError
from eventbrite.config import config
from eventbrite.logging_config import get_module_logger, setup_logging

logger = get_module_logger("main")


def parse_params(pairs: list[str] | None) -> dict[str, str]:
    """
    Turn ["key=value", ...] into a dict

    Raises:
        ValueError: An item has no "="
    """
    params: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --param {pair!r}, expected key=value")
        params[key] = value
    return params


def main():
    default_endpoint = config.get("api.eventbrite.current_user_endpoint", "users/me/")

    parser = argparse.ArgumentParser(
        description="Query the Eventbrite API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the token works
  python main.py --token MYTOKEN --check

  # Fetch the current user's orders with their venues expanded
  EVENTBRITE_TOKEN=MYTOKEN python main.py --endpoint users/me/orders/ \\
      --param expand=event.venue
        """,
    )
    parser.add_argument(
        "--token", type=str, help="OAuth token (or set EVENTBRITE_TOKEN env var)"
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=default_endpoint,
        help=f"Endpoint relative to the API base URL (default: {default_endpoint})",
    )
    parser.add_argument(
        "--param",
        action="append",
        metavar="KEY=VALUE",
        help="Query string parameter, may be repeated",
    )
    parser.add_argument(
        "--check", action="store_true", help="Only check that the API can be reached"
    )
    parser.add_argument("--log-file", type=Path, help="Append debug logs to this file")
    parser.add_argument("--verbose", action="store_true", help="Show request debug output")

    args = parser.parse_args()

    setup_logging(log_file=args.log_file, verbose=args.verbose)

    token = args.token or os.getenv("EVENTBRITE_TOKEN")
    if not token:
        logger.error("An OAuth token is required")
        logger.error("Either set EVENTBRITE_TOKEN environment variable or use --token")
        sys.exit(1)

    try:
        params = parse_params(args.param)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        with EventbriteClient(token) as client:
            if args.check:
                if client.can_connect():
                    logger.info("Connected to the Eventbrite API")
                    sys.exit(0)
                logger.error("The Eventbrite API rejected the request")
                sys.exit(1)

            response = client.get(args.endpoint, params=params or None)
    except EventbriteError as e:
        logger.error(str(e))
        sys.exit(1)

    print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    sys.exit(0)


if __name__ == "__main__":
    main()
