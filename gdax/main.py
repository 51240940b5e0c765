"""
Historic rates command line tool.

Run with:
    python -m gdax
    python -m gdax --product BTC-USD --granularity 300
    python -m gdax --start 2017-07-15T14:00:00Z --end 2017-07-15T15:00:00Z --environment production
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from dotenv import load_dotenv

from gdax.config import ClientConfig, Credentials
from gdax.connectors.client import GdaxClient
from gdax.connectors.http_mixin import GdaxError
from gdax.models import Candle, HistoricRateGranularity
from gdax.public import get_product_historic_rates

logger = logging.getLogger("Gdax")

TIME_LAYOUT = "%Y-%m-%dT%H:%M:%SZ"
ENVIRONMENTS = ("sandbox", "production")


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def parse_time(value: str) -> datetime:
    """argparse type: ISO 8601 UTC timestamp like 2017-07-15T14:00:00Z."""
    try:
        return datetime.strptime(value, TIME_LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid time {value!r}, expected YYYY-MM-DDTHH:MM:SSZ")


def parse_granularity(value: str) -> HistoricRateGranularity:
    """argparse type: candle width in seconds."""
    try:
        return HistoricRateGranularity.from_seconds(int(value))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    now = datetime.now(timezone.utc).replace(microsecond=0)

    parser = argparse.ArgumentParser(
        description="Fetch historic rates (candles) from the GDAX REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials are read from GDAX_API_SECRET, GDAX_API_KEY and
GDAX_API_PASSPHRASE (a .env file is honoured). Without them requests
go out unsigned, which is enough for public market data.

Supported granularities (seconds):
    60, 300, 900, 3600, 21600, 86400
        """
    )

    parser.add_argument(
        '--start',
        type=parse_time,
        default=now - timedelta(hours=1),
        help='Start time in ISO 8601 (default: one hour ago)'
    )

    parser.add_argument(
        '--end',
        type=parse_time,
        default=now,
        help='End time in ISO 8601 (default: now)'
    )

    parser.add_argument(
        '--granularity', '-g',
        type=parse_granularity,
        default=HistoricRateGranularity.ONE_MINUTE,
        help='Desired timeslice in seconds (default: 60)'
    )

    parser.add_argument(
        '--environment', '-e',
        choices=ENVIRONMENTS,
        default='sandbox',
        help='Environment to execute the request in (default: sandbox)'
    )

    parser.add_argument(
        '--product', '-p',
        default='ETH-USD',
        help='Product ID (default: ETH-USD)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def format_candle(candle: Candle) -> str:
    return (
        f"{candle.time.strftime(TIME_LAYOUT)}  "
        f"O={candle.open} H={candle.high} L={candle.low} C={candle.close} V={candle.volume}"
    )


def main(argv: Optional[List[str]] = None, client: Optional[GdaxClient] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    load_dotenv()

    logger.info(f"start = {args.start.strftime(TIME_LAYOUT)}")
    logger.info(f"end = {args.end.strftime(TIME_LAYOUT)}")
    logger.info(f"granularity = {args.granularity.seconds}")
    logger.info(f"environment = {args.environment}")

    if client is None:
        config = ClientConfig.for_environment(args.environment, Credentials.from_env())
        client = GdaxClient(config)

    try:
        with client:
            candles = get_product_historic_rates(
                client,
                args.product,
                start=args.start,
                end=args.end,
                granularity=args.granularity,
            )
    except GdaxError as e:
        logger.error(f"Failed to fetch historic rates for {args.product}: {e}")
        return 1

    for candle in candles:
        print(format_candle(candle))
    logger.info(f"Fetched {len(candles)} candles for {args.product}")
    return 0


def run():
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(0)


if __name__ == "__main__":
    run()
