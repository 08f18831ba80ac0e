"""GDELT 2.0 latest events collection script.

Resolves the latest export from the last-update manifest, downloads and
verifies it, decodes every event and prints the source URL of each one.

Usage:
    # Print the latest events
    python scripts/collect_gdelt_events.py

    # Also export a raw CSV to data/raw/gdelt_events/
    python scripts/collect_gdelt_events.py --export

    # Use a different manifest (e.g. a mirror)
    python scripts/collect_gdelt_events.py --url http://mirror.example.org/gdeltv2/lastupdate.txt

    # Health check only
    python scripts/collect_gdelt_events.py --health-check

Example:
    $ python scripts/collect_gdelt_events.py --export
    [INFO] Getting latest events from GDELT...
    [INFO] Found 1342 new events.
    [INFO] Exported 1342 records to data/raw/gdelt_events/gdelt_events_events_20260215.csv
"""

import argparse
import sys

from gdelt_events.errors import GDELTError
from gdelt_events.ingestion.collectors.gdelt_events_collector import GDELTEventsCollector
from gdelt_events.ingestion.collectors.gdelt_utils import events_to_dataframe
from gdelt_events.shared.config import Config
from gdelt_events.shared.utils import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Fetch and decode the latest GDELT 2.0 events export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--url",
        type=str,
        help="Last-update manifest URL. Default: Config.GDELT_LAST_UPDATE_URL",
        metavar="URL",
    )

    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check only and exit",
    )

    parser.add_argument(
        "--export",
        action="store_true",
        help="Export decoded events to CSV",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main collection script."""
    args = parse_args(argv)

    logger = setup_logger(
        "collect_gdelt_events",
        level="DEBUG" if args.verbose else "INFO",
    )

    collector = GDELTEventsCollector(
        last_update_url=args.url,
        log_file=Config.LOGS_DIR / "collectors" / "gdelt_events_collector.log",
    )

    if args.health_check:
        if not collector.health_check():
            logger.error("GDELT last-update manifest unreachable: %s", collector.last_update_url)
            return 1
        logger.info("Health check: PASSED")
        return 0

    logger.info("Getting latest events from GDELT...")
    try:
        events = collector.get_latest_events()
    except GDELTError as e:
        logger.error("Collection failed: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Collection interrupted by user")
        return 130

    logger.info("Found %d new events.", len(events))
    for event in events:
        print(event.source_url)

    if args.export:
        if not events:
            logger.warning("No events to export")
        else:
            df = events_to_dataframe(events, source=collector.SOURCE_NAME)
            collector.export_csv(df, collector.DATASET_NAME)

    return 0


if __name__ == "__main__":
    sys.exit(main())
