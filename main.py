import argparse

from sheet_inventory import settings
from sheet_inventory.logger import setup_logger
from sheet_inventory.pipeline import InventoryPipeline


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch the inventory sheet, normalize it and publish a snapshot."
    )
    parser.add_argument(
        "--sheet",
        default=settings.SHEET_SOURCE,
        help="Google Sheet ID or URL (default: SHEET_SOURCE from .env)",
    )
    parser.add_argument(
        "--watch", action="store_true", help="Keep polling the sheet on an interval."
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=settings.POLL_INTERVAL_SECONDS,
        help="Polling interval in seconds when --watch is set.",
    )
    parser.add_argument(
        "--no-save", action="store_true", help="Do not write CSV/JSON snapshots."
    )
    parser.add_argument(
        "--no-webhook", action="store_true", help="Do not post to the webhook."
    )
    return parser.parse_args(argv)


def run_process(argv=None) -> int:
    """Main orchestration function: one refresh, or a polling loop with --watch."""
    args = parse_args(argv)
    logger = setup_logger()

    pipeline = InventoryPipeline(
        sheet_source=args.sheet,
        save_outputs=not args.no_save,
        post_webhook=not args.no_webhook,
    )

    if args.watch:
        logger.info(f"Polling every {args.interval}s. Press Ctrl+C to stop.")
        try:
            pipeline.poll(args.interval)
        except KeyboardInterrupt:
            logger.info("Stopped.")
        return 0

    snapshot = pipeline.run()
    return 1 if snapshot.error else 0


if __name__ == "__main__":
    raise SystemExit(run_process())
