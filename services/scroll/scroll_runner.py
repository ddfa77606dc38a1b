"""Scroll runner entry point.

Prints every project, issue or time entry of the configured Redmine server,
one line per item, while errors are logged as they are reported.

Usage:
    python -m services.scroll.scroll_runner {projects|issues|time_entries}
"""

import argparse
import asyncio
import sys

from services.scroll.ScrollService import ScrollService
from shared.clients.tracker.TrackerClientManager import TrackerClientManager
from shared.clients.tracker.models.EntityKind import EntityKind
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scroll over all items of a tracker listing.")
    parser.add_argument("kind", choices=[kind.value for kind in EntityKind], help="entity kind to list")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Run one scroll and return the process exit code."""
    args = parse_args(argv)
    logger = setup_logging()
    config = HelperConfig(logger=logger)
    tracker_client = TrackerClientManager(helper_config=config).get_client()
    scroll_service = ScrollService(helper_config=config, tracker_client=tracker_client)

    error_count = 0

    async def print_items(scroll) -> None:
        async for item in scroll.items:
            print(item)

    async def log_errors(scroll) -> None:
        nonlocal error_count
        async for error in scroll.errors:
            error_count += 1
            logger.error("%s: %s", type(error).__name__, error)

    try:
        await tracker_client.boot()
        try:
            await tracker_client.do_healthcheck()
        except Exception as e:
            # the scroll reports every failed page itself
            logger.warning("Healthcheck of %s failed: %s. Scrolling anyway.", tracker_client.get_engine_name(), e)
        async with scroll_service.scroll(EntityKind(args.kind)) as scroll:
            await asyncio.gather(print_items(scroll), log_errors(scroll))
    finally:
        await tracker_client.close()

    return 1 if error_count else 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
