"""Command line entry point."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from lobsters_gopher.integrations.lobsters_client import normalize_host
from lobsters_gopher.utils.config import get_settings
from lobsters_gopher.utils.logging_config import setup_logging
from lobsters_gopher.workflow.cli_helpers import display_error, display_run_summary
from lobsters_gopher.workflow.pipeline import run_mirror

logger = logging.getLogger(__name__)


def build_parser(default_host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lobsters-gopher",
        description="Mirror the hottest Lobsters stories and comments as Gopher pages.",
    )
    parser.add_argument(
        "--host",
        default=default_host,
        help=f"forum host, with or without scheme (default: {default_host})",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one mirror pass.

    Returns:
        0 when the run completes (even with skipped stories), 1 when the
        story list could not be fetched or the host is invalid
    """
    settings = get_settings()
    args = build_parser(settings.LOBSTERS_HOST).parse_args(argv)
    setup_logging()

    try:
        base_url = normalize_host(args.host)
    except ValueError as e:
        display_error(str(e))
        return 1

    logger.info(f"Mirroring {base_url} into {settings.OUTPUT_DIR}")
    run = run_mirror(
        base_url,
        output_dir=settings.OUTPUT_DIR,
        worker_count=settings.WORKER_COUNT,
    )

    if not run.succeeded:
        display_error(f"Could not fetch the story list: {run.error_message}")
        return 1

    display_run_summary(run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
