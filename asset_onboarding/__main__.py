"""
Entry point for the asset_onboarding component.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import PurePath
from typing import List

from .application.domain import OnboardingRequest
from .application.exceptions import OnboardingError
from .infrastructure.containers import Container

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    """Applies basic logging configuration."""
    logging.basicConfig(level=level)


def single_character(value: str) -> str:
    """argparse type for delimiter and quote characters."""
    if len(value) != 1:
        raise argparse.ArgumentTypeError(
            f"expected a single character, got {value!r}"
        )
    return value


def build_requests(args: argparse.Namespace) -> List[OnboardingRequest]:
    """One request per path; the display name defaults to the file name."""
    return [
        OnboardingRequest(
            full_path=path,
            display_name=args.display_name or PurePath(path).name,
            description=args.description,
            column_headers=args.columns,
            delimiter_character=args.delimiter,
            quote_character=args.quote,
        )
        for path in args.paths
    ]


async def run_application(args: argparse.Namespace) -> int:
    """Wires and runs the application using the DI container."""

    container = Container()
    setup_logging(level=container.config().logging.level)

    try:
        onboarding_service = container.onboarding_service()
        results = await onboarding_service.onboard_all(build_requests(args))
    except OnboardingError as e:
        logger.error(f"An application error occurred: {e}")
        return 1
    finally:
        await container.http_client().aclose()

    for path, result in zip(args.paths, results):
        if result.ok:
            print(f"{path}\t{result.guid}")
        else:
            print(
                f"{path}\t{result.error.kind.value}: {result.error.message}",
                file=sys.stderr,
            )

    return 0 if all(result.ok for result in results) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Onboard CSV files into the metadata catalog"
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Full path of each CSV file to onboard.",
    )

    parser.add_argument(
        "--columns",
        nargs="+",
        default=None,
        help="Column names, in file order. Omit to onboard without a schema.",
    )

    parser.add_argument(
        "--delimiter",
        type=single_character,
        default=None,
        help="Field delimiter character (default ',').",
    )

    parser.add_argument(
        "--quote",
        type=single_character,
        default=None,
        help="Quote character (default '\"').",
    )

    parser.add_argument(
        "--display-name",
        default=None,
        help="Display name for the asset (default: the file name).",
    )

    parser.add_argument(
        "--description",
        default=None,
        help="Description of the asset.",
    )

    return parser


if __name__ == "__main__":
    cli_args = build_parser().parse_args()

    sys.exit(asyncio.run(run_application(cli_args)))
