"""Command line entry point: ``python -m daubkit`` (no arguments)."""

import logging
import sys

from daubkit.experiment.driver import main


def cli() -> None:
    """Runs the full experiment with the default configuration and exits."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    sys.exit(main())


if __name__ == "__main__":
    cli()
