"""Logging setup for the command line."""

import logging


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; debug level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if verbose:
        logging.getLogger("cutlist").setLevel(logging.DEBUG)
