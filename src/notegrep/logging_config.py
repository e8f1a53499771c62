"""Logging setup shared by the CLI and the MCP server."""

import sys

from loguru import logger

_PLAIN_FORMAT = "{level.icon} {message}"
_VERBOSE_FORMAT = "<green>{time:HH:mm:ss}</green> {level.icon} <cyan>{name}</cyan>:{line} {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send notegrep's log to stderr.

    stdout carries reports (CLI) or protocol messages (MCP stdio), so no
    sink may ever write there.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=_PLAIN_FORMAT)
