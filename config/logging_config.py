"""Logging setup shared by the CLI, the API server and the Streamlit page."""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[str, int] = "INFO", verbose: bool = False) -> None:
    """
    Install the root handler.

    Args:
        level: Log level name or number
        verbose: Force DEBUG regardless of level
    """
    if verbose:
        level = logging.DEBUG
    elif isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    # SDK transports are chatty at DEBUG
    for noisy in ("httpx", "httpcore", "anthropic", "openai"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
