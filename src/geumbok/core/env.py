"""Logging setup for geumbok.

Library modules only log to ``LOGGER``; handlers are installed once by the
CLI through setup_logging().
"""

import logging
import os

LOGGER = logging.getLogger("geumbok")


def setup_logging(level: str | None = None) -> None:
    """Route log records to a Rich handler on stderr.

    *level* defaults to the ``LOG_LEVEL`` environment variable, then INFO.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
                rich_tracebacks=False,
            )
        ],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
