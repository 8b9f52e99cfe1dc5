import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(
    name: Optional[str] = None,
    level: int = logging.INFO,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Return a logger that writes through a RichHandler.

    The handler is attached once; calling again only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
