"""Logging setup shared by all tools."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "ddl_tools"


def setup_logger(name: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """
    Configure logging with a rich console handler.

    The handler is attached to the package root logger so every module
    logger created with get_logger() shares it.

    Args:
        name: Name of the calling module (only used in the debug message)
        level: Log level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The configured root logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)

    root.propagate = False
    root.debug(f"Logging configured for {name or ROOT_LOGGER} at {level.upper()}")
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package root."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
