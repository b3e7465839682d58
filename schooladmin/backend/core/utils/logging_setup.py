"""
Logging Setup Utilities.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

# Third-party loggers that drown out the store/API messages at INFO
_CHATTY = ("httpx", "httpcore", "multipart")


def resolve_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """
    Turn a config value such as ``"info"`` or ``20`` into a logging level.

    Unknown names fall back to ``default``.
    """
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level, as a number or a level name
        log_file: Optional file path; it records DEBUG and up regardless of ``level``
    """
    level = resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)
    root_logger.handlers.clear()

    console_handler = RichHandler(show_time=False, show_path=False, rich_tracebacks=True)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(file_handler)

    for name in _CHATTY:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def setup_logging_from_config(config: dict[str, Any], override: int | None = None) -> int:
    """
    Apply the ``logging`` section of the configuration.

    Args:
        config: Full configuration dictionary
        override: Level forced from the command line (``--verbose``/``--debug``)

    Returns:
        The console level that was applied
    """
    section = config.get("logging") or {}
    level = override if override is not None else resolve_level(section.get("level"))
    setup_logging(level, section.get("file"))
    return level
