"""Logging utility."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra={...}`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {
            key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS
        }
        if not extras:
            return message
        details = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{message} | {details}"


def _resolve_level(level: Optional[int | str]) -> int:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


PACKAGE_LOGGER = "stockseq"


def _ensure_console_handler(logger: logging.Logger) -> None:
    if any(getattr(handler, "_stockseq_console", False) for handler in logger.handlers):
        return
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        ExtraFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler._stockseq_console = True  # type: ignore[attr-defined]
    logger.addHandler(console_handler)


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: Optional[int | str] = None,
    log_dir: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Set up a logger under the ``stockseq`` package logger.

    The package logger owns the console handler; module loggers such as
    ``stockseq.csv_parser`` carry no handlers of their own and propagate to
    it, so its level and file handler apply to the whole pipeline.

    Args:
        name: Logger name
        level: Logging level (name or number); the package logger defaults to ``LOG_LEVEL``
        log_dir: Directory for a timestamped log file, attached at most once per logger

    Returns:
        Configured logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(_resolve_level(None))
    _ensure_console_handler(package_logger)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_resolve_level(level))

    if log_dir is not None and not any(
        getattr(handler, "_stockseq_file", False) for handler in logger.handlers
    ):
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_handler = logging.FileHandler(log_path / f"{name}_{timestamp}.log", encoding="utf-8")
        file_handler.setFormatter(
            ExtraFormatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        file_handler._stockseq_file = True  # type: ignore[attr-defined]
        logger.addHandler(file_handler)

    return logger


def close_file_handlers(logger: logging.Logger) -> None:
    """Detach and close the file handlers attached by :func:`setup_logger`."""
    for handler in list(logger.handlers):
        if getattr(handler, "_stockseq_file", False):
            logger.removeHandler(handler)
            handler.close()
