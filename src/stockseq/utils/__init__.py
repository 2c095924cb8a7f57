"""Logging and symbol helpers."""

from .logger import close_file_handlers, setup_logger
from .symbols import sanitize_symbol, symbol_slug

__all__ = ["setup_logger", "close_file_handlers", "sanitize_symbol", "symbol_slug"]
