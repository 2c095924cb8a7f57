"""Utility helpers for turning symbol identifiers into file names."""

from __future__ import annotations

from typing import Sequence


def sanitize_symbol(symbol: str) -> str:
    """Return an uppercase filesystem-safe symbol."""
    return symbol.upper().replace("/", "_").replace(" ", "_")


def symbol_slug(symbol: str) -> str:
    """Return a lowercase slug suitable for filenames."""
    return sanitize_symbol(symbol).lower()


def symbols_slug(symbols: Sequence[str], max_symbols: int = 4) -> str:
    """Join symbol slugs into one label, abbreviating long symbol lists."""
    slugs = [symbol_slug(symbol) for symbol in symbols]
    if len(slugs) > max_symbols:
        extra = len(slugs) - max_symbols
        slugs = slugs[:max_symbols] + [f"plus{extra}"]
    return "_".join(slugs) or "empty"
