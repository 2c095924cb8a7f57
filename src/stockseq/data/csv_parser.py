"""Parsing of multi-symbol daily price CSV text."""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from stockseq.data.calendar import align_to_calendar, common_calendar
from stockseq.data.types import PRICE_COLUMNS, PriceTable
from stockseq.exceptions import EmptyDatasetError, FormatError
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.csv_parser")

REQUIRED_COLUMNS = ("Date", "Symbol", "Open", "Close")
RECORD_COLUMNS = ("date", "symbol", "open", "close")

_LINE_BREAK = re.compile(r"\r?\n")
_BYTE_ORDER_MARK = "\ufeff"


def _parse_price(value: str) -> Optional[float]:
    """Return a finite float, or None for NaN, infinities and non-numeric text."""
    text = value.strip()
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_price_records(text: str) -> pd.DataFrame:
    """
    Scan CSV text into a frame of valid ``date, symbol, open, close`` rows.

    Rows with the wrong column count, an empty date or symbol, or a
    non-numeric or non-finite price are skipped. Column order in the header
    is free and extra columns are ignored. A leading byte-order mark is
    dropped.
    """
    if text.startswith(_BYTE_ORDER_MARK):
        text = text[len(_BYTE_ORDER_MARK):]
    lines = [line.strip() for line in _LINE_BREAK.split(text)]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        raise FormatError("The CSV file must include a header row and at least one record.")

    headers = [header.strip() for header in lines[0].split(",")]
    missing = [column for column in REQUIRED_COLUMNS if column not in headers]
    if missing:
        raise FormatError(
            f"CSV file must contain Date, Symbol, Open, and Close columns (missing: {', '.join(missing)})."
        )

    idx_date, idx_symbol, idx_open, idx_close = (headers.index(column) for column in REQUIRED_COLUMNS)

    records = []
    skipped = 0
    for line in lines[1:]:
        row = line.split(",")
        if len(row) != len(headers):
            skipped += 1
            continue

        date = row[idx_date].strip()
        symbol = row[idx_symbol].strip()
        open_ = _parse_price(row[idx_open])
        close = _parse_price(row[idx_close])
        if not date or not symbol or open_ is None or close is None:
            skipped += 1
            continue

        records.append((date, symbol, open_, close))

    frame = pd.DataFrame.from_records(records, columns=list(RECORD_COLUMNS))
    frame = frame.astype({"date": str, "symbol": str, "open": float, "close": float})
    if skipped:
        logger.debug("Skipped malformed rows", extra={"skipped": skipped})
    logger.info("Parsed CSV rows", extra={"rows": len(frame), "skipped": skipped})
    return frame


def build_symbol_series(records: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """
    Group parsed rows into one date-indexed frame per symbol.

    A repeated ``(symbol, date)`` pair keeps its last occurrence.
    """
    deduped = records.drop_duplicates(subset=["symbol", "date"], keep="last")
    series: Dict[str, pd.DataFrame] = {}
    for symbol, group in deduped.groupby("symbol", sort=True):
        frame = group.set_index("date")[list(PRICE_COLUMNS)].sort_index()
        series[str(symbol)] = frame
    return series


def parse_price_csv(text: str) -> PriceTable:
    """Parse CSV text and align every symbol onto the common calendar."""
    records = parse_price_records(text)
    series = build_symbol_series(records)

    symbols = tuple(sorted(series))
    if not symbols:
        raise EmptyDatasetError("No stock symbols were detected in the CSV file.")

    calendar = common_calendar(series)
    aligned = align_to_calendar(series, calendar)
    logger.info(
        "Loaded price table",
        extra={"symbols": len(symbols), "dates": len(calendar)},
    )
    return PriceTable(symbols=symbols, calendar=calendar, frames=aligned)


def read_price_csv(path: str | Path) -> PriceTable:
    """Read a CSV file from disk and parse it into a :class:`PriceTable`."""
    csv_path = Path(path)
    if not csv_path.is_file():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")
    return parse_price_csv(csv_path.read_text(encoding="utf-8-sig"))
