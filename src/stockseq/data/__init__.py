"""CSV parsing and calendar alignment modules."""

from .calendar import align_to_calendar, common_calendar
from .csv_parser import (
    REQUIRED_COLUMNS,
    build_symbol_series,
    parse_price_csv,
    parse_price_records,
    read_price_csv,
)
from .types import PricePoint, PriceTable

__all__ = [
    "PricePoint",
    "PriceTable",
    "REQUIRED_COLUMNS",
    "parse_price_records",
    "build_symbol_series",
    "parse_price_csv",
    "read_price_csv",
    "common_calendar",
    "align_to_calendar",
]
