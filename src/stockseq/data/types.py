"""Value types shared by the parsing and feature stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import pandas as pd

PRICE_COLUMNS = ("open", "close")


@dataclass(frozen=True)
class PricePoint:
    open: float
    close: float


@dataclass(frozen=True, eq=False)
class PriceTable:
    """
    Per-symbol price frames aligned on a common calendar.

    Every frame is indexed by date string, holds the ``open`` and ``close``
    columns and has exactly one row per calendar date, in calendar order.
    """

    symbols: Tuple[str, ...]
    calendar: Tuple[str, ...]
    frames: Dict[str, pd.DataFrame]

    @property
    def symbol_count(self) -> int:
        return len(self.symbols)

    def __len__(self) -> int:
        return len(self.calendar)

    def point(self, symbol: str, date: str) -> PricePoint:
        row = self.frames[symbol].loc[date]
        return PricePoint(open=float(row["open"]), close=float(row["close"]))

    def series(self, symbol: str) -> Dict[str, PricePoint]:
        frame = self.frames[symbol]
        return {
            date: PricePoint(open=float(open_), close=float(close))
            for date, open_, close in zip(frame.index, frame["open"], frame["close"])
        }

    def column_matrix(self, column: str) -> np.ndarray:
        """Return one price column as a ``[dates, symbols]`` float64 matrix."""
        if not self.symbols:
            return np.empty((len(self.calendar), 0), dtype=np.float64)
        return np.column_stack(
            [self.frames[symbol][column].to_numpy(dtype=np.float64) for symbol in self.symbols]
        )
