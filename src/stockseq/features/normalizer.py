"""Per-symbol min-max scaling of Open/Close series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import pandas as pd

from stockseq.data.types import PRICE_COLUMNS, PriceTable
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.normalizer")


@dataclass(frozen=True)
class MinMaxScale:
    """Affine map ``(value - minimum) / span`` with a zero span replaced by 1."""

    minimum: float
    span: float

    @classmethod
    def fit(cls, values: pd.Series) -> "MinMaxScale":
        minimum = float(values.min())
        span = float(values.max()) - minimum
        return cls(minimum=minimum, span=span or 1.0)

    def apply(self, values):
        return (values - self.minimum) / self.span

    def invert(self, values):
        return values * self.span + self.minimum


@dataclass(frozen=True, eq=False)
class NormalizedTable:
    """Scaled per-symbol frames plus the scales needed to invert them."""

    symbols: Tuple[str, ...]
    calendar: Tuple[str, ...]
    frames: Dict[str, pd.DataFrame]
    scales: Dict[str, Dict[str, MinMaxScale]]

    def feature_matrix(self) -> np.ndarray:
        """
        Return a ``[dates, symbols * 2]`` float32 matrix.

        Each row holds ``open, close`` for every symbol in symbol order.
        """
        columns = [
            self.frames[symbol][column].to_numpy(dtype=np.float32)
            for symbol in self.symbols
            for column in PRICE_COLUMNS
        ]
        if not columns:
            return np.empty((len(self.calendar), 0), dtype=np.float32)
        return np.column_stack(columns)


def normalize_table(table: PriceTable) -> NormalizedTable:
    """Scale each symbol's Open and Close independently into ``[0, 1]``."""
    frames: Dict[str, pd.DataFrame] = {}
    scales: Dict[str, Dict[str, MinMaxScale]] = {}
    for symbol in table.symbols:
        source = table.frames[symbol]
        symbol_scales = {column: MinMaxScale.fit(source[column]) for column in PRICE_COLUMNS}
        frames[symbol] = pd.DataFrame(
            {column: symbol_scales[column].apply(source[column]) for column in PRICE_COLUMNS},
            index=source.index,
        )
        scales[symbol] = symbol_scales

    logger.info(
        "Normalized price table",
        extra={"symbols": len(frames), "dates": len(table.calendar)},
    )
    return NormalizedTable(
        symbols=table.symbols,
        calendar=table.calendar,
        frames=frames,
        scales=scales,
    )
