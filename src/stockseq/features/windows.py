"""Sliding-window feature and multi-horizon direction label generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from stockseq.data.types import PriceTable
from stockseq.exceptions import ConfigError, InsufficientDataError
from stockseq.features.normalizer import NormalizedTable
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.windows")

FEATURES_PER_SYMBOL = 2


@dataclass(frozen=True, eq=False)
class Sample:
    """One window: flat features ``[L * S * 2]``, labels ``[S * H]`` and its anchor."""

    features: np.ndarray
    labels: np.ndarray
    anchor_index: int
    anchor_date: str


def anchor_range(date_count: int, sequence_length: int, horizon: int) -> range:
    """Anchors with a full history behind them and a full horizon ahead."""
    return range(sequence_length - 1, date_count - horizon)


def direction_labels(closes: np.ndarray, anchor_index: int, horizon: int) -> np.ndarray:
    """
    Label each symbol and step ``1..horizon`` with 1 when the close rose.

    ``closes`` is the raw ``[dates, symbols]`` close matrix. Output is ordered
    symbol-major: all steps of the first symbol, then the next symbol. An
    unchanged close is labeled 0.
    """
    base = closes[anchor_index]
    future = closes[anchor_index + 1 : anchor_index + 1 + horizon]
    return (future > base).T.reshape(-1).astype(np.float32)


def build_samples(
    normalized: NormalizedTable,
    table: PriceTable,
    sequence_length: int,
    horizon: int,
) -> List[Sample]:
    """
    Slide a window of ``sequence_length`` steps over the calendar.

    Features come from the normalized table, laid out row-major as
    ``[step][symbol][open, close]``. Labels compare raw closes so they do not
    depend on the scaling.
    """
    if sequence_length < 1 or horizon < 1:
        raise ConfigError(
            f"sequence_length and horizon must be >= 1, got {sequence_length} and {horizon}"
        )

    calendar = table.calendar
    feature_matrix = normalized.feature_matrix()
    closes = table.column_matrix("close")

    samples: List[Sample] = []
    for idx in anchor_range(len(calendar), sequence_length, horizon):
        window = feature_matrix[idx - sequence_length + 1 : idx + 1]
        samples.append(
            Sample(
                features=np.array(window, dtype=np.float32).reshape(-1),
                labels=direction_labels(closes, idx, horizon),
                anchor_index=idx,
                anchor_date=calendar[idx],
            )
        )

    if not samples:
        raise InsufficientDataError(
            "Not enough data to create training samples: "
            f"{len(calendar)} dates for sequence_length={sequence_length}, horizon={horizon}."
        )

    logger.info(
        "Generated supervised sequences",
        extra={"sequence_length": sequence_length, "horizon": horizon, "samples": len(samples)},
    )
    return samples
