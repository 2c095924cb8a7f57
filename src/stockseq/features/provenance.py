"""Mapping test labels back to calendar dates, and per-symbol accuracy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class TimelineEntry:
    symbol: str
    horizon: int
    anchor_date: str
    future_date: str
    actual: int
    predicted: Optional[int] = None

    @property
    def correct(self) -> Optional[bool]:
        if self.predicted is None:
            return None
        return self.predicted == self.actual


def label_column(symbol_index: int, step: int, horizon: int) -> int:
    """Column of the label for a symbol and a 1-based horizon step."""
    return symbol_index * horizon + (step - 1)


def resolve_test_timeline(
    dataset: Any,
    predictions: Optional[Any] = None,
    threshold: float = 0.5,
) -> List[TimelineEntry]:
    """
    Expand every test label into a dated timeline entry.

    ``dataset`` is a :class:`~stockseq.features.export.DatasetBundle` or a
    :class:`~stockseq.features.packs.DatasetPack`. Entries are ordered by
    sample, then symbol, then horizon step. When ``predictions`` (shape
    ``[test_count, symbols * horizon]``) are given, each entry also carries
    the thresholded prediction.
    """
    truth = np.asarray(dataset.y_test, dtype=np.float32)
    anchors = list(dataset.test_anchor_indices)
    dates = list(dataset.all_dates)
    symbols = list(dataset.stock_symbols)
    horizon = int(dataset.horizon)

    predicted_bits = None
    if predictions is not None:
        scores = np.asarray(predictions, dtype=np.float32).reshape(truth.shape)
        predicted_bits = (scores >= threshold).astype(np.int32)

    entries: List[TimelineEntry] = []
    for sample_index, anchor in enumerate(anchors):
        for symbol_index, symbol in enumerate(symbols):
            for step in range(1, horizon + 1):
                column = label_column(symbol_index, step, horizon)
                entries.append(
                    TimelineEntry(
                        symbol=symbol,
                        horizon=step,
                        anchor_date=dates[anchor],
                        future_date=dates[anchor + step],
                        actual=int(round(float(truth[sample_index, column]))),
                        predicted=None
                        if predicted_bits is None
                        else int(predicted_bits[sample_index, column]),
                    )
                )
    return entries


def stock_accuracies(
    y_true: Any,
    y_pred: Any,
    symbols: Sequence[str],
    horizon: int,
    threshold: float = 0.5,
) -> Dict[str, float]:
    """Direction accuracy per symbol, averaged over samples and horizon steps."""
    truth = np.rint(np.asarray(y_true, dtype=np.float32)).astype(np.int32)
    predicted = (np.asarray(y_pred, dtype=np.float32) >= threshold).astype(np.int32)
    shape = (-1, len(symbols), horizon)
    matches = truth.reshape(shape) == predicted.reshape(shape)
    per_symbol = matches.mean(axis=(0, 2))
    return {symbol: float(score) for symbol, score in zip(symbols, per_symbol)}
