"""Common trading calendar computation and per-symbol alignment."""

from __future__ import annotations

from functools import reduce
from typing import Dict, Sequence, Tuple

import pandas as pd

from stockseq.exceptions import NoCommonCalendarError
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.calendar")


def common_calendar(frames: Dict[str, pd.DataFrame]) -> Tuple[str, ...]:
    """
    Return the sorted intersection of every frame's dates.

    Dates are compared as strings, so ISO-like dates sort chronologically.
    """
    indices = [pd.Index(frame.index) for frame in frames.values()]
    if not indices:
        raise NoCommonCalendarError("No symbols were provided to build a calendar.")

    shared = reduce(lambda left, right: left.intersection(right), indices)
    if len(shared) == 0:
        raise NoCommonCalendarError("Stocks do not share a common set of dates.")

    calendar = tuple(sorted(str(date) for date in shared.unique()))
    logger.info(
        "Computed common calendar",
        extra={"symbols": len(indices), "dates": len(calendar)},
    )
    return calendar


def align_to_calendar(
    frames: Dict[str, pd.DataFrame], calendar: Sequence[str]
) -> Dict[str, pd.DataFrame]:
    """Prune every frame to exactly the calendar dates, in calendar order."""
    dates = list(calendar)
    aligned: Dict[str, pd.DataFrame] = {}
    for symbol, frame in frames.items():
        pruned = frame.loc[dates].copy()
        pruned.index.name = "date"
        aligned[symbol] = pruned
        dropped = len(frame) - len(pruned)
        if dropped:
            logger.debug(
                "Dropped dates outside the common calendar",
                extra={"symbol": symbol, "dropped": dropped},
            )
    return aligned
