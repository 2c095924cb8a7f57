"""Chronological train/test partitioning of samples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from stockseq.exceptions import ConfigError, EmptySplitError
from stockseq.features.windows import Sample
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.splitter")

DEFAULT_SPLIT_RATIO = 0.8


@dataclass(frozen=True, eq=False)
class SampleGroup:
    samples: Tuple[Sample, ...]

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def dates(self) -> List[str]:
        return [sample.anchor_date for sample in self.samples]

    @property
    def anchor_indices(self) -> List[int]:
        return [sample.anchor_index for sample in self.samples]


@dataclass(frozen=True, eq=False)
class SplitResult:
    train: SampleGroup
    test: SampleGroup

    @property
    def total(self) -> int:
        return self.train.count + self.test.count


def train_count_for(total: int, split_ratio: float) -> int:
    """``floor(total * split_ratio)`` clamped so both partitions keep a sample."""
    return min(total - 1, max(1, math.floor(total * split_ratio)))


def split_samples(samples: Sequence[Sample], split_ratio: float = DEFAULT_SPLIT_RATIO) -> SplitResult:
    """
    Cut ordered samples into a training prefix and a test suffix.

    No shuffling takes place, so every test anchor is later than every
    training anchor.
    """
    if not 0.0 < split_ratio < 1.0:
        raise ConfigError(f"split_ratio must lie in (0, 1), got {split_ratio}")

    total = len(samples)
    if total < 2:
        raise EmptySplitError(
            f"Dataset split needs at least 2 samples, got {total}. "
            "Adjust the split ratio or provide more data."
        )

    train_count = train_count_for(total, split_ratio)
    result = SplitResult(
        train=SampleGroup(tuple(samples[:train_count])),
        test=SampleGroup(tuple(samples[train_count:])),
    )
    logger.info(
        "Split sequences",
        extra={"train": result.train.count, "test": result.test.count},
    )
    return result
