"""Stateful CSV-to-dataset facade."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from stockseq.config import PipelineConfig
from stockseq.data import PriceTable, parse_price_csv, read_price_csv
from stockseq.exceptions import DatasetNotLoadedError
from stockseq.features.export import DatasetBundle, TensorFactory, export_dataset
from stockseq.features.normalizer import normalize_table
from stockseq.features.splitter import split_samples
from stockseq.features.windows import build_samples
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.loader")


@dataclass(frozen=True)
class LoadSummary:
    symbols: Tuple[str, ...]
    dates: Tuple[str, ...]
    sequence_length: int
    horizon: int


def prepare_dataset(
    table: PriceTable,
    config: Optional[PipelineConfig] = None,
    tensor_factory: Optional[TensorFactory] = None,
) -> DatasetBundle:
    """Run normalization, windowing, splitting and export on an aligned table."""
    config = config or PipelineConfig()
    normalized = normalize_table(table)
    samples = build_samples(normalized, table, config.sequence_length, config.horizon)
    split = split_samples(samples, config.split_ratio)
    return export_dataset(
        split,
        symbols=table.symbols,
        calendar=table.calendar,
        sequence_length=config.sequence_length,
        horizon=config.horizon,
        tensor_factory=tensor_factory,
    )


class StockDataLoader:
    """
    Holds the most recently loaded price table and prepares datasets from it.

    A load either replaces the table completely or leaves the previous one in
    place. Load, prepare and dispose calls must not overlap.
    """

    def __init__(
        self,
        sequence_length: int = 12,
        horizon: int = 3,
        split_ratio: float = 0.8,
    ) -> None:
        self.config = PipelineConfig(
            sequence_length=sequence_length,
            horizon=horizon,
            split_ratio=split_ratio,
        )
        self._table: Optional[PriceTable] = None

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "StockDataLoader":
        return cls(
            sequence_length=config.sequence_length,
            horizon=config.horizon,
            split_ratio=config.split_ratio,
        )

    @property
    def sequence_length(self) -> int:
        return self.config.sequence_length

    @property
    def horizon(self) -> int:
        return self.config.horizon

    @property
    def split_ratio(self) -> float:
        return self.config.split_ratio

    @property
    def table(self) -> Optional[PriceTable]:
        return self._table

    @property
    def symbols(self) -> List[str]:
        return list(self._table.symbols) if self._table else []

    @property
    def dates(self) -> List[str]:
        return list(self._table.calendar) if self._table else []

    def load_text(self, text: str) -> LoadSummary:
        """Parse CSV text and make it the current price table."""
        self._table = parse_price_csv(text)
        return self._summary()

    def load_file(self, path: str | Path) -> LoadSummary:
        """Read a CSV file and make it the current price table."""
        logger.info("Loading CSV file", extra={"path": str(path)})
        self._table = read_price_csv(path)
        return self._summary()

    def prepare_dataset(self, tensor_factory: Optional[TensorFactory] = None) -> DatasetBundle:
        if self._table is None:
            raise DatasetNotLoadedError("Load a CSV file before preparing the dataset.")
        return prepare_dataset(self._table, self.config, tensor_factory=tensor_factory)

    @staticmethod
    def dispose_dataset(dataset: Optional[DatasetBundle]) -> None:
        if dataset is None:
            return
        dataset.dispose()

    def _summary(self) -> LoadSummary:
        assert self._table is not None
        return LoadSummary(
            symbols=self._table.symbols,
            dates=self._table.calendar,
            sequence_length=self.sequence_length,
            horizon=self.horizon,
        )
