"""Persisting exported datasets as compressed numpy archives."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from stockseq.config import get_settings
from stockseq.features.export import DatasetBundle
from stockseq.features.windows import FEATURES_PER_SYMBOL
from stockseq.utils.logger import setup_logger
from stockseq.utils.symbols import symbols_slug

logger = setup_logger("stockseq.packs")


@dataclass
class DatasetPack:
    X_train: np.ndarray
    y_train: np.ndarray
    X_test: np.ndarray
    y_test: np.ndarray
    stock_symbols: Tuple[str, ...]
    sequence_length: int
    horizon: int
    train_dates: Tuple[str, ...]
    test_dates: Tuple[str, ...]
    train_anchor_indices: Tuple[int, ...]
    test_anchor_indices: Tuple[int, ...]
    all_dates: Tuple[str, ...]

    @property
    def feature_count(self) -> int:
        return len(self.stock_symbols) * FEATURES_PER_SYMBOL

    @classmethod
    def from_npz(cls, path: str | Path) -> "DatasetPack":
        with np.load(path, allow_pickle=False) as data:
            return cls(
                X_train=data["X_train"],
                y_train=data["y_train"],
                X_test=data["X_test"],
                y_test=data["y_test"],
                stock_symbols=tuple(str(symbol) for symbol in data["stock_symbols"]),
                sequence_length=int(data["sequence_length"]),
                horizon=int(data["horizon"]),
                train_dates=tuple(str(date) for date in data["train_dates"]),
                test_dates=tuple(str(date) for date in data["test_dates"]),
                train_anchor_indices=tuple(int(i) for i in data["train_anchor_indices"]),
                test_anchor_indices=tuple(int(i) for i in data["test_anchor_indices"]),
                all_dates=tuple(str(date) for date in data["all_dates"]),
            )


def default_basename(bundle: DatasetBundle) -> str:
    return f"{symbols_slug(bundle.stock_symbols)}_seq{bundle.sequence_length}_h{bundle.horizon}"


def save_dataset_pack(
    bundle: DatasetBundle,
    basename: Optional[str] = None,
    out_dir: Optional[str | Path] = None,
) -> Path:
    """Persist train/test buffers and provenance metadata as a ``.npz`` archive."""
    if out_dir is None:
        out_dir = get_settings().data_processed_dir / "sequences"
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    path = out_path / f"{basename or default_basename(bundle)}.npz"

    arrays = bundle.to_numpy()
    np.savez_compressed(
        path,
        **arrays,
        stock_symbols=np.array(bundle.stock_symbols, dtype=str),
        sequence_length=np.array(bundle.sequence_length),
        horizon=np.array(bundle.horizon),
        train_dates=np.array(bundle.train_dates, dtype=str),
        test_dates=np.array(bundle.test_dates, dtype=str),
        train_anchor_indices=np.array(bundle.train_anchor_indices, dtype=np.int64),
        test_anchor_indices=np.array(bundle.test_anchor_indices, dtype=np.int64),
        all_dates=np.array(bundle.all_dates, dtype=str),
    )
    logger.info("Saved sequence pack", extra={"path": str(path)})
    return path


def load_dataset_pack(path: str | Path) -> DatasetPack:
    pack_path = Path(path)
    if not pack_path.is_file():
        raise FileNotFoundError(f"Dataset pack not found: {pack_path}")
    return DatasetPack.from_npz(pack_path)
