"""Flattening of sample groups into tensors and the exported dataset bundle."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import tensorflow as tf

from stockseq.exceptions import DatasetDisposedError
from stockseq.features.splitter import SplitResult
from stockseq.features.windows import FEATURES_PER_SYMBOL
from stockseq.utils.logger import setup_logger

logger = setup_logger("stockseq.export")

TensorFactory = Callable[[np.ndarray, Sequence[int]], Any]

TENSOR_NAMES = ("X_train", "y_train", "X_test", "y_test")


def flatten_vectors(vectors: Sequence[np.ndarray], vector_size: int) -> np.ndarray:
    """Copy equally sized vectors into one contiguous sample-major float32 buffer."""
    buffer = np.empty(len(vectors) * vector_size, dtype=np.float32)
    for index, vector in enumerate(vectors):
        flat = np.asarray(vector, dtype=np.float32).reshape(-1)
        if flat.size != vector_size:
            raise ValueError(
                f"Vector {index} has {flat.size} values, expected {vector_size}."
            )
        buffer[index * vector_size : (index + 1) * vector_size] = flat
    return buffer


def to_tensor(buffer: np.ndarray, shape: Sequence[int]) -> tf.Tensor:
    """Default tensor factory: a float32 TensorFlow tensor of the given shape."""
    return tf.convert_to_tensor(buffer.reshape(tuple(shape)), dtype=tf.float32)


class DatasetBundle:
    """
    Train/test tensors plus the metadata needed to interpret them.

    The bundle owns its tensors until :meth:`dispose` is called. Disposal
    drops every tensor reference, may be called any number of times, and also
    runs when the bundle is used as a context manager.
    """

    def __init__(
        self,
        tensors: Dict[str, Any],
        stock_symbols: Sequence[str],
        sequence_length: int,
        horizon: int,
        train_dates: Sequence[str],
        test_dates: Sequence[str],
        train_anchor_indices: Sequence[int],
        test_anchor_indices: Sequence[int],
        all_dates: Sequence[str],
    ) -> None:
        self._tensors: Dict[str, Any] = dict(tensors)
        self._disposed = False
        self.stock_symbols: List[str] = list(stock_symbols)
        self.sequence_length = sequence_length
        self.horizon = horizon
        self.feature_count = len(self.stock_symbols) * FEATURES_PER_SYMBOL
        self.train_dates: List[str] = list(train_dates)
        self.test_dates: List[str] = list(test_dates)
        self.train_anchor_indices: List[int] = list(train_anchor_indices)
        self.test_anchor_indices: List[int] = list(test_anchor_indices)
        self.all_dates: List[str] = list(all_dates)

    def _tensor(self, name: str) -> Any:
        if self._disposed:
            raise DatasetDisposedError(f"Dataset was disposed; '{name}' is no longer available.")
        return self._tensors[name]

    @property
    def X_train(self) -> Any:
        return self._tensor("X_train")

    @property
    def y_train(self) -> Any:
        return self._tensor("y_train")

    @property
    def X_test(self) -> Any:
        return self._tensor("X_test")

    @property
    def y_test(self) -> Any:
        return self._tensor("y_test")

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def train_count(self) -> int:
        return len(self.train_anchor_indices)

    @property
    def test_count(self) -> int:
        return len(self.test_anchor_indices)

    def to_numpy(self) -> Dict[str, np.ndarray]:
        """Return numpy copies of the four buffers."""
        return {name: np.array(self._tensor(name), dtype=np.float32) for name in TENSOR_NAMES}

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._tensors.clear()
        logger.debug("Disposed dataset tensors")

    def __enter__(self) -> "DatasetBundle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "live"
        return (
            f"DatasetBundle(symbols={self.stock_symbols}, train={self.train_count}, "
            f"test={self.test_count}, sequence_length={self.sequence_length}, "
            f"horizon={self.horizon}, {state})"
        )


def export_dataset(
    split: SplitResult,
    symbols: Sequence[str],
    calendar: Sequence[str],
    sequence_length: int,
    horizon: int,
    tensor_factory: Optional[TensorFactory] = None,
) -> DatasetBundle:
    """
    Flatten both partitions and hand them to the tensor factory.

    Shapes are ``[count, sequence_length, symbols * 2]`` for features and
    ``[count, symbols * horizon]`` for labels. Tensors built before a
    factory failure are dropped before the error propagates.
    """
    factory = tensor_factory or to_tensor
    feature_count = len(symbols) * FEATURES_PER_SYMBOL
    feature_size = sequence_length * feature_count
    label_size = len(symbols) * horizon

    plan: List[Tuple[str, np.ndarray, Tuple[int, ...]]] = []
    for prefix, group in (("train", split.train), ("test", split.test)):
        plan.append(
            (
                f"X_{prefix}",
                flatten_vectors([sample.features for sample in group.samples], feature_size),
                (group.count, sequence_length, feature_count),
            )
        )
        plan.append(
            (
                f"y_{prefix}",
                flatten_vectors([sample.labels for sample in group.samples], label_size),
                (group.count, label_size),
            )
        )

    tensors: Dict[str, Any] = {}
    try:
        for name, buffer, shape in plan:
            tensors[name] = factory(buffer, shape)
    except Exception:
        logger.error("Tensor construction failed", extra={"built": len(tensors)})
        tensors.clear()
        raise

    logger.info(
        "Exported dataset",
        extra={
            "train": split.train.count,
            "test": split.test.count,
            "feature_count": feature_count,
            "label_size": label_size,
        },
    )
    return DatasetBundle(
        tensors=tensors,
        stock_symbols=symbols,
        sequence_length=sequence_length,
        horizon=horizon,
        train_dates=split.train.dates,
        test_dates=split.test.dates,
        train_anchor_indices=split.train.anchor_indices,
        test_anchor_indices=split.test.anchor_indices,
        all_dates=calendar,
    )
