"""Normalization, windowing, splitting and export modules."""

from .export import DatasetBundle, export_dataset, flatten_vectors, to_tensor
from .normalizer import MinMaxScale, NormalizedTable, normalize_table
from .packs import DatasetPack, load_dataset_pack, save_dataset_pack
from .provenance import TimelineEntry, resolve_test_timeline, stock_accuracies
from .splitter import SampleGroup, SplitResult, split_samples
from .windows import Sample, anchor_range, build_samples, direction_labels

__all__ = [
    "MinMaxScale",
    "NormalizedTable",
    "normalize_table",
    "Sample",
    "anchor_range",
    "direction_labels",
    "build_samples",
    "SampleGroup",
    "SplitResult",
    "split_samples",
    "DatasetBundle",
    "flatten_vectors",
    "to_tensor",
    "export_dataset",
    "DatasetPack",
    "save_dataset_pack",
    "load_dataset_pack",
    "TimelineEntry",
    "resolve_test_timeline",
    "stock_accuracies",
]
