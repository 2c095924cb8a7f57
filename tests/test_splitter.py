import numpy as np
import pytest

from stockseq.exceptions import ConfigError, EmptySplitError
from stockseq.features import Sample, build_samples, normalize_table, split_samples
from stockseq.features.splitter import train_count_for


def _fake_samples(count):
    return [
        Sample(
            features=np.zeros(4, dtype=np.float32),
            labels=np.zeros(2, dtype=np.float32),
            anchor_index=index,
            anchor_date=f"2024-01-{index + 1:02d}",
        )
        for index in range(count)
    ]


def test_scenario_split(two_symbol_table):
    samples = build_samples(normalize_table(two_symbol_table), two_symbol_table, 2, 1)
    split = split_samples(samples, 0.8)
    assert split.train.count == 2
    assert split.test.count == 1
    assert split.train.dates == ["2024-01-02", "2024-01-03"]
    assert split.test.dates == ["2024-01-04"]
    assert split.test.anchor_indices == [3]


@pytest.mark.parametrize("total", [2, 3, 7, 10, 31])
@pytest.mark.parametrize("ratio", [0.01, 0.5, 0.8, 0.99])
def test_split_preserves_order_and_counts(total, ratio):
    split = split_samples(_fake_samples(total), ratio)
    assert split.train.count + split.test.count == total
    assert split.train.count >= 1 and split.test.count >= 1
    assert max(split.train.dates) <= min(split.test.dates)
    assert split.train.anchor_indices + split.test.anchor_indices == list(range(total))


def test_train_count_is_floor_clamped():
    assert train_count_for(10, 0.8) == 8
    assert train_count_for(3, 0.8) == 2
    assert train_count_for(10, 0.01) == 1
    assert train_count_for(10, 0.99) == 9


def test_single_sample_cannot_be_split():
    with pytest.raises(EmptySplitError):
        split_samples(_fake_samples(1), 0.8)


@pytest.mark.parametrize("ratio", [0.0, 1.0, -0.2, 1.5])
def test_ratio_outside_open_interval(ratio):
    with pytest.raises(ConfigError):
        split_samples(_fake_samples(5), ratio)
