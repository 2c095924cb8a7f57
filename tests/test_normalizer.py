import numpy as np
import pytest

from stockseq.data import parse_price_csv
from stockseq.features import MinMaxScale, normalize_table


def test_each_symbol_scaled_on_its_own_range(two_symbol_table):
    normalized = normalize_table(two_symbol_table)
    np.testing.assert_allclose(normalized.frames["A"]["open"], [0.0, 0.5, 1.0, 1.0, 0.0])
    np.testing.assert_allclose(normalized.frames["A"]["close"], [0.25, 0.5, 0.5, 0.0, 1.0])
    np.testing.assert_allclose(normalized.frames["B"]["open"], [1.0, 0.8, 0.0, 0.5, 0.3])
    np.testing.assert_allclose(
        normalized.frames["B"]["close"], [1 / 3, 0.0, 1 / 6, 1 / 6, 1.0]
    )


def test_values_bounded_with_min_zero_and_max_one(two_symbol_table):
    normalized = normalize_table(two_symbol_table)
    for frame in normalized.frames.values():
        for column in ("open", "close"):
            values = frame[column].to_numpy()
            assert values.min() == 0.0
            assert values.max() == 1.0
            assert ((values >= 0.0) & (values <= 1.0)).all()


def test_constant_series_normalizes_to_zero():
    table = parse_price_csv(
        "Date,Symbol,Open,Close\n2024-01-01,A,5,7\n2024-01-02,A,5,7\n2024-01-03,A,5,7\n"
    )
    normalized = normalize_table(table)
    assert list(normalized.frames["A"]["open"]) == [0.0, 0.0, 0.0]
    assert normalized.scales["A"]["close"] == MinMaxScale(minimum=7.0, span=1.0)


def test_scale_invert_restores_prices(two_symbol_table):
    normalized = normalize_table(two_symbol_table)
    scale = normalized.scales["B"]["close"]
    restored = scale.invert(normalized.frames["B"]["close"].to_numpy())
    np.testing.assert_allclose(restored, [100, 90, 95, 95, 120])


def test_feature_matrix_layout(two_symbol_table):
    matrix = normalize_table(two_symbol_table).feature_matrix()
    assert matrix.shape == (5, 4)
    assert matrix.dtype == np.float32
    np.testing.assert_allclose(matrix[1], [0.5, 0.5, 0.8, 0.0])


def test_normalization_is_deterministic(two_symbol_csv):
    first = normalize_table(parse_price_csv(two_symbol_csv)).feature_matrix()
    second = normalize_table(parse_price_csv(two_symbol_csv)).feature_matrix()
    assert np.array_equal(first, second)


@pytest.mark.parametrize("values", [[3.0, 9.0, 6.0], [-2.0, 2.0]])
def test_scale_fit(values):
    import pandas as pd

    scale = MinMaxScale.fit(pd.Series(values))
    assert scale.minimum == min(values)
    assert scale.span == max(values) - min(values)
