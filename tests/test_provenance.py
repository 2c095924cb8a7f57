import pytest

from stockseq.features import resolve_test_timeline, stock_accuracies
from stockseq.loader import StockDataLoader


@pytest.fixture
def dataset(two_symbol_csv):
    loader = StockDataLoader(sequence_length=1, horizon=2, split_ratio=0.5)
    loader.load_text(two_symbol_csv)
    bundle = loader.prepare_dataset()
    yield bundle
    bundle.dispose()


def test_timeline_maps_labels_to_future_dates(dataset):
    # anchors 0..2, train 1 sample, test anchors 1 and 2
    assert dataset.test_anchor_indices == [1, 2]
    entries = resolve_test_timeline(dataset)
    assert len(entries) == 2 * 2 * 2
    first = entries[0]
    assert (first.symbol, first.horizon, first.anchor_date, first.future_date) == (
        "A",
        1,
        "2024-01-02",
        "2024-01-03",
    )
    # A close 12 -> 12 (tie), 10 ; B close 90 -> 95, 95
    assert [entry.actual for entry in entries[:4]] == [0, 0, 1, 1]
    assert entries[3].future_date == "2024-01-04"
    assert all(entry.predicted is None and entry.correct is None for entry in entries)


def test_timeline_with_predictions(dataset):
    predictions = [[0.9, 0.1, 0.6, 0.4], [0.2, 0.7, 0.5, 0.5]]
    entries = resolve_test_timeline(dataset, predictions)
    assert [entry.predicted for entry in entries] == [1, 0, 1, 0, 0, 1, 1, 1]
    assert entries[0].correct is False
    assert entries[1].correct is True


def test_stock_accuracies():
    y_true = [[0, 1], [0, 0]]
    y_pred = [[0.7, 0.9], [0.2, 0.4]]
    assert stock_accuracies(y_true, y_pred, ["A", "B"], horizon=1) == {"A": 0.5, "B": 1.0}


def test_stock_accuracies_multi_horizon():
    y_true = [[1, 0, 1, 1]]
    y_pred = [[0.6, 0.6, 0.1, 0.9]]
    assert stock_accuracies(y_true, y_pred, ["A", "B"], horizon=2) == {"A": 0.5, "B": 0.5}


def test_stock_accuracies_with_bundle_symbols(dataset):
    truth = dataset.to_numpy()["y_test"]
    scores = stock_accuracies(truth, truth, dataset.stock_symbols, dataset.horizon)
    assert scores == {"A": 1.0, "B": 1.0}
