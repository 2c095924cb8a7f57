import numpy as np
import pytest

from stockseq.features import load_dataset_pack, resolve_test_timeline, save_dataset_pack
from stockseq.features.packs import default_basename
from stockseq.loader import StockDataLoader


@pytest.fixture
def dataset(two_symbol_csv):
    loader = StockDataLoader(sequence_length=2, horizon=1)
    loader.load_text(two_symbol_csv)
    bundle = loader.prepare_dataset()
    yield bundle
    bundle.dispose()


def test_save_and_load_pack(dataset, tmp_path):
    path = save_dataset_pack(dataset, basename="scenario", out_dir=tmp_path / "sequences")
    assert path == tmp_path / "sequences" / "scenario.npz"

    pack = load_dataset_pack(path)
    assert pack.X_train.shape == (2, 2, 4)
    assert pack.y_test.tolist() == [[1.0, 1.0]]
    assert pack.stock_symbols == ("A", "B")
    assert pack.sequence_length == 2
    assert pack.horizon == 1
    assert pack.feature_count == 4
    assert pack.test_dates == ("2024-01-04",)
    assert pack.test_anchor_indices == (3,)
    assert pack.all_dates[-1] == "2024-01-05"
    assert np.array_equal(pack.X_test, dataset.to_numpy()["X_test"])


def test_pack_supports_timeline(dataset, tmp_path):
    pack = load_dataset_pack(save_dataset_pack(dataset, out_dir=tmp_path))
    entries = resolve_test_timeline(pack)
    assert [(entry.symbol, entry.future_date, entry.actual) for entry in entries] == [
        ("A", "2024-01-05", 1),
        ("B", "2024-01-05", 1),
    ]


def test_default_basename(dataset):
    assert default_basename(dataset) == "a_b_seq2_h1"


def test_default_directory_comes_from_settings(dataset, tmp_path, monkeypatch):
    from stockseq.config import settings as settings_module

    monkeypatch.setenv("DATA_PROCESSED_DIR", str(tmp_path / "processed"))
    settings_module.get_settings.cache_clear()
    try:
        path = save_dataset_pack(dataset)
    finally:
        settings_module.get_settings.cache_clear()
    assert path == tmp_path / "processed" / "sequences" / "a_b_seq2_h1.npz"
    assert path.exists()


def test_missing_pack(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset_pack(tmp_path / "missing.npz")
