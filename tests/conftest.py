import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "src"))


TWO_SYMBOL_CSV = """Date,Symbol,Open,Close
2024-01-01,A,10,11
2024-01-02,A,11,12
2024-01-03,A,12,12
2024-01-04,A,12,10
2024-01-05,A,10,14
2024-01-01,B,101,100
2024-01-02,B,99,90
2024-01-03,B,91,95
2024-01-04,B,96,95
2024-01-05,B,94,120
"""


@pytest.fixture
def two_symbol_csv() -> str:
    return TWO_SYMBOL_CSV


@pytest.fixture
def two_symbol_table():
    from stockseq.data import parse_price_csv

    return parse_price_csv(TWO_SYMBOL_CSV)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text(TWO_SYMBOL_CSV, encoding="utf-8")
    return path
