import pandas as pd
import pytest

from stockseq.data import align_to_calendar, common_calendar, parse_price_csv
from stockseq.exceptions import NoCommonCalendarError

UNEVEN_CSV = """Date,Symbol,Open,Close
2024-01-03,A,3,3
2024-01-01,A,1,1
2024-01-02,A,2,2
2024-01-04,A,4,4
2024-01-02,B,20,20
2024-01-03,B,30,30
2024-01-04,B,40,40
2024-01-05,B,50,50
2024-01-03,C,300,300
2024-01-02,C,200,200
2024-01-04,C,400,400
"""


def _frame(dates):
    return pd.DataFrame(
        {"open": range(len(dates)), "close": range(len(dates))},
        index=pd.Index(dates, name="date"),
        dtype=float,
    )


def test_calendar_is_sorted_intersection():
    frames = {
        "A": _frame(["2024-01-03", "2024-01-01", "2024-01-02"]),
        "B": _frame(["2024-01-02", "2024-01-03", "2024-01-04"]),
    }
    assert common_calendar(frames) == ("2024-01-02", "2024-01-03")


def test_empty_intersection_raises():
    frames = {"A": _frame(["2024-01-01"]), "B": _frame(["2024-01-02"])}
    with pytest.raises(NoCommonCalendarError):
        common_calendar(frames)


def test_align_prunes_to_calendar_order():
    frames = {"A": _frame(["2024-01-03", "2024-01-01", "2024-01-02"])}
    aligned = align_to_calendar(frames, ("2024-01-02", "2024-01-03"))
    assert list(aligned["A"].index) == ["2024-01-02", "2024-01-03"]
    assert list(aligned["A"]["close"]) == [2.0, 0.0]


def test_every_symbol_covers_the_calendar_without_gaps():
    table = parse_price_csv(UNEVEN_CSV)
    assert table.calendar == ("2024-01-02", "2024-01-03", "2024-01-04")
    for symbol in table.symbols:
        frame = table.frames[symbol]
        assert len(frame) == len(table.calendar)
        assert tuple(frame.index) == table.calendar
    assert all(
        earlier < later for earlier, later in zip(table.calendar, table.calendar[1:])
    )
