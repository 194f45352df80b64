import pytest

from src.rangeparser.api import cell_name, parse_range, range_ref
from src.rangeparser.model import CellRange
from src.rangeparser.rangeparser import RangeParseError


def test_parse_simple_range():
    r = parse_range("A1:C10")
    assert r == CellRange(start_col=1, start_row=1, end_col=3, end_row=10)
    assert r.row_size == 10
    assert r.col_size == 3


def test_parse_tolerates_case_absolute_markers_and_sheet_prefix():
    assert parse_range("b2:$D$5") == CellRange(2, 2, 4, 5)
    assert parse_range("Sheet1!A1:B2") == CellRange(1, 1, 2, 2)
    assert parse_range(" AA10:AB11 ") == CellRange(27, 10, 28, 11)


def test_single_cell_is_one_by_one_range():
    r = parse_range("B3")
    assert r == CellRange(2, 3, 2, 3)
    assert (r.row_size, r.col_size) == (1, 1)


@pytest.mark.parametrize("expr", ["", "A1:", "1A:B2", "A0:B2", "C3:A1", "A3:A1", "A1:B2:C3", "XFE1:XFE2", "A1:B1048577"])
def test_invalid_ranges(expr):
    with pytest.raises(RangeParseError):
        parse_range(expr)


def test_cell_name():
    assert cell_name(1, 1) == "A1"
    assert cell_name(3, 10) == "C10"
    assert cell_name(28, 1) == "AB1"
    assert cell_name(16384, 1048576) == "XFD1048576"


def test_cell_name_out_of_bounds():
    with pytest.raises(RangeParseError):
        cell_name(0, 1)
    with pytest.raises(RangeParseError):
        cell_name(16385, 1)


def test_range_ref_is_normalized():
    assert range_ref(parse_range("b2:$d$5")) == "B2:D5"
