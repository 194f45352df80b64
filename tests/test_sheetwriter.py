from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook

import src.sheetwriter.sheetwriter as sheetwriter_module
from src.sheetwriter.api import write_to_sheet
from src.sheetwriter.sheetwriter import InvalidArgumentError, SheetWriterError


def _make_xlsx(path: Path) -> Path:
    wb = Workbook()
    wb.active.title = "Sheet1"
    wb.active["A1"] = "original"
    wb.save(path)
    return path


def test_write_literals(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    res = write_to_sheet(str(p), "Sheet1", False, "A1:B2", [["Name", "Age"], ["Alice", 30]])

    assert res.wrote_formula is False
    assert res.cells_written == 4
    assert res.backend == "openpyxl"
    assert "<tr><th>2</th><td>Alice</td><td>30</td></tr>" in res.report
    assert "<li>sheet name: Sheet1</li>" in res.report
    assert "<li>read range: A1:B2</li>" in res.report
    assert res.report.endswith("<p>Values wrote successfully.</p>\n")

    ws = load_workbook(p)["Sheet1"]
    assert [[c.value for c in row] for row in ws["A1:B2"]] == [["Name", "Age"], ["Alice", 30]]


def test_write_formula(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    res = write_to_sheet(str(p), "Sheet1", False, "A1:A1", [["=1+1"]])

    assert res.wrote_formula is True
    assert "<td>=1+1</td>" in res.report
    assert load_workbook(p)["Sheet1"]["A1"].value == "=1+1"


def test_single_formula_switches_whole_report(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(sheetwriter_module, "render_values_table", lambda ws, r: "<table>VALUES</table>")
    monkeypatch.setattr(sheetwriter_module, "render_formula_table", lambda ws, r: "<table>FORMULAS</table>")
    p = _make_xlsx(tmp_path / "book.xlsx")

    res = write_to_sheet(str(p), "Sheet1", False, "A1:B2", [["a", 1], [True, "=SUM(B1:B1)"]])
    assert "FORMULAS" in res.report

    res = write_to_sheet(str(p), "Sheet1", False, "A1:B2", [["a", 1], [True, None]])
    assert "VALUES" in res.report


def test_write_dates_and_scalars(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    grid = [
        ["2026-02-03", "2026-02-03T10:30:00Z", "2026-02-03T10:30:00+02:00", "2026-02-03T10:30:00"],
        ["2026-13-45", 42, True, None],
    ]
    write_to_sheet(str(p), "Sheet1", False, "A1:D2", grid)

    ws = load_workbook(p)["Sheet1"]
    assert ws["A1"].value == datetime(2026, 2, 3)
    assert ws["B1"].value == datetime(2026, 2, 3, 10, 30)
    assert ws["C1"].value == datetime(2026, 2, 3, 10, 30)
    assert ws["D1"].value == datetime(2026, 2, 3, 10, 30)
    assert ws["A2"].value == "2026-13-45"
    assert ws["B2"].value == 42
    assert ws["C2"].value is True
    assert ws["D2"].value is None


def test_offset_range(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    write_to_sheet(str(p), "Sheet1", False, "C3:D4", [[1, 2], [3, 4]])

    ws = load_workbook(p)["Sheet1"]
    assert ws["A1"].value == "original"
    assert [[c.value for c in row] for row in ws["C3:D4"]] == [[1, 2], [3, 4]]
    assert ws["B3"].value is None
    assert ws["E5"].value is None


def test_row_count_mismatch_writes_nothing(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    before = p.read_bytes()

    with pytest.raises(InvalidArgumentError) as ei:
        write_to_sheet(str(p), "Sheet1", False, "A1:A2", [["x"]])
    assert str(ei.value) == "number of rows in data (1) does not match range size (2)"
    assert p.read_bytes() == before


def test_column_count_mismatch_writes_nothing(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    before = p.read_bytes()

    with pytest.raises(InvalidArgumentError, match=r"row 1 \(3\) does not match range size \(2\)"):
        write_to_sheet(str(p), "Sheet1", True, "A1:B2", [["a", "b"], ["c", "d", "e"]])
    assert p.read_bytes() == before


def test_invalid_range(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    with pytest.raises(InvalidArgumentError):
        write_to_sheet(str(p), "Sheet1", False, "B2:A1", [["x"]])


def test_missing_sheet_is_invalid_argument(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    with pytest.raises(InvalidArgumentError, match="sheet not found: Other"):
        write_to_sheet(str(p), "Other", False, "A1", [["x"]])
    assert not (tmp_path / ".book.xlsx.lock").exists()


def test_new_sheet(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    res = write_to_sheet(str(p), "Data", True, "A1:B1", [["k", "v"]])

    assert "<li>sheet name: Data</li>" in res.report
    wb = load_workbook(p)
    assert wb.sheetnames == ["Sheet1", "Data"]
    assert wb["Data"]["B1"].value == "v"


def test_new_sheet_with_existing_name_fails(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    before = p.read_bytes()

    with pytest.raises(SheetWriterError, match="sheet already exists"):
        write_to_sheet(str(p), "Sheet1", True, "A1", [["x"]])
    assert p.read_bytes() == before


def test_new_sheet_name_differing_only_in_case_fails(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    before = p.read_bytes()

    with pytest.raises(SheetWriterError, match="sheet already exists: sheet1"):
        write_to_sheet(str(p), "sheet1", True, "A1", [["x"]])
    assert p.read_bytes() == before
    assert load_workbook(p).sheetnames == ["Sheet1"]


def test_missing_file_is_internal_failure(tmp_path: Path):
    with pytest.raises(SheetWriterError):
        write_to_sheet(str(tmp_path / "missing.xlsx"), "Sheet1", False, "A1", [["x"]])


def test_write_failure_aborts_without_persisting(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    before = p.read_bytes()

    with pytest.raises(SheetWriterError, match="A2"):
        write_to_sheet(str(p), "Sheet1", False, "A1:A3", [["first"], ["bad\x02"], ["never"]])

    assert p.read_bytes() == before
    assert load_workbook(p)["Sheet1"]["A1"].value == "original"
    assert not (tmp_path / ".book.xlsx.lock").exists()


def test_repeated_write_is_idempotent(tmp_path: Path):
    p = _make_xlsx(tmp_path / "book.xlsx")
    grid = [["=1+1", "2026-02-03"], ["x", 1.5]]

    write_to_sheet(str(p), "Sheet1", False, "A1:B2", grid)
    first = [[c.value for c in row] for row in load_workbook(p)["Sheet1"]["A1:B2"]]
    write_to_sheet(str(p), "Sheet1", False, "A1:B2", grid)
    second = [[c.value for c in row] for row in load_workbook(p)["Sheet1"]["A1:B2"]]

    assert first == second
    assert first == [["=1+1", datetime(2026, 2, 3)], ["x", 1.5]]
