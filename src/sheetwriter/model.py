from dataclasses import dataclass


@dataclass
class WriteOutcome:
    any_formula_written: bool = False
    cells_written: int = 0


@dataclass(frozen=True)
class WriteResult:
    file_path: str
    sheet_name: str
    range_ref: str  # as given by the caller
    backend: str
    wrote_formula: bool
    cells_written: int
    report: str
