from dataclasses import dataclass


@dataclass(frozen=True)
class CellRange:
    start_col: int
    start_row: int
    end_col: int
    end_row: int

    @property
    def row_size(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def col_size(self) -> int:
        return self.end_col - self.start_col + 1
