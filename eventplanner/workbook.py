"""
Workbook abstraction: the tabular store every planner tab lives in.

Responsibilities:
- Define the small set of operations the planner needs from a spreadsheet:
    - tab existence / creation / clearing
    - reading a tab as rows of strings
    - writing one or more rows starting at a given 1-based row and column
    - writing chosen cells of one row, leaving the rest of it alone
- Provide InMemoryWorkbook, a dict-backed implementation used by tests and
  dry runs. The Google Sheets implementation lives in gsheets.py.

Implementation notes:
- Rows are 1-based, like the sheet UI: row 1 is the header row.
- Values read back are always strings; blanks are "".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, NamedTuple, Optional


def cell_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class WriteCall(NamedTuple):
    sheet: str
    row: int
    col: int            # 1-based first column; 0 for a write_cells call
    values: Any         # rows for write_rows, {col index: value} for write_cells
    user_entered: bool


class Workbook(ABC):
    @abstractmethod
    def has_sheet(self, name: str) -> bool:
        ...

    @abstractmethod
    def add_sheet(self, name: str) -> None:
        ...

    @abstractmethod
    def clear_sheet(self, name: str) -> None:
        ...

    @abstractmethod
    def get_values(self, name: str) -> List[List[str]]:
        """All non-empty rows of a tab, top to bottom. Rows may be ragged."""

    @abstractmethod
    def write_rows(self, name: str, start_row: int, rows: List[List[Any]], *,
                   start_col: int = 1, user_entered: bool = False) -> None:
        """
        Overwrite rows starting at `start_row`, beginning in column `start_col`.
        `user_entered` asks the backend to parse values the way typed input is
        parsed (formulas, dates, times) instead of storing them verbatim.
        """

    @abstractmethod
    def write_cells(self, name: str, row: int, cells: Dict[int, Any], *,
                    user_entered: bool = False) -> None:
        """
        Overwrite only the given cells of one row; `cells` maps 0-based column
        index to value. Every other cell of the row is left untouched.
        """

    def write_row(self, name: str, row: int, values: List[Any], *,
                  user_entered: bool = False) -> None:
        self.write_rows(name, row, [values], user_entered=user_entered)

    def last_row(self, name: str) -> int:
        return len(self.get_values(name))


class InMemoryWorkbook(Workbook):
    def __init__(self, sheets: Optional[Dict[str, Iterable[Iterable[Any]]]] = None):
        self.sheets: Dict[str, List[List[str]]] = {}
        for name, rows in (sheets or {}).items():
            self.sheets[name] = [[cell_str(v) for v in row] for row in rows]
        # lets tests count and inspect writes
        self.writes: List[WriteCall] = []

    def has_sheet(self, name: str) -> bool:
        return name in self.sheets

    def add_sheet(self, name: str) -> None:
        if name in self.sheets:
            raise ValueError(f"Sheet '{name}' already exists")
        self.sheets[name] = []

    def clear_sheet(self, name: str) -> None:
        self._require(name)
        self.sheets[name] = []

    def get_values(self, name: str) -> List[List[str]]:
        self._require(name)
        rows = [list(r) for r in self.sheets[name]]
        # mimic the Sheets API: trailing blank rows are not returned
        while rows and not any(rows[-1]):
            rows.pop()
        return rows

    def write_rows(self, name: str, start_row: int, rows: List[List[Any]], *,
                   start_col: int = 1, user_entered: bool = False) -> None:
        self._require(name)
        if start_row < 1 or start_col < 1:
            raise ValueError("start_row and start_col are 1-based")
        for offset, values in enumerate(rows):
            row = self._row(name, start_row + offset)
            for i, v in enumerate(values):
                self._set(row, start_col - 1 + i, v)
        self.writes.append(WriteCall(name, start_row, start_col, [list(r) for r in rows], user_entered))

    def write_cells(self, name: str, row: int, cells: Dict[int, Any], *,
                    user_entered: bool = False) -> None:
        self._require(name)
        if row < 1:
            raise ValueError("row is 1-based")
        target = self._row(name, row)
        for col, v in cells.items():
            self._set(target, col, v)
        self.writes.append(WriteCall(name, row, 0, dict(cells), user_entered))

    def _row(self, name: str, row: int) -> List[str]:
        data = self.sheets[name]
        while len(data) < row:
            data.append([])
        return data[row - 1]

    @staticmethod
    def _set(row: List[str], col: int, value: Any) -> None:
        while len(row) <= col:
            row.append("")
        row[col] = cell_str(value)

    def _require(self, name: str) -> None:
        if name not in self.sheets:
            raise KeyError(f"Sheet '{name}' not found")
