"""
Record-oriented view of the People roster tab.

Responsibilities:
- Schema introspection: header row names and name -> column lookup
- Locate a record by key field (linear scan, first match wins)
- Read a record as {field: value}
- Append a record after the last row / overwrite chosen cells of a record

Implementation notes:
- Column positions are never assumed; the header row is re-read on each call
  because users reorder and rename columns.
- Rows coming back from the workbook may be shorter than the header (trailing
  blanks are trimmed); they are padded to the header width here.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from eventplanner.models import PEOPLE_SHEET, RecordHandle
from eventplanner.workbook import Workbook


def pad(row: List[str], width: int) -> List[str]:
    return list(row[:width]) + [""] * max(0, width - len(row))


class RosterStore:
    def __init__(self, workbook: Workbook, sheet_name: str = PEOPLE_SHEET):
        self.workbook = workbook
        self.sheet_name = sheet_name

    # ---- schema ----

    def exists(self) -> bool:
        return self.workbook.has_sheet(self.sheet_name)

    def headers(self) -> List[str]:
        values = self.workbook.get_values(self.sheet_name)
        return list(values[0]) if values else []

    def field_index(self, name: str, headers: Optional[List[str]] = None) -> Optional[int]:
        """0-based position of the first header exactly equal to `name`."""
        headers = self.headers() if headers is None else headers
        try:
            return headers.index(name)
        except ValueError:
            return None

    # ---- records ----

    def records(self) -> Iterator[Tuple[RecordHandle, Dict[str, str]]]:
        values = self.workbook.get_values(self.sheet_name)
        if not values:
            return
        headers = values[0]
        for i, row in enumerate(values[1:], start=2):
            yield RecordHandle(i), self._as_record(headers, row)

    def find_by_key(self, field: str, key: str) -> Optional[RecordHandle]:
        # An empty key never identifies anyone.
        if not key:
            return None
        values = self.workbook.get_values(self.sheet_name)
        if not values:
            return None
        idx = self.field_index(field, values[0])
        if idx is None:
            return None
        for i, row in enumerate(values[1:], start=2):
            if idx < len(row) and row[idx] == key:
                return RecordHandle(i)
        return None

    def read_row(self, handle: RecordHandle) -> List[str]:
        """Cell values of a record in header order, padded to header width."""
        values = self.workbook.get_values(self.sheet_name)
        if not values:
            raise KeyError(f"{self.sheet_name} has no header row")
        if handle.row < 2 or handle.row > len(values):
            raise KeyError(f"row {handle.row} is outside {self.sheet_name}")
        return pad(values[handle.row - 1], len(values[0]))

    def read(self, handle: RecordHandle) -> Dict[str, str]:
        return self._as_record(self.headers(), self.read_row(handle))

    def append(self, values: List[str]) -> RecordHandle:
        handle = RecordHandle(self.workbook.last_row(self.sheet_name) + 1)
        self.workbook.write_row(self.sheet_name, handle.row, values)
        return handle

    def update(self, handle: RecordHandle, cells: Dict[int, str]) -> None:
        """Overwrite only the given {0-based column: value} cells of a record."""
        if handle.row < 2:
            raise ValueError("cannot overwrite the header row")
        self.workbook.write_cells(self.sheet_name, handle.row, cells)

    @staticmethod
    def _as_record(headers: List[str], row: List[str]) -> Dict[str, str]:
        record: Dict[str, str] = {}
        for name, value in zip(headers, pad(row, len(headers))):
            # duplicate header names: the first column wins, like field_index
            record.setdefault(name, value)
        return record
