"""
Google Sheets backend for the planner workbook.

Talks to the Sheets v4 REST API through a googleapiclient service object:
  service.spreadsheets().get(...)                    tab titles
  service.spreadsheets().values().get(...)           read a tab
  service.spreadsheets().values().update(...)        write a block of rows
  service.spreadsheets().values().batchUpdate(...)   write chosen cells of one row
  service.spreadsheets().values().clear(...)         clear a tab
  service.spreadsheets().batchUpdate(...)            add a tab

Notes:
- Building the service (credentials, scopes) is done in google_sheets.py.
- HttpError is not caught here; callers decide what a failed call means.
- Tab titles are cached per instance and refreshed after add_sheet().
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from eventplanner.workbook import Workbook, cell_str

logger = logging.getLogger(__name__)


def column_letter(n: int) -> str:
    """1-based column index to A1 letters (1 -> A, 27 -> AA)."""
    if n < 1:
        raise ValueError("column index is 1-based")
    result = ""
    while n:
        n, r = divmod(n - 1, 26)
        result = chr(65 + r) + result
    return result


def quote_sheet(name: str) -> str:
    return "'" + name.replace("'", "''") + "'"


def a1_range(sheet: str, start_row: int, width: Optional[int] = None, height: int = 1,
             start_col: int = 1) -> str:
    first = f"{column_letter(start_col)}{start_row}"
    if width is None:
        return f"{quote_sheet(sheet)}!{first}"
    end_row = start_row + max(height, 1) - 1
    end_col = start_col + max(width, 1) - 1
    return f"{quote_sheet(sheet)}!{first}:{column_letter(end_col)}{end_row}"


def cell_runs(cells: Dict[int, Any]) -> List[Tuple[int, List[Any]]]:
    """
    Group {0-based column: value} into contiguous runs, ordered by column.

    Returns [(first 1-based column, [values...]), ...]; columns A, B and E
    become two runs (A:B and E).
    """
    runs: List[Tuple[int, List[Any]]] = []
    for col in sorted(cells):
        if runs and runs[-1][0] + len(runs[-1][1]) == col + 1:
            runs[-1][1].append(cells[col])
        else:
            runs.append((col + 1, [cells[col]]))
    return runs


def _body_value(v: Any) -> Any:
    return "" if v is None else v


def _input_option(user_entered: bool) -> str:
    return "USER_ENTERED" if user_entered else "RAW"


class SheetsWorkbook(Workbook):
    def __init__(self, service, spreadsheet_id: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self._titles: Optional[Set[str]] = None

    def _sheet_titles(self) -> Set[str]:
        if self._titles is None:
            meta = self.service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets.properties.title",
            ).execute()
            self._titles = {s["properties"]["title"] for s in meta.get("sheets", [])}
        return self._titles

    def has_sheet(self, name: str) -> bool:
        return name in self._sheet_titles()

    def add_sheet(self, name: str) -> None:
        self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": name}}}]},
        ).execute()
        logger.info("Created sheet '%s'", name)
        self._titles = None

    def clear_sheet(self, name: str) -> None:
        self.service.spreadsheets().values().clear(
            spreadsheetId=self.spreadsheet_id,
            range=quote_sheet(name),
            body={},
        ).execute()

    def get_values(self, name: str) -> List[List[str]]:
        result = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=quote_sheet(name),
        ).execute()
        return [[cell_str(v) for v in row] for row in result.get("values", [])]

    def write_rows(self, name: str, start_row: int, rows: List[List[Any]], *,
                   start_col: int = 1, user_entered: bool = False) -> None:
        if not rows:
            return
        width = max(len(r) for r in rows)
        body_rows = [[_body_value(v) for v in r] for r in rows]
        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range(name, start_row, width=width, height=len(rows), start_col=start_col),
            valueInputOption=_input_option(user_entered),
            body={"values": body_rows},
        ).execute()
        logger.debug("Wrote %d row(s) to '%s' at row %d", len(rows), name, start_row)

    def write_cells(self, name: str, row: int, cells: Dict[int, Any], *,
                    user_entered: bool = False) -> None:
        if not cells:
            return
        # columns outside the runs are never part of a request range
        data = [
            {
                "range": a1_range(name, row, width=len(values), start_col=first),
                "values": [[_body_value(v) for v in values]],
            }
            for first, values in cell_runs(cells)
        ]
        self.service.spreadsheets().values().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"valueInputOption": _input_option(user_entered), "data": data},
        ).execute()
        logger.debug("Wrote %d cell(s) to '%s' row %d", len(cells), name, row)
