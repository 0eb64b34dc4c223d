"""
Cue sheet generation (Cue Builder tab -> "<Event> - Cue Sheet" tab).

Responsibilities:
- Read cues from the Cue Builder tab (headers matched case-insensitively)
- Read session start times from the Schedule tab
- Build the output rows:
    - a "--- SECTION ---" separator whenever the schedule item changes
    - continuous cue numbering across sections
    - running start time per cue: the section's scheduled start, advanced by
      each cue's estimated duration (blank when the start is unknown)
- Write the print header block + table into the cue sheet tab; the Time
  column is written a second time as user input so Sheets stores time values

The row-building functions are pure; only generate_cue_sheet() touches the
workbook. Layout only: no colours, merges or column widths.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from eventplanner.config_repo import ConfigRepo
from eventplanner.workbook import Workbook

logger = logging.getLogger(__name__)

CUE_BUILDER_SHEET = "Cue Builder"
SCHEDULE_SHEET = "Schedule"

CUE_SHEET_HEADERS = [
    "#", "Time", "Dur.", "Cue Title", "Lead / Talent",
    "MC Script", "Lighting Cue", "Audio / Sound Cue", "Visuals / Screen Cue",
]

TIME_FORMATS = (
    "%I:%M:%S %p",
    "%I:%M %p",
    "%H:%M:%S",
    "%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
)


@dataclass
class Cue:
    schedule_item: str
    cue_title: str
    lead: str = ""
    duration: str = ""
    mc_script: str = ""
    lighting_cue: str = ""
    audio_cue: str = ""
    visuals_cue: str = ""
    source_row: int = 0


class CueSheetError(Exception):
    pass


def parse_time(value: str) -> Optional[datetime]:
    value = (value or "").strip()
    if not value:
        return None
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def format_time(t: datetime) -> str:
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d}:{t.second:02d} {suffix}"


def parse_duration(value: str) -> float:
    try:
        minutes = float((value or "").strip())
    except ValueError:
        return 0.0
    return minutes if minutes > 0 else 0.0


def format_duration(minutes: float) -> str:
    if minutes <= 0:
        return ""
    return f"{minutes:g}m"


def _column(headers: List[str], name: str) -> Optional[int]:
    try:
        return headers.index(name)
    except ValueError:
        return None


def _cell(row: List[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx]


def parse_cues(values: List[List[str]]) -> List[Cue]:
    """Cue Builder rows (header included) -> cues that have an item and a title."""
    if len(values) < 2:
        return []
    headers = [h.strip().lower() for h in values[0]]
    cols = {
        "schedule_item": _column(headers, "schedule item"),
        "cue_title": _column(headers, "cue title"),
        "lead": _column(headers, "lead / talent"),
        "duration": _column(headers, "est. duration (mins)"),
        "mc_script": _column(headers, "mc script / notes"),
        "lighting_cue": _column(headers, "lighting cue"),
        "audio_cue": _column(headers, "audio / sound cue"),
        "visuals_cue": _column(headers, "visuals / screen cue"),
    }
    cues = []
    for i, row in enumerate(values[1:], start=2):
        cue = Cue(source_row=i, **{k: _cell(row, idx) for k, idx in cols.items()})
        if cue.schedule_item and cue.cue_title:
            cues.append(cue)
    return cues


def schedule_start_times(values: List[List[str]]) -> Dict[str, str]:
    """Schedule rows (header included) -> {session title: start time text}."""
    if not values:
        return {}
    headers = [h.strip().lower() for h in values[0]]
    title_idx = _column(headers, "session title")
    time_idx = _column(headers, "start time")
    times: Dict[str, str] = {}
    for row in values[1:]:
        title = _cell(row, title_idx)
        start = _cell(row, time_idx)
        if title and start:
            times[title] = start
    return times


def build_cue_rows(cues: List[Cue], start_times: Dict[str, str]) -> List[list]:
    rows: List[list] = []
    running: Optional[datetime] = None
    current_item = None
    number = 1

    for cue in cues:
        if cue.schedule_item != current_item:
            current_item = cue.schedule_item
            running = parse_time(start_times.get(current_item, ""))
            rows.append(["", "", "", f"--- {current_item.upper()} ---", "", "", "", "", ""])

        minutes = parse_duration(cue.duration)
        rows.append([
            number,
            format_time(running) if running else "",
            format_duration(minutes),
            cue.cue_title,
            cue.lead,
            cue.mc_script,
            cue.lighting_cue,
            cue.audio_cue,
            cue.visuals_cue,
        ])
        number += 1

        if running:
            running = running + timedelta(minutes=minutes)

    return rows


def header_block(event_info: Dict[str, Optional[str]], generated_at: datetime) -> List[list]:
    """Rows 1-7 of the cue sheet: title, event/crew info, spacer."""
    name = event_info.get("event_name") or "Event"
    info = [
        ["Event Date:", event_info.get("start_date") or "TBD", "", "Show Caller:", ""],
        ["Venue:", event_info.get("location") or "TBD", "", "Stage Manager:", ""],
        ["Generated:", generated_at.strftime("%Y-%m-%d %H:%M:%S"), "", "Audio Lead (A1):", ""],
        ["Version:", "1.0", "", "Lighting (LD):", ""],
    ]
    rows: List[list] = [[f"{name.upper()} - CUE SHEET"], []]
    # info table starts in column C
    rows.extend(["", ""] + r for r in info)
    rows.append([])
    return rows


def cue_sheet_name(event_name: Optional[str]) -> str:
    return f"{event_name or 'Event'} - Cue Sheet"


def generate_cue_sheet(workbook: Workbook, now: Optional[datetime] = None) -> Optional[str]:
    """
    Build the cue sheet tab. Returns its name, or None when Cue Builder has
    no usable cues. Raises CueSheetError if Cue Builder or Schedule is missing.
    """
    if not workbook.has_sheet(CUE_BUILDER_SHEET):
        raise CueSheetError(f'"{CUE_BUILDER_SHEET}" sheet not found.')

    cues = parse_cues(workbook.get_values(CUE_BUILDER_SHEET))
    if not cues:
        logger.warning('The "%s" sheet is empty; no cue sheet generated', CUE_BUILDER_SHEET)
        return None

    if not workbook.has_sheet(SCHEDULE_SHEET):
        raise CueSheetError(f'"{SCHEDULE_SHEET}" sheet not found.')
    start_times = schedule_start_times(workbook.get_values(SCHEDULE_SHEET))

    event_info = ConfigRepo(workbook).get_event_info()
    sheet_name = cue_sheet_name(event_info.get("event_name"))

    if workbook.has_sheet(sheet_name):
        workbook.clear_sheet(sheet_name)
    else:
        workbook.add_sheet(sheet_name)

    rows = header_block(event_info, now or datetime.now())
    rows.append(CUE_SHEET_HEADERS)
    first_cue_row = len(rows) + 1
    cue_rows = build_cue_rows(cues, start_times)
    rows.extend(cue_rows)
    workbook.write_rows(sheet_name, 1, rows)
    # Time column again, parsed by Sheets so the cells hold time values
    workbook.write_rows(sheet_name, first_cue_row, [[r[1]] for r in cue_rows],
                        start_col=2, user_entered=True)

    logger.info("Cue sheet '%s' written with %d cue(s)", sheet_name, len(cues))
    return sheet_name
