from datetime import datetime

import pytest

from eventplanner.cuesheet import (
    CUE_SHEET_HEADERS,
    Cue,
    CueSheetError,
    build_cue_rows,
    format_duration,
    format_time,
    generate_cue_sheet,
    parse_cues,
    parse_time,
    schedule_start_times,
)
from eventplanner.workbook import InMemoryWorkbook

CUE_BUILDER = [
    ["Schedule Item", "Cue Title", "Lead / Talent", "Est. Duration (mins)",
     "MC Script / Notes", "Lighting Cue", "Audio / Sound Cue", "Visuals / Screen Cue"],
    ["Opening", "Walk-in", "House", "5", "", "Preset", "Walk-in music", "Logo loop"],
    ["Opening", "Welcome", "MC", "10", "Good evening!", "Spot MC", "Mic 1", "Title slide"],
    ["", "Orphan cue", "", "3"],
    ["Awards", "First award", "Host", "", "", "", "", ""],
]

SCHEDULE = [
    ["Date", "Start Time", "End Time", "Location", "Session Title"],
    ["2026-05-01", "7:00 PM", "7:30 PM", "Main Hall", "Opening"],
    ["2026-05-01", "", "", "Main Hall", "Awards"],
]


def test_parse_time_and_format():
    assert format_time(parse_time("7:00 PM")) == "7:00:00 PM"
    assert format_time(parse_time("09:30")) == "9:30:00 AM"
    assert format_time(parse_time("12:15:00 AM")) == "12:15:00 AM"
    assert parse_time("") is None
    assert parse_time("soon") is None


def test_format_duration():
    assert format_duration(5.0) == "5m"
    assert format_duration(2.5) == "2.5m"
    assert format_duration(0) == ""


def test_parse_cues_drops_incomplete_rows():
    cues = parse_cues(CUE_BUILDER)
    assert [c.cue_title for c in cues] == ["Walk-in", "Welcome", "First award"]
    assert cues[1].mc_script == "Good evening!"
    assert cues[2].source_row == 5
    assert parse_cues(CUE_BUILDER[:1]) == []


def test_schedule_start_times():
    assert schedule_start_times(SCHEDULE) == {"Opening": "7:00 PM"}


def test_build_cue_rows_running_time_and_separators():
    rows = build_cue_rows(parse_cues(CUE_BUILDER), schedule_start_times(SCHEDULE))

    assert rows == [
        ["", "", "", "--- OPENING ---", "", "", "", "", ""],
        [1, "7:00:00 PM", "5m", "Walk-in", "House", "", "Preset", "Walk-in music", "Logo loop"],
        [2, "7:05:00 PM", "10m", "Welcome", "MC", "Good evening!", "Spot MC", "Mic 1", "Title slide"],
        ["", "", "", "--- AWARDS ---", "", "", "", "", ""],
        [3, "", "", "First award", "Host", "", "", "", ""],
    ]


def test_returning_to_a_section_restarts_its_clock():
    cues = [Cue("A", "one", duration="30"), Cue("B", "two"), Cue("A", "three")]
    rows = build_cue_rows(cues, {"A": "10:00 AM"})
    assert [r[1] for r in rows if r[0] != ""] == ["10:00:00 AM", "", "10:00:00 AM"]
    assert sum(1 for r in rows if r[0] == "") == 3


def test_generate_cue_sheet_writes_tab():
    wb = InMemoryWorkbook({
        "Cue Builder": CUE_BUILDER,
        "Schedule": SCHEDULE,
        "Event Description": [["Event Name", "Spring Gala"], ["Location", "Main Hall"]],
    })

    name = generate_cue_sheet(wb, now=datetime(2026, 4, 30, 18, 0, 0))

    assert name == "Spring Gala - Cue Sheet"
    values = wb.get_values(name)
    assert values[0] == ["SPRING GALA - CUE SHEET"]
    assert values[2] == ["", "", "Event Date:", "TBD", "", "Show Caller:", ""]
    assert values[3][3] == "Main Hall"
    assert values[4][3] == "2026-04-30 18:00:00"
    assert values[7] == CUE_SHEET_HEADERS
    assert values[8][3] == "--- OPENING ---"
    assert values[9][:3] == ["1", "7:00:00 PM", "5m"]
    assert len(values) == 8 + 5


def test_generate_cue_sheet_rewrites_time_column_as_user_input():
    wb = InMemoryWorkbook({"Cue Builder": CUE_BUILDER, "Schedule": SCHEDULE})

    generate_cue_sheet(wb)

    raw, times = wb.writes
    assert not raw.user_entered
    assert (times.sheet, times.row, times.col, times.user_entered) == ("Event - Cue Sheet", 9, 2, True)
    assert all(len(r) == 1 for r in times.values)
    assert times.values[1] == ["7:00:00 PM"]
    # separator rows carry no time
    assert times.values[0] == [""]


def test_generate_cue_sheet_replaces_previous_output():
    wb = InMemoryWorkbook({
        "Cue Builder": CUE_BUILDER,
        "Schedule": SCHEDULE,
        "Event - Cue Sheet": [["old"]] * 50,
    })
    generate_cue_sheet(wb)
    assert len(wb.get_values("Event - Cue Sheet")) == 13


def test_generate_cue_sheet_missing_or_empty_builder():
    with pytest.raises(CueSheetError):
        generate_cue_sheet(InMemoryWorkbook())

    wb = InMemoryWorkbook({"Cue Builder": CUE_BUILDER[:1]})
    assert generate_cue_sheet(wb) is None
    assert wb.writes == []


def test_generate_cue_sheet_missing_schedule():
    with pytest.raises(CueSheetError):
        generate_cue_sheet(InMemoryWorkbook({"Cue Builder": CUE_BUILDER}))
