"""
Config tab repository for the planner workbook.

Responsibilities:
- Read the Config tab as named option lists:
    "People Statuses" -> ["Potential", "Invited", ...]
- Seed / reset the Config tab with default rows
- Check that the intake form rows exist and store form links next to them
- Look up event information (name, date, venue) on the Event Description tab

The Config tab has three columns:
    Key / Template Name | Value / Subject | Body
List values are comma-separated in the Value column.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from eventplanner.forms import FORMS
from eventplanner.workbook import Workbook

logger = logging.getLogger(__name__)

CONFIG_SHEET = "Config"
EVENT_DESCRIPTION_SHEET = "Event Description"

CONFIG_HEADERS = ["Key / Template Name", "Value / Subject", "Body"]

DEFAULT_CONFIG_ROWS = [
    ["Event Type", "Single,Multi", ""],
    ["Status Options", "Tentative,Confirmed,Cancelled", ""],
    ["People Categories", "Staff,Volunteer,Speaker,Participant", ""],
    ["People Statuses", "Potential,Invited,Accepted,Registered,Unavailable", ""],
    ["Budget Cost Basis", "Flat,Per Person", ""],
    ["Location List", "Main Hall,Room 101,Room 102,Outdoor Area", ""],
    ["Task Status Options", "Not Started,In Progress,Blocked,Done,Cancelled", ""],
    ["Task Priority Options", "High,Medium,Low", ""],
    ["Owners", "", ""],
    ["Look-Ahead Days", "1", ""],
    ["Reminder Lead Time (days)", "2", ""],
    ["New-Event Template ID", "", ""],
    ["Default Food Rate ($/person)", "10", ""],
    ["registration form", "", ""],
    ["volunteer sign up", "", ""],
    ["speaker form", "", ""],
    ["InviteTemplate", "Invitation: {{name}} for [EVENT NAME]",
     "Hi {{name}},\n\nYou are invited to [EVENT NAME]!\n\n[Add event details like date, time, location.]\n\n"
     "Please RSVP by [RSVP Date].\n\nMore info here: [Link]\n\nBest regards,\n[Your Name/Org]"],
    ["ReminderTemplate", "Reminder: [EVENT NAME] is coming up!",
     "Hi {{name}},\n\nJust a friendly reminder about the upcoming event: [EVENT NAME] on [Date] at [Time].\n\n"
     "Location: [Location]\n\nWe look forward to seeing you!\n\nBest regards,\n[Your Name/Org]"],
    ["ThankYouTemplate", "Thank You for Attending [EVENT NAME]!",
     "Hi {{name}},\n\nThank you for attending [EVENT NAME]!\n\nWe hope you enjoyed it. "
     "[Optional: Add link to slides, photos, feedback survey, etc.]\n\nBest regards,\n[Your Name/Org]"],
]


def parse_config_lists(rows: List[List[str]]) -> Dict[str, List[str]]:
    """
    rows: Config tab data rows (header excluded).
    Blank keys are skipped; a blank value gives an empty list.
    """
    lists: Dict[str, List[str]] = {}
    for row in rows:
        key = row[0].strip() if row and row[0] else ""
        if not key:
            continue
        value = row[1] if len(row) > 1 and row[1] else ""
        lists[key] = [s.strip() for s in value.split(",")] if value else []
    return lists


def find_row(workbook: Workbook, sheet: str, label: str) -> Optional[int]:
    """1-based row whose column A equals `label` exactly, or None."""
    for i, row in enumerate(workbook.get_values(sheet), start=1):
        if row and row[0] == label:
            return i
    return None


class ConfigRepo:
    def __init__(self, workbook: Workbook):
        self.workbook = workbook

    def _rows(self) -> List[List[str]]:
        if not self.workbook.has_sheet(CONFIG_SHEET):
            return []
        return self.workbook.get_values(CONFIG_SHEET)

    def lists(self) -> Dict[str, List[str]]:
        return parse_config_lists(self._rows()[1:])

    def get_value(self, key: str) -> Optional[str]:
        for row in self._rows()[1:]:
            if row and row[0].strip() == key:
                return row[1] if len(row) > 1 else ""
        return None

    def setup_defaults(self) -> None:
        """Create the Config tab, or wipe it, and write the default rows."""
        if self.workbook.has_sheet(CONFIG_SHEET):
            self.workbook.clear_sheet(CONFIG_SHEET)
        else:
            self.workbook.add_sheet(CONFIG_SHEET)
        self.workbook.write_rows(CONFIG_SHEET, 1, [CONFIG_HEADERS] + DEFAULT_CONFIG_ROWS)
        logger.info("Config sheet has been set up with %d default rows", len(DEFAULT_CONFIG_ROWS))

    # ---- form links ----

    def has_form_entries(self) -> bool:
        keys = {row[0].strip().lower() for row in self._rows() if row and row[0]}
        all_found = True
        for form_key in FORMS:
            if form_key not in keys:
                logger.info("Form key not found in Config sheet: %s", form_key)
                all_found = False
        return all_found

    def save_form_url(self, key: str, url: str) -> bool:
        """Store `url` as a HYPERLINK formula in the Value column of `key`'s row."""
        if not self.workbook.has_sheet(CONFIG_SHEET):
            logger.warning("Config sheet not found")
            return False

        for i, row in enumerate(self.workbook.get_values(CONFIG_SHEET), start=1):
            if row and row[0] and row[0].strip().lower() == key.lower():
                label = key[:1].upper() + key[1:]
                formula = f'=HYPERLINK("{url}","{label}")'
                self.workbook.write_row(CONFIG_SHEET, i, [row[0], formula], user_entered=True)
                logger.info("Form URL saved for key: %s", key)
                return True

        logger.warning("Key not found in Config sheet: %s", key)
        return False

    # ---- event description ----

    def _event_value(self, label: str) -> Optional[str]:
        if not self.workbook.has_sheet(EVENT_DESCRIPTION_SHEET):
            logger.warning("Event Description sheet not found")
            return None
        row_number = find_row(self.workbook, EVENT_DESCRIPTION_SHEET, label)
        if not row_number:
            return None
        row = self.workbook.get_values(EVENT_DESCRIPTION_SHEET)[row_number - 1]
        value = row[1] if len(row) > 1 else ""
        return value or None

    def get_event_name(self) -> Optional[str]:
        return self._event_value("Event Name")

    def get_event_info(self) -> Dict[str, Optional[str]]:
        return {
            "event_name": self.get_event_name(),
            "start_date": self._event_value("Start Date"),
            "location": self._event_value("Location"),
        }
