"""
Command-line entry point for the event planner workbook.

Each subcommand stands in for one of the spreadsheet's menu items:
    setup-config       seed / reset the Config tab with default rows
    cue-sheet          build "<Event> - Cue Sheet" from the Cue Builder tab
    import-responses   replay a form's responses tab into the People roster

Settings come from .env (see google_sheets.py / mongodb_client.py):
    SPREADSHEET_ID, GOOGLE_SERVICE_ACCOUNT_FILE, MONGODB_URI (optional audit log)
"""

import argparse
import logging
import sys
from typing import Optional

from eventplanner.audit_repo import SubmissionAuditRepo
from eventplanner.config_repo import ConfigRepo
from eventplanner.cuesheet import CueSheetError, generate_cue_sheet
from eventplanner.forms import FORMS, get_form, handle_submission, submission_from_response_row
from eventplanner.models import ACTION_CREATED, ACTION_UPDATED
from eventplanner.roster import RosterStore
from eventplanner.workbook import Workbook

logger = logging.getLogger("planner")


def setup_config(workbook: Workbook) -> int:
    ConfigRepo(workbook).setup_defaults()
    return 0


def cue_sheet(workbook: Workbook) -> int:
    try:
        name = generate_cue_sheet(workbook)
    except CueSheetError as e:
        logger.error("Failed to generate cue sheet: %s", e)
        return 1
    if name is None:
        return 1
    print(f'Cue sheet created! Check the "{name}" tab.')
    return 0


def import_responses(workbook: Workbook, form_key: str, sheet: str, audit=None) -> int:
    form = get_form(form_key)
    if not workbook.has_sheet(sheet):
        logger.error("Responses sheet '%s' not found", sheet)
        return 1

    values = workbook.get_values(sheet)
    if len(values) < 2:
        logger.info("No responses in '%s'", sheet)
        return 0

    store = RosterStore(workbook)
    counts = {ACTION_CREATED: 0, ACTION_UPDATED: 0, "failed": 0}
    headers = values[0]
    for row in values[1:]:
        submission = submission_from_response_row(form, headers, row)
        outcome = handle_submission(store, form, submission, audit=audit)
        if outcome is None or not outcome.ok:
            counts["failed"] += 1
        else:
            counts[outcome.action] += 1

    print(f"{form.key}: {counts[ACTION_CREATED]} added, "
          f"{counts[ACTION_UPDATED]} updated, {counts['failed']} failed")
    return 1 if counts["failed"] else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="planner", description="Event planner workbook tools")
    parser.add_argument("--spreadsheet-id", default=None, help="Overrides SPREADSHEET_ID")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("setup-config", help="Reset the Config sheet to default values")
    sub.add_parser("cue-sheet", help="Generate the printable cue sheet")

    imp = sub.add_parser("import-responses", help="Merge form responses into the People sheet")
    imp.add_argument("--form", required=True, choices=sorted(FORMS), help="Which intake form")
    imp.add_argument("--sheet", required=True, help="Responses tab, e.g. 'Form Responses 1'")
    imp.add_argument("--no-audit", action="store_true", help="Do not write the MongoDB audit log")
    return parser


def main(argv=None, workbook: Optional[Workbook] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if workbook is None:
            import google_sheets
            workbook = google_sheets.get_workbook(args.spreadsheet_id)

        if args.command == "setup-config":
            return setup_config(workbook)
        if args.command == "cue-sheet":
            return cue_sheet(workbook)
        if args.command == "import-responses":
            audit = None
            if not args.no_audit:
                import mongodb_client
                db = mongodb_client.get_optional_database()
                if db is not None:
                    audit = SubmissionAuditRepo(db)
                    audit.ensure_indexes()
            return import_responses(workbook, args.form, args.sheet, audit=audit)
    except Exception as e:
        logger.exception("Failed to run %s: %s", args.command, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
