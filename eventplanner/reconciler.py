"""
Roster reconciliation: upsert an IncomingContact into the People roster.

Flow per call (no state is kept between calls):
  locate schema -> (fail if Name/Category/Email missing)
  -> scan for a row with the same Email
  -> matched:   overwrite only the contact-field cells of that row
     unmatched: new row after the last one, non-contact columns blank
  -> one write call per contact

Notes:
- Email matching is exact and case-sensitive ("a@x.com" != "A@X.com").
- An empty email never matches, so each such call appends a row.
- Matching is a linear scan over the roster, O(n) per call.
- Two concurrent first submissions for the same email can both append;
  nothing here locks the sheet.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from eventplanner.models import (
    ACTION_CREATED,
    ACTION_UPDATED,
    CONTACT_FIELDS,
    EMAIL_FIELD,
    REQUIRED_FIELDS,
    ConfigurationError,
    IncomingContact,
    ReconcileOutcome,
)
from eventplanner.roster import RosterStore

logger = logging.getLogger(__name__)


def _fail(error: ConfigurationError) -> ReconcileOutcome:
    logger.error("Roster reconciliation aborted: %s", error)
    return ReconcileOutcome(error=error)


def reconcile_contact(store: RosterStore, contact: IncomingContact) -> ReconcileOutcome:
    """
    Add `contact` to the roster, or merge it into the row carrying the same email.

    Configuration problems (missing tab, missing required columns) are returned
    in the outcome and nothing is written. Backend errors propagate.
    """
    if not store.exists():
        return _fail(ConfigurationError(f"{store.sheet_name} sheet not found"))

    headers = store.headers()
    missing = [name for name in REQUIRED_FIELDS if name not in headers]
    if missing:
        return _fail(ConfigurationError(
            f"Required columns not found in {store.sheet_name} sheet: {', '.join(missing)}"
        ))

    # positions this routine owns; everything else belongs to someone else
    owned: Dict[int, str] = {}
    for name, attr in CONTACT_FIELDS.items():
        idx = store.field_index(name, headers)
        if idx is not None:
            owned[idx] = getattr(contact, attr) or ""

    if not contact.email:
        logger.warning("Contact '%s' has no email; it will be added as a new row", contact.name)

    handle = store.find_by_key(EMAIL_FIELD, contact.email)

    if handle is not None:
        # only the owned cells are sent; other columns are never read back or rewritten
        store.update(handle, owned)
        logger.info("Updated existing person: %s (%s) at row %d", contact.name, contact.email, handle.row)
        return ReconcileOutcome(action=ACTION_UPDATED, handle=handle)

    row: List[str] = [owned.get(i, "") for i in range(len(headers))]
    handle = store.append(row)
    logger.info("Added new person: %s (%s) to row %d", contact.name, contact.email, handle.row)
    return ReconcileOutcome(action=ACTION_CREATED, handle=handle)
