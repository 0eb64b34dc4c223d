"""
Append-only submission log (PyMongo-backed).

Each processed form submission becomes one document in `roster_submissions`:
    form, email, action (created / updated / None), row, error, at

Implementation notes:
- Purely for forensics; nothing reads it back during reconciliation.
- A failed insert is logged and swallowed so the audit can never turn a good
  submission into a failed one.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionAuditRepo:
    def __init__(self, db):
        self.col = db["roster_submissions"]

    def ensure_indexes(self) -> None:
        self.col.create_index([("email", 1), ("at", -1)])
        self.col.create_index([("form", 1), ("at", -1)])

    def record(self, form: str, email: str, *, outcome=None, error: Optional[BaseException] = None) -> None:
        if error is None and outcome is not None and outcome.error is not None:
            error = outcome.error
        doc: Dict[str, Any] = {
            "form": form,
            "email": email,
            "action": outcome.action if outcome is not None else None,
            "row": outcome.handle.row if outcome is not None and outcome.handle is not None else None,
            "error": f"{type(error).__name__}: {error}" if error is not None else None,
            "at": now_utc(),
        }
        try:
            self.col.insert_one(doc)
        except Exception:
            logger.exception("Could not write audit entry for %s (%s)", form, email)
