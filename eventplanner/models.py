from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

PEOPLE_SHEET = "People"

EMAIL_FIELD = "Email"

# roster header -> IncomingContact attribute
CONTACT_FIELDS = {
    "Name": "name",
    "Category": "category",
    "Role/Position": "role",
    "Status": "status",
    "Email": "email",
    "Phone": "phone",
}

REQUIRED_FIELDS = ("Name", "Category", "Email")

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"


class ReconcileError(Exception):
    pass


class ConfigurationError(ReconcileError):
    """Roster tab missing, or its header lacks a required field."""


@dataclass
class IncomingContact:
    email: str = ""
    name: str = ""
    phone: str = ""
    category: str = ""
    status: str = ""
    role: str = ""
    notes: str = ""


@dataclass(frozen=True)
class RecordHandle:
    row: int  # 1-based sheet row, header is row 1


@dataclass
class ReconcileOutcome:
    action: Optional[str] = None
    handle: Optional[RecordHandle] = None
    error: Optional[ReconcileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Answer = Union[str, List[str]]


@dataclass
class FormSubmission:
    respondent_email: str
    answers: List[Tuple[str, Answer]] = field(default_factory=list)
