"""
Intake form submissions -> People roster.

Responsibilities:
- Describe the three intake forms (registration, volunteer sign up, speaker)
  by the questions that matter to the roster: which one gives the role and
  which ones are folded into notes.
- Turn a FormSubmission into an IncomingContact.
- Turn a row of a form's responses tab into a FormSubmission, so responses
  can be replayed into the roster.
- handle_submission(): the per-submission boundary. Every exception is caught
  and logged there, so one malformed submission never blocks the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from eventplanner.audit_repo import SubmissionAuditRepo
from eventplanner.models import (
    Answer,
    FormSubmission,
    IncomingContact,
    ReconcileOutcome,
)
from eventplanner.reconciler import reconcile_contact
from eventplanner.roster import RosterStore

logger = logging.getLogger(__name__)

NAME_QUESTION = "Full Name"
PHONE_QUESTION = "Phone Number"

# headers the form engine adds to a responses tab
TIMESTAMP_COLUMN = "Timestamp"
EMAIL_COLUMN = "Email Address"


@dataclass(frozen=True)
class FormDefinition:
    key: str                      # row key in the Config tab
    category: str
    status: str
    role_question: Optional[str] = None
    role_is_choice_list: bool = False
    note_questions: Tuple[str, ...] = ()
    # checkbox question -> its choices, used to split a joined answer back apart
    checkbox_options: Dict[str, Tuple[str, ...]] = field(default_factory=dict)


REGISTRATION_FORM = FormDefinition(
    key="registration form",
    category="Participant",
    status="Registered",
    note_questions=(
        "Dietary Restrictions or Preferences",
        "Accessibility Needs",
        "How did you hear about this event?",
    ),
)

VOLUNTEER_FORM = FormDefinition(
    key="volunteer sign up",
    category="Volunteer",
    status="Potential",
    role_question="Preferred Role/Area",
    role_is_choice_list=True,
    note_questions=(
        "Availability",
        "T-Shirt Size",
        "Previous Volunteer Experience",
    ),
    checkbox_options={
        "Availability": (
            "Setup Day",
            "Event Day - Morning",
            "Event Day - Afternoon",
            "Event Day - Evening",
            "Cleanup Day",
        ),
        "Preferred Role/Area": (
            "Registration",
            "Setup/Teardown",
            "Technical Support",
            "Food & Beverage",
            "Logistics",
            "Communications",
            "General Support",
        ),
    },
)

SPEAKER_FORM = FormDefinition(
    key="speaker form",
    category="Speaker",
    status="Potential",
    role_question="Session Title",
    note_questions=(
        "Session Description",
        "Speaker Bio",
        "Headshot Photo Link",
        "AV/Technical Requirements",
        "Additional Notes or Requirements",
    ),
    checkbox_options={
        "AV/Technical Requirements": (
            "Projector",
            "Audio Connection",
            "Microphone",
            "Internet Connection",
            "Whiteboard/Flip Chart",
            "Other (specify in notes)",
        ),
    },
)

FORMS: Dict[str, FormDefinition] = {
    f.key: f for f in (REGISTRATION_FORM, VOLUNTEER_FORM, SPEAKER_FORM)
}


def get_form(key: str) -> FormDefinition:
    try:
        return FORMS[key.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown form '{key}'. Known forms: {', '.join(FORMS)}") from None


def _answer_text(answer: Answer) -> str:
    if isinstance(answer, (list, tuple)):
        return ", ".join(str(a) for a in answer)
    return "" if answer is None else str(answer)


def contact_from_submission(form: FormDefinition, submission: FormSubmission) -> IncomingContact:
    contact = IncomingContact(
        email=submission.respondent_email or "",
        category=form.category,
        status=form.status,
    )
    notes: List[str] = []

    for question, answer in submission.answers:
        if question == NAME_QUESTION:
            contact.name = _answer_text(answer)
        elif question == PHONE_QUESTION:
            contact.phone = _answer_text(answer)
        elif form.role_question and question == form.role_question:
            if form.role_is_choice_list:
                # first choice is the primary role; all of them go to notes
                if isinstance(answer, (list, tuple)) and answer:
                    contact.role = str(answer[0])
                    notes.append(f"Preferred Roles: {_answer_text(answer)}\n")
            else:
                contact.role = _answer_text(answer)
        elif question in form.note_questions:
            text = _answer_text(answer)
            if text:
                notes.append(f"{question}: {text}\n")

    contact.notes = "".join(notes)
    return contact


def split_checkbox_answer(value: str, options: Tuple[str, ...] = ()) -> List[str]:
    """
    Split a checkbox answer the form engine stored joined with ", ".

    An option whose own text contains ", " would be broken apart by a plain
    split, so at each position the longest run of pieces that re-joins into a
    known option is taken. Pieces that match nothing (e.g. an "Other" answer)
    are kept one by one.
    """
    pieces = value.split(", ")
    known = set(options)
    choices: List[str] = []
    i = 0
    while i < len(pieces):
        end = i + 1
        for j in range(len(pieces), i + 1, -1):
            if ", ".join(pieces[i:j]) in known:
                end = j
                break
        choice = ", ".join(pieces[i:end]).strip()
        if choice:
            choices.append(choice)
        i = end
    return choices


def submission_from_response_row(form: FormDefinition, headers: List[str], row: List[str]) -> FormSubmission:
    """
    Build a FormSubmission from one row of a form's responses tab.

    Checkbox answers are stored in the tab joined with ", " and are split back
    into lists here, guided by the form's known options. Empty cells are
    skipped.
    """
    email = ""
    answers: List[Tuple[str, Answer]] = []
    for i, question in enumerate(headers):
        value = row[i] if i < len(row) else ""
        if question == EMAIL_COLUMN:
            email = value
            continue
        if question == TIMESTAMP_COLUMN or not question or value == "":
            continue
        if question in form.checkbox_options:
            answers.append((question, split_checkbox_answer(value, form.checkbox_options[question])))
        else:
            answers.append((question, value))
    return FormSubmission(respondent_email=email, answers=answers)


def handle_submission(store: RosterStore, form: FormDefinition, submission: FormSubmission,
                      audit: Optional[SubmissionAuditRepo] = None) -> Optional[ReconcileOutcome]:
    """
    Reconcile one form submission into the roster.

    Never raises: failures are logged and None is returned. A configuration
    problem comes back as an outcome carrying the error.
    """
    outcome: Optional[ReconcileOutcome] = None
    contact: Optional[IncomingContact] = None
    error: Optional[BaseException] = None
    try:
        contact = contact_from_submission(form, submission)
        outcome = reconcile_contact(store, contact)
    except Exception as e:
        logger.exception("Error processing %s submission", form.key)
        error = e

    if audit is not None:
        email = contact.email if contact else getattr(submission, "respondent_email", "")
        audit.record(form.key, email, outcome=outcome, error=error)
    return outcome
