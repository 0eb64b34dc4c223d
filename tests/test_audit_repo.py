from eventplanner.audit_repo import SubmissionAuditRepo
from eventplanner.models import ACTION_CREATED, ConfigurationError, ReconcileOutcome, RecordHandle


class FakeCollection:
    def __init__(self, fail=False):
        self.docs = []
        self.fail = fail

    def insert_one(self, doc):
        if self.fail:
            raise ConnectionError("mongo down")
        self.docs.append(doc)


def make_repo(fail=False):
    col = FakeCollection(fail=fail)
    return SubmissionAuditRepo({"roster_submissions": col}), col


def test_records_successful_outcome():
    repo, col = make_repo()
    repo.record("speaker form", "spk@x.com",
                outcome=ReconcileOutcome(action=ACTION_CREATED, handle=RecordHandle(7)))

    doc = col.docs[0]
    assert doc["form"] == "speaker form"
    assert doc["email"] == "spk@x.com"
    assert doc["action"] == ACTION_CREATED
    assert doc["row"] == 7
    assert doc["error"] is None
    assert doc["at"].tzinfo is not None


def test_records_configuration_error_from_outcome():
    repo, col = make_repo()
    repo.record("registration form", "a@x.com",
                outcome=ReconcileOutcome(error=ConfigurationError("People sheet not found")))
    assert col.docs[0]["error"] == "ConfigurationError: People sheet not found"
    assert col.docs[0]["action"] is None


def test_records_suppressed_exception():
    repo, col = make_repo()
    repo.record("volunteer sign up", "", error=RuntimeError("boom"))
    assert col.docs[0]["error"] == "RuntimeError: boom"
    assert col.docs[0]["row"] is None


def test_insert_failure_is_logged_not_raised(caplog):
    repo, _ = make_repo(fail=True)
    repo.record("speaker form", "spk@x.com")
    assert "Could not write audit entry" in caplog.text
