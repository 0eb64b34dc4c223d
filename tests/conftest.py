import pytest

from eventplanner.roster import RosterStore
from eventplanner.workbook import InMemoryWorkbook

PEOPLE_HEADERS = ["Name", "Category", "Role/Position", "Status", "Email", "Phone", "Assigned Tasks"]


@pytest.fixture
def people_workbook():
    return InMemoryWorkbook({
        "People": [
            PEOPLE_HEADERS,
            ["Ana", "Volunteer", "", "", "ana@x.com", "", "Signage"],
            ["Ben", "Staff", "Stage", "Confirmed", "ben@x.com", "555-0101", "Setup, Teardown"],
        ]
    })


@pytest.fixture
def store(people_workbook):
    return RosterStore(people_workbook)
