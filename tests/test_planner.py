import planner
from eventplanner.workbook import InMemoryWorkbook

PEOPLE_HEADERS = ["Name", "Category", "Role/Position", "Status", "Email", "Phone", "Assigned Tasks"]
RESPONSE_HEADERS = ["Timestamp", "Email Address", "Full Name", "Phone Number",
                    "Availability", "Preferred Role/Area", "T-Shirt Size"]


def volunteer_workbook():
    return InMemoryWorkbook({
        "People": [PEOPLE_HEADERS, ["Ana", "Volunteer", "", "", "ana@x.com", "", "Signage"]],
        "Form Responses 1": [
            RESPONSE_HEADERS,
            ["5/1/2026 10:00:00", "ana@x.com", "Ana Lee", "555", "Setup Day", "Registration, Logistics", "S"],
            ["5/1/2026 11:00:00", "sam@x.com", "Sam", "556", "Cleanup Day", "Logistics", "M"],
        ],
    })


def test_import_responses_merges_into_people(capsys):
    wb = volunteer_workbook()

    code = planner.main(
        ["import-responses", "--form", "volunteer sign up", "--sheet", "Form Responses 1", "--no-audit"],
        workbook=wb,
    )

    assert code == 0
    people = wb.get_values("People")
    assert people[1] == ["Ana Lee", "Volunteer", "Registration", "Potential", "ana@x.com", "555", "Signage"]
    assert people[2] == ["Sam", "Volunteer", "Logistics", "Potential", "sam@x.com", "556", ""]
    assert "1 added, 1 updated, 0 failed" in capsys.readouterr().out


def test_import_responses_twice_is_stable():
    wb = volunteer_workbook()
    args = ["import-responses", "--form", "volunteer sign up", "--sheet", "Form Responses 1", "--no-audit"]

    planner.main(args, workbook=wb)
    first = wb.get_values("People")
    planner.main(args, workbook=wb)

    assert wb.get_values("People") == first


def test_import_responses_reports_failures():
    wb = volunteer_workbook()
    wb.sheets["People"][0] = ["Name", "Category"]

    code = planner.import_responses(wb, "volunteer sign up", "Form Responses 1")

    assert code == 1
    assert wb.get_values("People") == [["Name", "Category"], ["Ana", "Volunteer", "", "", "ana@x.com", "", "Signage"]]


def test_import_responses_missing_sheet():
    assert planner.import_responses(volunteer_workbook(), "speaker form", "Form Responses 9") == 1


def test_setup_config_command():
    wb = InMemoryWorkbook()
    assert planner.main(["setup-config"], workbook=wb) == 0
    assert wb.get_values("Config")[0][0] == "Key / Template Name"


def test_cue_sheet_command_without_builder():
    assert planner.main(["cue-sheet"], workbook=InMemoryWorkbook()) == 1
