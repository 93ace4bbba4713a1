"""
Report aggregation tests.
"""

from datetime import date

import pytest

from timesheet_hub.core.exceptions import InvalidInputError, UnknownReportError
from timesheet_hub.db.repositories.timesheet_repository import TimesheetRepository
from timesheet_hub.models.project import Project
from timesheet_hub.models.timesheet import TimesheetStatus
from timesheet_hub.schemas.report import TimesheetReportRequest
from timesheet_hub.services.timesheet_report_service import TimesheetReportService

TODAY = date(2025, 3, 20)


@pytest.fixture
async def report_data(test_db_session, seed):
    """Alice: Apollo 8 accepted + 4 submitted, Beacon 2 rejected. Bob: Apollo 5 accepted, 3 in April."""
    beacon = Project(project_name="Beacon", client_name="Acme")
    test_db_session.add(beacon)
    await test_db_session.flush()

    repo = TimesheetRepository(test_db_session)
    rows = [
        (seed.employee, seed.project, "2025-03-03", "8", TimesheetStatus.ACCEPTED),
        (seed.employee, seed.project, "2025-03-04", "4", TimesheetStatus.SUBMITTED),
        (seed.employee, beacon, "2025-03-05", "2", TimesheetStatus.REJECTED),
        (seed.colleague, seed.project, "2025-03-11", "5", TimesheetStatus.ACCEPTED),
        (seed.colleague, seed.project, "2025-04-01", "3", TimesheetStatus.ACCEPTED),
    ]
    for user, project, day, hours, status in rows:
        await repo.create(
            project_id=project.id,
            user_id=user.id,
            task_category_id=seed.category.id,
            task_detail="Work",
            week_start=day,
            week_end=day,
            day_sheet=[{"date": day, "hours": hours}],
            status=status,
        )
    await test_db_session.commit()
    return beacon


def _request(tab_key, **filters):
    return TimesheetReportRequest(tabKey=tab_key, **filters)


@pytest.mark.asyncio
async def test_project_summary(test_db_session, report_data):
    service = TimesheetReportService(test_db_session, approved_predicate="accepted")
    report = await service.generate_report(_request("projectSummary", year=2025, month=3), TODAY)

    assert (report.start_date, report.end_date) == ("2025-03-01", "2025-03-31")
    assert report.rows == [
        {"projectName": "Apollo", "year": 2025, "month": 3, "loggedHours": 17.0, "approvedHours": 13.0},
        {"projectName": "Beacon", "year": 2025, "month": 3, "loggedHours": 2.0, "approvedHours": 0.0},
    ]


@pytest.mark.asyncio
async def test_project_detail_with_loose_predicate(test_db_session, report_data):
    service = TimesheetReportService(test_db_session, approved_predicate="not_rejected")
    report = await service.generate_report(_request("projectDetail"), TODAY)

    apollo = report.rows[0]
    assert apollo["approvedHours"] == 17.0
    assert apollo["dateRange"] == "2025-03-01 - 2025-03-31"


@pytest.mark.asyncio
async def test_employee_summary_totals(test_db_session, seed, report_data):
    service = TimesheetReportService(test_db_session, approved_predicate="accepted")
    report = await service.generate_report(_request("employeeSummary", year=2025, month=3), TODAY)

    assert [(r["employeeName"], r["projectName"]) for r in report.rows] == [
        ("Alice Employee", "Apollo"),
        ("Alice Employee", "Beacon"),
        ("Bob Employee", "Apollo"),
    ]
    alice_apollo, alice_beacon, bob_apollo = report.rows
    assert (alice_apollo["loggedHours"], alice_apollo["approvedHours"]) == (12.0, 8.0)
    assert (alice_beacon["loggedHours"], alice_beacon["approvedHours"]) == (2.0, 0.0)
    assert alice_apollo["totalLogged"] == alice_beacon["totalLogged"] == 14.0
    assert alice_apollo["totalApproved"] == 8.0
    assert (bob_apollo["totalLogged"], bob_apollo["totalApproved"]) == (5.0, 5.0)
    assert "dateRange" not in bob_apollo


@pytest.mark.asyncio
async def test_employee_detail_with_filters_and_range(test_db_session, seed, report_data):
    service = TimesheetReportService(test_db_session)
    report = await service.generate_report(
        _request(
            "employeeDetail",
            startDate="2025-03-10",
            endDate="2025-04-30",
            userIds=[str(seed.colleague.id)],
        ),
        TODAY,
    )

    assert report.rows == [
        {
            "employeeName": "Bob Employee",
            "projectName": "Apollo",
            "year": 2025,
            "month": 3,
            "loggedHours": 8.0,
            "approvedHours": 8.0,
            "totalLogged": 8.0,
            "totalApproved": 8.0,
            "dateRange": "2025-03-10 - 2025-04-30",
        }
    ]


@pytest.mark.asyncio
async def test_hours_are_conserved_across_groupings(test_db_session, report_data):
    service = TimesheetReportService(test_db_session)
    projects = await service.generate_report(_request("projectSummary", year=2025, month=3), TODAY)
    employees = await service.generate_report(_request("employeeSummary", year=2025, month=3), TODAY)

    assert sum(r["loggedHours"] for r in projects.rows) == sum(r["loggedHours"] for r in employees.rows) == 19.0


@pytest.mark.asyncio
async def test_report_input_errors(test_db_session, report_data):
    service = TimesheetReportService(test_db_session)
    with pytest.raises(UnknownReportError):
        await service.generate_report(_request("projectForecast"), TODAY)
    with pytest.raises(InvalidInputError):
        await service.generate_report(_request("projectSummary", startDate="2025-03-10", endDate="2025-03-01"), TODAY)


@pytest.mark.asyncio
async def test_report_endpoint(test_client, seed, acting_as, report_data):
    acting_as(seed.employee)
    response = await test_client.post("/api/v1/reports/timesheets", json={"tabKey": "projectSummary"})
    assert response.status_code == 403

    acting_as(seed.approver)
    response = await test_client.post(
        "/api/v1/reports/timesheets", json={"tabKey": "projectSummary", "year": 2025, "month": 3}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["data"]["tabKey"] == "projectSummary"
    assert [r["projectName"] for r in body["data"]["rows"]] == ["Apollo", "Beacon"]

    response = await test_client.post("/api/v1/reports/timesheets", json={"tabKey": "nope"})
    assert response.status_code == 400
    assert response.json()["status"] is False
