"""
Timesheet record store tests against an in-memory database.
"""

from datetime import date

import pytest

from timesheet_hub.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from timesheet_hub.db.repositories.timesheet_repository import TimesheetRepository
from timesheet_hub.models.timesheet import TimesheetStatus
from timesheet_hub.services.timesheet_workflow import EditPolicy


async def _create(repo, seed, status=TimesheetStatus.SAVED, day_sheet=None, start=date(2025, 3, 2), end=date(2025, 3, 8)):
    return await repo.create(
        project_id=seed.project.id,
        user_id=seed.employee.id,
        task_category_id=seed.category.id,
        task_detail="Build reports",
        week_start=start,
        week_end=end,
        day_sheet=day_sheet if day_sheet is not None else [{"date": "2025-03-03", "hours": "8"}],
        status=status,
    )


@pytest.mark.asyncio
async def test_create_persists_days(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed)

    assert entry.version == 1
    assert entry.status == TimesheetStatus.SAVED
    assert [(d.work_date, d.hours) for d in entry.days] == [(date(2025, 3, 3), "8")]


@pytest.mark.asyncio
async def test_update_day_sheet_overwrites_and_appends(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed)

    updated = await repo.update_day_sheet(
        entry.id,
        [{"date": "2025-03-03T00:00:00Z", "hours": 6}, {"date": "2025-03-04", "hours": "2.5"}],
        TimesheetStatus.SAVED,
        EditPolicy().editable_statuses,
    )

    assert updated.version == 2
    assert [(d.work_date, d.hours) for d in updated.days] == [
        (date(2025, 3, 3), "6"),
        (date(2025, 3, 4), "2.5"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [TimesheetStatus.SUBMITTED, TimesheetStatus.ACCEPTED])
async def test_update_day_sheet_rejects_locked_entries(test_db_session, seed, status):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed, status=status)

    with pytest.raises(ConflictError):
        await repo.update_day_sheet(
            entry.id, [{"date": "2025-03-03", "hours": "1"}], TimesheetStatus.SAVED, EditPolicy().editable_statuses
        )

    unchanged = await repo.get(entry.id)
    assert unchanged.status == status
    assert unchanged.version == 1
    assert unchanged.days[0].hours == "8"


@pytest.mark.asyncio
async def test_rejected_entry_editability_depends_on_policy(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed, status=TimesheetStatus.REJECTED)

    with pytest.raises(ConflictError):
        await repo.update_day_sheet(
            entry.id, [], TimesheetStatus.SAVED, EditPolicy(rejected_editable=False).editable_statuses
        )

    updated = await repo.update_day_sheet(
        entry.id, [], TimesheetStatus.SAVED, EditPolicy(rejected_editable=True).editable_statuses
    )
    assert updated.status == TimesheetStatus.SAVED


@pytest.mark.asyncio
async def test_update_day_sheet_version_check(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed)

    with pytest.raises(ConflictError):
        await repo.update_day_sheet(
            entry.id, [], TimesheetStatus.SAVED, EditPolicy().editable_statuses, expected_version=5
        )
    updated = await repo.update_day_sheet(
        entry.id, [], TimesheetStatus.SAVED, EditPolicy().editable_statuses, expected_version=1
    )
    assert updated.version == 2


@pytest.mark.asyncio
async def test_update_day_sheet_validation(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed)

    with pytest.raises(InvalidInputError):
        await repo.update_day_sheet(
            entry.id, [{"date": "2025-03-04"}], TimesheetStatus.SAVED, EditPolicy().editable_statuses
        )
    with pytest.raises(NotFoundError):
        await repo.update_day_sheet(
            seed.project.id, [], TimesheetStatus.SAVED, EditPolicy().editable_statuses
        )


@pytest.mark.asyncio
async def test_window_queries(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    first_week = await _create(repo, seed)
    await _create(
        repo,
        seed,
        day_sheet=[{"date": "2025-03-01", "hours": "3"}],
        start=date(2025, 3, 1),
        end=date(2025, 3, 1),
    )

    exact = await repo.find_by_window(seed.employee.id, date(2025, 3, 2), date(2025, 3, 8))
    assert [e.id for e in exact] == [first_week.id]
    # windows are matched exactly, not by overlap
    assert await repo.find_by_window(seed.employee.id, date(2025, 3, 3), date(2025, 3, 8)) == []
    assert await repo.find_by_window(seed.colleague.id, date(2025, 3, 2), date(2025, 3, 8)) == []

    within = await repo.find_overlapping(seed.employee.id, date(2025, 3, 1), date(2025, 3, 31))
    assert len(within) == 2
    # a range starting mid-week still sees the week that began before it
    overlapping = await repo.find_overlapping(seed.employee.id, date(2025, 3, 5), date(2025, 3, 12))
    assert [e.id for e in overlapping] == [first_week.id]
    assert await repo.find_overlapping(seed.employee.id, date(2025, 3, 9), date(2025, 3, 15)) == []

    matching = await repo.find_matching(
        seed.employee.id, seed.project.id, seed.category.id, "Build reports", date(2025, 3, 2), date(2025, 3, 8)
    )
    assert matching.id == first_week.id

    on_day = await repo.find_for_day(seed.employee.id, date(2025, 3, 1))
    assert len(on_day) == 1

    owned = await repo.find_by_owner(seed.employee.id)
    assert [e.week_start for e in owned] == [date(2025, 3, 2), date(2025, 3, 1)]
    assert await repo.find_by_owner(seed.employee.id, status=TimesheetStatus.SUBMITTED) == []
    assert await repo.find_by_owner(seed.colleague.id) == []


@pytest.mark.asyncio
async def test_count_by_status_and_report_rows(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    await _create(repo, seed, status=TimesheetStatus.SUBMITTED)
    await _create(repo, seed, status=TimesheetStatus.ACCEPTED)
    await _create(repo, seed, status=TimesheetStatus.ACCEPTED)

    counts = await repo.count_by_status(seed.employee.id, date(2025, 3, 1), date(2025, 3, 31))
    assert counts == {TimesheetStatus.SUBMITTED: 1, TimesheetStatus.ACCEPTED: 2}

    rows = await repo.report_rows(date(2025, 3, 1), date(2025, 3, 31), project_ids=[seed.project.id])
    assert len(rows) == 3
    assert {row.project_name for row in rows} == {"Apollo"}
    assert {row.user_name for row in rows} == {"Alice Employee"}
    assert await repo.report_rows(date(2025, 4, 1), date(2025, 4, 30)) == []


@pytest.mark.asyncio
async def test_delete_removes_entry(test_db_session, seed):
    repo = TimesheetRepository(test_db_session)
    entry = await _create(repo, seed)

    assert await repo.delete(entry.id) is True
    assert await repo.get(entry.id) is None
    assert await repo.delete(entry.id) is False
