"""
Timesheet endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

from datetime import datetime, timezone

import pytest

BASE = "/api/v1/timesheets"


def _row(seed, data_sheet, **extra):
    row = {
        "project_id": str(seed.project.id),
        "task_category_id": str(seed.category.id),
        "task_detail": "API work",
        "data_sheet": data_sheet,
    }
    row.update(extra)
    return row


async def _save(client, seed, data_sheet, **extra):
    response = await client.post(f"{BASE}/save", json={"timesheets": [_row(seed, data_sheet, **extra)]})
    assert response.status_code == 200, response.text
    return response.json()["data"][0]


@pytest.mark.asyncio
async def test_save_then_weekly_round_trip(test_client, seed, acting_as):
    acting_as(seed.employee)
    saved = await _save(
        test_client,
        seed,
        [{"date": "2025-03-03", "hours": 8}, {"date": "2025-03-04", "hours": "4.5"}],
    )

    assert saved["status"] == "saved"
    assert saved["week_start"] == "2025-03-02"
    assert saved["week_end"] == "2025-03-08"
    assert saved["data_sheet"] == [
        {"date": "2025-03-03", "hours": "8", "isHoliday": False},
        {"date": "2025-03-04", "hours": "4.5", "isHoliday": False},
    ]

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] is True
    payload = body["data"]

    assert payload["date_range"] == {"startDate": "2025-03-02", "endDate": "2025-03-08"}
    assert payload["rejectionNote"] is None
    assert [d["normalizedDate"] for d in payload["weekDates"]] == [
        "2025-03-02", "2025-03-03", "2025-03-04", "2025-03-05", "2025-03-06", "2025-03-07", "2025-03-08",
    ]
    assert [d["isHoliday"] for d in payload["weekDates"]] == [False, False, True, False, False, False, False]

    [entry] = payload["data"]
    assert entry["id"] == saved["id"]
    assert entry["totalHours"] == 12.5
    assert [d["hours"] for d in entry["data_sheet"]] == ["00:00", "8", "4.5", "00:00", "00:00", "00:00", "00:00"]
    assert entry["data_sheet"][2]["isHoliday"] is True
    assert not any(d["isDisabled"] for d in entry["data_sheet"])


@pytest.mark.asyncio
async def test_saving_same_row_updates_in_place(test_client, seed, acting_as):
    acting_as(seed.employee)
    first = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])
    second = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 6}, {"date": "2025-03-05", "hours": 1}])

    assert second["id"] == first["id"]
    assert second["version"] == first["version"] + 1
    assert [(d["date"], d["hours"]) for d in second["data_sheet"]] == [("2025-03-03", "6"), ("2025-03-05", "1")]


@pytest.mark.asyncio
async def test_stale_version_is_a_conflict(test_client, seed, acting_as):
    acting_as(seed.employee)
    saved = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])

    response = await test_client.post(
        f"{BASE}/save",
        json={"timesheets": [_row(seed, [{"date": "2025-03-03", "hours": 2}], timesheetId=saved["id"], version=7)]},
    )
    assert response.status_code == 409
    assert response.json()["status"] is False


@pytest.mark.asyncio
async def test_month_boundary_week_disables_days_of_previous_month(test_client, seed, acting_as):
    acting_as(seed.employee)
    await _save(test_client, seed, [{"date": "2025-03-01", "hours": 3}])

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-01"})
    payload = response.json()["data"]

    assert payload["date_range"] == {"startDate": "2025-03-01", "endDate": "2025-03-01"}
    assert len(payload["weekDates"]) == 7
    enabled = [d["normalizedDate"] for d in payload["weekDates"] if not d["isDisabled"]]
    assert enabled == ["2025-03-01"]
    assert payload["data"][0]["totalHours"] == 3


@pytest.mark.asyncio
async def test_weekly_partial_range_and_paging(test_client, seed, acting_as):
    acting_as(seed.employee)

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-02", "endDate": "2025-03-04"})
    week_dates = response.json()["data"]["weekDates"]
    assert [d["isDisabled"] for d in week_dates] == [False, False, False, True, True, True, True]

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03", "direction": "next"})
    assert response.json()["data"]["date_range"] == {"startDate": "2025-03-09", "endDate": "2025-03-15"}

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03", "direction": "prev"})
    assert response.json()["data"]["date_range"] == {"startDate": "2025-03-01", "endDate": "2025-03-01"}


@pytest.mark.asyncio
async def test_weekly_mid_week_range_disables_both_sides(test_client, seed, acting_as):
    acting_as(seed.employee)
    await _save(test_client, seed, [{"date": "2025-03-03", "hours": 2}, {"date": "2025-03-05", "hours": 6}])

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-05", "endDate": "2025-03-06"})
    payload = response.json()["data"]

    assert payload["date_range"] == {"startDate": "2025-03-02", "endDate": "2025-03-08"}
    assert [d["isDisabled"] for d in payload["weekDates"]] == [True, True, True, False, False, True, True]
    [entry] = payload["data"]
    assert [d["isDisabled"] for d in entry["data_sheet"]] == [True, True, True, False, False, True, True]
    # disabled days keep their stored hours
    assert entry["totalHours"] == 8


@pytest.mark.asyncio
async def test_due_range_starting_mid_week_counts_overlapping_entries(test_client, seed, acting_as):
    acting_as(seed.employee)
    await _save(test_client, seed, [{"date": "2025-03-03", "hours": 4}, {"date": "2025-03-06", "hours": 5}])
    await _save(test_client, seed, [{"date": "2025-03-10", "hours": 1}], task_detail="Next week")

    response = await test_client.post(f"{BASE}/due", json={"startDate": "2025-03-05", "endDate": "2025-03-12"})
    rows = response.json()["data"]

    by_date = {row["date"]: row["hours"] for row in rows}
    assert list(by_date)[:-1] == [
        "2025-03-05", "2025-03-06", "2025-03-07", "2025-03-08", "2025-03-09", "2025-03-10", "2025-03-11", "2025-03-12",
    ]
    assert by_date["2025-03-06"] == 5
    assert by_date["2025-03-10"] == 1
    # hours before the requested range are not counted
    assert by_date["TOTAL"] == 6


@pytest.mark.asyncio
async def test_weekly_rejects_bad_dates(test_client, seed, acting_as):
    acting_as(seed.employee)
    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "yesterday"})
    assert response.status_code == 422

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-05", "endDate": "2025-03-01"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_failed_batch_persists_nothing(test_client, seed, acting_as):
    acting_as(seed.employee)
    response = await test_client.post(
        f"{BASE}/save",
        json={
            "timesheets": [
                _row(seed, [{"date": "2025-03-03", "hours": 8}]),
                # outside the week of its first day
                _row(seed, [{"date": "2025-03-03", "hours": 1}, {"date": "2025-03-12", "hours": 1}], task_detail="Other"),
            ]
        },
    )
    assert response.status_code == 422
    assert response.json()["status"] is False

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03"})
    assert response.json()["data"]["data"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("hours", [-2, "-1.5", "12345678901", 1e20])
async def test_save_rejects_out_of_range_hours(test_client, seed, acting_as, hours):
    acting_as(seed.employee)
    response = await test_client.post(
        f"{BASE}/save", json={"timesheets": [_row(seed, [{"date": "2025-03-03", "hours": hours}])]}
    )
    assert response.status_code == 422
    assert response.json()["status"] is False

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03"})
    assert response.json()["data"]["data"] == []



@pytest.mark.asyncio
async def test_save_unknown_project_is_not_found(test_client, seed, acting_as):
    acting_as(seed.employee)
    row = _row(seed, [{"date": "2025-03-03", "hours": 8}])
    row["project_id"] = str(seed.category.id)
    response = await test_client.post(f"{BASE}/save", json={"timesheets": [row]})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_submit_locks_entry(test_client, seed, acting_as):
    acting_as(seed.employee)
    saved = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])

    response = await test_client.post(f"{BASE}/submit", json={"timesheets": [saved["id"]]})
    assert response.status_code == 200
    assert response.json()["data"][0]["status"] == "submitted"

    # no further edits, deletes or re-submits
    response = await test_client.post(
        f"{BASE}/save", json={"timesheets": [_row(seed, [{"date": "2025-03-03", "hours": 1}])]}
    )
    assert response.status_code == 409
    response = await test_client.delete(f"{BASE}/{saved['id']}")
    assert response.status_code == 409
    response = await test_client.post(f"{BASE}/submit", json={"timesheets": [saved["id"]]})
    assert response.status_code == 409

    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03"})
    assert response.json()["data"]["data"][0]["data_sheet"][1]["hours"] == "8"


@pytest.mark.asyncio
async def test_submit_requires_saved_status_and_open_project(test_client, seed, acting_as):
    acting_as(seed.employee)
    draft = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}], status="in_progress")
    response = await test_client.post(f"{BASE}/submit", json={"timesheets": [draft["id"]]})
    assert response.status_code == 409

    closed = await _save(
        test_client, seed, [{"date": "2025-03-03", "hours": 2}], project_id=str(seed.closed_project.id)
    )
    response = await test_client.post(f"{BASE}/submit", json={"timesheets": [closed["id"]]})
    assert response.status_code == 409
    assert "closed" in response.json()["message"]


@pytest.mark.asyncio
async def test_other_users_timesheets_are_off_limits(test_client, seed, acting_as):
    acting_as(seed.employee)
    saved = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])

    acting_as(seed.colleague)
    response = await test_client.post(f"{BASE}/submit", json={"timesheets": [saved["id"]]})
    assert response.status_code == 403
    response = await test_client.delete(f"{BASE}/{saved['id']}")
    assert response.status_code == 403
    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03"})
    assert response.json()["data"]["data"] == []

    response = await test_client.post(f"{BASE}/submit", json={"timesheets": [str(seed.project.id)]})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_draft(test_client, seed, acting_as):
    acting_as(seed.employee)
    saved = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])

    response = await test_client.delete(f"{BASE}/{saved['id']}")
    assert response.status_code == 200
    response = await test_client.post(f"{BASE}/weekly", json={"startDate": "2025-03-03"})
    assert response.json()["data"]["data"] == []


@pytest.mark.asyncio
async def test_due_hours_exclude_submitted_entries(test_client, seed, acting_as):
    acting_as(seed.employee)
    submitted = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])
    await test_client.post(f"{BASE}/submit", json={"timesheets": [submitted["id"]]})
    await _save(
        test_client, seed, [{"date": "2025-03-03", "hours": 2}, {"date": "2025-03-06", "hours": 1.5}], task_detail="Docs"
    )

    response = await test_client.post(f"{BASE}/due", json={"startDate": "2025-03-02", "endDate": "2025-03-08"})
    assert response.status_code == 200
    rows = response.json()["data"]

    assert len(rows) == 8
    by_date = {row["date"]: row["hours"] for row in rows}
    assert by_date["2025-03-03"] == 2
    assert by_date["2025-03-06"] == 1.5
    assert rows[-1] == {"date": "TOTAL", "dayOfWeek": None, "isHoliday": False, "hours": 3.5}


@pytest.mark.asyncio
async def test_snapshot_counts(test_client, seed, acting_as):
    acting_as(seed.employee)
    first = await _save(test_client, seed, [{"date": "2025-03-03", "hours": 8}])
    await _save(test_client, seed, [{"date": "2025-03-10", "hours": 8}])
    await test_client.post(f"{BASE}/submit", json={"timesheets": [first["id"]]})

    response = await test_client.post(f"{BASE}/snapshot", json={"year": 2025, "month": 3})
    assert response.json()["data"] == {"in_progress": 0, "saved": 1, "submitted": 1, "approved": 0, "rejected": 0}


@pytest.mark.asyncio
async def test_today_summary(test_client, seed, acting_as):
    acting_as(seed.employee)
    today = datetime.now(timezone.utc).date().isoformat()
    await _save(test_client, seed, [{"date": today, "hours": 5}])
    await _save(test_client, seed, [{"date": today, "hours": 1.5}], task_detail="Standup")

    response = await test_client.get(f"{BASE}/today")
    data = response.json()["data"]
    assert data["date"] == today
    assert data["totalHours"] == 6.5
    assert data["projects"] == [{"project_id": str(seed.project.id), "project_name": "Apollo", "hours": 6.5}]
