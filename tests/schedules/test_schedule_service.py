from __future__ import annotations

import pytest

from tkms.core.exceptions import InvalidSchedule, NotFoundError, ValidationError


@pytest.fixture
def service(container):
    return container.schedule_service


def test_create_normalizes_days_and_blank_lunch(service):
    s = service.create(user_id=1, days=["Monday", " friday "], time_in="08:00", time_out="17:00", lunch_start="", lunch_end=" ")

    assert s.days == frozenset({"monday", "friday"})
    assert s.lunch_start is None
    assert s.lunch_end is None
    assert s.is_active is True
    assert s.to_dict()["days"] == ["monday", "friday"]


def test_create_deactivates_previous_active_schedule(service, schedules_repo):
    first = service.create(user_id=1, days=["monday"], time_in="08:00", time_out="17:00")
    second = service.create(user_id=1, days=["monday"], time_in="09:00", time_out="18:00")

    assert schedules_repo.get_by_id(first.schedule_id).is_active is False
    assert [s.schedule_id for s in service.list_active(user_id=1)] == [second.schedule_id]


@pytest.mark.parametrize(
    "fields, error",
    [
        ({"days": []}, ValidationError),
        ({"days": ["funday"]}, ValidationError),
        ({"time_in": "8:00am"}, InvalidSchedule),
        ({"time_out": "07:00"}, InvalidSchedule),
        ({"lunch_start": "13:00", "lunch_end": "12:00"}, InvalidSchedule),
        ({"lunch_start": "12:75", "lunch_end": "13:00"}, InvalidSchedule),
    ],
)
def test_create_rejects_invalid_schedule(service, schedules_repo, fields, error):
    payload = {"user_id": 1, "days": ["monday"], "time_in": "08:00", "time_out": "17:00"}
    payload.update(fields)

    with pytest.raises(error):
        service.create(**payload)
    assert schedules_repo.items == {}


def test_update_revalidates_merged_schedule(service):
    s = service.create(user_id=1, days=["monday"], time_in="08:00", time_out="17:00")

    updated = service.update(s.schedule_id, time_in="07:30", lunch_start="12:00", lunch_end="12:30")
    assert updated.time_in == "07:30"
    assert updated.has_lunch_window

    with pytest.raises(InvalidSchedule):
        service.update(s.schedule_id, time_out="07:00")
    with pytest.raises(ValidationError):
        service.update(s.schedule_id, user_id=2)


def test_delete_and_missing_schedule(service):
    s = service.create(user_id=1, days=["monday"], time_in="08:00", time_out="17:00")

    service.delete(s.schedule_id)

    with pytest.raises(NotFoundError):
        service.get(s.schedule_id)
    with pytest.raises(NotFoundError):
        service.delete(s.schedule_id)
