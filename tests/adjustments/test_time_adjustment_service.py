from __future__ import annotations

from datetime import date, datetime

import pytest

from tkms.adjustments.model import AdjustmentSettings
from tkms.adjustments.service import TimeAdjustmentService
from tkms.common.datetime_utils import LOCAL_TZ
from tkms.core.enums import AdjustmentType, EntryStatus
from tkms.core.exceptions import InvalidSchedule, ValidationError


def _create(service, **overrides):
    payload = {
        "user_id": 7,
        "adjustment_type": "early-out",
        "work_date": date(2024, 6, 3),
        "adjusted_time": "15:00",
        "original_time": "17:00",
        "reason": "Doctor's appointment",
        "approved_by": 1,
    }
    payload.update(overrides)
    return service.create(**payload)


def test_create_combines_date_and_time_in_canonical_zone(container):
    adj = _create(container.adjustment_service)

    assert adj.adjustment_type == AdjustmentType.EARLY_OUT
    assert adj.status == EntryStatus.APPROVED
    assert adj.adjusted_time == datetime(2024, 6, 3, 15, 0, tzinfo=LOCAL_TZ)
    assert adj.original_time == datetime(2024, 6, 3, 17, 0, tzinfo=LOCAL_TZ)
    assert adj.to_dict()["adjustmentType"] == "early-out"


def test_disabled_adjustment_type_is_refused(container, adjustments_repo):
    with pytest.raises(ValidationError, match="Half day adjustments are disabled"):
        _create(container.adjustment_service, adjustment_type="half-day")
    assert adjustments_repo.items == {}


def test_all_adjustments_refused_when_verbal_agreements_disabled(adjustments_repo):
    service = TimeAdjustmentService(adjustments_repo, AdjustmentSettings(allow_early_out=True))

    with pytest.raises(ValidationError, match="currently disabled"):
        _create(service)


def test_other_type_needs_only_the_master_switch(adjustments_repo):
    service = TimeAdjustmentService(adjustments_repo, AdjustmentSettings(enable_verbal_agreements=True))

    assert _create(service, adjustment_type="other", original_time=None).original_time is None


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"adjustment_type": "overtime"}, ValidationError),
        ({"reason": "  "}, ValidationError),
        ({"adjusted_time": "3pm"}, InvalidSchedule),
    ],
)
def test_create_validates_payload(container, overrides, error):
    with pytest.raises(error):
        _create(container.adjustment_service, **overrides)


def test_list_is_newest_first(container):
    first = _create(container.adjustment_service)
    second = _create(container.adjustment_service, adjustment_type="late-in", adjusted_time="09:00", original_time=None)

    assert [a.adjustment_id for a in container.adjustment_service.list()] == [second.adjustment_id, first.adjustment_id]


def test_settings_from_dict_defaults_to_disabled():
    settings = AdjustmentSettings.from_dict({"enable_verbal_agreements": 1})

    assert settings.enable_verbal_agreements is True
    assert settings.allows(AdjustmentType.LATE_IN) is False
    assert AdjustmentSettings.from_dict(None) == AdjustmentSettings()
