"""Example: compute a day's attendance without Flask or MySQL.

The calculator only needs the clock events and something shaped like a schedule.
"""

from datetime import datetime

from tkms.attendance.calculator import compute
from tkms.common.datetime_utils import LOCAL_TZ
from tkms.schedules.model import Schedule


def main():
    schedule = Schedule(
        schedule_id=1,
        user_id=1,
        days=frozenset({"monday", "tuesday", "wednesday", "thursday", "friday"}),
        time_in="08:00",
        time_out="17:00",
        lunch_start="12:00",
        lunch_end="13:00",
    )
    metrics = compute(
        datetime(2024, 6, 3, 8, 12, tzinfo=LOCAL_TZ),
        datetime(2024, 6, 3, 18, 5, tzinfo=LOCAL_TZ),
        schedule,
    )
    print(metrics.to_dict())


if __name__ == "__main__":
    main()
