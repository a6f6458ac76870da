from __future__ import annotations

import pendulum

from typing import Iterable, List, Optional

from dayflow.core.config import Config
from dayflow.models import Activity

REMINDER_MESSAGE = "Don't forget to log your achievements today!"


class ReminderSchedule:
    """
    Works out when the user should next be nudged to log their day.
    Delivering the reminder is somebody else's problem.
    """

    def __init__(self, times: List[str], enabled: bool = True):
        self.enabled = enabled
        self.times = sorted(times)

    @classmethod
    def from_config(cls, config: Config) -> ReminderSchedule:
        return cls(config.reminder_times, config.reminders_enabled)

    def next_after(self, now: pendulum.DateTime) -> Optional[pendulum.DateTime]:
        """
        Returns the first reminder strictly after `now`, in `now`'s timezone.
        """
        if not self.enabled or not self.times:
            return None

        for days_ahead in (0, 1):
            day = now.start_of("day").add(days=days_ahead)
            for t in self.times:
                hour, minute = (int(part) for part in t.split(":"))
                candidate = day.set(hour=hour, minute=minute)
                if candidate > now:
                    return candidate
        return None

    def is_due(self, now: pendulum.DateTime, activities: Iterable[Activity]) -> bool:
        """
        True once a reminder time has passed today and nothing has been logged today.
        """
        if not self.enabled or not self.times:
            return False

        start = now.start_of("day")
        hour, minute = (int(part) for part in self.times[0].split(":"))
        if now < start.set(hour=hour, minute=minute):
            return False

        return not any(a.timestamp >= start for a in activities)
