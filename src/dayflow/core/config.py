from __future__ import annotations

import re

import pendulum

from dataclasses import dataclass, field
from typing import List

THEMES = ("light", "dark")

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


@dataclass
class Config:
    """Configuration for dayflow. This object includes the default values."""
    timezone: pendulum.Timezone = field(default_factory=lambda: pendulum.now().timezone)
    theme: str = "light"
    reminders_enabled: bool = True
    reminder_times: List[str] = field(default_factory=lambda: ["20:00"])

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        if "timezone" in data:
            timezone = pendulum.timezone(data.get("timezone"))
        else:
            timezone = pendulum.now().timezone

        display = data.get("display", {})
        theme = display.get("theme", "light")
        if theme not in THEMES:
            raise ValueError(f"Invalid theme: {theme}. Expected one of {', '.join(THEMES)}.")

        reminders = data.get("reminders", {})
        enabled = bool(reminders.get("enabled", True))
        times = reminders.get("times", ["20:00"])
        if isinstance(times, str):
            times = [times]
        for t in times:
            if not isinstance(t, str) or not _TIME_PATTERN.match(t):
                raise ValueError(f"Invalid reminder time: {t!r}. Expected HH:MM.")

        return cls(timezone, theme, enabled, sorted(times))
