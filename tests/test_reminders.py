"""
Tests for ReminderSchedule.
"""
import pendulum

from dayflow.core import Config, ReminderSchedule
from dayflow.models import Activity


def at(hour, minute=0, day=15):
    return pendulum.datetime(2025, 1, day, hour, minute, tz="Europe/London")


class TestNextAfter:

    def test_later_today(self):
        schedule = ReminderSchedule(["20:00"])
        assert schedule.next_after(at(14, 30)) == at(20)

    def test_rolls_over_to_tomorrow(self):
        schedule = ReminderSchedule(["20:00"])
        assert schedule.next_after(at(21)) == at(20, day=16)

    def test_strictly_after(self):
        schedule = ReminderSchedule(["20:00"])
        assert schedule.next_after(at(20)) == at(20, day=16)

    def test_picks_earliest_remaining(self):
        schedule = ReminderSchedule(["20:00", "09:00", "13:00"])
        assert schedule.next_after(at(10)) == at(13)
        assert schedule.next_after(at(22)) == at(9, day=16)

    def test_disabled(self):
        assert ReminderSchedule(["20:00"], enabled=False).next_after(at(10)) is None

    def test_no_times(self):
        assert ReminderSchedule([]).next_after(at(10)) is None

    def test_keeps_timezone(self):
        now = pendulum.datetime(2025, 1, 15, 10, tz="America/New_York")
        reminder = ReminderSchedule(["20:00"]).next_after(now)
        assert reminder.timezone_name == "America/New_York"
        assert reminder.hour == 20

    def test_from_config(self):
        config = Config.from_dict({"reminders": {"enabled": True, "times": ["07:30"]}})
        assert ReminderSchedule.from_config(config).next_after(at(6)) == at(7, 30)


class TestIsDue:

    def test_due_when_nothing_logged_today(self):
        yesterday = Activity(id=1, text="x", timestamp=at(18, day=14))
        assert ReminderSchedule(["20:00"]).is_due(at(20, 30), [yesterday]) is True

    def test_not_due_before_reminder_time(self):
        assert ReminderSchedule(["20:00"]).is_due(at(19), []) is False

    def test_not_due_when_logged_today(self):
        today = Activity(id=1, text="x", timestamp=at(8))
        assert ReminderSchedule(["20:00"]).is_due(at(21), [today]) is False

    def test_not_due_when_disabled(self):
        assert ReminderSchedule(["20:00"], enabled=False).is_due(at(21), []) is False
