from dayflow.models import Activity, ImageAttachment, LinkAttachment

import humanize
import pendulum

import re

from datetime import timedelta

from typing import List

from rich.table import Table
from rich.text import Text

URL_PATTERN = re.compile(r"https?://[^\s<>\"']*[^\s<>\"'.,;:!?)]")


class ActivityFormatter:

    EMPTY_STATE = "No activities in the last 2 days. Start logging!"

    @classmethod
    def day_label(cls, activity: Activity, now: pendulum.DateTime) -> str:
        """
        "Today", "Yesterday", or the date the activity was logged on.
        """
        logged_on = activity.timestamp.in_timezone(now.timezone).date()
        today = now.date()
        if logged_on == today:
            return "Today"
        if logged_on == today.subtract(days=1):
            return "Yesterday"
        return logged_on.to_date_string()

    @classmethod
    def time_label(cls, activity: Activity, now: pendulum.DateTime) -> str:
        return activity.timestamp.in_timezone(now.timezone).format("HH:mm")

    @classmethod
    def attachment_label(cls, activity: Activity) -> str:
        attachment = activity.attachment
        if isinstance(attachment, ImageAttachment):
            header = attachment.data.split(",", 1)[0]
            mime_type = header.removeprefix("data:").split(";")[0] or "image"
            return f"{mime_type} ({humanize.naturalsize(len(attachment.data))})"
        if isinstance(attachment, LinkAttachment):
            return attachment.data
        return ""

    @classmethod
    def linkify(cls, text: str) -> Text:
        """
        Make any http(s) URL in the text clickable in terminals that support links.
        """
        rendered = Text(text)
        for match in URL_PATTERN.finditer(text):
            rendered.stylize(f"link {match.group()}", match.start(), match.end())
        return rendered

    @classmethod
    def table(cls, activities: List[Activity], now: pendulum.DateTime) -> Table:
        table = Table()
        table.add_column("ID", justify="right")
        table.add_column("When")
        table.add_column("★")
        table.add_column("Activity")
        table.add_column("Attachment")

        for activity in activities:
            table.add_row(
                str(activity.id),
                f"{cls.day_label(activity, now)} • {cls.time_label(activity, now)}",
                "★" if activity.is_favorite else "",
                cls.linkify(activity.text),
                cls.linkify(cls.attachment_label(activity)),
            )

        return table

    @classmethod
    def detail(cls, activity: Activity, now: pendulum.DateTime) -> str:
        lines = [
            f"id        {activity.id}",
            f"logged    {cls.day_label(activity, now)} {cls.time_label(activity, now)} "
            f"({humanize.naturaltime(cls.age(activity, now))})",
            f"favorite  {'yes' if activity.is_favorite else 'no'}",
        ]
        if activity.text:
            lines.append(f"text      {activity.text}")
        if activity.attachment:
            lines.append(f"{activity.attachment.kind:<10}{cls.attachment_label(activity)}")
        return "\n".join(lines)

    @classmethod
    def age(cls, activity: Activity, now: pendulum.DateTime) -> timedelta:
        return timedelta(seconds=(now - activity.timestamp).total_seconds())
