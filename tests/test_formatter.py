"""
Tests for ActivityFormatter.
"""
import pendulum

from rich.console import Console
from rich.style import Style

from dayflow.models import Activity, ImageAttachment, LinkAttachment
from dayflow_cli.formatter import ActivityFormatter


def activity_at(when, **kwargs):
    return Activity(id=1, text=kwargs.pop("text", "Went for a walk"), timestamp=when, **kwargs)


class TestLabels:

    def test_today(self, fixed_now):
        assert ActivityFormatter.day_label(activity_at(fixed_now.subtract(hours=2)), fixed_now) == "Today"

    def test_yesterday(self, fixed_now):
        assert ActivityFormatter.day_label(activity_at(fixed_now.subtract(days=1)), fixed_now) == "Yesterday"

    def test_older_shows_date(self, fixed_now):
        assert ActivityFormatter.day_label(activity_at(fixed_now.subtract(days=5)), fixed_now) == "2025-01-10"

    def test_label_uses_viewer_timezone(self):
        """23:30 UTC on the 14th is already the 15th in Tokyo."""
        now = pendulum.datetime(2025, 1, 15, 12, tz="Asia/Tokyo")
        activity = activity_at(pendulum.datetime(2025, 1, 14, 23, 30, tz="UTC"))
        assert ActivityFormatter.day_label(activity, now) == "Today"
        assert ActivityFormatter.time_label(activity, now) == "08:30"

    def test_attachment_labels(self, fixed_now):
        image = activity_at(fixed_now, attachment=ImageAttachment("data:image/jpeg;base64,AAAA"))
        link = activity_at(fixed_now, attachment=LinkAttachment("https://example.com"))
        assert ActivityFormatter.attachment_label(image).startswith("image/jpeg")
        assert ActivityFormatter.attachment_label(link) == "https://example.com"
        assert ActivityFormatter.attachment_label(activity_at(fixed_now)) == ""


class TestRendering:

    def test_table_contains_rows(self, fixed_now):
        pinned = Activity(id=7, text="Old favorite", timestamp=fixed_now.subtract(days=9), is_favorite=True)
        today = Activity(id=8, text="Went for a walk", timestamp=fixed_now.subtract(minutes=30))

        console = Console(record=True, width=120)
        console.print(ActivityFormatter.table([pinned, today], fixed_now))
        output = console.export_text()

        assert "Old favorite" in output
        assert "Today • 14:00" in output
        assert "★" in output

    def test_detail(self, fixed_now):
        activity = Activity(id=8, text="Went for a walk", timestamp=fixed_now.subtract(minutes=30),
                            attachment=LinkAttachment("https://example.com"))
        detail = ActivityFormatter.detail(activity, fixed_now)
        assert "id        8" in detail
        assert "30 minutes ago" in detail
        assert "https://example.com" in detail
        assert "favorite  no" in detail

    def test_linkify_marks_urls(self):
        text = ActivityFormatter.linkify("Read https://example.com/recipe. Then cooked.")
        links = [(span.start, span.end, Style.parse(str(span.style)).link) for span in text.spans]
        assert links == [(5, 31, "https://example.com/recipe")]

    def test_linkify_plain_text(self):
        assert ActivityFormatter.linkify("Went for a walk").spans == []

    def test_table_links_urls(self, fixed_now):
        activity = Activity(id=8, text="Read https://example.com", timestamp=fixed_now)
        table = ActivityFormatter.table([activity], fixed_now)
        cell = next(iter(table.columns[3].cells))
        assert Style.parse(str(cell.spans[0].style)).link == "https://example.com"
