from __future__ import annotations

from dayflow.models.attachment import Attachment

import pendulum

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Activity:
    """A single logged entry. Only the favorite flag ever changes."""
    id: int
    text: str
    timestamp: pendulum.DateTime
    attachment: Optional[Attachment] = None
    is_favorite: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> Activity:
        if not isinstance(data, dict):
            raise ValueError(f"Expected an activity object, got {type(data).__name__}.")

        activity_id = data["id"]
        if isinstance(activity_id, bool) or not isinstance(activity_id, int):
            raise ValueError(f"Activity id must be an integer, got {activity_id!r}.")

        text = data.get("text")
        if text is None:
            text = ""
        elif not isinstance(text, str):
            raise ValueError(f"Activity {activity_id} text must be a string, got {type(text).__name__}.")

        timestamp = pendulum.parse(data["timestamp"])
        if not isinstance(timestamp, pendulum.DateTime):
            raise ValueError(f"Timestamp {data['timestamp']!r} is not a date-time.")

        attachment = data.get("attachment")
        # Entries written before favorites existed carry no isFavorite key.
        return cls(
            id=activity_id,
            text=text,
            timestamp=timestamp,
            attachment=Attachment.from_dict(attachment) if attachment is not None else None,
            is_favorite=bool(data.get("isFavorite", False)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "timestamp": self.timestamp.in_timezone("UTC").format("YYYY-MM-DD[T]HH:mm:ss.SSS[Z]"),
            "attachment": self.attachment.to_dict() if self.attachment else None,
            "isFavorite": self.is_favorite,
        }

    def toggle_favorite(self) -> Activity:
        return replace(self, is_favorite=not self.is_favorite)
