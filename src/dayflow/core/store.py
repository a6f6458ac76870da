from __future__ import annotations

import json
import logging

import pendulum

from typing import Callable, Iterator, List, Optional

from dayflow.core.exceptions import EmptyInput, NotFound, PersistenceError
from dayflow.core.storage import BlobStore
from dayflow.models import Activity, Attachment

logger = logging.getLogger(__name__)

ACTIVITIES_KEY = "dayflow_activities"


class ActivityStore:
    """
    The authoritative list of activities for this device.

    The list is kept newest-created first. Every mutation is written to the blob
    store before the method returns; if that write fails the mutation is rolled
    back and PersistenceError is raised, so memory and disk never disagree.
    """

    def __init__(self, blobs: BlobStore,
                 activities: Optional[List[Activity]] = None,
                 clock: Callable[[], pendulum.DateTime] = pendulum.now):
        self.blobs = blobs
        self.clock = clock
        self._activities: List[Activity] = list(activities or [])

    @classmethod
    def load(cls, blobs: BlobStore,
             clock: Callable[[], pendulum.DateTime] = pendulum.now) -> ActivityStore:
        """
        Build a store from whatever the blob store currently holds.

        Raises:
            PersistenceError: If the stored collection can't be read or decoded.
        """
        raw = blobs.get(ACTIVITIES_KEY)
        if raw is None:
            return cls(blobs, [], clock)
        try:
            activities = cls.decode(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.error("Stored activities under %s are unreadable: %s", ACTIVITIES_KEY, e)
            raise PersistenceError(f"Stored activities are corrupt: {e}") from e
        logger.debug("Loaded %d activities", len(activities))
        return cls(blobs, activities, clock)

    @staticmethod
    def decode(raw: str) -> List[Activity]:
        data = json.loads(raw)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError("Expected a JSON array of activities.")
        activities = [Activity.from_dict(item) for item in data]

        seen = set()
        for activity in activities:
            if activity.id in seen:
                raise ValueError(f"Duplicate activity id {activity.id}.")
            if not activity.text.strip() and activity.attachment is None:
                raise ValueError(f"Activity {activity.id} has neither text nor an attachment.")
            seen.add(activity.id)
        return activities

    def to_json(self) -> str:
        return json.dumps([a.to_dict() for a in self._activities])

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[Activity]:
        return iter(list(self._activities))

    def all(self) -> List[Activity]:
        return list(self._activities)

    def get(self, activity_id: int) -> Activity:
        return self._activities[self._index_of(activity_id)]

    def create(self, text: str, attachment: Optional[Attachment] = None) -> Activity:
        """
        Record a new activity, timestamped now, at the front of the list.

        Raises:
            EmptyInput: If the trimmed text is empty and there is no attachment.
            PersistenceError: If the new collection couldn't be saved.
        """
        text = (text or "").strip()
        if not text and attachment is None:
            raise EmptyInput()

        now = self.clock()
        # Stored timestamps carry milliseconds; truncate so a reload compares equal.
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)

        activity = Activity(
            id=self._next_id(now),
            text=text,
            timestamp=now,
            attachment=attachment,
            is_favorite=False,
        )
        self._commit([activity] + self._activities)
        logger.debug("Created activity %d", activity.id)
        return activity

    def toggle_favorite(self, activity_id: int) -> Activity:
        """
        Flip the favorite flag of an activity.

        Raises:
            NotFound: If no activity has that id.
            PersistenceError: If the change couldn't be saved.
        """
        index = self._index_of(activity_id)
        updated = self._activities[index].toggle_favorite()
        activities = list(self._activities)
        activities[index] = updated
        self._commit(activities)
        logger.debug("Activity %d favorite=%s", activity_id, updated.is_favorite)
        return updated

    def delete(self, activity_id: int) -> None:
        """
        Remove an activity for good. Callers are expected to have asked the user first.

        Raises:
            NotFound: If no activity has that id.
            PersistenceError: If the change couldn't be saved.
        """
        self._index_of(activity_id)
        self._commit([a for a in self._activities if a.id != activity_id])
        logger.debug("Deleted activity %d", activity_id)

    def clear_all(self) -> None:
        """
        Remove every activity, favorites included. Callers are expected to have asked
        the user first.
        """
        self._commit([])
        logger.debug("Cleared all activities")

    def visible(self, now: pendulum.DateTime) -> List[Activity]:
        """
        Activities to show at `now`: everything from local midnight yesterday
        onwards, plus every favorite. Favorites come first, then newest first.
        Ties keep their order in the store.
        """
        cutoff = now.start_of("day").subtract(days=1)
        shown = [a for a in self._activities if a.is_favorite or a.timestamp >= cutoff]
        shown = sorted(shown, key=lambda a: a.timestamp, reverse=True)
        return sorted(shown, key=lambda a: not a.is_favorite)

    def flush(self) -> None:
        """Write the current collection out again."""
        self._commit(self._activities)

    def _commit(self, activities: List[Activity]) -> None:
        previous = self._activities
        self._activities = activities
        try:
            self.blobs.set(ACTIVITIES_KEY, self.to_json())
        except (PersistenceError, OSError, TypeError, ValueError) as e:
            self._activities = previous
            logger.error("Could not save activities, change rolled back: %s", e)
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError(f"Could not save activities: {e}") from e

    def _index_of(self, activity_id: int) -> int:
        for index, activity in enumerate(self._activities):
            if activity.id == activity_id:
                return index
        raise NotFound(activity_id)

    def _next_id(self, now: pendulum.DateTime) -> int:
        candidate = now.int_timestamp * 1000 + now.microsecond // 1000
        highest = max((a.id for a in self._activities), default=0)
        return candidate if candidate > highest else highest + 1
