class DayflowError(Exception):
    """Base class for errors raised by the dayflow core."""


class EmptyInput(DayflowError, ValueError):
    """An activity needs some text or an attachment."""

    def __init__(self, message: str = "Please enter some text or add an attachment."):
        super().__init__(message)


class NotFound(DayflowError, KeyError):
    """No activity has the requested id."""

    def __init__(self, activity_id: int):
        self.activity_id = activity_id
        super().__init__(activity_id)

    def __str__(self) -> str:
        return f"No activity with id {self.activity_id}."


class PersistenceError(DayflowError):
    """The durable store could not be read or written."""
