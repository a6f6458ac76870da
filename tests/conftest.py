"""
Shared pytest fixtures for dayflow tests.
"""
import pytest
import pendulum

from dayflow.core import ActivityStore, FileSystem, MemoryBlobStore, PersistenceError


class FakeClock:
    """
    A clock that only moves when told to.
    """
    def __init__(self, start: pendulum.DateTime):
        self.current = start

    def __call__(self) -> pendulum.DateTime:
        return self.current

    def advance(self, **kwargs) -> pendulum.DateTime:
        self.current = self.current.add(**kwargs)
        return self.current

    def set(self, when: pendulum.DateTime) -> None:
        self.current = when


class FailingBlobStore(MemoryBlobStore):
    """
    A MemoryBlobStore whose writes can be made to fail.
    """
    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("disk full")
        super().set(key, value)


@pytest.fixture
def fixed_now():
    """
    A fixed local time: Wednesday 15 January 2025, 14:30 in London.
    """
    return pendulum.datetime(2025, 1, 15, 14, 30, 0, tz="Europe/London")


@pytest.fixture
def clock(fixed_now):
    return FakeClock(fixed_now)


@pytest.fixture
def blobs():
    return FailingBlobStore()


@pytest.fixture
def store(blobs, clock):
    """
    An empty ActivityStore over an in-memory blob store and a fake clock.
    """
    return ActivityStore.load(blobs, clock=clock)


@pytest.fixture
def dayflow_dir(tmp_path, monkeypatch):
    """
    An initialised dayflow data directory, pointed at by DAYFLOW_DIR.
    """
    root = tmp_path / "dayflow"
    FileSystem(root).initialise()
    monkeypatch.setenv("DAYFLOW_DIR", str(root))
    return root


@pytest.fixture
def sample_activities_json():
    """
    Two stored activities as written by the app: a plain note from yesterday
    and a pinned link from last week.
    """
    return """[
  {"id": 1736880000000, "text": "Went for a walk", "timestamp": "2025-01-14T18:40:00.000Z",
   "attachment": null, "isFavorite": false},
  {"id": 1736344800000, "text": "", "timestamp": "2025-01-08T14:00:00.000Z",
   "attachment": {"type": "link", "data": "https://example.com/recipe"}, "isFavorite": true}
]"""
