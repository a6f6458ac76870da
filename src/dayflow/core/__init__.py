from .exceptions import DayflowError, EmptyInput, NotFound, PersistenceError
from .storage import BlobStore, FileBlobStore, MemoryBlobStore
from .store import ActivityStore
from .config import Config
from .file_system import FileSystem
from .reminders import ReminderSchedule
from .workspace import Workspace

# Lets leave log as an explicit submodule for now
