import tomllib
import pendulum

from pathlib import Path

from dayflow.core.config import THEMES, Config
from dayflow.core.file_system import FileSystem
from dayflow.core.reminders import ReminderSchedule
from dayflow.core.storage import BlobStore, FileBlobStore
from dayflow.core.store import ActivityStore

THEME_KEY = "dayflow_theme"


class Workspace:

    def __init__(self, root: Path | None = None, blobs: BlobStore | None = None):
        self.fs = FileSystem(root)
        if not self.fs.is_initialised():
            raise FileNotFoundError(
                f"No dayflow data directory at {self.fs.ROOT}. Run `dayflow init` first.")

        self.config = Config.from_dict(tomllib.loads(self.fs.CONFIG_PATH.read_text()))
        self.blobs = blobs or FileBlobStore(self.fs.STORAGE_PATH)
        self.activities = ActivityStore.load(self.blobs, clock=self.now)
        self.reminders = ReminderSchedule.from_config(self.config)

    def now(self) -> pendulum.DateTime:
        """
        Get the current time in the configured timezone
        """
        return pendulum.now(self.config.timezone)

    def today(self) -> pendulum.Date:
        """
        Get today's date in the configured timezone.
        """
        return self.now().date()

    def get_theme(self) -> str:
        """
        The stored theme, falling back to the configured default.
        """
        theme = self.blobs.get(THEME_KEY)
        if theme in THEMES:
            return theme
        return self.config.theme

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Invalid theme: {theme}. Expected one of {', '.join(THEMES)}.")
        self.blobs.set(THEME_KEY, theme)
        return theme

    def toggle_theme(self) -> str:
        return self.set_theme("dark" if self.get_theme() == "light" else "light")
