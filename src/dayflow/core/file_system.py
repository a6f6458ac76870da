import os

import tomlkit

from pathlib import Path


class FileSystem:
    """Layout of the dayflow data directory."""

    ENV_VAR = "DAYFLOW_DIR"
    DEFAULT_ROOT = Path.home() / ".dayflow"

    VALID_DIRECTORY_STRUCTURE = {
        'config.toml': None,
        'storage': {},
    }

    def __init__(self, root: Path | None = None):
        if root is None:
            env_root = os.getenv(self.ENV_VAR)
            root = Path(env_root) if env_root else self.DEFAULT_ROOT
        self.ROOT = Path(root).expanduser()
        self.CONFIG_PATH = self.ROOT / "config.toml"
        self.STORAGE_PATH = self.ROOT / "storage"

    def is_initialised(self) -> bool:
        return self.CONFIG_PATH.exists()

    def initialise(self) -> None:
        """
        Create the data directory with a default config.

        Raises:
            FileExistsError: If the directory has already been initialised.
        """
        if self.is_initialised():
            raise FileExistsError(f"{self.ROOT} is already initialised.")

        self._create_directory_structure(self.VALID_DIRECTORY_STRUCTURE, self.ROOT)
        self.CONFIG_PATH.write_text(self.default_config())

    @classmethod
    def default_config(cls) -> str:
        doc = tomlkit.document()
        doc.add(tomlkit.comment("dayflow configuration."))
        doc.add(tomlkit.comment("timezone = \"Europe/London\"  # defaults to the local timezone"))
        doc.add(tomlkit.nl())

        display = tomlkit.table()
        theme = tomlkit.item("light")
        theme.comment("light or dark, used until a theme is chosen")
        display.add("theme", theme)
        doc.add("display", display)

        reminders = tomlkit.table()
        reminders.add("enabled", True)
        times = tomlkit.item(["20:00"])
        times.comment("HH:MM, local time")
        reminders.add("times", times)
        doc.add("reminders", reminders)

        return doc.as_string()

    def _create_directory_structure(self, directory_structure: dict, base_path: Path) -> None:
        """
        Recursively create directory structure from a dictionary object.
        """
        base_path.mkdir(parents=True, exist_ok=True)
        for name, value in directory_structure.items():
            path = base_path / name
            if isinstance(value, dict):
                path.mkdir(exist_ok=True)
                self._create_directory_structure(value, path)
