import os
import base64
import mimetypes
import subprocess
import dateparser
from datetime import datetime, date, time

from pathlib import Path

def edit_file(path: Path) -> bool:
    """
    Open a file in the user's preferred editor and check if it was modified.
    If the file was modified, return True. Otherwise, return False.
    """
    editor = os.getenv("EDITOR", "vim") # Default to vim if $EDITOR is not set

    pre_edit = path.read_text()

    subprocess.run([editor, str(path)], check=True)

    post_edit = path.read_text()

    # vim adds a trailing newline on save, so only a semantic change counts.
    return pre_edit.strip() != post_edit.strip()

def resolve_natural_date(today: date, arg: str | None) -> date:
    """
    Parse a natural-language date string and return a datetime.date.
    Examples: "today", "yesterday", "last monday", "2025-08-03".
    """
    if arg is None or arg.strip().lower() == "today":
        return today

    dt = dateparser.parse(
        arg,
        settings={
            "PREFER_DATES_FROM": "past",
            "RELATIVE_BASE": datetime.combine(today, time.min),
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
    )
    if dt is None:
        raise ValueError(f"Invalid date string: {arg}")

    return dt.date()

def image_to_data_uri(path: Path) -> str:
    """
    Read an image file and embed it as a self-contained `data:` URI.
    """
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type is None or not mime_type.startswith("image/"):
        raise ValueError(f"{path} does not look like an image.")

    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
