from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Type


@dataclass(frozen=True)
class Attachment:
    """Media or link payload bound to an activity when it is created."""
    data: str

    kind: ClassVar[str] = ""

    @classmethod
    def from_dict(cls, data: dict) -> Attachment:
        if not isinstance(data, dict):
            raise ValueError(f"Expected an attachment object, got {type(data).__name__}.")
        kind = data.get("type")
        variant = _VARIANTS.get(kind)
        if variant is None:
            raise ValueError(f"Unknown attachment type: {kind!r}")
        payload = data.get("data")
        if not isinstance(payload, str):
            raise ValueError(f"Attachment data must be a string, got {type(payload).__name__}.")
        return variant(payload)

    def to_dict(self) -> dict:
        return {"type": self.kind, "data": self.data}


@dataclass(frozen=True)
class ImageAttachment(Attachment):
    """An embedded image, as a self-contained `data:` URI."""
    kind: ClassVar[str] = "image"


@dataclass(frozen=True)
class LinkAttachment(Attachment):
    """A URL."""
    kind: ClassVar[str] = "link"


_VARIANTS: Dict[str, Type[Attachment]] = {
    ImageAttachment.kind: ImageAttachment,
    LinkAttachment.kind: LinkAttachment,
}
