"""Window snapshot schema."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Frame:
    """Window bounds in screen coordinates at enumeration time."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class WindowDescriptor:
    """One on-screen window as seen by a single enumeration pass.

    ``thumbnail`` and ``app_icon`` are PIL images when present. Either may be
    ``None``; the presentation layer falls back to the icon, then to the label.
    """

    id: int
    title: str
    owner_app_name: str
    owner_pid: int
    frame: Frame
    thumbnail: Any | None = None
    app_icon: Any | None = None

    @property
    def display_label(self) -> str:
        return self.title or self.owner_app_name

    def with_thumbnail(self, thumbnail: Any | None) -> WindowDescriptor:
        """Return a copy carrying ``thumbnail``."""
        return replace(self, thumbnail=thumbnail)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view without pixel data."""
        return {
            "id": self.id,
            "title": self.title,
            "owner_app_name": self.owner_app_name,
            "owner_pid": self.owner_pid,
            "frame": [self.frame.x, self.frame.y, self.frame.width, self.frame.height],
            "thumbnail": list(self.thumbnail.size) if self.thumbnail is not None else None,
            "has_icon": self.app_icon is not None,
        }
