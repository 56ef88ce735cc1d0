"""Correlate compositor windows with accessibility window objects.

The compositor's window number and the accessibility tree live in different
identity spaces, so the only available correlation is the window title. Two
windows of one app sharing a title are ambiguous; the first match wins.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from os_controller.base_backend import WindowSystemBackend
from world_model.window_state import WindowDescriptor

logger = logging.getLogger("windeck.ax_tree")


class WindowMatcher(Protocol):
    def find(self, backend: WindowSystemBackend, descriptor: WindowDescriptor) -> Any | None:
        ...


class TitleMatcher:
    """Exact title match over the owning process's window objects."""

    def find(self, backend: WindowSystemBackend, descriptor: WindowDescriptor) -> Any | None:
        """Return the first window object titled like ``descriptor``.

        Raises:
            AccessibilityError: the owning process cannot be introspected.
        """
        for element in backend.ax_windows(descriptor.owner_pid):
            if backend.ax_title(element) == descriptor.title:
                return element
        logger.debug(
            "No accessibility window titled %r in pid %s", descriptor.title, descriptor.owner_pid
        )
        return None
