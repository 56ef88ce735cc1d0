"""Cross-process window actions: focus, close and quit."""

from __future__ import annotations

import logging
from typing import Any

from os_controller.ax_tree import TitleMatcher, WindowMatcher
from os_controller.base_backend import AccessibilityError, WindowSystemBackend
from world_model.window_state import WindowDescriptor


class WindowActionController:
    """Performs actions on windows owned by other processes.

    Every method degrades to a no-op when the target process has exited or
    denies accessibility access. Session bookkeeping (removing entries) is the
    caller's job and happens regardless of the return value.
    """

    def __init__(self, backend: WindowSystemBackend, matcher: WindowMatcher | None = None) -> None:
        self.backend = backend
        self.matcher = matcher or TitleMatcher()
        self.logger = logging.getLogger("windeck.actions")

    def _find(self, descriptor: WindowDescriptor) -> Any | None:
        try:
            return self.matcher.find(self.backend, descriptor)
        except AccessibilityError as e:
            self.logger.debug("%s", e)
        except Exception as e:
            self.logger.warning("Window lookup for %s failed: %s", descriptor.id, e)
        return None

    def focus(self, descriptor: WindowDescriptor) -> bool:
        """Activate the owning app and make the matching window its main window."""
        try:
            self.backend.activate_app(descriptor.owner_pid)
        except Exception as e:
            self.logger.warning("Failed to activate pid %s: %s", descriptor.owner_pid, e)
        element = self._find(descriptor)
        if element is None:
            return False
        try:
            made_main = self.backend.ax_set_main(element)
            self.backend.ax_raise(element)
        except Exception as e:
            self.logger.warning("Failed to focus window %s: %s", descriptor.id, e)
            return False
        return made_main

    def close(self, descriptor: WindowDescriptor) -> bool:
        """Press the matching window's close button."""
        element = self._find(descriptor)
        if element is None:
            return False
        try:
            return self.backend.ax_press_close(element)
        except Exception as e:
            self.logger.warning("Failed to close window %s: %s", descriptor.id, e)
            return False

    def quit(self, descriptor: WindowDescriptor) -> bool:
        """Terminate the whole owning process."""
        try:
            return self.backend.terminate_app(descriptor.owner_pid)
        except Exception as e:
            self.logger.warning("Failed to terminate pid %s: %s", descriptor.owner_pid, e)
            return False
