"""Base interface for the window-system collaborators used by the engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

# Keys of a raw compositor window record, as reported by the window server.
WINDOW_NUMBER = "kCGWindowNumber"
WINDOW_LAYER = "kCGWindowLayer"
WINDOW_BOUNDS = "kCGWindowBounds"
WINDOW_OWNER_PID = "kCGWindowOwnerPID"
WINDOW_OWNER_NAME = "kCGWindowOwnerName"
WINDOW_NAME = "kCGWindowName"


class AccessibilityError(RuntimeError):
    """The accessibility API refused or failed a query for a process."""

    def __init__(self, pid: int, code: int) -> None:
        super().__init__(f"Accessibility query for pid {pid} failed with code {code}")
        self.pid = pid
        self.code = code


class BackendUnavailableError(RuntimeError):
    """The native frameworks for this backend cannot be loaded."""


class WindowSystemBackend(ABC):
    """Abstract compositor, accessibility and process-registry interface."""

    # -- compositor ----------------------------------------------------

    @abstractmethod
    def list_window_records(self) -> list[Mapping[str, Any]] | None:
        """Return on-screen window records, excluding desktop elements.

        ``None`` means the query itself failed.
        """

    @abstractmethod
    def create_window_image(self, window_id: int) -> Any | None:
        """Return the window's current pixels as a PIL image, or ``None``."""

    # -- process registry ------------------------------------------------

    @abstractmethod
    def own_process_name(self) -> str:
        """Localized name of the running process."""

    @abstractmethod
    def app_icon(self, pid: int, size: int) -> Any | None:
        """Return the owning application's icon as a PIL image, or ``None``."""

    @abstractmethod
    def activate_app(self, pid: int) -> bool:
        """Bring the process to the foreground, ignoring other apps' claims."""

    @abstractmethod
    def terminate_app(self, pid: int) -> bool:
        """Ask the process to terminate."""

    # -- accessibility ---------------------------------------------------

    @abstractmethod
    def ax_windows(self, pid: int) -> list[Any]:
        """Return the process's accessibility window objects.

        Raises:
            AccessibilityError: the process is gone or denies introspection.
        """

    @abstractmethod
    def ax_title(self, element: Any) -> str:
        """Title of an accessibility window object, empty when unreadable."""

    @abstractmethod
    def ax_set_main(self, element: Any) -> bool:
        """Mark the window object as its process's main window."""

    @abstractmethod
    def ax_raise(self, element: Any) -> bool:
        """Raise the window object above its siblings."""

    @abstractmethod
    def ax_press_close(self, element: Any) -> bool:
        """Press the window object's close button."""
