"""Per-invocation session state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from world_model.window_state import WindowDescriptor


class SessionPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


@dataclass
class SessionState:
    """Mutable state for one overlay invocation.

    Only the orchestrator mutates this, and only on the interactive thread.
    """

    descriptors: list[WindowDescriptor] = field(default_factory=list)
    phase: SessionPhase = SessionPhase.LOADING
    hovered_id: int | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is SessionPhase.LOADING


class SessionStateManager:
    """Wraps session state and provides the allowed mutations."""

    def __init__(self) -> None:
        self.state = SessionState()

    @property
    def descriptors(self) -> list[WindowDescriptor]:
        return self.state.descriptors

    def begin_loading(self) -> None:
        self.state.phase = SessionPhase.LOADING

    def publish(self, descriptors: list[WindowDescriptor]) -> None:
        """Swap in a complete collection and become ready."""
        self.state.descriptors = list(descriptors)
        self.state.phase = SessionPhase.READY
        if self.find(self.state.hovered_id) is None:
            self.state.hovered_id = None

    def end(self) -> None:
        self.state.phase = SessionPhase.IDLE
        self.state.descriptors = []
        self.state.hovered_id = None

    def set_hovered(self, window_id: int | None) -> None:
        self.state.hovered_id = window_id

    def find(self, window_id: int | None) -> WindowDescriptor | None:
        if window_id is None:
            return None
        return next((d for d in self.state.descriptors if d.id == window_id), None)

    def hovered(self) -> WindowDescriptor | None:
        return self.find(self.state.hovered_id)

    def remove_window(self, window_id: int) -> int:
        """Drop the descriptor with ``window_id``; returns how many were removed."""
        return self._remove_where(lambda d: d.id == window_id)

    def remove_app(self, pid: int) -> int:
        """Drop every descriptor owned by ``pid``."""
        return self._remove_where(lambda d: d.owner_pid == pid)

    def _remove_where(self, predicate: Callable[[WindowDescriptor], bool]) -> int:
        before = len(self.state.descriptors)
        self.state.descriptors = [d for d in self.state.descriptors if not predicate(d)]
        if self.find(self.state.hovered_id) is None:
            self.state.hovered_id = None
        return before - len(self.state.descriptors)
