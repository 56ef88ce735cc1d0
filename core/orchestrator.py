"""Session lifecycle, asynchronous refresh and user intents."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from core.event_bus import SESSION_CHANGED, SESSION_CLOSED, SESSION_OPENED, SESSION_READY, EventBus
from core.key_commands import KeyCommandRouter
from core.policy_runtime import load_settings
from core.settings import SwitcherSettings
from core.state_manager import SessionPhase, SessionStateManager
from layout.justified_layout import JustifiedLayout, LayoutItem, LayoutResult, aspect_ratio_for
from os_controller.base_backend import WindowSystemBackend
from os_controller.screen_capture import ThumbnailCapturer
from os_controller.window_actions import WindowActionController
from os_controller.window_enumerator import WindowEnumerator
from world_model.window_state import WindowDescriptor

logger = logging.getLogger("windeck.session")


class SessionOrchestrator:
    """Owns at most one session and drives it through idle/loading/ready.

    All public methods are meant to be called from the interactive thread
    (the thread running the event loop). Enumeration and capture run on the
    worker pool and hand their results back before any state is touched.
    """

    def __init__(
        self,
        enumerator: WindowEnumerator,
        capturer: ThumbnailCapturer,
        actions: WindowActionController,
        layout_engine: JustifiedLayout | None = None,
        event_bus: EventBus | None = None,
        executor: Executor | None = None,
        max_workers: int = 8,
    ) -> None:
        self.enumerator = enumerator
        self.capturer = capturer
        self.actions = actions
        self.layout_engine = layout_engine or JustifiedLayout()
        self.event_bus = event_bus or EventBus()
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="windeck-capture"
        )
        self._session: SessionStateManager | None = None
        self._refresh_task: asyncio.Task[bool] | None = None
        self._generation = 0

    @property
    def session(self) -> SessionStateManager | None:
        return self._session

    @property
    def phase(self) -> SessionPhase:
        if self._session is None:
            return SessionPhase.IDLE
        return self._session.state.phase

    @property
    def refresh_task(self) -> asyncio.Task[bool] | None:
        return self._refresh_task

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> SessionStateManager:
        """Start a session; schedules a refresh when an event loop is running."""
        if self._session is not None:
            return self._session
        session = SessionStateManager()
        self._session = session
        logger.debug("Session opened")
        self.event_bus.emit(SESSION_OPENED, {"state": session.state})
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._refresh_task = loop.create_task(self.refresh())
        return session

    def close(self) -> None:
        """End the session. An in-flight refresh finishes but is never published."""
        session = self._session
        if session is None:
            return
        self._session = None
        if self._refresh_task is not None:
            self._refresh_task.add_done_callback(_log_detached_failure)
        self._refresh_task = None
        session.end()
        logger.debug("Session closed")
        self.event_bus.emit(SESSION_CLOSED, {})

    def toggle(self) -> None:
        if self._session is None:
            self.open()
        else:
            self.close()

    def shutdown(self) -> None:
        self.close()
        self._executor.shutdown(wait=False)

    async def refresh(self) -> bool:
        """Enumerate and capture off-thread, then publish the whole batch at once.

        Returns ``False`` when the result was dropped because the session closed
        or a newer refresh started meanwhile.
        """
        session = self._session
        if session is None:
            return False
        self._generation += 1
        generation = self._generation
        session.begin_loading()

        try:
            descriptors = await self._snapshot()
        except Exception as e:
            logger.warning("Refresh failed, publishing an empty collection: %s", e)
            descriptors = []

        if self._session is not session or generation != self._generation:
            logger.debug("Dropping stale refresh result (%d windows)", len(descriptors))
            return False
        session.publish(descriptors)
        logger.info("Session ready with %d windows", len(descriptors))
        self.event_bus.emit(SESSION_READY, {"state": session.state})
        return True

    async def _snapshot(self) -> list[WindowDescriptor]:
        loop = asyncio.get_running_loop()
        descriptors = await loop.run_in_executor(self._executor, self.enumerator.enumerate)
        thumbnails = await asyncio.gather(
            *(loop.run_in_executor(self._executor, self.capturer.capture, d) for d in descriptors)
        )
        # gather preserves argument order, so thumbnails line up with descriptors
        return [d.with_thumbnail(t) for d, t in zip(descriptors, thumbnails)]

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    def hover(self, window_id: int | None) -> None:
        if self._session is None:
            return
        if self._session.state.hovered_id == window_id:
            return
        self._session.set_hovered(window_id)
        self._changed()

    def select(self, descriptor: WindowDescriptor) -> None:
        """Focus the window and dismiss the overlay."""
        self.actions.focus(descriptor)
        self.close()

    def close_window(self, descriptor: WindowDescriptor) -> None:
        """Close one window; its entry goes away even if the close failed."""
        if not self.actions.close(descriptor):
            logger.debug("Close of window %s had no effect", descriptor.id)
        if self._session is not None:
            self._session.remove_window(descriptor.id)
            self._changed()

    def quit_app(self, descriptor: WindowDescriptor) -> None:
        """Terminate the owning app and drop all of its windows."""
        if not self.actions.quit(descriptor):
            logger.debug("Terminate of pid %s had no effect", descriptor.owner_pid)
        if self._session is not None:
            self._session.remove_app(descriptor.owner_pid)
            self._changed()

    def close_hovered(self) -> bool:
        target = self._session.hovered() if self._session else None
        if target is None:
            return False
        self.close_window(target)
        return True

    def quit_hovered(self) -> bool:
        target = self._session.hovered() if self._session else None
        if target is None:
            return False
        self.quit_app(target)
        return True

    def layout(self, available_width: float) -> LayoutResult:
        """Justified rows for the current collection; indices are list positions."""
        descriptors = self._session.descriptors if self._session else []
        settings = self.layout_engine.settings
        items = [LayoutItem(i, aspect_ratio_for(d.frame, settings)) for i, d in enumerate(descriptors)]
        return self.layout_engine.compute(items, available_width)

    def _changed(self) -> None:
        if self._session is not None:
            self.event_bus.emit(SESSION_CHANGED, {"state": self._session.state})


def _log_detached_failure(task: asyncio.Task[bool]) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug("Detached refresh ended with %r", error)


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    settings: SwitcherSettings
    backend: WindowSystemBackend
    enumerator: WindowEnumerator
    capturer: ThumbnailCapturer
    actions: WindowActionController
    orchestrator: SessionOrchestrator
    keys: KeyCommandRouter


def build_runtime(
    backend: WindowSystemBackend | None = None,
    root: Path | None = None,
    settings: SwitcherSettings | None = None,
) -> RuntimeBundle:
    """Create and wire runtime components."""
    if settings is None:
        default_root = Path(__file__).resolve().parents[1]
        settings = load_settings((root or default_root).resolve())
    if backend is None:
        from os_controller.macos_backend import MacOSBackend

        backend = MacOSBackend()

    enumerator = WindowEnumerator(backend, settings.enumerator)
    capturer = ThumbnailCapturer(backend, settings.capture)
    actions = WindowActionController(backend)
    orchestrator = SessionOrchestrator(
        enumerator=enumerator,
        capturer=capturer,
        actions=actions,
        layout_engine=JustifiedLayout(settings.layout),
        max_workers=settings.refresh.max_workers,
    )
    return RuntimeBundle(
        settings=settings,
        backend=backend,
        enumerator=enumerator,
        capturer=capturer,
        actions=actions,
        orchestrator=orchestrator,
        keys=KeyCommandRouter(orchestrator),
    )
