"""macOS window-system backend built on pyobjc.

Compositor queries go through Quartz (``CGWindowListCopyWindowInfo`` and
``CGWindowListCreateImage``), process control through AppKit's
``NSRunningApplication`` and window control through the accessibility API in
ApplicationServices. Every call here may fail at runtime because the target
process exited or the user has not granted Screen Recording / Accessibility
permission; failures are reported as ``None``/``False`` and logged, except for
``ax_windows`` which raises so the caller can tell "no windows" from "no
access".
"""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import Any

from PIL import Image

from os_controller.base_backend import AccessibilityError, BackendUnavailableError, WindowSystemBackend

# Lazy-load pyobjc so the package imports on non-macOS hosts
try:
    import AppKit
    import ApplicationServices as AX
    import Quartz
except ImportError:
    AppKit = None
    AX = None
    Quartz = None

logger = logging.getLogger("windeck.macos")

_AX_SUCCESS = 0


def is_available() -> bool:
    """Check if the pyobjc frameworks are importable."""
    return Quartz is not None and AX is not None and AppKit is not None


def cg_image_to_pil(cg_image: Any) -> Image.Image | None:
    """Copy a CGImage's backing store into a PIL image.

    Window server images are 32-bit premultiplied-first little-endian, which
    is premultiplied BGRA in memory; Pillow's "BGRa" rawmode un-premultiplies.
    """
    width = Quartz.CGImageGetWidth(cg_image)
    height = Quartz.CGImageGetHeight(cg_image)
    if width == 0 or height == 0:
        return None
    bytes_per_row = Quartz.CGImageGetBytesPerRow(cg_image)
    data = Quartz.CGDataProviderCopyData(Quartz.CGImageGetDataProvider(cg_image))
    if not data:
        return None
    return Image.frombuffer("RGBA", (width, height), bytes(data), "raw", "BGRa", bytes_per_row, 1)


class MacOSBackend(WindowSystemBackend):
    """Quartz + AppKit + accessibility implementation."""

    def __init__(self) -> None:
        if not is_available():
            raise BackendUnavailableError(
                "pyobjc Quartz/AppKit/ApplicationServices frameworks are not installed."
            )

    # ------------------------------------------------------------------
    # Compositor
    # ------------------------------------------------------------------

    def list_window_records(self) -> list[Mapping[str, Any]] | None:
        options = Quartz.kCGWindowListOptionOnScreenOnly | Quartz.kCGWindowListExcludeDesktopElements
        raw = Quartz.CGWindowListCopyWindowInfo(options, Quartz.kCGNullWindowID)
        if raw is None:
            logger.warning("Window list query returned nothing")
            return None
        return [dict(record) for record in raw]

    def create_window_image(self, window_id: int) -> Image.Image | None:
        cg_image = Quartz.CGWindowListCreateImage(
            Quartz.CGRectNull,
            Quartz.kCGWindowListOptionIncludingWindow,
            window_id,
            Quartz.kCGWindowImageBoundsIgnoreFraming | Quartz.kCGWindowImageBestResolution,
        )
        if cg_image is None:
            return None
        return cg_image_to_pil(cg_image)

    # ------------------------------------------------------------------
    # Process registry
    # ------------------------------------------------------------------

    def own_process_name(self) -> str:
        return str(AppKit.NSRunningApplication.currentApplication().localizedName() or "")

    def _running_app(self, pid: int) -> Any | None:
        return AppKit.NSRunningApplication.runningApplicationWithProcessIdentifier_(pid)

    def app_icon(self, pid: int, size: int) -> Image.Image | None:
        app = self._running_app(pid)
        if app is None or app.icon() is None:
            return None
        tiff = app.icon().TIFFRepresentation()
        if tiff is None:
            return None
        icon = Image.open(io.BytesIO(bytes(tiff)))
        icon.load()
        icon.thumbnail((size, size))
        return icon

    def activate_app(self, pid: int) -> bool:
        app = self._running_app(pid)
        if app is None:
            return False
        return bool(app.activateWithOptions_(AppKit.NSApplicationActivateIgnoringOtherApps))

    def terminate_app(self, pid: int) -> bool:
        app = self._running_app(pid)
        if app is None:
            return False
        return bool(app.terminate())

    # ------------------------------------------------------------------
    # Accessibility
    # ------------------------------------------------------------------

    def ax_windows(self, pid: int) -> list[Any]:
        app_ref = AX.AXUIElementCreateApplication(pid)
        err, windows = AX.AXUIElementCopyAttributeValue(app_ref, AX.kAXWindowsAttribute, None)
        if err != _AX_SUCCESS:
            raise AccessibilityError(pid, err)
        return list(windows or [])

    def ax_title(self, element: Any) -> str:
        err, title = AX.AXUIElementCopyAttributeValue(element, AX.kAXTitleAttribute, None)
        if err != _AX_SUCCESS or title is None:
            return ""
        return str(title)

    def ax_set_main(self, element: Any) -> bool:
        err = AX.AXUIElementSetAttributeValue(element, AX.kAXMainAttribute, True)
        return err == _AX_SUCCESS

    def ax_raise(self, element: Any) -> bool:
        return AX.AXUIElementPerformAction(element, AX.kAXRaiseAction) == _AX_SUCCESS

    def ax_press_close(self, element: Any) -> bool:
        err, button = AX.AXUIElementCopyAttributeValue(element, AX.kAXCloseButtonAttribute, None)
        if err != _AX_SUCCESS or button is None:
            return False
        return AX.AXUIElementPerformAction(button, AX.kAXPressAction) == _AX_SUCCESS
