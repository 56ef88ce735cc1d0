"""Window enumeration: compositor records in, typed descriptors out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from core.settings import EnumeratorSettings
from os_controller import base_backend as keys
from os_controller.base_backend import WindowSystemBackend
from world_model.window_state import Frame, WindowDescriptor


class WindowEnumerator:
    """Produces the filtered, ordered window list for one refresh."""

    def __init__(self, backend: WindowSystemBackend, settings: EnumeratorSettings | None = None) -> None:
        self.backend = backend
        self.settings = settings or EnumeratorSettings()
        self.logger = logging.getLogger("windeck.enumerator")
        self._own_name = self.settings.own_app_name

    @property
    def own_app_name(self) -> str:
        if self._own_name is None:
            self._own_name = self.backend.own_process_name()
        return self._own_name

    def enumerate(self) -> list[WindowDescriptor]:
        """Return descriptors in the compositor's front-to-back order."""
        try:
            records = self.backend.list_window_records()
            own_name = self.own_app_name
        except Exception as e:
            self.logger.warning("Window list query failed: %s", e)
            return []
        if not records:
            return []

        descriptors: list[WindowDescriptor] = []
        seen: set[int] = set()
        for record in records:
            descriptor = self._decode(record, own_name)
            if descriptor is None:
                continue
            if descriptor.id in seen:
                self.logger.debug("Skipping duplicate window id %s", descriptor.id)
                continue
            seen.add(descriptor.id)
            descriptors.append(self._with_icon(descriptor))
        self.logger.debug("Enumerated %d of %d window records", len(descriptors), len(records))
        return descriptors

    def _decode(self, record: Mapping[str, Any], own_name: str) -> WindowDescriptor | None:
        """Decode one raw record, or ``None`` if it is rejected."""
        try:
            window_id = int(record[keys.WINDOW_NUMBER])
            layer = int(record[keys.WINDOW_LAYER])
            bounds = record[keys.WINDOW_BOUNDS]
            pid = int(record[keys.WINDOW_OWNER_PID])
            width = float(bounds.get("Width", 0))
            height = float(bounds.get("Height", 0))
            x = float(bounds.get("X", 0))
            y = float(bounds.get("Y", 0))
        except (KeyError, TypeError, ValueError, AttributeError):
            self.logger.debug("Skipping malformed window record: %r", record)
            return None

        if layer != self.settings.normal_layer:
            return None
        minimum = self.settings.min_window_size
        if width <= minimum or height <= minimum:
            return None
        owner = str(record.get(keys.WINDOW_OWNER_NAME) or "Unknown")
        if owner == own_name:
            return None

        return WindowDescriptor(
            id=window_id,
            title=str(record.get(keys.WINDOW_NAME) or ""),
            owner_app_name=owner,
            owner_pid=pid,
            frame=Frame(x=x, y=y, width=width, height=height),
        )

    def _with_icon(self, descriptor: WindowDescriptor) -> WindowDescriptor:
        try:
            icon = self.backend.app_icon(descriptor.owner_pid, self.settings.icon_size)
        except Exception as e:
            self.logger.debug("No icon for pid %s: %s", descriptor.owner_pid, e)
            return descriptor
        if icon is None:
            return descriptor
        return replace(descriptor, app_icon=icon)
