"""Keyboard shortcuts while the overlay is up."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.orchestrator import SessionOrchestrator

logger = logging.getLogger("windeck.keys")

# Virtual key codes (ANSI layout)
KEY_ESCAPE = 53
KEY_W = 13
KEY_Q = 12

COMMAND = "command"


class KeyCommandRouter:
    """Maps key-down events to session intents.

    ``handle`` returns ``True`` when the event was consumed. Command+W and
    Command+Q are always consumed, even with nothing hovered, so they never
    reach the host and close or quit the overlay's own process. Extra
    modifiers such as caps lock do not prevent a match.
    """

    def __init__(self, orchestrator: SessionOrchestrator) -> None:
        self.orchestrator = orchestrator

    def handle(self, key_code: int, modifiers: Collection[str] = ()) -> bool:
        if key_code == KEY_ESCAPE:
            self.orchestrator.close()
            return True
        if COMMAND not in modifiers:
            return False
        if key_code == KEY_W:
            if not self.orchestrator.close_hovered():
                logger.debug("Command-W with nothing hovered")
            return True
        if key_code == KEY_Q:
            if not self.orchestrator.quit_hovered():
                logger.debug("Command-Q with nothing hovered")
            return True
        return False
