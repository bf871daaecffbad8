from __future__ import annotations

import logging
from typing import List

from frm_bridge.app.events.emitter import ToolCallEmitter
from frm_bridge.app.events.models import ToolCallEvent

logger = logging.getLogger(__name__)


def format_duration(milliseconds: float) -> str:
    """'1.23s' below a minute, 'm:ss.cc' above."""
    total_seconds = int(milliseconds // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    centiseconds = int((milliseconds % 1000) // 10)

    if minutes > 0:
        return f"{minutes}:{seconds:02d}.{centiseconds:02d}"
    return f"{seconds}.{centiseconds:02d}s"


def format_event(event: ToolCallEvent) -> str:
    status_text = f" | Status: {event.status}" if event.status else ""
    error_text = f" | Error: {event.error_message}" if event.error_message else ""
    return (
        f"[{event.timestamp.isoformat()}] {event.source.value.upper()} {event.tool}"
        f" | Duration: {format_duration(event.duration_ms)}"
        f" | Success: {event.success}{status_text}{error_text}"
    )


class MemoryCallLog(ToolCallEmitter):
    """
    In-memory call log.

    Properties:
    - keeps every event in emission order
    - hands out copies, never the internal list
    - mirrors each entry to the module logger
    """

    def __init__(self) -> None:
        self._entries: List[ToolCallEvent] = []

    async def emit(self, event: ToolCallEvent) -> None:
        self._entries.append(event)
        logger.info("%s", format_event(event))

    @property
    def entries(self) -> List[ToolCallEvent]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries = []
