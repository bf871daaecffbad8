from __future__ import annotations

from typing import Protocol

from frm_bridge.app.events.models import ToolCallEvent


class ToolCallEmitter(Protocol):
    """
    Receives one ToolCallEvent per finished bridge call.

    FrmToolBridge awaits emit() after the tool result is decoded, or
    after the call raised. The outcome is already fixed at that point,
    so an emitter can record timings but cannot alter results.
    """

    async def emit(self, event: ToolCallEvent) -> None:
        ...


class NullCallEmitter:
    """Default emitter of FrmToolBridge; drops every event."""

    async def emit(self, event: ToolCallEvent) -> None:
        return
