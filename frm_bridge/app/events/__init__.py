from .models import CallSource, ToolCallEvent
from .emitter import ToolCallEmitter, NullCallEmitter
from .memory_log import MemoryCallLog, format_duration, format_event

__all__ = [
    "CallSource",
    "ToolCallEvent",
    "ToolCallEmitter",
    "NullCallEmitter",
    "MemoryCallLog",
    "format_duration",
    "format_event",
]
