from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
# Call sources (finite)
# ----------------------------------------------------------------------
class CallSource(str, Enum):
    """
    Who issued a tool call.

    Sources are observational labels only. They never change how a
    document is validated.
    """

    CLIENT = "client"
    CLI = "cli"


# ----------------------------------------------------------------------
# Call event
# ----------------------------------------------------------------------
class ToolCallEvent(BaseModel):
    """
    An immutable record of one completed client-side tool call.

    Events are:
    - strictly observational
    - emitted after the call resolves or fails
    - never persisted by the bridge itself
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    tool: str = Field(..., description="Invoked tool name")
    source: CallSource = CallSource.CLIENT

    duration_ms: float = Field(
        ...,
        ge=0,
        description="Wall-clock duration of the round trip in milliseconds",
    )

    success: bool = Field(
        ...,
        description="True when the call produced an ok or accepted outcome",
    )

    status: Optional[str] = Field(
        None,
        description="Outcome status (ok, error, accepted); None when the call raised",
    )

    error_message: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
