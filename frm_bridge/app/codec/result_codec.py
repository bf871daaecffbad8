"""
Dual-encoding result codec.

Every tool response carries the same outcome twice:

- structuredContent: the outcome value itself, tagged by "status"
- a text content entry: the JSON serialization of that value

The transport does not guarantee that the structured value survives
every environment, so decoding falls back to the text entry.

Decode order:
    1. structured value validated against the expected outcome shape
    2. first text content entry, JSON-parsed, then validated
    3. no text entry, or an empty one       -> ProtocolDecodeError(empty_content)
    4. text not JSON / wrong shape           -> ProtocolDecodeError(unparseable_content)

All functions here are pure. Decoding the same envelope twice yields
equal outcomes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as ShapeError

from frm_bridge.app.domains import domain_label
from frm_bridge.app.errors import ProtocolDecodeError
from frm_bridge.app.schemas.outcomes import (
    SUBMISSION_OUTCOME,
    VALIDATION_OUTCOME,
    SubmissionAccepted,
    ValidationFailed,
    ValidationOk,
)

logger = logging.getLogger(__name__)

VALIDATE_TOOL = "validate_frm"
SUBMIT_TOOL = "submit_frm_case"

Outcome = ValidationOk | ValidationFailed | SubmissionAccepted


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------
class EncodedOutcome(BaseModel):
    """The two parallel representations of one outcome."""

    structured: Dict[str, Any]
    text: str

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


def encode(outcome: Outcome) -> EncodedOutcome:
    structured = outcome.model_dump(mode="json", by_alias=True)
    return EncodedOutcome(
        structured=structured,
        text=json.dumps(structured),
    )


def to_tool_result(outcome: Outcome) -> CallToolResult:
    """
    Build the response envelope for an outcome.

    isError is advisory and true exactly when status == "error".
    """
    encoded = encode(outcome)
    return CallToolResult(
        content=[TextContent(type="text", text=encoded.text)],
        structuredContent=encoded.structured,
        isError=isinstance(outcome, ValidationFailed),
    )


# ----------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------
def first_text_content(envelope: CallToolResult) -> Optional[str]:
    """Text of the first text-typed content entry, or None."""
    for entry in envelope.content or []:
        if getattr(entry, "type", None) == "text" and isinstance(
            getattr(entry, "text", None), str
        ):
            return entry.text
    return None


def _decode(envelope: CallToolResult, adapter: TypeAdapter, tool: str) -> Any:
    structured = envelope.structuredContent
    if structured is not None:
        try:
            return adapter.validate_python(structured)
        except ShapeError:
            logger.debug("%s: structured content rejected, trying text", tool)

    fallback_text = first_text_content(envelope)
    if not fallback_text:
        raise ProtocolDecodeError(tool, ProtocolDecodeError.EMPTY_CONTENT)

    try:
        return adapter.validate_python(json.loads(fallback_text))
    except (json.JSONDecodeError, ShapeError) as exc:
        raise ProtocolDecodeError(
            tool, ProtocolDecodeError.UNPARSEABLE_CONTENT
        ) from exc


def decode_validation(envelope: CallToolResult) -> ValidationOk | ValidationFailed:
    return _decode(envelope, VALIDATION_OUTCOME, VALIDATE_TOOL)


def decode_submission(
    envelope: CallToolResult,
) -> SubmissionAccepted | ValidationFailed:
    return _decode(envelope, SUBMISSION_OUTCOME, SUBMIT_TOOL)


# ----------------------------------------------------------------------
# Human-readable rendering
# ----------------------------------------------------------------------
def render_failure(outcome: ValidationFailed, limit: int = 8) -> str:
    """
    Summary headline followed by numbered '<instancePath> <message>' lines.

    At most `limit` issues are listed.
    """
    lines: List[str] = [outcome.summary]
    for index, issue in enumerate(outcome.errors[:limit], start=1):
        lines.append(f"{index}. {issue.instance_path or '/'} {issue.message}")
    hidden = len(outcome.errors) - limit
    if hidden > 0:
        lines.append(f"... {hidden} more")
    return "\n".join(lines)


def render_acceptance(outcome: SubmissionAccepted) -> str:
    return (
        f"Accepted case {outcome.problem_id} "
        f"({domain_label(outcome.domain)}, {outcome.version})"
    )
