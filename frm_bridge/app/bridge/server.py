"""
FRM tool server.

Exposes two tools over MCP:
    validate_frm      check a document against the FRM schema
    submit_frm_case   validate, then accept the document as a case and
                      surface its identifying metadata

Every response carries the outcome twice (structuredContent and a JSON
text entry) and sets isError exactly when the outcome status is
"error". Schema violations are returned as data, never raised.

The server owns no module-level state. It is built from an already
compiled SchemaValidator by build_frm_server().
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, ToolAnnotations

from frm_bridge.app.codec.result_codec import (
    SUBMIT_TOOL,
    VALIDATE_TOOL,
    to_tool_result,
)
from frm_bridge.app.config import BridgeConfig
from frm_bridge.app.schemas.outcomes import (
    SubmissionAccepted,
    ValidationFailed,
    ValidationOk,
)
from frm_bridge.app.validation.metadata import extract_metadata
from frm_bridge.app.validation.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)

UNKNOWN_PROBLEM_ID = "unknown-problem-id"
UNKNOWN_DOMAIN = "unknown-domain"
UNKNOWN_VERSION = "v0.0"

SERVER_INSTRUCTIONS = (
    "Call validate_frm with the FRM JSON payload before invoking "
    "submit_frm_case. Pass the JSON object in the `document` argument."
)


# ---------------------------------------------------------------------------
# Handler logic (transport independent)
# ---------------------------------------------------------------------------


def handle_validate(
    validator: SchemaValidator, document: Any
) -> ValidationOk | ValidationFailed:
    return validator.validate(document)


def handle_submit(
    validator: SchemaValidator, document: Any
) -> SubmissionAccepted | ValidationFailed:
    """
    Validate, then accept.

    An invalid document yields the validation failure unchanged (same
    issues, same summary). Missing metadata fields are replaced by
    sentinels rather than rejected.
    """
    outcome = handle_validate(validator, document)
    if isinstance(outcome, ValidationFailed):
        return outcome

    metadata = extract_metadata(outcome.normalized_document)
    return SubmissionAccepted(
        problem_id=metadata.problem_id or UNKNOWN_PROBLEM_ID,
        domain=metadata.domain or UNKNOWN_DOMAIN,
        version=metadata.version or UNKNOWN_VERSION,
    )


# ---------------------------------------------------------------------------
# MCP wiring
# ---------------------------------------------------------------------------


def build_frm_server(
    validator: SchemaValidator,
    config: BridgeConfig | None = None,
) -> FastMCP:
    """
    Build the server role around a compiled validator.

    The `document` argument is declared as a JSON object, so non-object
    inputs are rejected by the tool's argument model before either
    handler runs.
    """
    config = config or BridgeConfig()
    server = FastMCP(config.SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    @server.tool(
        name=VALIDATE_TOOL,
        title="Validate Formal Reasoning Mode document",
        description=(
            "Validate an FRM payload against the Formal Reasoning Mode "
            "schema and receive granular issues."
        ),
        annotations=ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
        ),
        structured_output=False,
    )
    async def validate_frm(document: Dict[str, Any]) -> CallToolResult:
        outcome = handle_validate(validator, document)
        logger.info("tool: %s status=%s", VALIDATE_TOOL, outcome.status)
        return to_tool_result(outcome)

    @server.tool(
        name=SUBMIT_TOOL,
        title="Submit Formal Reasoning Mode case",
        description="Accept a valid FRM payload and surface identifying metadata.",
        annotations=ToolAnnotations(
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
        ),
        structured_output=False,
    )
    async def submit_frm_case(document: Dict[str, Any]) -> CallToolResult:
        outcome = handle_submit(validator, document)
        logger.info("tool: %s status=%s", SUBMIT_TOOL, outcome.status)
        return to_tool_result(outcome)

    return server
