import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from frm_bridge.app.bridge.server import (
    UNKNOWN_DOMAIN,
    UNKNOWN_PROBLEM_ID,
    UNKNOWN_VERSION,
    build_frm_server,
    handle_submit,
    handle_validate,
)
from frm_bridge.app.codec.result_codec import SUBMIT_TOOL, VALIDATE_TOOL
from frm_bridge.app.config import BridgeConfig
from frm_bridge.app.schemas.outcomes import SubmissionAccepted, ValidationFailed
from frm_bridge.tests.helpers import (
    load_seir_case,
    packaged_validator,
    permissive_validator,
)


# ----------------------------------------------------------------------
# Handler logic
# ----------------------------------------------------------------------
def test_submit_accepts_valid_case():
    outcome = handle_submit(packaged_validator(), load_seir_case())

    assert outcome == SubmissionAccepted(problem_id="X1", domain="medicine", version="v1.0")


def test_submit_returns_identical_validation_failure():
    validator = packaged_validator()

    submitted = handle_submit(validator, {})
    validated = handle_validate(validator, {})

    assert isinstance(submitted, ValidationFailed)
    assert submitted == validated


def test_submit_defaults_missing_metadata_to_sentinels():
    outcome = handle_submit(permissive_validator(), {})

    assert outcome == SubmissionAccepted(
        problem_id=UNKNOWN_PROBLEM_ID,
        domain=UNKNOWN_DOMAIN,
        version=UNKNOWN_VERSION,
    )
    assert (outcome.problem_id, outcome.domain, outcome.version) == (
        "unknown-problem-id",
        "unknown-domain",
        "v0.0",
    )


def test_submit_defaults_only_the_missing_fields():
    outcome = handle_submit(
        permissive_validator(),
        {"metadata": {"problem_id": "P-2", "domain": 5}},
    )

    assert outcome.problem_id == "P-2"
    assert outcome.domain == UNKNOWN_DOMAIN
    assert outcome.version == UNKNOWN_VERSION


# ----------------------------------------------------------------------
# MCP surface
# ----------------------------------------------------------------------
@pytest.mark.anyio
async def test_server_lists_both_tools_as_read_only():
    server = build_frm_server(packaged_validator(), BridgeConfig(SERVER_NAME="frm-test"))

    async with create_connected_server_and_client_session(server) as session:
        listed = await session.list_tools()

    tools = {tool.name: tool for tool in listed.tools}
    assert set(tools) == {VALIDATE_TOOL, SUBMIT_TOOL}
    for tool in tools.values():
        assert tool.annotations.readOnlyHint is True
        assert tool.annotations.destructiveHint is False
        assert "document" in tool.inputSchema["properties"]


@pytest.mark.anyio
async def test_server_envelope_carries_outcome_twice():
    server = build_frm_server(packaged_validator())

    async with create_connected_server_and_client_session(server) as session:
        result = await session.call_tool(SUBMIT_TOOL, {"document": {}})

    assert result.isError is True
    assert result.structuredContent["status"] == "error"
    assert result.structuredContent["summary"] == "8 schema issues detected."
    assert json.loads(result.content[0].text) == result.structuredContent


@pytest.mark.anyio
async def test_server_rejects_non_object_document():
    server = build_frm_server(packaged_validator())

    async with create_connected_server_and_client_session(server) as session:
        result = await session.call_tool(VALIDATE_TOOL, {"document": [1, 2]})

    assert result.isError is True
    assert result.structuredContent is None
