"""
Composition root for one FRM bridge.

A context owns exactly one compiled validator, one server role and one
client-side bridge linked to it. Nothing here is module-level: two
contexts never share state.

IMPORTANT:
The schema is compiled eagerly in from_config(). A malformed schema
fails construction with SchemaCompilationError before any channel is
opened.
"""

from __future__ import annotations

from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import Implementation

from frm_bridge.app.bridge.client import BridgeState, FrmToolBridge
from frm_bridge.app.bridge.server import build_frm_server
from frm_bridge.app.config import BridgeConfig
from frm_bridge.app.events import CallSource, ToolCallEmitter
from frm_bridge.app.schemas.outcomes import (
    SubmissionAccepted,
    ValidationFailed,
    ValidationOk,
)
from frm_bridge.app.validation.schema_validator import SchemaValidator


class FrmContext:
    """
    Explicitly wired validator, server and bridge.

    Use as an async context manager:

        async with FrmContext.from_config(config) as ctx:
            outcome = await ctx.call_validate(document)
    """

    def __init__(
        self,
        config: BridgeConfig,
        validator: SchemaValidator,
        server: FastMCP,
        bridge: FrmToolBridge,
    ) -> None:
        self.config = config
        self.validator = validator
        self.server = server
        self.bridge = bridge

    # ------------------------------------------------------------------
    # Integration constructor
    # ------------------------------------------------------------------

    @classmethod
    def from_config(
        cls,
        config: Optional[BridgeConfig] = None,
        *,
        emitter: Optional[ToolCallEmitter] = None,
        source: CallSource = CallSource.CLIENT,
    ) -> "FrmContext":
        config = config or BridgeConfig()

        validator = SchemaValidator.from_path(config.SCHEMA_PATH)
        server = build_frm_server(validator, config)
        bridge = FrmToolBridge(
            server,
            client_info=Implementation(
                name=config.CLIENT_NAME,
                version=config.CLIENT_VERSION,
            ),
            emitter=emitter,
            source=source,
        )
        return cls(config, validator, server, bridge)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> BridgeState:
        return self.bridge.state

    async def __aenter__(self) -> "FrmContext":
        await self.bridge.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.bridge.close()

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    async def call_validate(self, document: Any) -> ValidationOk | ValidationFailed:
        return await self.bridge.call_validate(document)

    async def call_submit(
        self, document: Any
    ) -> SubmissionAccepted | ValidationFailed:
        return await self.bridge.call_submit(document)
