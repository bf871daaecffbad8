"""
Client role of the FRM tool-invocation bridge.

The client and server roles are linked by one in-memory duplex
channel. Connecting is asynchronous and happens exactly once:

    UNINITIALIZED -> INITIALIZING -> READY -> CLOSED
    INITIALIZING -> FAILED   (fatal, never retried)

Every call first awaits the ready barrier. Calls issued while the
bridge is still initializing suspend until the transition completes;
nothing polls. Once READY, the barrier stays resolved for all later
calls.

Failure surface for callers:
- ValidationFailed outcome     the document is invalid (returned, not raised)
- InputShapeError              the document is not a JSON object
- ProtocolDecodeError          the response envelope could not be interpreted
- InitializationError          the channel never came up, or was closed
"""

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack
from enum import Enum
from typing import Any, Callable, Optional

import anyio
from mcp import ClientSession
from mcp.server.fastmcp import FastMCP
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import CallToolResult, Implementation

from frm_bridge.app.codec.result_codec import (
    SUBMIT_TOOL,
    VALIDATE_TOOL,
    decode_submission,
    decode_validation,
)
from frm_bridge.app.errors import InitializationError, InputShapeError
from frm_bridge.app.events import (
    CallSource,
    NullCallEmitter,
    ToolCallEmitter,
    ToolCallEvent,
)
from frm_bridge.app.schemas.outcomes import (
    SubmissionAccepted,
    ValidationFailed,
    ValidationOk,
)

logger = logging.getLogger(__name__)


class BridgeState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


class FrmToolBridge:
    """
    Connects a client session to an FRM server over linked in-memory
    streams and exposes call_validate / call_submit.

    Use as an async context manager, or call connect() and close()
    from the same task.
    """

    def __init__(
        self,
        server: FastMCP,
        *,
        client_info: Optional[Implementation] = None,
        emitter: Optional[ToolCallEmitter] = None,
        source: CallSource = CallSource.CLIENT,
    ) -> None:
        self._server = server
        self._client_info = client_info
        self._emitter = emitter or NullCallEmitter()
        self._source = source

        self._state = BridgeState.UNINITIALIZED
        self._ready = anyio.Event()
        self._session: Optional[ClientSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None
        self._init_error: Optional[BaseException] = None

    @property
    def state(self) -> BridgeState:
        return self._state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """
        Run the one-time connect step.

        Raises InitializationError if the connect fails or was already
        attempted. A failed bridge stays FAILED.
        """
        if self._state is not BridgeState.UNINITIALIZED:
            raise InitializationError(
                f"connect already attempted (state={self._state.value})"
            )

        self._state = BridgeState.INITIALIZING
        logger.info("bridge: initializing")

        stack = AsyncExitStack()
        try:
            self._session = await stack.enter_async_context(
                create_connected_server_and_client_session(
                    self._server,
                    client_info=self._client_info,
                )
            )
        except Exception as exc:
            await stack.aclose()
            self._init_error = exc
            self._state = BridgeState.FAILED
            self._ready.set()
            logger.error("bridge: initialization failed: %s", exc)
            raise InitializationError(str(exc)) from exc

        self._exit_stack = stack
        self._state = BridgeState.READY
        self._ready.set()
        logger.info("bridge: ready")

    async def close(self) -> None:
        """Tear down the channel. Idempotent; pending waiters are released."""
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if self._state is not BridgeState.FAILED:
            self._state = BridgeState.CLOSED
        self._ready.set()
        if stack is not None:
            await stack.aclose()
            logger.info("bridge: closed")

    async def __aenter__(self) -> "FrmToolBridge":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def wait_ready(self) -> ClientSession:
        """Suspend until the connect step has resolved, then return the session."""
        await self._ready.wait()

        if self._state is BridgeState.READY and self._session is not None:
            return self._session
        if self._init_error is not None:
            raise InitializationError(str(self._init_error))
        raise InitializationError(f"bridge is {self._state.value}")

    # ------------------------------------------------------------------
    # Client-side calls
    # ------------------------------------------------------------------

    async def call_validate(self, document: Any) -> ValidationOk | ValidationFailed:
        return await self._call(VALIDATE_TOOL, document, decode_validation)

    async def call_submit(
        self, document: Any
    ) -> SubmissionAccepted | ValidationFailed:
        return await self._call(SUBMIT_TOOL, document, decode_submission)

    async def _call(
        self,
        tool: str,
        document: Any,
        decode: Callable[[CallToolResult], Any],
    ) -> Any:
        session = await self.wait_ready()

        if not isinstance(document, dict):
            raise InputShapeError()

        started = time.perf_counter()
        try:
            result = await session.call_tool(tool, {"document": document})
            outcome = decode(result)
        except Exception as exc:
            await self._record(tool, started, error_message=str(exc))
            raise

        await self._record(tool, started, status=outcome.status)
        return outcome

    async def _record(
        self,
        tool: str,
        started: float,
        *,
        status: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> None:
        await self._emitter.emit(
            ToolCallEvent(
                tool=tool,
                source=self._source,
                duration_ms=(time.perf_counter() - started) * 1000.0,
                success=status in {"ok", "accepted"},
                status=status,
                error_message=error_message,
            )
        )
