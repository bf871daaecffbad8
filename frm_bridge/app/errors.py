"""
Error taxonomy for the FRM validation bridge.

Schema violations are NOT represented here. They are ordinary data
(ValidationFailed outcomes) and are never raised.

Everything in this module means "the interface was misused or the
protocol malfunctioned", not "the document is invalid".
"""

from __future__ import annotations


class FrmBridgeError(Exception):
    """Base class for all bridge failures. error.code is stable for callers."""

    code: str = "bridge_error"


class SchemaCompilationError(FrmBridgeError, RuntimeError):
    """
    The domain schema definition could not be loaded or compiled.

    Fatal at startup: a context cannot be built without a compiled schema.
    """

    code = "schema_compilation_failed"


class InputShapeError(FrmBridgeError, TypeError):
    """The call's own input violates the operation contract (document not an object)."""

    code = "input_shape"

    def __init__(self, detail: str = "document argument must be a JSON object") -> None:
        self.detail = detail
        super().__init__(detail)


class ProtocolDecodeError(FrmBridgeError, ValueError):
    """
    A tool response envelope could not be interpreted.

    code is either "empty_content" (no usable structured value and no
    text entry) or "unparseable_content" (text entry present but not a
    JSON document of the expected shape).
    """

    EMPTY_CONTENT = "empty_content"
    UNPARSEABLE_CONTENT = "unparseable_content"

    def __init__(self, tool: str, code: str) -> None:
        self.tool = tool
        self.code = code
        super().__init__(f"{tool} returned {code.replace('_', ' ')}")


class InitializationError(FrmBridgeError, RuntimeError):
    """The one-time client/server connect failed, or the bridge is not usable."""

    code = "initialization_failed"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(
            "FRM bridge initialization failed" + (f" ({detail})" if detail else "")
        )
