from .client import BridgeState, FrmToolBridge
from .context import FrmContext
from .server import build_frm_server, handle_submit, handle_validate

__all__ = [
    "BridgeState",
    "FrmToolBridge",
    "FrmContext",
    "build_frm_server",
    "handle_submit",
    "handle_validate",
]
