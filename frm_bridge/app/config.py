"""
Runtime configuration for the FRM validation bridge.

Configuration is environment-driven, parsed once at startup and
read-only afterwards. It controls where the domain schema is loaded
from, how the two protocol roles identify themselves, and how much of
a failure report is rendered for humans. It never changes validation
outcomes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class BridgeConfig(BaseModel):
    """
    Runtime configuration for the FRM bridge.
    """

    # ------------------------------------------------------------------
    # Domain schema
    # ------------------------------------------------------------------

    SCHEMA_PATH: Path | None = Field(
        None,
        description=(
            "Optional path to a draft-07 FRM schema definition. "
            "When unset, the packaged frm_schema.json is used."
        ),
    )

    # ------------------------------------------------------------------
    # Protocol identities
    # ------------------------------------------------------------------

    SERVER_NAME: str = Field(
        "frm-mcp-server",
        description="Implementation name announced by the server role",
    )

    CLIENT_NAME: str = Field(
        "frm-desktop-main",
        description="Implementation name announced by the client role",
    )

    CLIENT_VERSION: str = Field(
        "1.0.0",
        description="Implementation version announced by the client role",
    )

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level used by the command line entry point",
    )

    ISSUE_DISPLAY_LIMIT: int = Field(
        8,
        ge=1,
        description="Maximum number of issues rendered in a failure report",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("SCHEMA_PATH")
    @classmethod
    def schema_path_must_exist(cls, v: Path | None) -> Path | None:
        if v is None:
            return v
        if not v.exists():
            raise ValueError(f"Configured SCHEMA_PATH does not exist: {v}")
        if not v.is_file():
            raise ValueError(f"Configured SCHEMA_PATH is not a file: {v}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(
                f"Unsupported LOG_LEVEL '{v}'. Allowed values: {sorted(allowed)}"
            )
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.LOG_LEVEL)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        """
        Load configuration from FRM_* environment variables.
        """
        schema_path_env = os.getenv("FRM_SCHEMA_PATH")

        return cls(
            SCHEMA_PATH=(
                Path(schema_path_env).expanduser()
                if schema_path_env
                else None
            ),
            SERVER_NAME=os.getenv("FRM_SERVER_NAME", "frm-mcp-server"),
            CLIENT_NAME=os.getenv("FRM_CLIENT_NAME", "frm-desktop-main"),
            CLIENT_VERSION=os.getenv("FRM_CLIENT_VERSION", "1.0.0"),
            LOG_LEVEL=os.getenv("FRM_LOG_LEVEL", "INFO"),
            ISSUE_DISPLAY_LIMIT=int(
                os.getenv("FRM_ISSUE_DISPLAY_LIMIT", "8")
            ),
        )

    model_config = {
        "frozen": True,
    }
