"""
Typed outcomes exchanged across the FRM tool-invocation protocol.

Python attributes are snake_case; the wire representation (aliases)
is camelCase, matching the payloads carried in tool results:

    {"status": "ok", "normalizedDocument": {...}}
    {"status": "error", "errors": [...], "summary": "..."}
    {"status": "accepted", "problemId": ..., "domain": ..., "version": ...}

Unknown keys are ignored when reading from the wire so that an
envelope carrying additional diagnostics still decodes.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    model_serializer,
)
from pydantic.alias_generators import to_camel


_WIRE_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
)


def summarize_issues(count: int) -> str:
    """Human-readable headline: '1 schema issue detected.' / 'n schema issues detected.'"""
    return f"{count} schema issue{'' if count == 1 else 's'} detected."


# ----------------------------------------------------------------------
# Schema violations
# ----------------------------------------------------------------------
class ValidationIssue(BaseModel):
    """
    One schema violation found in a submitted document.

    instance_path points into the document ("/" for the root),
    schema_path points at the violated rule in the schema.
    """

    message: str = Field(
        ...,
        description="Human-readable description of the violation",
    )

    instance_path: str = Field(
        ...,
        description="JSON pointer into the document, '/' for the root",
    )

    schema_path: str = Field(
        ...,
        description="Pointer to the violated rule inside the schema",
    )

    keyword: Optional[str] = Field(
        None,
        description="The schema keyword that failed (e.g. required, enum)",
    )

    params: Optional[Dict[str, Any]] = Field(
        None,
        description="Keyword-specific details, omitted when empty",
    )

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}

    model_config = _WIRE_CONFIG


# ----------------------------------------------------------------------
# Validation outcomes
# ----------------------------------------------------------------------
class ValidationOk(BaseModel):
    """
    The document conforms to the domain schema.

    normalized_document is the submitted document itself. No coercion,
    defaulting or stripping is performed.
    """

    status: Literal["ok"] = "ok"
    normalized_document: Any = None

    model_config = _WIRE_CONFIG


class ValidationFailed(BaseModel):
    """
    The document violates the domain schema.

    This is a normal, non-exceptional outcome.
    """

    status: Literal["error"] = "error"

    errors: List[ValidationIssue] = Field(
        ...,
        min_length=1,
        description="Issues in the order the schema engine discovered them",
    )

    summary: str = Field(
        ...,
        description="Short headline, e.g. '3 schema issues detected.'",
    )

    @classmethod
    def from_issues(cls, issues: List[ValidationIssue]) -> "ValidationFailed":
        return cls(errors=list(issues), summary=summarize_issues(len(issues)))

    model_config = _WIRE_CONFIG


ValidationOutcome = Annotated[
    Union[ValidationOk, ValidationFailed],
    Field(discriminator="status"),
]


# ----------------------------------------------------------------------
# Submission outcomes
# ----------------------------------------------------------------------
class SubmissionAccepted(BaseModel):
    """
    A valid document accepted as a case.

    Identifying fields fall back to fixed sentinels when the document
    does not carry them.
    """

    status: Literal["accepted"] = "accepted"
    problem_id: str
    domain: str
    version: str

    model_config = _WIRE_CONFIG


SubmissionOutcome = Annotated[
    Union[SubmissionAccepted, ValidationFailed],
    Field(discriminator="status"),
]


VALIDATION_OUTCOME: TypeAdapter = TypeAdapter(ValidationOutcome)
SUBMISSION_OUTCOME: TypeAdapter = TypeAdapter(SubmissionOutcome)


# ----------------------------------------------------------------------
# Case metadata
# ----------------------------------------------------------------------
class CaseMetadata(BaseModel):
    """
    Identifying fields read from document.metadata.

    A field is None when it is missing or not a string.
    """

    problem_id: Optional[str] = None
    domain: Optional[str] = None
    version: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
