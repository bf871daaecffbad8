"""
Domain schema compilation and document validation.

The FRM schema is compiled exactly once per context and shared by all
validation calls. A compiled validator is read-only and safe for any
number of concurrent readers.

Validation semantics:
- every applicable rule is evaluated, violations are collected in one
  pass (no short-circuit at the first failure)
- the input document is never mutated, coerced, defaulted or stripped
- on success the very same document object is returned
- format-aware string rules (date, uri, email, ...) are enforced
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JsonSchemaError

from frm_bridge.app.errors import SchemaCompilationError
from frm_bridge.app.schemas.outcomes import (
    ValidationFailed,
    ValidationIssue,
    ValidationOk,
)

logger = logging.getLogger(__name__)

PACKAGED_SCHEMA_PATH = Path(__file__).with_name("frm_schema.json")

_LIMIT_KEYWORDS = {
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "multipleOf",
    "minLength",
    "maxLength",
    "minItems",
    "maxItems",
    "minProperties",
    "maxProperties",
}


# ----------------------------------------------------------------------
# Schema loading
# ----------------------------------------------------------------------
def load_schema_definition(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read a schema definition from disk.

    Defaults to the packaged frm_schema.json. Any failure is fatal:
    the bridge must not start without its schema.
    """
    source = path if path is not None else PACKAGED_SCHEMA_PATH
    try:
        definition = json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SchemaCompilationError(
            f"Cannot read schema definition {source}: {exc}"
        ) from exc
    except json.JSONDecodeError as exc:
        raise SchemaCompilationError(
            f"Schema definition {source} is not valid JSON: {exc}"
        ) from exc

    if not isinstance(definition, dict):
        raise SchemaCompilationError(
            f"Schema definition {source} must be a JSON object"
        )
    return definition


# ----------------------------------------------------------------------
# Issue conversion
# ----------------------------------------------------------------------
def _escape_pointer_token(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def _instance_pointer(error: JsonSchemaError) -> str:
    if not error.absolute_path:
        return "/"
    return "/" + "/".join(_escape_pointer_token(p) for p in error.absolute_path)


def _schema_pointer(error: JsonSchemaError) -> str:
    if not error.absolute_schema_path:
        return "#"
    return "#/" + "/".join(
        _escape_pointer_token(p) for p in error.absolute_schema_path
    )


def _issue_params(error: JsonSchemaError) -> Optional[Dict[str, Any]]:
    keyword = error.validator
    value = error.validator_value
    instance = error.instance

    if keyword == "required" and isinstance(instance, dict):
        for name in value:
            if name not in instance and error.message.startswith(repr(name)):
                return {"missingProperty": name}
        return None

    if keyword == "additionalProperties" and isinstance(instance, dict):
        declared = error.schema.get("properties", {}) if isinstance(error.schema, dict) else {}
        unexpected = [key for key in instance if key not in declared]
        return {"additionalProperties": unexpected} if unexpected else None

    if keyword == "type":
        return {"type": value}
    if keyword == "enum":
        return {"allowedValues": list(value)}
    if keyword == "const":
        return {"allowedValue": value}
    if keyword == "format":
        return {"format": value}
    if keyword == "pattern":
        return {"pattern": value}
    if keyword in _LIMIT_KEYWORDS:
        return {"limit": value}
    return None


def to_issue(error: JsonSchemaError) -> ValidationIssue:
    """Convert one jsonschema error into a ValidationIssue."""
    return ValidationIssue(
        message=error.message or "Schema violation",
        instance_path=_instance_pointer(error),
        schema_path=_schema_pointer(error),
        keyword=error.validator if isinstance(error.validator, str) else None,
        params=_issue_params(error),
    )


def to_issues(errors: Iterable[JsonSchemaError]) -> List[ValidationIssue]:
    return [to_issue(error) for error in errors]


# ----------------------------------------------------------------------
# Validator
# ----------------------------------------------------------------------
class SchemaValidator:
    """
    A compiled, immutable draft-07 validator for FRM documents.

    Construct via compile() or from_path(); both fail with
    SchemaCompilationError when the definition itself is malformed.
    """

    def __init__(self, compiled: Draft7Validator) -> None:
        self._compiled = compiled

    @classmethod
    def compile(cls, definition: Dict[str, Any]) -> "SchemaValidator":
        try:
            Draft7Validator.check_schema(definition)
        except SchemaError as exc:
            raise SchemaCompilationError(
                f"Malformed schema definition: {exc.message}"
            ) from exc

        compiled = Draft7Validator(
            definition,
            format_checker=Draft7Validator.FORMAT_CHECKER,
        )
        logger.info(
            "schema: compiled %s",
            definition.get("$id") or definition.get("title") or "<anonymous>",
        )
        return cls(compiled)

    @classmethod
    def from_path(cls, path: Optional[Path] = None) -> "SchemaValidator":
        return cls.compile(load_schema_definition(path))

    @property
    def schema(self) -> Dict[str, Any]:
        return self._compiled.schema

    def validate(self, document: Any) -> ValidationOk | ValidationFailed:
        """
        Check a document against the compiled schema.

        Returns ValidationOk carrying the same document object, or
        ValidationFailed listing every issue in discovery order.
        """
        issues = to_issues(self._compiled.iter_errors(document))
        if not issues:
            return ValidationOk(normalized_document=document)

        logger.debug("schema: %d issue(s) found", len(issues))
        return ValidationFailed.from_issues(issues)
