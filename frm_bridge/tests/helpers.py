import copy
import json
from pathlib import Path
from typing import Any, Dict

from frm_bridge.app.validation.schema_validator import SchemaValidator

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_seir_case() -> Dict[str, Any]:
    """A fresh copy of the valid SEIR epidemic document."""
    return json.loads((FIXTURES_DIR / "seir_case.json").read_text(encoding="utf-8"))


def seir_case_with(**metadata_overrides: Any) -> Dict[str, Any]:
    document = copy.deepcopy(load_seir_case())
    document["metadata"].update(metadata_overrides)
    return document


def packaged_validator() -> SchemaValidator:
    return SchemaValidator.from_path()


def permissive_validator() -> SchemaValidator:
    """Accepts any JSON object; used to reach metadata defaulting."""
    return SchemaValidator.compile({"type": "object"})
