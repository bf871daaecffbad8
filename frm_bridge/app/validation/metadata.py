from typing import Any

from frm_bridge.app.schemas.outcomes import CaseMetadata


def extract_metadata(document: Any) -> CaseMetadata:
    """
    Read identifying fields from document.metadata.

    A non-object document or metadata block yields an empty
    CaseMetadata. A field that is missing or not a string is left as
    None. Nothing is coerced and nothing is raised.
    """
    if not isinstance(document, dict):
        return CaseMetadata()

    meta = document.get("metadata")
    if not isinstance(meta, dict):
        return CaseMetadata()

    def _string(key: str):
        value = meta.get(key)
        return value if isinstance(value, str) else None

    return CaseMetadata(
        problem_id=_string("problem_id"),
        domain=_string("domain"),
        version=_string("version"),
    )
