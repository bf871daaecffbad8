from frm_bridge.app.schemas.outcomes import CaseMetadata
from frm_bridge.app.validation.metadata import extract_metadata
from frm_bridge.tests.helpers import load_seir_case


def test_full_metadata_is_echoed():
    assert extract_metadata(load_seir_case()) == CaseMetadata(
        problem_id="X1",
        domain="medicine",
        version="v1.0",
    )


def test_non_object_inputs_yield_empty_metadata():
    assert extract_metadata([1, 2]) == CaseMetadata()
    assert extract_metadata("metadata") == CaseMetadata()
    assert extract_metadata({"metadata": ["X1"]}) == CaseMetadata()
    assert extract_metadata({}) == CaseMetadata()


def test_non_string_fields_are_left_absent():
    metadata = extract_metadata(
        {"metadata": {"problem_id": 7, "domain": "physics", "version": None}}
    )

    assert metadata.problem_id is None
    assert metadata.domain == "physics"
    assert metadata.version is None


def test_extraction_does_not_mutate_document():
    document = {"metadata": {"problem_id": "P-9"}}

    extract_metadata(document)

    assert document == {"metadata": {"problem_id": "P-9"}}
