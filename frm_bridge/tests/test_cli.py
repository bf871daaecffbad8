import json

import pytest

from frm_bridge.app.main import EXIT_FAILURE, EXIT_OK, EXIT_VIOLATIONS, main
from frm_bridge.tests.helpers import FIXTURES_DIR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("FRM_SCHEMA_PATH", "FRM_LOG_LEVEL", "FRM_ISSUE_DISPLAY_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_validate_valid_case(capsys):
    code = main(["validate", str(FIXTURES_DIR / "seir_case.json")])

    assert code == EXIT_OK
    out = json.loads(capsys.readouterr().out)
    assert out["status"] == "ok"
    assert out["normalizedDocument"]["metadata"]["problem_id"] == "X1"


def test_submit_valid_case(capsys):
    code = main(["submit", str(FIXTURES_DIR / "seir_case.json")])

    captured = capsys.readouterr()
    assert code == EXIT_OK
    assert json.loads(captured.out) == {
        "status": "accepted",
        "problemId": "X1",
        "domain": "medicine",
        "version": "v1.0",
    }
    assert "Accepted case X1 (Medicine, v1.0)" in captured.err


def test_violations_exit_with_report(tmp_path, capsys, clean_env):
    clean_env.setenv("FRM_ISSUE_DISPLAY_LIMIT", "2")

    code = main(["validate", str(_write(tmp_path, "empty.json", "{}"))])

    captured = capsys.readouterr()
    assert code == EXIT_VIOLATIONS
    assert json.loads(captured.out)["summary"] == "8 schema issues detected."
    assert "1. / 'metadata' is a required property" in captured.err
    assert "... 6 more" in captured.err


@pytest.mark.parametrize(
    "content",
    ["[1, 2, 3]", '"just a string"', "{not json"],
)
def test_unusable_input_exits_with_failure(tmp_path, capsys, content):
    code = main(["validate", str(_write(tmp_path, "input.json", content))])

    assert code == EXIT_FAILURE
    assert capsys.readouterr().out == ""


def test_missing_file_exits_with_failure(tmp_path):
    assert main(["submit", str(tmp_path / "absent.json")]) == EXIT_FAILURE


def test_schema_override_reaches_metadata_defaulting(tmp_path, capsys, clean_env):
    schema = _write(tmp_path, "schema.json", '{"type": "object"}')
    clean_env.setenv("FRM_SCHEMA_PATH", str(schema))

    code = main(["submit", str(_write(tmp_path, "bare.json", "{}"))])

    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out) == {
        "status": "accepted",
        "problemId": "unknown-problem-id",
        "domain": "unknown-domain",
        "version": "v0.0",
    }


def test_malformed_schema_override_exits_with_failure(tmp_path, clean_env):
    schema = _write(tmp_path, "schema.json", '{"type": "not-a-type"}')
    clean_env.setenv("FRM_SCHEMA_PATH", str(schema))

    assert main(["validate", str(FIXTURES_DIR / "seir_case.json")]) == EXIT_FAILURE


def test_invalid_configuration_exits_with_failure(tmp_path, clean_env):
    clean_env.setenv("FRM_SCHEMA_PATH", str(tmp_path / "missing.json"))

    assert main(["validate", str(FIXTURES_DIR / "seir_case.json")]) == EXIT_FAILURE


def test_domains_lists_catalogue(capsys):
    code = main(["domains"])

    assert code == EXIT_OK
    listed = json.loads(capsys.readouterr().out)
    by_value = {entry["value"]: entry for entry in listed}
    assert len(listed) == 41
    assert by_value["public_health"]["label"] == "Public Health"
    assert by_value["medicine"]["description"]
