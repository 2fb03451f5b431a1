"""Tests for the command line entry point."""

import json

from i18n_audit.__main__ import main


def test_writes_report_file(project, tmp_path):
    output = tmp_path / "out" / "audit.json"
    assert main([str(project), "--output", str(output), "--no-timestamp", "--quiet"]) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert set(data) == {
        "metadata", "summary", "client_candidates", "backend_candidates",
        "role_associations", "conversion_plan", "warnings",
    }
    assert data["summary"]["total_candidates"] == 3
    assert "generated_at" not in data["metadata"]


def test_prints_json_to_stdout(project, capsys):
    assert main([str(project), "--no-timestamp"]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["summary"]["skipped_files"] == 1
    assert "Hardcoded Text Audit" in captured.err


def test_custom_directories(project, capsys):
    assert main([str(project), "--ui-dir", "client/src/components", "--backend-dir", "nowhere", "-q"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["summary"]["total_files"] == 1
    assert data["backend_candidates"] == []


def test_configuration_error_exit_code(project, tmp_path, capsys):
    assert main([str(project), "--roles", str(tmp_path / "missing.json")]) == 2
    assert "Configuration error" in capsys.readouterr().err
