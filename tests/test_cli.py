"""Tests for the command-line interface."""

import io
import json
import sys

import pytest

from instance_counter import cli


def _export() -> dict:
    return {
        "type": "DOCUMENT",
        "name": "Doc",
        "children": [
            {
                "id": "p1",
                "type": "PAGE",
                "name": "Home",
                "children": [
                    {"id": "card", "type": "COMPONENT", "name": "Card"},
                    {"id": "i1", "type": "INSTANCE", "mainComponent": "card"},
                    {"id": "i2", "type": "INSTANCE", "mainComponent": "card", "visible": False},
                    {"id": "i3", "type": "INSTANCE", "mainComponent": "icon"},
                ],
            },
        ],
        "components": [{"id": "icon", "type": "COMPONENT", "name": "Icon, Large"}],
    }


@pytest.fixture
def export_file(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(_export()))
    return path


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["instance-counter", *argv])
    cli.main()


def test_scan_summary(monkeypatch, capsys, export_file):
    _run(monkeypatch, "scan", str(export_file))
    out = capsys.readouterr().out
    assert "instance-counter scan results" in out
    assert "Page:        Home" in out
    assert "Instances:   2" in out
    assert "Card" in out


def test_scan_json(monkeypatch, capsys, export_file):
    _run(monkeypatch, "scan", str(export_file), "--format", "json", "--include-hidden")
    data = json.loads(capsys.readouterr().out)
    assert data["details"] == {"Card": {"total": 2, "hidden": 1}, "Icon, Large": {"total": 1, "hidden": 0}}
    assert data["metadata"]["pageName"] == "Home"


def test_scan_csv_to_file(monkeypatch, export_file, tmp_path):
    out_path = tmp_path / "out" / "usage.csv"
    _run(monkeypatch, "scan", str(export_file), "--format", "csv", "--output", str(out_path))
    text = out_path.read_text()
    assert text.startswith("Count,Instance Name\n")
    assert '1,"Icon, Large"' in text


def test_scan_missing_file(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "scan", str(tmp_path / "missing.json"))
    assert exc.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_scan_unknown_page(monkeypatch, capsys, export_file):
    with pytest.raises(SystemExit):
        _run(monkeypatch, "scan", str(export_file), "--page", "Nope")
    assert "Page not found" in capsys.readouterr().err


def test_session_loop(monkeypatch, capsys, export_file):
    requests = "\n".join([
        json.dumps({"type": "export-json"}),
        json.dumps({"type": "scan-instances"}),
        "",
        "{not json",
        json.dumps({"type": "export-csv", "includeHidden": True}),
    ])
    monkeypatch.setattr(sys, "stdin", io.StringIO(requests + "\n"))
    _run(monkeypatch, "session", str(export_file))
    responses = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [r["type"] for r in responses] == ["error", "scan-results", "error", "export-csv"]
    assert responses[0]["message"] == "Please scan the page first"
    assert responses[1]["data"]["totalInstances"] == 2
    assert responses[2]["message"].startswith("Invalid JSON")
    assert responses[3]["data"]["metadata"]["totalHidden"] == 1
