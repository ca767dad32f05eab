# tests/core/test_audit_controller.py
import json
from pathlib import Path

import pytest

from accessibility_checker.cli import main
from accessibility_checker.config import Configuration
from accessibility_checker.controllers.audit_controller import AuditController
from accessibility_checker.dom.builder import DOMBuilder
from accessibility_checker.managers.report_manager import EXPORT_COLUMNS, ReportManager
from accessibility_checker.stats.merger import merge

PAGE_A = """<html lang="en">
<head><title>Home</title></head>
<body>
<h1>Home</h1>
<img src="a.png">
<img src="b.png">
</body>
</html>"""

PAGE_B = """<html lang="en">
<head></head>
<body><h1>About</h1></body>
</html>"""

CLEAN_PAGE = """<html lang="en">
<head><title>Clean</title></head>
<body><h1>Clean</h1><p>Nothing to see.</p></body>
</html>"""


@pytest.fixture
def site(tmp_path):
    """A small site: two pages at the top level, one in a sub directory and a non-HTML file."""
    (tmp_path / "a.html").write_text(PAGE_A, encoding="utf-8")
    (tmp_path / "b.html").write_text(PAGE_B, encoding="utf-8")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "clean.htm").write_text(CLEAN_PAGE, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not html")
    return tmp_path


def test_run_audit_over_directory(site, config):
    summary = AuditController(config).run_audit([site])

    assert [r.title for r in summary.results] == ["a.html", "b.html", "clean.htm"]
    assert summary.failed == []

    a, b, clean = summary.results
    assert a.statistics.occurrences() == {"1.1.1": 2}
    assert b.statistics.occurrences() == {"2.4.2": 1}
    assert clean.diagnostics == []

    assert summary.overall.tallies == [2, 1, 0, 0]
    assert summary.overall.guidelines == ["1.1.1", "2.4.2"]
    assert summary.overall.amount == [2, 1]
    assert summary.overall == merge(r.statistics for r in summary.results)


def test_progress_callback(site, config):
    calls = []
    AuditController(config).run_audit([site], progress_callback=lambda done, total: calls.append((done, total)))
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_deeply_nested_page_is_audited(tmp_path, config):
    depth = 1500
    (tmp_path / "a.html").write_text(PAGE_A, encoding="utf-8")
    (tmp_path / "deep.html").write_text("<div>" * depth + '<img src="x.png">' + "</div>" * depth, encoding="utf-8")

    summary = AuditController(config).run_audit([tmp_path])

    assert summary.failed == []
    assert [r.title for r in summary.results] == ["a.html", "deep.html"]
    assert summary.results[1].statistics.occurrences() == {"1.1.1": 1}


def test_failing_document_is_recorded(site, config, monkeypatch):
    parse_file = DOMBuilder.parse_file

    def parse_or_crash(self, path, encoding="utf-8"):
        if Path(path).name == "b.html":
            raise RuntimeError("parser crashed")
        return parse_file(self, path, encoding)

    monkeypatch.setattr(DOMBuilder, "parse_file", parse_or_crash)
    summary = AuditController(config).run_audit([site])

    assert summary.failed == [str(site / "b.html")]
    assert [r.title for r in summary.results] == ["a.html", "clean.htm"]
    assert summary.overall.occurrences() == {"1.1.1": 2}


def test_parallel_run_matches_serial_run(site, config):
    controller = AuditController(config)
    serial = controller.run_audit([site])
    parallel = controller.run_audit([site], workers=2)

    assert parallel == serial


def test_configuration_is_validated_once_per_run(site, config, caplog):
    data = {category: {sub: dict(entries) for sub, entries in subs.items()} for category, subs in config.rules.items()}
    data["robust"]["compatible"]["retired rule"] = True

    AuditController(Configuration.from_mapping(data)).run_audit([site])

    warnings = [r for r in caplog.records if "retired rule" in r.getMessage()]
    assert len(warnings) == 1


def test_audit_html_in_memory(config):
    result = AuditController(config).audit_html(PAGE_A, path="inline.html")
    assert result.path == "inline.html"
    assert len(result.diagnostics) == 2
    assert result.statistics.tallies == [2, 0, 0, 0]


def test_audit_documents(builder, config):
    docs = [builder.parse_doc(PAGE_A, path="a.html"), builder.parse_doc(PAGE_B, path="b.html")]
    summary = AuditController(config).audit_documents(docs)
    assert summary.overall.occurrences() == {"1.1.1": 2, "2.4.2": 1}
    assert summary.total_diagnostics == 3


def test_report_payload(site, config, tmp_path):
    summary = AuditController(config).run_audit([site])
    output = ReportManager().save_report(summary, tmp_path / "out" / "report.json")

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["tallies"] == [2, 1, 0, 0]
    assert payload["guidelines"] == ["1.1.1", "2.4.2"]
    assert payload["categories"] == ["Perceivable", "Operable", "Understandable", "Robust"]
    assert [r["title"] for r in payload["results"]] == ["a.html", "b.html", "clean.htm"]
    first = payload["results"][0]["diagnostics"][0]
    assert first["code"] == "1.1.1"
    assert first["severity"] == "error"
    assert first["range"]["start"] == {"line": 4, "character": 0}


def test_dataframe_export(site, config, tmp_path):
    summary = AuditController(config).run_audit([site])
    manager = ReportManager()

    df = manager.to_dataframe(summary)
    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 3
    assert df.iloc[0]["Line"] == 5

    csv_path = manager.export_csv(summary, tmp_path / "diagnostics.csv")
    assert csv_path.read_text(encoding="utf-8").splitlines()[0] == ",".join(EXPORT_COLUMNS)

    table = manager.category_table(summary.overall)
    assert list(table["Category"]) == ["Perceivable", "Operable"]


def test_cli_reports_findings(site, tmp_path, capsys):
    report = tmp_path / "report.json"
    exit_code = main([str(site), "--no-progress", "-o", str(report)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Include an alt attribute on every image" in captured.out
    assert "Documents audited: 3" in captured.out
    assert report.exists()


def test_cli_clean_site(tmp_path):
    (tmp_path / "clean.html").write_text(CLEAN_PAGE, encoding="utf-8")
    assert main([str(tmp_path), "--no-progress"]) == 0


def test_cli_bad_configuration(site, tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"perceivable": {}}))
    assert main([str(site), "--config", str(bad), "--no-progress"]) == 2
    assert "Configuration error" in capsys.readouterr().err
