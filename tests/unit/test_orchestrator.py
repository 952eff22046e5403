"""End-to-end tests for core/orchestrator.py."""

from __future__ import annotations

import json
from pathlib import Path

from sarforge.core.config import CONFIG_DIR
from sarforge.core.orchestrator import (
    EXIT_CATALOGUE_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_OK,
    initialize_project,
    run_report,
)


class TestInitializeProject:
    def test_creates_layout(self, tmp_path: Path):
        project = tmp_path / "acme"
        project.mkdir()
        initialize_project(project)

        config = (project / CONFIG_DIR / "config.yaml").read_text(encoding="utf-8")
        assert 'name: "acme"' in config
        assert (project / CONFIG_DIR / "reports").is_dir()

    def test_keeps_existing_config(self, tmp_path: Path):
        (tmp_path / CONFIG_DIR).mkdir()
        (tmp_path / CONFIG_DIR / "config.yaml").write_text("organization:\n  name: Kept\n", encoding="utf-8")
        initialize_project(tmp_path)
        assert "Kept" in (tmp_path / CONFIG_DIR / "config.yaml").read_text(encoding="utf-8")


class TestRunReport:
    def test_writes_html(self, assessment_file: Path, tmp_path: Path, now):
        output = tmp_path / "report.html"
        code = run_report(assessment_file, output_path=output, now=now)

        assert code == EXIT_OK
        html = output.read_text(encoding="utf-8")
        assert "Security Assessment Report - Contoso Defense" in html
        assert "ia.l1-3.5.2" in html

    def test_writes_json(self, assessment_file: Path, tmp_path: Path, now):
        output = tmp_path / "report.json"
        run_report(assessment_file, output_format="json", output_path=output, now=now)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["domain_analysis"]) == 6
        # 14 controls, one yes and one n/a
        assert data["compliance_status"]["gap_analysis"]["total_gaps"] == 12

    def test_writes_text(self, assessment_file: Path, tmp_path: Path, now):
        output = tmp_path / "report.md"
        run_report(assessment_file, output_format="text", output_path=output, now=now)
        assert output.read_text(encoding="utf-8").startswith("# Security Assessment Report")

    def test_default_output_in_project(self, assessment_file: Path, tmp_path: Path, now):
        project = tmp_path / "acme"
        project.mkdir()
        initialize_project(project)

        assert run_report(assessment_file, project_path=project, now=now) == EXIT_OK
        reports = list((project / CONFIG_DIR / "reports").glob("sar-*.html"))
        assert len(reports) == 1
        # project config names the organization after the directory
        assert "Security Assessment Report - acme" in reports[0].read_text(encoding="utf-8")

    def test_cli_organization_wins(self, assessment_file: Path, tmp_path: Path, now):
        output = tmp_path / "report.md"
        run_report(assessment_file, output_format="text", output_path=output, organization="Fabrikam", now=now)
        assert "Fabrikam" in output.read_text(encoding="utf-8")

    def test_ci_mode_reflects_readiness(self, assessment_file: Path, tmp_path: Path, now):
        code = run_report(assessment_file, output_path=tmp_path / "r.html", ci=True, now=now)
        assert code == 1

    def test_custom_catalogue(self, tmp_path: Path, now):
        catalogue = tmp_path / "custom.yaml"
        catalogue.write_text(
            "id: custom\n"
            "sections:\n"
            "  - name: Access Control\n"
            "    code: AC\n"
            "    controls:\n"
            "      - {id: c-1, title: Limit access, priority: high}\n",
            encoding="utf-8",
        )
        assessment = tmp_path / "assessment.json"
        assessment.write_text(json.dumps({"responses": {"c-1": "yes"}}), encoding="utf-8")

        code = run_report(assessment, catalogue_path=catalogue, output_path=tmp_path / "r.html", ci=True, now=now)
        assert code == 0

    def test_invalid_catalogue(self, assessment_file: Path, tmp_path: Path, now):
        catalogue = tmp_path / "empty.yaml"
        catalogue.write_text("id: empty\nsections: []\n", encoding="utf-8")
        code = run_report(assessment_file, catalogue_path=catalogue, output_path=tmp_path / "r.html", now=now)
        assert code == EXIT_CATALOGUE_ERROR
        assert not (tmp_path / "r.html").exists()

    def test_unreadable_assessment(self, tmp_path: Path, now):
        assessment = tmp_path / "assessment.json"
        assessment.write_text("{not json", encoding="utf-8")
        code = run_report(assessment, output_path=tmp_path / "r.html", now=now)
        assert code == EXIT_INPUT_ERROR

    def test_assessment_not_a_mapping(self, tmp_path: Path, now):
        assessment = tmp_path / "assessment.json"
        assessment.write_text("[1, 2]", encoding="utf-8")
        code = run_report(assessment, output_path=tmp_path / "r.html", now=now)
        assert code == EXIT_INPUT_ERROR

    def test_catalogue_entry_not_a_mapping(self, assessment_file: Path, tmp_path: Path, now):
        catalogue = tmp_path / "flat.yaml"
        catalogue.write_text("id: flat\nsections:\n  - Access Control\n", encoding="utf-8")
        code = run_report(assessment_file, catalogue_path=catalogue, output_path=tmp_path / "r.html", now=now)
        assert code == EXIT_CATALOGUE_ERROR


class TestRunReportConfigErrors:
    def _run(self, config_text: str, assessment_file: Path, tmp_path: Path, now) -> int:
        project = tmp_path / "acme"
        (project / CONFIG_DIR).mkdir(parents=True)
        (project / CONFIG_DIR / "config.yaml").write_text(config_text, encoding="utf-8")
        return run_report(assessment_file, project_path=project, output_path=tmp_path / "r.html", now=now)

    def test_unknown_target_level(self, assessment_file: Path, tmp_path: Path, now):
        code = self._run("report:\n  target_level: Level 9\n", assessment_file, tmp_path, now)
        assert code == EXIT_CONFIG_ERROR
        assert not (tmp_path / "r.html").exists()

    def test_null_assessor_name(self, assessment_file: Path, tmp_path: Path, now):
        code = self._run("assessor:\n  name: null\n", assessment_file, tmp_path, now)
        assert code == EXIT_CONFIG_ERROR

    def test_unknown_assessment_type(self, assessment_file: Path, tmp_path: Path, now):
        code = self._run("scope:\n  assessment_type: Penetration Test\n", assessment_file, tmp_path, now)
        assert code == EXIT_CONFIG_ERROR

    def test_empty_sections_fall_back_to_defaults(self, assessment_file: Path, tmp_path: Path, now):
        code = self._run("report:\noutput:\nscope: []\n", assessment_file, tmp_path, now)
        assert code == EXIT_OK
        assert (tmp_path / "r.html").exists()
