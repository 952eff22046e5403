"""Report run orchestrator: load inputs, build the report, render and write it."""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console

from .. import __version__
from ..compliance.loader import load_assessment, load_bundled_catalogue, load_catalogue
from ..formatters.html import render_html
from ..formatters.text import render_plain_text
from ..models.assessment import AssessorInfo
from ..models.catalogue import Catalogue
from ..models.report import CertificationReadiness, ComplianceLevel, Report
from .config import CONFIG_DIR, get_effective_config, scope_overrides
from .errors import CatalogueError
from .report import export_report_json, generate_report

console = Console()

EXIT_OK = 0
EXIT_INPUT_ERROR = 12
EXIT_CATALOGUE_ERROR = 13
EXIT_CONFIG_ERROR = 14

OUTPUT_SUFFIXES = {"html": ".html", "text": ".md", "json": ".json"}

READINESS_EXIT_CODES = {
    CertificationReadiness.READY: 0,
    CertificationReadiness.NEAR_READY: 0,
    CertificationReadiness.SIGNIFICANT_WORK_NEEDED: 2,
    CertificationReadiness.NOT_READY: 1,
}


def initialize_project(project_path: Path) -> None:
    """Initialize .sarforge directory structure in a project."""
    sf_dir = project_path / CONFIG_DIR
    (sf_dir / "reports").mkdir(parents=True, exist_ok=True)

    config_path = sf_dir / "config.yaml"
    if not config_path.exists():
        config_path.write_text(
            "# sarforge project configuration\n"
            "\n"
            f"sarforge_version: \"{__version__}\"\n"
            "\n"
            "organization:\n"
            f'  name: "{project_path.name}"\n'
            "\n"
            "catalogue:\n"
            "  bundled: cmmc-level1\n"
            "\n"
            "output:\n"
            "  format: html\n",
            encoding="utf-8",
        )

    console.print(f"  [green]Initialized[/green] {CONFIG_DIR}/ in {project_path.name}")


def get_exit_code(report: Report) -> int:
    """Map certification readiness to a CI exit code."""
    return READINESS_EXIT_CODES.get(report.compliance_status.certification_readiness, 0)


def resolve_catalogue(config: dict, catalogue_path: Optional[Path] = None) -> Catalogue:
    if catalogue_path is not None:
        return load_catalogue(catalogue_path)
    configured = (config.get("catalogue") or {}).get("path")
    if configured:
        path = Path(configured)
        if not path.is_absolute() and config.get("_project_path"):
            path = Path(config["_project_path"]) / path
        return load_catalogue(path)
    return load_bundled_catalogue((config.get("catalogue") or {}).get("bundled") or "cmmc-level1")


def render_report(report: Report, output_format: str, config: dict) -> str:
    if output_format == "text":
        return render_plain_text(report)
    if output_format == "json":
        return report.model_dump_json(indent=2)
    return render_html(
        report,
        max_recommendations=int((config.get("output") or {}).get("max_recommendations", 5)),
    )


def run_report(
    assessment_path: Path,
    project_path: Optional[Path] = None,
    catalogue_path: Optional[Path] = None,
    output_format: Optional[str] = None,
    output_path: Optional[Path] = None,
    assessor_name: Optional[str] = None,
    organization: Optional[str] = None,
    ci: bool = False,
    now: Optional[datetime] = None,
) -> int:
    """Generate a report for one assessment. Returns exit code."""
    start_time = time.time()

    cli_overrides: dict = {}
    if assessor_name:
        cli_overrides.setdefault("assessor", {})["name"] = assessor_name
    if organization:
        cli_overrides.setdefault("organization", {})["name"] = organization
    if output_format:
        cli_overrides.setdefault("output", {})["format"] = output_format

    config = get_effective_config(project_path, cli_overrides=cli_overrides or None)
    output_config = config.get("output") or {}
    fmt = output_config.get("format") or "html"

    console.print()
    console.print(f"  [bold cyan]SARFORGE[/bold cyan] v{__version__}")

    try:
        catalogue = resolve_catalogue(config, catalogue_path)
    except CatalogueError as e:
        console.print(f"  [red]ERROR[/red] {e}")
        return EXIT_CATALOGUE_ERROR

    console.print(f"  Catalogue: [white]{catalogue.name or catalogue.id}[/white]")

    try:
        assessment = load_assessment(Path(assessment_path))
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        console.print(f"  [red]ERROR[/red] Cannot load assessment {assessment_path}: {e}")
        return EXIT_INPUT_ERROR

    try:
        assessor = AssessorInfo.model_validate(config.get("assessor"))
        target_level = ComplianceLevel((config.get("report") or {}).get("target_level") or "Level 2")
    except (ValueError, ValidationError) as e:
        console.print(f"  [red]ERROR[/red] Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    try:
        report = generate_report(
            catalogue,
            assessment,
            assessor,
            scope_info=scope_overrides(config),
            organization=(config.get("organization") or {}).get("name") or None,
            target_level=target_level,
            now=now,
        )
    except CatalogueError as e:
        console.print(f"  [red]ERROR[/red] {e}")
        return EXIT_CATALOGUE_ERROR
    except (ValueError, ValidationError) as e:
        # scope overrides are validated while the report is assembled
        console.print(f"  [red]ERROR[/red] Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    if output_path is None:
        base_dir = Path(project_path) / CONFIG_DIR if project_path else Path.cwd()
        output_path = base_dir / (output_config.get("dir") or "reports") / f"{report.id}{OUTPUT_SUFFIXES.get(fmt, '.html')}"

    if fmt == "json":
        export_report_json(report, output_path)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_report(report, fmt, config), encoding="utf-8")

    summary = report.executive_summary
    status = report.compliance_status
    console.print(
        f"  [green]OK[/green] {status.gap_analysis.total_gaps} findings "
        f"({summary.critical_findings}C/{summary.high_findings}H/"
        f"{summary.medium_findings}M/{summary.low_findings}L) "
        f"in {round(time.time() - start_time, 1)}s"
    )

    readiness_colors = {
        CertificationReadiness.READY: "green",
        CertificationReadiness.NEAR_READY: "green",
        CertificationReadiness.SIGNIFICANT_WORK_NEEDED: "yellow",
        CertificationReadiness.NOT_READY: "red",
    }
    color = readiness_colors.get(status.certification_readiness, "white")
    console.print(f"  Score: {summary.overall_score:.1f}% ({summary.compliance_level.value})")
    console.print(f"  [{color}]Readiness: {status.certification_readiness.value}[/{color}]")
    console.print(f"  Report: {output_path}")
    console.print()

    if ci:
        exit_code = get_exit_code(report)
        console.print(f"  CI Mode: Exiting with code {exit_code}")
        return exit_code

    return EXIT_OK
