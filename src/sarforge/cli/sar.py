"""sarforge (sar) - security assessment report generator."""

from __future__ import annotations

import sys
from pathlib import Path

import click


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--assessment", "-a", type=click.Path(exists=True, dir_okay=False), help="Assessment record (JSON/YAML)")
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), help="Project path holding .sarforge/config.yaml")
@click.option("--catalogue", "-c", type=click.Path(exists=True, dir_okay=False), help="Framework catalogue YAML")
@click.option("--output-format", "-f", type=click.Choice(["html", "text", "json"]))
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Report output path")
@click.option("--assessor-name", type=str, help="Assessor name")
@click.option("--organization", type=str, help="Organization name override")
@click.option("--ci", is_flag=True, help="CI mode: exit code reflects certification readiness")
def sar_cli(
    ctx: click.Context,
    assessment: str | None,
    project: str | None,
    catalogue: str | None,
    output_format: str | None,
    output: str | None,
    assessor_name: str | None,
    organization: str | None,
    ci: bool,
) -> None:
    """Generate a security assessment report from a self-assessment."""
    if ctx.invoked_subcommand is not None:
        return

    if not assessment:
        click.echo("Error: --assessment/-a is required to generate a report.", err=True)
        ctx.exit(11)
        return

    from ..core.orchestrator import run_report

    exit_code = run_report(
        assessment_path=Path(assessment),
        project_path=Path(project) if project else None,
        catalogue_path=Path(catalogue) if catalogue else None,
        output_format=output_format,
        output_path=Path(output) if output else None,
        assessor_name=assessor_name,
        organization=organization,
        ci=ci,
    )
    if exit_code != 0:
        sys.exit(exit_code)


@sar_cli.command()
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), required=True)
def init(project: str) -> None:
    """Initialize sarforge in a project."""
    from ..core.orchestrator import initialize_project

    initialize_project(Path(project))


@sar_cli.command()
@click.option("--dir", "catalogues_dir", type=click.Path(file_okay=False), help="Also list catalogues in this directory")
def catalogues(catalogues_dir: str | None) -> None:
    """List available framework catalogues."""
    from ..compliance.loader import get_available_catalogues, list_bundled_catalogues

    click.echo("Bundled:")
    for name in list_bundled_catalogues():
        click.echo(f"  {name}")

    if catalogues_dir:
        click.echo(f"In {catalogues_dir}:")
        for entry in get_available_catalogues(Path(catalogues_dir)):
            click.echo(f"  {entry['id']}  {entry['name']}  ({entry['path']})")


def main() -> None:
    sar_cli()


if __name__ == "__main__":
    main()
