"""CLI entry point for interview-report."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import click
import yaml
from pydantic import BaseModel, ValidationError

from interview_report import __version__
from interview_report.models import CandidateReportData, RecruiterReportData, ReportInput
from interview_report.recommendations import select_recommendations
from interview_report.render.primitives import card_tone

REPORT_MODELS: dict[str, type[BaseModel]] = {
    "interview": ReportInput,
    "candidate": CandidateReportData,
    "recruiter": RecruiterReportData,
}


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "-r", "--report", "report",
    type=click.Choice(sorted(REPORT_MODELS), case_sensitive=False),
    default="interview",
    help="Report to render (default: interview).",
)
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["pdf", "json"], case_sensitive=False),
    default="pdf",
    help="Output format (default: pdf). json is only available for the interview report.",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    default=None,
    help="Output file path. Defaults to a name derived from the report for pdf, stdout for json.",
)
@click.option(
    "--name",
    default=None,
    help="Candidate or recruiter name for the candidate and recruiter reports.",
)
@click.option(
    "--generated-at",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]),
    default=None,
    help="Timestamp printed in the report header. Defaults to now.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    path: str,
    report: str,
    fmt: str,
    output: str | None,
    name: str | None,
    generated_at: datetime | None,
    verbose: bool,
) -> None:
    """Render an interview analysis (JSON or YAML) as a PDF report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    report = report.lower()
    if fmt == "json" and report != "interview":
        raise click.UsageError("--format json is only available for the interview report")

    data = _load_input(Path(path), REPORT_MODELS[report])
    generated_at = generated_at or datetime.now()

    if report == "candidate":
        _output_candidate_pdf(data, generated_at, output, name or "Candidate")
    elif report == "recruiter":
        _output_recruiter_pdf(data, generated_at, output, name or "Recruiter")
    elif fmt == "json":
        _output_json(data, output)
    else:
        _output_pdf(data, generated_at, output)


def _load_input(path: Path, model: type[BaseModel] = ReportInput) -> BaseModel:
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
        return model.model_validate(raw)
    except (UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError, ValidationError) as e:
        raise click.ClickException(f"Invalid report input {path.name}: {e}") from e


def _output_pdf(data: ReportInput, generated_at: datetime, output: str | None) -> None:
    from interview_report.render.pdf import report_filename, write_report
    dest = Path(output) if output else Path(report_filename(data.interview.file_name, generated_at))
    write_report(data, generated_at, dest)
    click.echo(f"PDF report written to {dest}")


def _output_candidate_pdf(
    data: CandidateReportData, generated_at: datetime, output: str | None, name: str,
) -> None:
    from interview_report.render.resume import candidate_report_filename, render_candidate_report
    dest = Path(output) if output else Path(candidate_report_filename(name, generated_at))
    dest.write_bytes(render_candidate_report(data, generated_at, candidate_name=name))
    click.echo(f"PDF report written to {dest}")


def _output_recruiter_pdf(
    data: RecruiterReportData, generated_at: datetime, output: str | None, name: str,
) -> None:
    from interview_report.render.resume import recruiter_report_filename, render_recruiter_report
    dest = Path(output) if output else Path(recruiter_report_filename(name, generated_at))
    dest.write_bytes(render_recruiter_report(data, generated_at, recruiter_name=name))
    click.echo(f"PDF report written to {dest}")


def _output_json(data: ReportInput, output: str | None) -> None:
    s = data.scores
    payload = {
        "file_name": data.interview.file_name,
        "cards": {
            "jd_match": card_tone("jd_match", s.jd_match_score or 0),
            "candidate_engagement": card_tone("candidate_engagement", s.candidate_engagement or 0),
            "recruiter_effectiveness": card_tone("recruiter_effectiveness", s.recruiter_sentiment or 0),
            "flow_continuity": card_tone("flow_continuity", s.flow_continuity_score or 0),
        },
        "recommendations": select_recommendations(data),
    }

    text = json.dumps(payload, indent=2)
    if output:
        Path(output).write_text(text)
        click.echo(f"JSON summary written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
