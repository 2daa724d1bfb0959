"""CLI interface for distro-ready."""

from pathlib import Path
from typing import Any
from uuid import uuid4
import json
import logging

import typer

from .interfaces.cli_handlers import (
    catalog_summary,
    classify_audio_from_path,
    evaluate_cover_art_from_path,
    run_batch_audio,
    score_release_from_path,
    split_revenue_from_path,
    write_report_json,
)
from .readiness_options import RevenueEventType

app = typer.Typer(help="distro-ready command line interface")

CATALOG_OPTION_HELP = "Optional DSP catalog file (.json/.yaml) overriding the packaged catalog."


def _emit(payload: dict[str, Any], report_json: Path | None) -> None:
    typer.echo(json.dumps(payload, indent=2))
    if report_json is not None:
        written = write_report_json(report_json, payload)
        typer.echo(f"Report written to: {written}", err=True)


def _fail(error: ValueError) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log domain events to stderr."),
) -> None:
    """Check audio masters, cover art and writer splits before distribution."""

    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)


@app.command("audio")
def audio_command(
    input_path: Path = typer.Argument(..., help="JSON file with technicalProfile and loudness objects."),
    catalog: Path | None = typer.Option(None, "--catalog", help=CATALOG_OPTION_HELP),
    report_json: Path | None = typer.Option(None, "--report-json", help="Optional path to write the report JSON."),
) -> None:
    """Classify an analysed audio master into a distribution tier."""

    correlation_id = str(uuid4())
    try:
        report = classify_audio_from_path(input_path, catalog_path=catalog, correlation_id=correlation_id)
    except ValueError as error:
        _fail(error)
    _emit(report.as_dict(), report_json)


@app.command("cover-art")
def cover_art_command(
    input_path: Path = typer.Argument(..., help="JSON file with decoded cover art facts (null when unreadable)."),
    catalog: Path | None = typer.Option(None, "--catalog", help=CATALOG_OPTION_HELP),
    report_json: Path | None = typer.Option(None, "--report-json", help="Optional path to write the report JSON."),
) -> None:
    """Check cover art against every DSP's artwork requirements."""

    correlation_id = str(uuid4())
    try:
        report = evaluate_cover_art_from_path(input_path, catalog_path=catalog, correlation_id=correlation_id)
    except ValueError as error:
        _fail(error)
    _emit(report.as_dict(), report_json)


@app.command("splits")
def splits_command(
    input_path: Path = typer.Argument(..., help="JSON file with a splits array and optional ownerProfileId."),
    total_cents: int = typer.Option(..., "--total-cents", min=0, help="Revenue to distribute, in cents."),
    event_type: RevenueEventType | None = typer.Option(
        None,
        "--event-type",
        case_sensitive=False,
        help="Apply the fee schedule of a revenue event (stream, tip, sale) before fan-out.",
    ),
    report_json: Path | None = typer.Option(None, "--report-json", help="Optional path to write the result JSON."),
) -> None:
    """Validate writer splits and fan revenue out across them."""

    correlation_id = str(uuid4())
    try:
        result = split_revenue_from_path(
            input_path,
            total_cents,
            event_type=event_type,
            correlation_id=correlation_id,
        )
    except ValueError as error:
        _fail(error)
    _emit(result, report_json)


@app.command("score")
def score_command(
    input_path: Path = typer.Argument(..., help="JSON file with technicalProfile, loudness and coverArt objects."),
    catalog: Path | None = typer.Option(None, "--catalog", help=CATALOG_OPTION_HELP),
    report_json: Path | None = typer.Option(None, "--report-json", help="Optional path to write the report JSON."),
) -> None:
    """Compute the unified 0-100 release quality score."""

    try:
        readiness = score_release_from_path(input_path, catalog_path=catalog)
    except ValueError as error:
        _fail(error)
    _emit(readiness.as_dict(), report_json)


@app.command("catalog")
def catalog_command(
    catalog: Path | None = typer.Option(None, "--catalog", help=CATALOG_OPTION_HELP),
) -> None:
    """Print the DSP catalog in use."""

    try:
        summary = catalog_summary(catalog)
    except ValueError as error:
        _fail(error)
    typer.echo(json.dumps(summary, indent=2))


@app.command("batch-audio")
def batch_audio_command(
    manifest: Path = typer.Argument(..., help="JSON array of audio payloads, each with an optional id."),
    concurrency_limit: int = typer.Option(
        4,
        "--concurrency-limit",
        min=1,
        help="Maximum number of concurrent classification jobs.",
    ),
    catalog: Path | None = typer.Option(None, "--catalog", help=CATALOG_OPTION_HELP),
    report_json: Path | None = typer.Option(None, "--report-json", help="Optional path to write batch results JSON."),
) -> None:
    """Classify many analysed masters, isolating failures per item."""

    try:
        results, summary = run_batch_audio(manifest, concurrency_limit, catalog_path=catalog)
    except ValueError as error:
        _fail(error)

    for item in results:
        if item["status"] == "succeeded":
            typer.echo(
                "[OK] "
                f"#{item['index']} id={item['id']} tier={item['qualityTier']} "
                f"warnings={item['warningCount']} correlation_id={item['correlationId']}"
            )
        else:
            typer.echo(
                "[FAILED] "
                f"#{item['index']} id={item['id']} "
                f"error={item['error']} correlation_id={item['correlationId']}"
            )

    typer.echo(
        "Summary: "
        f"total={summary['total']} "
        f"succeeded={summary['succeeded']} "
        f"failed={summary['failed']}"
    )
    if report_json is not None:
        write_report_json(report_json, {"results": results, "summary": summary})


def main() -> None:
    app()


if __name__ == "__main__":
    main()
