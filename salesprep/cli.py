"""Typer CLI interface for salesprep."""

import logging
from datetime import date, datetime
from pathlib import Path

import typer

from salesprep.config import EngineConfig, load_config
from salesprep.exceptions import ConfigError, IngestionError
from salesprep.models.records import RawRecord

app = typer.Typer(
    name="salesprep",
    help="salesprep — clean, de-duplicate and validate raw sales transaction exports.",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at DEBUG level"),
) -> None:
    """salesprep — clean, de-duplicate and validate raw sales transaction exports."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_inputs(input_file: Path, config_file: Path | None) -> tuple[list[RawRecord], EngineConfig]:
    """Load config first, then records, exiting with status 1 on either failure."""
    from salesprep.ingestion import get_adapter

    try:
        config = load_config(config_file)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    try:
        adapter = get_adapter(input_file)
        records = adapter.parse(input_file)
    except IngestionError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    for message in adapter.validate(records):
        typer.echo(f"Warning: {message}", err=True)
    return records, config


def _parse_as_of(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        typer.echo(f"Error: --as-of must be YYYY-MM-DD, got '{value}'", err=True)
        raise typer.Exit(1)


@app.command()
def clean(
    input_file: Path = typer.Argument(..., help="Raw sales export (.csv or .json)"),
    output: Path = typer.Option(Path("output"), "--output", "-o", help="Output directory"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="JSON config overrides"),
    as_of: str | None = typer.Option(
        None, "--as-of", help="Reference date for recency metrics (YYYY-MM-DD, default today)"
    ),
) -> None:
    """Normalize, de-duplicate and validate a raw export; write tables and reports."""
    from salesprep.engines import (
        Aggregator,
        build_quality_metrics,
        normalize_and_reconcile,
        summarize,
    )
    from salesprep.reports import (
        CleaningSummaryGenerator,
        ExecutiveSummaryGenerator,
        QualityReportGenerator,
        ValidationReportGenerator,
        write_cleaned_records,
        write_csv,
    )
    from salesprep.models.aggregates import (
        CustomerSummary,
        DailySalesSummary,
        ProductPerformance,
        SalesFact,
    )
    from salesprep.reports.tables import CLEANED_COLUMNS

    reference_date = _parse_as_of(as_of)
    records, config = _load_inputs(input_file, config_file)

    typer.echo(f"Cleaning {len(records)} raw records from {input_file.name}...")
    try:
        dataset, report, audit = normalize_and_reconcile(records, config)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    output.mkdir(parents=True, exist_ok=True)
    write_cleaned_records(dataset.records, output / "cleaned_sales_data.csv")
    write_csv(audit.entries, output / "duplicates_audit.csv",
              ["transaction_id", "duplicate_row", "survivor_row", "reason"])

    tables = Aggregator(reference_date).build_all(dataset)
    write_csv(tables.sales_fact, output / "sales_fact.csv", list(SalesFact.model_fields))
    write_csv(tables.customer_summary, output / "customer_summary.csv",
              list(CustomerSummary.model_fields))
    write_csv(tables.product_performance, output / "product_performance.csv",
              list(ProductPerformance.model_fields))
    write_csv(tables.daily_sales_summary, output / "daily_sales_summary.csv",
              list(DailySalesSummary.model_fields))

    summary = summarize(records, dataset, audit)
    summary_text = CleaningSummaryGenerator().render(summary, audit)
    validation_text = ValidationReportGenerator().render(report)
    quality_text = QualityReportGenerator().render(build_quality_metrics(records, dataset))

    (output / "cleaning_summary.txt").write_text(summary_text, encoding="utf-8")
    (output / "validation_report.txt").write_text(validation_text, encoding="utf-8")
    (output / "data_quality.txt").write_text(quality_text, encoding="utf-8")
    (output / "executive_summary.txt").write_text(
        ExecutiveSummaryGenerator().render(tables.executive_summary), encoding="utf-8"
    )

    typer.echo("")
    typer.echo(summary_text)
    typer.echo(validation_text)
    typer.echo(f"Wrote {len(dataset.records)} records ({len(CLEANED_COLUMNS)} columns) to {output}")


@app.command()
def profile(
    input_file: Path = typer.Argument(..., help="Raw sales export (.csv or .json)"),
) -> None:
    """Profile a raw export before cleaning: duplicates, gaps and format mix."""
    from salesprep.engines import RawProfiler
    from salesprep.reports import ProfileReportGenerator

    records, _ = _load_inputs(input_file, None)
    typer.echo(ProfileReportGenerator().render(RawProfiler().profile(records)))


@app.command()
def validate(
    input_file: Path = typer.Argument(..., help="Raw sales export (.csv or .json)"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="JSON config overrides"),
    strict: bool = typer.Option(False, "--strict", help="Exit with status 1 when a hard check fails"),
) -> None:
    """Clean a raw export in memory and print the validation report only."""
    from salesprep.engines import normalize_and_reconcile
    from salesprep.reports import ValidationReportGenerator

    records, config = _load_inputs(input_file, config_file)
    _, report, _ = normalize_and_reconcile(records, config)
    typer.echo(ValidationReportGenerator().render(report))

    if strict and not report.all_passed:
        raise typer.Exit(1)
