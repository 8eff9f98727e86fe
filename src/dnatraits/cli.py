"""Command-line interface for DNATraits.

ARCHITECTURE:
    CLI Commands → parse_buffer/parse_stream or GenotypeEngine → text report / JSON / CSV output

Workflows: parse (ingestion only), traits (full analysis), export (CSV), known-snps

Key Design:
- Typer framework for auto-help and type validation
- asyncio.run() bridges sync CLI → async stream parser
- Reference table and log directory configurable via options or environment
- Typed ingestion failures reported as 'Error: ...' with exit code 1
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from dnatraits.constants import LOG_DIR_ENV_VAR, REFERENCE_ENV_VAR
from dnatraits.engine import GenotypeEngine
from dnatraits.models.ingestion import IngestionResult
from dnatraits.parsing import parse_buffer, parse_stream
from dnatraits.reference import load_reference_table
from dnatraits.utils import analyze_variants, export_variants_csv, find_duplicate_rsids
from dnatraits.utils.logging_config import get_logger

load_dotenv()

app = typer.Typer(
    name="dnatraits",
    help="Consumer genotype file parsing and health trait matching",
    add_completion=False,
)


def _require_file(input_file: Path) -> None:
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}")
        raise typer.Exit(1)


def _ingest(input_file: Path, stream: bool) -> IngestionResult:
    if stream:
        async def run_stream() -> IngestionResult:
            with open(input_file, "rb") as f:
                return await parse_stream(f, input_file.name)

        return asyncio.run(run_stream())

    return parse_buffer(input_file.read_bytes(), input_file.name)


def _write_json(output: Path, data) -> None:
    with open(output, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Saved to {output}")


@app.command()
def parse(
    input_file: Path = typer.Argument(..., help="Raw genotype file (23andMe or AncestryDNA)"),
    stream: bool = typer.Option(False, "--stream", help="Read the file line by line"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    log: bool = typer.Option(True, "--log/--no-log", help="Enable parse run logging"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", envvar=LOG_DIR_ENV_VAR, help="Directory for JSONL run logs"),
) -> None:
    """Parse a raw genotype file and report ingestion statistics."""
    _require_file(input_file)

    run_logger = get_logger(log_dir=log_dir) if log else None
    run_id = run_logger.log_parse_started(input_file.name, "stream" if stream else "buffer") if run_logger else None

    try:
        result = _ingest(input_file, stream)
    except (FileNotFoundError, ValueError) as e:
        if run_logger and run_id:
            run_logger.log_parse_failed(run_id, input_file.name, e)
        print(f"Error: {e}")
        raise typer.Exit(1)

    if run_logger and run_id:
        run_logger.log_parse_completed(run_id, result)

    print(result.to_report())

    stats = analyze_variants(result.variants)
    print(f"No-calls: {stats.no_calls} | Average confidence: {stats.average_confidence:.3f}")

    duplicates = find_duplicate_rsids(result.variants)
    if duplicates:
        print(f"Repeated ids: {len(duplicates)} (last call is used for matching)")

    if output:
        _write_json(output, result.model_dump(mode="json"))


@app.command()
def traits(
    input_file: Path = typer.Argument(..., help="Raw genotype file (23andMe or AncestryDNA)"),
    reference: Optional[Path] = typer.Option(None, "--reference", "-r", envvar=REFERENCE_ENV_VAR, help="Reference table JSON"),
    stream: bool = typer.Option(False, "--stream", help="Read the file line by line"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    log: bool = typer.Option(True, "--log/--no-log", help="Enable parse run logging"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", envvar=LOG_DIR_ENV_VAR, help="Directory for JSONL run logs"),
) -> None:
    """Match a genotype file against the SNP reference table."""
    _require_file(input_file)

    try:
        engine = GenotypeEngine(
            reference=load_reference_table(reference),
            enable_logging=log,
            log_dir=log_dir,
        )

        if stream:
            async def run_stream():
                with open(input_file, "rb") as f:
                    return await engine.analyze_stream(f, input_file.name)

            report = asyncio.run(run_stream())
        else:
            report = engine.analyze_buffer(input_file.read_bytes(), input_file.name)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    print(report.to_report())

    if output:
        _write_json(output, report.model_dump(mode="json"))


@app.command()
def export(
    input_file: Path = typer.Argument(..., help="Raw genotype file (23andMe or AncestryDNA)"),
    output: Path = typer.Option(..., "--output", "-o", help="Output CSV file"),
    stream: bool = typer.Option(False, "--stream", help="Read the file line by line"),
) -> None:
    """Export validated variants as CSV."""
    _require_file(input_file)

    try:
        result = _ingest(input_file, stream)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    output.write_text(export_variants_csv(result.variants), encoding="utf-8")
    print(f"Exported {result.valid_variants} variants to {output}")


@app.command("known-snps")
def known_snps(
    reference: Optional[Path] = typer.Option(None, "--reference", "-r", envvar=REFERENCE_ENV_VAR, help="Reference table JSON"),
) -> None:
    """List the SNPs covered by the reference table."""
    try:
        table = load_reference_table(reference)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    for entry in table:
        print(f"{entry.rsid}\t{entry.gene}\t{entry.trait_name}\t{entry.category}")
    print(f"\n{len(table)} SNPs")


@app.command()
def version() -> None:
    """Show version information."""
    from dnatraits import __version__
    print(f"DNATraits version {__version__}")


if __name__ == "__main__":
    app()
