"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from dnatraits.cli import app

runner = CliRunner()


@pytest.fixture
def genome_file(tmp_path, twenty_three_and_me_bytes):
    path = tmp_path / "genome.txt"
    path.write_bytes(twenty_three_and_me_bytes)
    return path


@pytest.fixture
def reference_file(tmp_path):
    path = tmp_path / "reference.json"
    path.write_text(json.dumps({
        "entries": [{
            "rsid": "rs429358",
            "gene": "APOE",
            "trait_name": "APOE E4 Variant",
            "category": "disease_risk",
            "genotypes": {"CC": {"risk_level": "HIGH", "description": "APOE E4/E4 genotype."}},
        }]
    }))
    return path


class TestParseCommand:
    """Tests for the parse command."""

    def test_parse(self, genome_file):
        result = runner.invoke(app, ["parse", str(genome_file), "--no-log"])

        assert result.exit_code == 0
        assert "Source: 23andMe" in result.stdout
        assert "Valid variants: 5" in result.stdout
        assert "No-calls: 1" in result.stdout

    def test_parse_stream_to_json(self, genome_file, tmp_path):
        """Test streaming mode with JSON output."""
        output = tmp_path / "result.json"
        result = runner.invoke(app, ["parse", str(genome_file), "--stream", "--no-log", "-o", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["valid_variants"] == 5
        assert data["source"] == "23andMe"

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["parse", str(tmp_path / "nope.txt"), "--no-log"])

        assert result.exit_code == 1
        assert "Input file not found" in result.stdout

    def test_empty_file(self, tmp_path):
        """Test that ingestion errors exit with status 1."""
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        result = runner.invoke(app, ["parse", str(path), "--no-log"])

        assert result.exit_code == 1
        assert "Error: DNA file is empty or invalid" in result.stdout


class TestTraitsCommand:
    """Tests for the traits command."""

    def test_traits(self, genome_file, reference_file):
        result = runner.invoke(app, ["traits", str(genome_file), "-r", str(reference_file), "--no-log"])

        assert result.exit_code == 0
        assert "Traits matched: 1" in result.stdout
        assert "[HIGH] APOE E4 Variant" in result.stdout

    def test_missing_reference(self, genome_file, tmp_path):
        result = runner.invoke(
            app, ["traits", str(genome_file), "-r", str(tmp_path / "nope.json"), "--no-log"]
        )

        assert result.exit_code == 1
        assert "Reference table not found" in result.stdout


class TestOtherCommands:
    """Tests for export, known-snps and version."""

    def test_export(self, genome_file, tmp_path):
        output = tmp_path / "variants.csv"
        result = runner.invoke(app, ["export", str(genome_file), "-o", str(output)])

        assert result.exit_code == 0
        assert "Exported 5 variants" in result.stdout
        assert output.read_text().startswith("rsid,chromosome,position,genotype,confidence\n")

    def test_known_snps(self, reference_file):
        result = runner.invoke(app, ["known-snps", "-r", str(reference_file)])

        assert result.exit_code == 0
        assert "rs429358\tAPOE\tAPOE E4 Variant\tdisease_risk" in result.stdout
        assert "1 SNPs" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "DNATraits version 0.1.0" in result.stdout
