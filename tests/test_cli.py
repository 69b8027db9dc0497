"""
Tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from modhunter import __version__
from modhunter.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fasta(tmp_path):
    path = tmp_path / "proteins.fasta"
    path.write_text(">AT1G01010\nMKPVKRAG\n>AT1G01020\nMASGRKPLE\n")
    return path


class TestGroup:

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "score" in result.output
        assert "list-sources" in result.output


class TestDigest:

    def test_digest(self, runner):
        result = runner.invoke(cli, ["digest", "mkpvkrag"])

        assert result.exit_code == 0
        assert "MKPVK" in result.output
        assert "Tryptic total: 3" in result.output

    def test_empty(self, runner):
        result = runner.invoke(cli, ["digest", "123"])
        assert result.exit_code == 1


class TestListSources:

    def test_lists_all(self, runner):
        result = runner.invoke(cli, ["list-sources"])

        assert result.exit_code == 0
        for name in ("ppdb", "proteotypic", "snp", "phosphat", "orthology"):
            assert name in result.output

    def test_detailed(self, runner):
        result = runner.invoke(cli, ["list-sources", "--detailed"])
        assert result.exit_code == 0
        assert "Glycosylation" in result.output


class TestValidate:

    def test_valid(self, runner):
        result = runner.invoke(cli, ["validate-sequence", "MKPVKRAG"])
        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_invalid(self, runner):
        result = runner.invoke(cli, ["validate-sequence", "MK1"])
        assert result.exit_code == 1
        assert "Invalid" in result.output

    def test_file(self, runner, fasta):
        result = runner.invoke(cli, ["validate-sequence", "--file", str(fasta)])
        assert result.exit_code == 0

    def test_missing_input(self, runner):
        result = runner.invoke(cli, ["validate-sequence"])
        assert result.exit_code == 1


class TestScore:
    """Tests for the score command."""

    def test_shared_payload(self, runner, fasta, tmp_path):
        payload = tmp_path / "pubmed.json"
        payload.write_text(json.dumps({"peptides": [{"sequence": "MK"}, {"sequence": "AG"}]}))
        predicted = tmp_path / "pred.json"
        predicted.write_text(json.dumps({"peptides": [{"sequence": "PVKR"}]}))
        output = tmp_path / "scores.tsv"

        result = runner.invoke(cli, [
            "score", str(fasta),
            "-e", f"pubmed={payload}",
            "-e", f"proteotypic={predicted}",
            "-o", str(output), "-f", "tsv",
        ])

        assert result.exit_code == 0, result.output
        assert "AT1G01010" in result.output
        lines = output.read_text().splitlines()
        # header + 8 + 9 residues
        assert len(lines) == 18
        assert lines[3].split("\t")[:4] == ["AT1G01010", "3", "P", "40"]

    def test_per_protein_payload(self, runner, fasta, tmp_path):
        payload = tmp_path / "phosphat.json"
        payload.write_text(json.dumps({"results": {"AT1G01020": {"positions": [3]}}}))
        output = tmp_path / "scores.json"

        result = runner.invoke(cli, [
            "score", str(fasta), "-e", f"phosphat={payload}", "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        documents = {d["id"]: d for d in json.loads(output.read_text())}
        assert documents["AT1G01010"]["confirmed_mods"] == []
        assert documents["AT1G01020"]["confirmed_mods"][0]["position"] == 2

    def test_unknown_source(self, runner, fasta, tmp_path):
        payload = tmp_path / "x.json"
        payload.write_text("{}")
        result = runner.invoke(cli, ["score", str(fasta), "-e", f"nope={payload}"])
        assert result.exit_code == 1

    def test_bad_evidence_option(self, runner, fasta):
        result = runner.invoke(cli, ["score", str(fasta), "-e", "ppdb"])
        assert result.exit_code == 2

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", '"ppdb"'])
    def test_unusable_payload_file(self, runner, fasta, tmp_path, content):
        payload = tmp_path / "ppdb.json"
        payload.write_text(content)

        result = runner.invoke(cli, ["score", str(fasta), "-e", f"ppdb={payload}"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error loading evidence" in result.output

    def test_non_object_protein_result_skipped(self, runner, fasta, tmp_path):
        payload = tmp_path / "phosphat.json"
        payload.write_text(json.dumps({"results": {
            "AT1G01010": [5],
            "AT1G01020": {"positions": [3]},
        }}))
        output = tmp_path / "scores.json"

        result = runner.invoke(cli, [
            "score", str(fasta), "-e", f"phosphat={payload}", "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        documents = {d["id"]: d for d in json.loads(output.read_text())}
        assert documents["AT1G01010"]["confirmed_mods"] == []
        assert documents["AT1G01020"]["confirmed_mods"][0]["position"] == 2
