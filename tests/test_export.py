"""
Tests for result export.
"""

import json

import pytest

from modhunter import annotate
from modhunter.export import (
    TSV_COLUMNS,
    export_to_json,
    export_to_tsv,
    model_to_rows,
    summarize_model,
)
from modhunter.sources import GlycoModSource, ProteotypicSource, PubmedSource


@pytest.fixture
def model():
    return annotate(
        "MKPVKRAG",
        [
            PubmedSource({"peptides": [{"sequence": "MK"}, {"sequence": "AG"}, {"sequence": "WW"}]}),
            ProteotypicSource({"peptides": [{"sequence": "PVKR"}]}),
            GlycoModSource({"peptides": [{"sequence": "PVKR", "de_index": [2]}]}),
        ],
        sequence_id="AT1G01010",
    )


class TestRows:

    def test_one_row_per_residue(self, model):
        rows = model_to_rows(model)

        assert len(rows) == 8
        assert [r["pos"] for r in rows] == list(range(1, 9))
        assert "".join(r["aa"] for r in rows) == "MKPVKRAG"
        assert all(set(r) == set(TSV_COLUMNS) for r in rows)

    def test_modifications_column(self, model):
        rows = model_to_rows(model)
        assert rows[3]["modifications"] == "Glycosylation"
        assert rows[2]["modifications"] == ""

    def test_summary(self, model):
        summary = summarize_model(model)

        assert summary["id"] == "AT1G01010"
        assert summary["length"] == 8
        assert summary["tryptic_total"] == 3
        assert summary["abundance_score"] == 40
        assert summary["max_score"] == 40
        assert summary["n_scored"] == 4
        assert summary["dropped_evidence"] == {"pubmed": 1}
        assert summary["confirmed_mods"][0]["label"] == "Glycosylation"


class TestFiles:

    def test_tsv(self, model, tmp_path):
        path = export_to_tsv(model, tmp_path / "out" / "scores.tsv")

        lines = path.read_text().splitlines()
        assert lines[0].split("\t") == TSV_COLUMNS
        assert len(lines) == 9
        fields = lines[3].split("\t")
        assert fields[:4] == ["AT1G01010", "3", "P", "40"]

    def test_tsv_multiple_models(self, model, tmp_path):
        path = export_to_tsv([model, model], tmp_path / "scores.tsv")
        assert len(path.read_text().splitlines()) == 17

    def test_json(self, model, tmp_path):
        path = export_to_json(model, tmp_path / "scores.json")

        documents = json.loads(path.read_text())
        assert len(documents) == 1
        assert documents[0]["id"] == "AT1G01010"
        assert len(documents[0]["residues"]) == 8

    def test_json_without_residues(self, model, tmp_path):
        path = export_to_json([model], tmp_path / "scores.json", include_residues=False)
        assert "residues" not in json.loads(path.read_text())[0]
