"""
Tests for Modhunter data models.

The sequence model is the accumulator every evidence source writes into;
these tests pin its initial state and helper behaviour.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from modhunter import load
from modhunter.core.models import ConfirmedModification, ResidueRecord, SequenceModel


class TestResidueRecord:
    """Tests for per-residue records."""

    def test_defaults(self):
        record = ResidueRecord(residue="K")
        assert record.gator_coverage == 0
        assert record.predicted_coverage == 0
        assert record.reader_coverage == 0
        assert record.snp_coverage == 0
        assert record.conservation is None
        assert record.score == 0
        assert not record.is_covered

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            ResidueRecord(residue="K", score=101)
        with pytest.raises(ValidationError):
            ResidueRecord(residue="K", score=-1)

    def test_single_letter(self):
        with pytest.raises(ValidationError):
            ResidueRecord(residue="KR")


class TestSequenceModel:
    """Tests for the per-protein model."""

    @pytest.fixture
    def model(self):
        return load("MKPVKRAG", sequence_id="AT1G01010")

    def test_initial_state(self, model):
        assert model.whole_sequence == "MKPVKRAG"
        assert len(model.residues) == 8
        assert [r.residue for r in model.residues] == list("MKPVKRAG")
        assert model.predicted_total == 0
        assert model.peptide_total == 0
        assert model.abundance_score == 0
        assert model.n_terminal is None
        assert model.c_terminal is None
        assert model.confirmed_mods == []
        assert model.dropped_evidence == {}

    def test_length(self, model):
        assert len(model) == 8
        assert model.sequence_length == 8

    def test_sequence_is_immutable(self, model):
        with pytest.raises(ValidationError):
            model.whole_sequence = "MAGV"

    def test_residue_count_must_match(self):
        with pytest.raises(ValidationError, match="residues length"):
            SequenceModel(
                whole_sequence="MKPV",
                residues=[ResidueRecord(residue="M")],
            )

    def test_find_peptide(self, model):
        assert model.find_peptide("PVK") == 2
        assert model.find_peptide("MK") == 0
        assert model.find_peptide("WWW") == -1
        assert model.find_peptide("") == -1

    def test_find_peptide_first_match(self):
        model = load("AKAKAK")
        assert model.find_peptide("AK") == 0

    def test_coverage_array(self, model):
        model.residues[2].gator_coverage = 3
        arr = model.coverage_array("gator_coverage")
        assert isinstance(arr, np.ndarray)
        assert arr.tolist() == [0, 0, 3, 0, 0, 0, 0, 0]

    def test_coverage_array_unknown_counter(self, model):
        with pytest.raises(ValueError):
            model.coverage_array("residue")
        with pytest.raises(ValueError):
            model.coverage_array("nonexistent")

    def test_record_dropped(self, model):
        model.record_dropped("ppdb")
        model.record_dropped("ppdb", 2)
        model.record_dropped("snp", 0)
        assert model.dropped_evidence == {"ppdb": 3}
        assert model.total_dropped == 3

    def test_terminal_zone_membership(self, model):
        assert not model.in_terminal_zone(0)

        model.n_terminal = 0
        model.c_terminal = 6
        assert model.in_terminal_zone(0)
        assert not model.in_terminal_zone(1)
        assert model.in_terminal_zone(6)
        assert model.in_terminal_zone(7)

    def test_mods_at(self, model):
        model.confirmed_mods.append(ConfirmedModification(position=3, label="Glycosylation"))
        model.confirmed_mods.append(ConfirmedModification(position=3, label="Phosphorylation"))
        assert model.mods_at(3) == ["Glycosylation", "Phosphorylation"]
        assert model.mods_at(4) == []

    def test_serialization(self, model):
        data = model.model_dump()
        restored = SequenceModel.model_validate(data)
        assert restored == model


class TestConfirmedModification:

    def test_as_tuple(self):
        mod = ConfirmedModification(position=4, label="Phosphorylation", source="phosphat")
        assert mod.as_tuple() == (4, "Phosphorylation")

    def test_position_non_negative(self):
        with pytest.raises(ValidationError):
            ConfirmedModification(position=-1, label="Phosphorylation")
