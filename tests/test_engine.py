"""
End-to-end tests for the load / aggregate / recompute lifecycle.
"""

import pytest

from modhunter import (
    InvalidInputError,
    Modhunter,
    aggregate,
    annotate,
    load,
    recompute,
)
from modhunter.sources import (
    GlycoModSource,
    PhosphatSource,
    PpdbSource,
    ProteotypicSource,
    PubmedSource,
    SnpSource,
)


# 100-residue protein with three tryptic fragments
LONG_SEQUENCE = "A" * 40 + "MKPVKRAGWE" + "A" * 50


class TestLoad:

    def test_zeroed_model(self):
        model = load("MKPVKRAG")

        assert model.tryptic_total == 3
        assert model.peptide_total == 0
        assert model.predicted_total == 0
        assert model.abundance_score == 0
        assert all(r.score == 0 for r in model.residues)

    @pytest.mark.parametrize("sequence", ["", "mkpv", "MK PV", "MKPV1", None])
    def test_invalid_sequences(self, sequence):
        with pytest.raises(InvalidInputError):
            load(sequence)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            load("")

    def test_ambiguous_letters_accepted(self):
        assert len(load("MKXBZ")) == 5


class TestRecompute:
    """Tests for the derived pass."""

    def test_no_evidence(self):
        model = recompute(load("MKPVKRAG"))
        assert model.abundance_score == 0
        assert model.scores == [0] * 8
        assert model.n_terminal is None
        assert model.c_terminal is None

    def test_returns_same_model(self):
        model = load("MKPVKRAG")
        assert recompute(model) is model

    def test_idempotent(self):
        model = load(LONG_SEQUENCE)
        aggregate(model, PpdbSource({"peptides": [
            {"sequence": "MKPVKRAGWE", "experiments": [1, 2, 3]},
        ]}))
        aggregate(model, ProteotypicSource({"peptides": [{"sequence": "KRAG"}]}))

        first = recompute(model).model_dump()
        second = recompute(model).model_dump()
        assert first == second

    def test_scores_follow_new_evidence(self):
        model = load("MKPVKRAG")
        aggregate(model, ProteotypicSource({"peptides": [{"sequence": "PVKR"}]}))
        recompute(model)
        assert model.scores == [0] * 8

        # peptide_total 2 over 3 tryptic fragments: density 66.7, abundance 40
        aggregate(model, PubmedSource({"peptides": [{"sequence": "MK"}, {"sequence": "AG"}]}))
        recompute(model)
        assert model.abundance_score == 40
        assert model.scores == [0, 0, 40, 40, 40, 40, 0, 0]

    def test_low_abundance_scores_zero(self):
        """One observed peptide on a protein with many tryptic fragments."""
        sequence = "MK" + "AGK" * 30
        model = load(sequence)
        aggregate(model, PubmedSource({"peptides": [{"sequence": "AGK"}]}))
        aggregate(model, ProteotypicSource({"peptides": [{"sequence": sequence}]}))
        recompute(model)

        assert model.abundance_score <= 20
        assert model.scores == [0] * len(sequence)

    def test_provenance_does_not_change_scores(self):
        sources = [
            PpdbSource({"peptides": [{"sequence": "MKPVKRAGWE", "experiments": [1, 2]}]}),
            ProteotypicSource({"peptides": [{"sequence": "AAAAMKPV"}]}),
        ]
        plain = annotate(LONG_SEQUENCE, sources)
        decorated = annotate(LONG_SEQUENCE, sources + [
            SnpSource({"snps": {"Col-0": [[42, "K", "E"]]}}),
            PhosphatSource({"positions": [43]}),
            GlycoModSource({"peptides": [{"sequence": "PVKR", "de_index": [1]}]}),
        ])

        assert plain.scores == decorated.scores
        assert len(decorated.confirmed_mods) == 2


class TestAnnotate:

    def test_annotate(self):
        model = annotate(
            "MKPVKRAG",
            [PubmedSource({"peptides": [{"sequence": "MK"}, {"sequence": "AG"}]})],
            sequence_id="P1",
        )
        assert model.sequence_id == "P1"
        assert model.peptide_total == 2
        assert model.abundance_score == 40

    def test_annotate_without_sources(self):
        model = annotate("MKPVKRAG")
        assert model.scores == [0] * 8


class TestModhunterSession:
    """Tests for the session wrapper."""

    def test_lifecycle(self):
        session = Modhunter("MKPVKRAG", sequence_id="AT1G01010")
        session.add(PubmedSource({"peptides": [{"sequence": "MK"}, {"sequence": "AG"}]}))
        session.add(ProteotypicSource({"peptides": [{"sequence": "PVKR"}]}))
        session.add(GlycoModSource({"peptides": [{"sequence": "PVKR", "de_index": [2]}]}))
        session.recompute()

        assert session.abundance_score == 40
        assert session.scores == [0, 0, 40, 40, 40, 40, 0, 0]
        assert session.confirmed_mods == [(3, "Glycosylation")]
        assert len(session.reports) == 3

    def test_repr(self):
        session = Modhunter("MKPV", sequence_id="P1")
        assert "P1" in repr(session)

    def test_invalid_sequence(self):
        with pytest.raises(InvalidInputError):
            Modhunter("")
