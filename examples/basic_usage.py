#!/usr/bin/env python3
"""
Modhunter Example: Scoring a Chloroplast Protein

This script walks through the Modhunter lifecycle for the mature RuBisCO
small subunit of Arabidopsis thaliana (AT1G67090). Evidence payloads are
written inline in the shapes the source adapters expect; in practice they
are the parsed JSON results of database lookups that complete in any
order.

Run with: python examples/basic_usage.py
"""

from modhunter import Modhunter, list_sources
from modhunter.core.sequence import tryptic_digest
from modhunter.export import model_to_rows
from modhunter.sources import (
    GlycoModSource,
    Pep2ProSource,
    PhosphatSource,
    PpdbSource,
    ProteotypicSource,
    SnpSource,
)


RBCS1A = (
    "MASSMLSSATMVASPAQATMVAPFNGLKSSAAFPATRKANNDITSITSNGGRVNCMKVWPPIGKKKFETLSYLPDLTDSELAK"
    "EVDYLIRNKWIPCVEFELEHGFVYREHGNSPGYYDGRYWTMWKLPLFGCTDSAQVLKEVEECKKEYPNAFIRIIGFDNTRQV"
    "QCISFIAYKPPSFT"
)


def print_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def show_available_sources():
    print_header("Available Evidence Sources")

    for info in list_sources():
        print(f"  {info['name']:<12} {info['kind']:<13} {info['description']}")


def show_digest():
    print_header("In-silico Tryptic Digest")

    fragments = tryptic_digest(RBCS1A)
    print(f"  {len(fragments)} fragments, e.g. {', '.join(fragments[:4])}")


def score_rbcs():
    """
    Aggregate evidence as it arrives and rescore after each batch.

    Experimental peptides suppress the score where they were observed;
    predicted proteotypic peptides that were never observed raise it.
    """
    print_header("RBCS1A (AT1G67090)")

    session = Modhunter(RBCS1A, sequence_id="AT1G67090")

    # First results: a proteotypic prediction and one peptide database
    session.add(ProteotypicSource({"peptides": [
        {"sequence": "VWPPIGK"},
        {"sequence": "YWTMWK"},
        {"sequence": "LPLFGCTDSAQVLK"},
        {"sequence": "IIGFDNTR"},
    ]}))
    session.add(PpdbSource({"peptides": [
        {"sequence": "FETLSYLPDLTDSELAK", "experiments": ["e1", "e2", "e3", "e4"]},
        {"sequence": "EVDYLIR", "experiments": ["e1", "e2"]},
    ]}))
    session.recompute()
    print(f"  After 2 sources: abundance={session.abundance_score}, max score={max(session.scores)}")

    # More evidence arrives later
    session.add(Pep2ProSource({"peptides": [
        {"sequence": "EHGNSPGYYDGR", "qty_spectra": "12"},
        {"sequence": "FETLSYLPDLTDSELAK", "qty_spectra": "30"},
        {"sequence": "QVQCISFIAYKPPSFT", "qty_spectra": "8"},
    ]}))
    session.add(SnpSource({"snps": {"Ler": [[57, "K", "R"]]}}))
    session.add(PhosphatSource({"positions": [134]}))
    session.add(GlycoModSource({"peptides": [{"sequence": "ANNDITSITSNGGR", "de_index": [3]}]}))
    model = session.recompute()
    print(f"  After 6 sources: abundance={model.abundance_score}, max score={max(model.scores)}")

    if model.n_terminal is not None:
        print(f"  N-terminal processing zone ends at residue {model.n_terminal + 1}")

    print("\n  Top candidate residues:")
    rows = sorted(model_to_rows(model), key=lambda r: r["score"], reverse=True)
    for row in rows[:8]:
        print(
            f"    {row['aa']}{row['pos']:<4} score={row['score']:<3} "
            f"coverage={row['gator_coverage']:<5g} {row['modifications']}"
        )

    print("\n  Confirmed modifications:")
    for position, label in session.confirmed_mods:
        print(f"    {RBCS1A[position]}{position + 1}: {label}")

    if model.total_dropped:
        print(f"\n  Dropped evidence: {model.dropped_evidence}")


def main():
    """Run the example."""
    print("\n" + "=" * 70)
    print("  Modhunter Example: Scoring a Chloroplast Protein")
    print("=" * 70)

    show_available_sources()
    show_digest()
    score_rbcs()

    print("\n" + "=" * 70)
    print("  Example complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
