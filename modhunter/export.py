"""
Result export.

Per-residue tables for downstream analysis and a JSON document carrying the
protein-level values and provenance alongside the residue table.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import pandas as pd

from .core.models import SequenceModel

logger = logging.getLogger(__name__)

TSV_COLUMNS = [
    "id", "pos", "aa", "score", "gator_coverage", "predicted_coverage",
    "reader_coverage", "snp_coverage", "conservation", "modifications",
]


def model_to_rows(model: SequenceModel) -> list[dict[str, Any]]:
    """
    Flatten a model into one row per residue.

    Positions are reported 1-indexed.
    """
    mods: dict[int, list[str]] = {}
    for mod in model.confirmed_mods:
        mods.setdefault(mod.position, []).append(mod.label)

    rows = []
    for i, residue in enumerate(model.residues):
        rows.append({
            "id": model.sequence_id or "",
            "pos": i + 1,
            "aa": residue.residue,
            "score": residue.score,
            "gator_coverage": residue.gator_coverage,
            "predicted_coverage": residue.predicted_coverage,
            "reader_coverage": residue.reader_coverage,
            "snp_coverage": residue.snp_coverage,
            "conservation": residue.conservation,
            "modifications": ";".join(mods.get(i, [])),
        })
    return rows


def summarize_model(model: SequenceModel) -> dict[str, Any]:
    """Protein-level values of a model."""
    scores = model.scores
    return {
        "id": model.sequence_id,
        "length": model.sequence_length,
        "tryptic_total": model.tryptic_total,
        "peptide_total": model.peptide_total,
        "predicted_total": model.predicted_total,
        "abundance_score": model.abundance_score,
        "n_terminal": model.n_terminal,
        "c_terminal": model.c_terminal,
        "max_score": max(scores) if scores else 0,
        "n_scored": sum(1 for s in scores if s > 0),
        "confirmed_mods": [m.model_dump() for m in model.confirmed_mods],
        "dropped_evidence": dict(model.dropped_evidence),
        "ignored_sources": list(model.ignored_sources),
    }


def export_to_tsv(
    models: Union[SequenceModel, list[SequenceModel]],
    filepath: Union[str, Path],
) -> Path:
    """
    Export per-residue results to TSV.

    Args:
        models: One model or a list of models
        filepath: Output TSV file path

    Returns:
        Path to created file
    """
    if isinstance(models, SequenceModel):
        models = [models]
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    rows = [row for model in models for row in model_to_rows(model)]
    df = pd.DataFrame(rows, columns=TSV_COLUMNS)
    df.to_csv(filepath, sep="\t", index=False)

    logger.info(f"Exported {len(rows)} residues to {filepath}")
    return filepath


def export_to_json(
    models: Union[SequenceModel, list[SequenceModel]],
    filepath: Union[str, Path],
    include_residues: bool = True,
) -> Path:
    """
    Export protein summaries, optionally with residue tables, to JSON.

    Args:
        models: One model or a list of models
        filepath: Output JSON file path
        include_residues: Include the per-residue rows

    Returns:
        Path to created file
    """
    if isinstance(models, SequenceModel):
        models = [models]
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    documents = []
    for model in models:
        doc = summarize_model(model)
        if include_residues:
            doc["residues"] = model_to_rows(model)
        documents.append(doc)

    with open(filepath, "w") as f:
        json.dump(documents, f, indent=2, default=str)

    logger.info(f"Exported {len(documents)} protein(s) to {filepath}")
    return filepath
