"""
Peptide evidence sources.

Experimental shotgun-proteomics databases report the peptides they observed
for a protein, sometimes with a spectral count or the list of experiments
or tissues the peptide was seen in. Each source below declares how that
count is read; sources without one count every peptide once.

The proteotypic source is the one predictive peptide source: its peptides
mark where the protein is expected to be observable, not where it was
observed, and feed the predicted-coverage counter instead.
"""

from __future__ import annotations

from .base import (
    PeptideSource,
    PredictedPeptideSource,
    WeightMode,
    WeightRule,
    register_source,
)


@register_source
class PpdbSource(PeptideSource):
    """Plant Proteome Database; count = number of experiments."""
    name = "ppdb"
    description = "Plant Proteome Database experimental peptides"
    weight_rule = WeightRule("experiments", WeightMode.LENGTH)


@register_source
class AtPeptideSource(PeptideSource):
    """AtProteome tissue atlas; count = number of tissues."""
    name = "atpeptide"
    description = "AtProteome peptides by tissue"
    weight_rule = WeightRule("tissues", WeightMode.LENGTH)


@register_source
class Pep2ProSource(PeptideSource):
    name = "pep2pro"
    description = "pep2pro peptides with spectral counts"
    weight_rule = WeightRule("qty_spectra", WeightMode.VALUE)


@register_source
class AtChloroSource(PeptideSource):
    name = "atchloro"
    description = "AT_CHLORO chloroplast proteomics peptides"


@register_source
class GelMapSource(PeptideSource):
    name = "gelmap"
    description = "GelMap 2D-gel identified peptides"


@register_source
class PubmedSource(PeptideSource):
    name = "pubmed"
    description = "Literature-curated peptides"


@register_source
class ProteotypicSource(PredictedPeptideSource):
    """
    Predicted proteotypic peptides.

    Records carry a ``pvalue``, but predicted coverage counts every
    peptide once, so no weight rule is declared.
    """
    name = "proteotypic"
    description = "Predicted proteotypic peptides"
