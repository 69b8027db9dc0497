"""
Evidence source adapters.

Each adapter wraps the parsed result of one external lookup and normalizes
it into an ``EvidenceBatch`` of a single ``EvidenceKind``:

    - generic: experimental peptides (ppdb, atpeptide, pep2pro, atchloro,
      gelmap, pubmed)
    - predicted: proteotypic peptide predictions (proteotypic)
    - variant: nonsynonymous SNPs (snp)
    - modification: confirmed modification sites (rnaedit, glycomod,
      phosphat, ubiquitin, rippdb, mox, nterm, sno)
    - conservation: orthology conservation (orthology)

Importing this package registers all of the above.
"""

from .base import (
    ConservationSource,
    EvidenceBatch,
    EvidenceKind,
    EvidenceSource,
    ModificationSite,
    ModificationSource,
    PeptideHit,
    PeptideSource,
    PredictedPeptideSource,
    SnpPayloadMixin,
    SourceError,
    UnknownSourceError,
    VariantSource,
    WeightMode,
    WeightRule,
    get_source,
    list_sources,
    register_source,
)
from .conservation import OrthologySource
from .modifications import (
    GlycoModSource,
    MoxSource,
    NTermSource,
    PeptideModificationSource,
    PhosphatSource,
    RippdbSource,
    SnoSource,
    UbiquitinSource,
)
from .peptides import (
    AtChloroSource,
    AtPeptideSource,
    GelMapSource,
    Pep2ProSource,
    PpdbSource,
    ProteotypicSource,
    PubmedSource,
)
from .variants import RnaEditSource, SnpSource

__all__ = [
    # Interface
    "EvidenceKind",
    "EvidenceSource",
    "EvidenceBatch",
    "PeptideHit",
    "ModificationSite",
    "WeightMode",
    "WeightRule",
    "SourceError",
    "UnknownSourceError",
    # Base classes
    "PeptideSource",
    "PredictedPeptideSource",
    "SnpPayloadMixin",
    "VariantSource",
    "ModificationSource",
    "PeptideModificationSource",
    "ConservationSource",
    # Registry
    "register_source",
    "get_source",
    "list_sources",
    # Concrete sources
    "PpdbSource",
    "AtPeptideSource",
    "Pep2ProSource",
    "AtChloroSource",
    "GelMapSource",
    "PubmedSource",
    "ProteotypicSource",
    "SnpSource",
    "RnaEditSource",
    "GlycoModSource",
    "PhosphatSource",
    "UbiquitinSource",
    "RippdbSource",
    "MoxSource",
    "NTermSource",
    "SnoSource",
    "OrthologySource",
]
