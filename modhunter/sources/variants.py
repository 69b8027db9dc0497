"""
Variant evidence sources.

Both sources read the same payload shape, a mapping from transcript
accession to ``[position, from, to]`` triples with 1-based protein
positions. SNPs are counted per residue; RNA edits are recorded as
confirmed modifications.
"""

from __future__ import annotations

from .base import (
    ModificationSite,
    ModificationSource,
    SnpPayloadMixin,
    VariantSource,
    register_source,
)


@register_source
class SnpSource(VariantSource):
    name = "snp"
    description = "Nonsynonymous SNPs across ecotype accessions"


@register_source
class RnaEditSource(SnpPayloadMixin, ModificationSource):
    """RNA editing events that change the encoded residue."""
    name = "rnaedit"
    description = "RNA editing sites"
    label = "RNA Edit"

    def get_modifications(self) -> list[ModificationSite]:
        sites = []
        for accession in self.get_accessions():
            for edit in self.get_snp(accession):
                try:
                    position = int(edit[0])
                    from_aa, to_aa = edit[1], edit[2]
                except (IndexError, TypeError, ValueError, OverflowError):
                    self._rejected += 1
                    continue
                sites.append(ModificationSite(
                    position=position,
                    label=f"{self.label} ({from_aa} to {to_aa})",
                ))
        return sites
