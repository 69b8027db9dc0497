"""
Modification-site evidence sources.

These sources report residues already known to carry a modification, either
as offsets inside an observed peptide (resolved against the protein by
substring search during aggregation) or as positions on the whole protein.
Their sites are provenance only; they do not change coverage or scores.
"""

from __future__ import annotations

import logging
from typing import Any

from .base import ModificationSite, ModificationSource, as_list, register_source

logger = logging.getLogger(__name__)


class PeptideModificationSource(ModificationSource):
    """
    Modification source whose payload lists peptides with 1-based site
    offsets in ``position_field``.
    """

    position_field: str = "positions"

    def get_peptides(self) -> list[dict[str, Any]]:
        peptides = self._raw_data.get("peptides")
        if peptides is None and isinstance(self._raw_data.get("data"), dict):
            peptides = self._raw_data["data"].get("peptides")
        return as_list(peptides)

    def _sites_for(self, peptide: Any) -> list[ModificationSite]:
        if not isinstance(peptide, dict):
            self._rejected += 1
            return []
        sequence = peptide.get("sequence")
        offsets = as_list(peptide.get(self.position_field))
        if not sequence:
            self._rejected += len(offsets) or 1
            return []

        sites = []
        for offset in offsets:
            try:
                sites.append(ModificationSite(position=int(offset), label=self.label, peptide=sequence))
            except (TypeError, ValueError, OverflowError):
                logger.debug(f"{self.name}: bad site {offset!r} on peptide {sequence!r}")
                self._rejected += 1
        return sites

    def get_modifications(self) -> list[ModificationSite]:
        sites = []
        for peptide in self.get_peptides():
            sites.extend(self._sites_for(peptide))
        return sites

    def get_all_experimental_positions(self) -> list[int]:
        """Distinct peptide-relative site offsets, in first-seen order."""
        seen = []
        for peptide in self.get_peptides():
            if not isinstance(peptide, dict):
                continue
            for pos in as_list(peptide.get(self.position_field)):
                if pos not in seen:
                    seen.append(pos)
        return seen


@register_source
class GlycoModSource(PeptideModificationSource):
    name = "glycomod"
    description = "Glycosylation sites from deamidation-tagged peptides"
    label = "Glycosylation"
    position_field = "de_index"


@register_source
class UbiquitinSource(PeptideModificationSource):
    name = "ubiquitin"
    description = "Ubiquitination sites"
    label = "Ubiquitination"


@register_source
class MoxSource(PeptideModificationSource):
    name = "mox"
    description = "Methionine oxidation sites"
    label = "Methionine oxidation"


@register_source
class NTermSource(PeptideModificationSource):
    name = "nterm"
    description = "N-terminal processing sites"
    label = "N-terminal processing"


@register_source
class SnoSource(PeptideModificationSource):
    name = "sno"
    description = "S-nitrosylation sites"
    label = "S-nitrosylation"


@register_source
class RippdbSource(PeptideModificationSource):
    """
    Phosphorylation spectra grouped by spectrum.

    Payload: ``{"spectra": [{"peptides": [{"sequence", "positions"}]}]}``
    """
    name = "rippdb"
    description = "RIPP-DB phosphopeptide spectra"
    label = "Phosphorylation"

    def get_spectra(self) -> list[dict[str, Any]]:
        return as_list(self._raw_data.get("spectra"))

    def get_peptides(self) -> list[dict[str, Any]]:
        peptides = []
        for spectrum in self.get_spectra():
            if isinstance(spectrum, dict):
                peptides.extend(as_list(spectrum.get("peptides")))
            else:
                # Rejected as a malformed peptide record
                peptides.append(spectrum)
        return peptides


@register_source
class PhosphatSource(ModificationSource):
    """
    PhosPhAt experimentally verified phosphorylation sites.

    Payload: ``{"positions": [...]}`` with 1-based positions on the
    whole protein.
    """
    name = "phosphat"
    description = "PhosPhAt experimental phosphorylation sites"
    label = "Phosphorylation"

    def get_all_experimental_positions(self) -> list[int]:
        positions = []
        for pos in as_list(self._raw_data.get("positions")):
            if pos not in positions:
                positions.append(pos)
        return positions

    def get_modifications(self) -> list[ModificationSite]:
        sites = []
        for pos in self.get_all_experimental_positions():
            try:
                sites.append(ModificationSite(position=int(pos), label=self.label))
            except (TypeError, ValueError, OverflowError):
                logger.debug(f"{self.name}: bad position {pos!r}")
                self._rejected += 1
        return sites
