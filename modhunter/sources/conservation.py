"""Orthology conservation source."""

from __future__ import annotations

from .base import ConservationSource, register_source


@register_source
class OrthologySource(ConservationSource):
    """Per-residue conservation across orthologous proteins."""
    name = "orthology"
    description = "Orthology conservation profile"
