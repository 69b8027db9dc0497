"""
Command-line interface for Modhunter.

Usage patterns:
    modhunter score sequences.fasta -e ppdb=ppdb.json -o results.tsv -f tsv
    modhunter list-sources --detailed
    modhunter digest SEQUENCE
"""

from .main import cli, main

__all__ = ["cli", "main"]
