"""
Modhunter test suite.

Tests are organized by module:
- test_sequence: Sequence cleaning, FASTA parsing, tryptic digest
- test_models: Per-protein and per-residue data models
- test_sources: Evidence source adapters and registry
- test_aggregation: Folding evidence into models
- test_scoring: Abundance estimation and per-residue scores
- test_engine: End-to-end load / aggregate / recompute
- test_export: TSV and JSON export
- test_cli: Command-line interface
"""
