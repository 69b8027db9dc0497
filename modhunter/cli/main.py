"""
Modhunter Command Line Interface.

Scores protein sequences against evidence payloads that were already
retrieved and saved as JSON. Built with Click, with Rich for terminal
output.

Usage:
    modhunter score proteins.fasta -e ppdb=ppdb.json -e proteotypic=pred.json
    modhunter list-sources
    modhunter digest MKWVTFISLLLLFSSAYSRGVFRR
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import __version__

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, quiet: bool):
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_evidence(ctx, param, values: tuple) -> list[tuple[str, Path]]:
    parsed = []
    for value in values:
        name, sep, path = value.partition("=")
        if not sep or not name or not path:
            raise click.BadParameter(f"expected NAME=PATH, got {value!r}")
        path = Path(path)
        if not path.exists():
            raise click.BadParameter(f"file not found: {path}")
        parsed.append((name.strip().lower(), path))
    return parsed


def _payload_for(payload: dict, protein_id: str) -> Optional[dict]:
    """Per-protein payload: ``results`` keyed by accession, else the whole file."""
    if isinstance(payload.get("results"), dict):
        data = payload["results"].get(protein_id)
        if data is not None and not isinstance(data, dict):
            logger.warning(f"Ignoring non-object result for {protein_id}")
            return None
        return data
    return payload


@click.group()
@click.version_option(version=__version__, prog_name="Modhunter")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress warnings")
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool):
    """
    Modhunter: find likely unreported post-translational modification sites.

    \b
    • Aggregates peptide, variant and modification evidence per residue
    • Estimates protein abundance from a tryptic digest model
    • Scores every residue from 0 to 100
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    _configure_logging(verbose, quiet)


@cli.command("score")
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "--evidence", "-e",
    multiple=True,
    callback=_parse_evidence,
    help="Evidence payload as SOURCE=PATH.json (repeatable)"
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write per-residue results to this file"
)
@click.option(
    "--format", "-f",
    type=click.Choice(["json", "tsv"]),
    default="json",
    help="Output format for results"
)
@click.option(
    "--top", "-n",
    type=int,
    default=5,
    help="Highest-scoring residues to show per protein"
)
@click.pass_context
def score(ctx, input_file: str, evidence: list, output: Optional[str], format: str, top: int):
    """
    Score the sequences in INPUT_FILE against saved evidence payloads.

    Each payload file holds one source's parsed JSON result. A file with a
    top-level "results" object is read per protein accession; any other file
    applies to every sequence.

    \b
    Examples:
        modhunter score query.fasta -e ppdb=ppdb.json
        modhunter score proteins.fasta -e pep2pro=p2p.json -o out.tsv -f tsv
    """
    from ..core.sequence import SequenceError, parse_fasta
    from ..engine import aggregate, load, recompute
    from ..export import export_to_json, export_to_tsv
    from ..sources import UnknownSourceError, get_source

    try:
        proteins = list(parse_fasta(Path(input_file)))
    except (SequenceError, ValueError) as e:
        console.print(f"[red]✗ Error loading sequences:[/red] {e}")
        sys.exit(1)

    payloads = {}
    for name, path in evidence:
        try:
            with open(path) as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            console.print(f"[red]✗ Error loading evidence {path}:[/red] {e}")
            sys.exit(1)
        if not isinstance(payload, dict):
            console.print(
                f"[red]✗ Error loading evidence {path}:[/red] "
                f"expected a JSON object, got {type(payload).__name__}"
            )
            sys.exit(1)
        payloads[name] = payload

    models = []
    for protein_id, sequence in proteins:
        model = load(sequence, protein_id)
        for name, payload in payloads.items():
            data = _payload_for(payload, protein_id)
            if data is None:
                continue
            try:
                source = get_source(name, data, agi=protein_id)
            except UnknownSourceError as e:
                console.print(f"[red]✗[/red] {e}")
                sys.exit(1)
            aggregate(model, source)
        models.append(recompute(model))

    if output:
        writer = export_to_tsv if format == "tsv" else export_to_json
        path = writer(models, output)
        console.print(f"[green]✓[/green] Results saved to: {path}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Protein")
    table.add_column("Length", justify="right")
    table.add_column("Abundance", justify="right")
    table.add_column("Top residues")
    table.add_column("Confirmed mods", justify="right")
    table.add_column("Dropped", justify="right")

    for model in models:
        ranked = sorted(
            range(model.sequence_length), key=lambda i: model.residues[i].score, reverse=True
        )
        top_residues = ", ".join(
            f"{model.whole_sequence[i]}{i + 1}:{model.residues[i].score}"
            for i in ranked[:top] if model.residues[i].score > 0
        )
        table.add_row(
            model.sequence_id,
            str(model.sequence_length),
            str(model.abundance_score),
            top_residues or "-",
            str(len(model.confirmed_mods)),
            str(model.total_dropped),
        )

    console.print(table)


@cli.command("list-sources")
@click.option("--detailed", "-d", is_flag=True, help="Show weight rules and labels")
def list_sources_cmd(detailed: bool):
    """List all registered evidence sources and their evidence kinds."""
    from ..sources import list_sources

    table = Table(title="Evidence Sources", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Description")
    if detailed:
        table.add_column("Weight / label")

    for info in list_sources():
        row = [info["name"], info["kind"], info["description"]]
        if detailed:
            row.append(info.get("weight") or info.get("label") or "-")
        table.add_row(*row)

    console.print(table)


@cli.command("digest")
@click.argument("sequence")
def digest_cmd(sequence: str):
    """Show the in-silico tryptic digest of SEQUENCE."""
    from ..core.sequence import clean_sequence, tryptic_digest, tryptic_total

    seq = clean_sequence(sequence)
    if not seq:
        console.print("[red]✗ Empty sequence[/red]")
        sys.exit(1)

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("Fragment")

    start = 1
    for i, fragment in enumerate(tryptic_digest(seq), 1):
        table.add_row(str(i), str(start), fragment)
        start += len(fragment)

    console.print(table)
    console.print(f"Tryptic total: [bold]{tryptic_total(seq)}[/bold]")


@cli.command("validate-sequence")
@click.argument("sequence", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="FASTA file to validate")
def validate_sequence(sequence: Optional[str], file: Optional[str]):
    """Check that sequences can be loaded for scoring."""
    from ..core.sequence import SequenceValidator, parse_fasta

    validator = SequenceValidator()

    if file:
        sequences = list(parse_fasta(Path(file), clean=False))
    elif sequence:
        sequences = [("input", sequence)]
    else:
        console.print("[red]Provide a sequence or --file[/red]")
        sys.exit(1)

    all_valid = True
    for seq_id, seq in sequences:
        is_valid, errors = validator.validate(seq)
        if is_valid:
            console.print(f"[green]✓[/green] {seq_id}: Valid ({len(seq)} residues)")
        else:
            all_valid = False
            console.print(f"[red]✗[/red] {seq_id}: Invalid")
            for error in errors:
                console.print(f"    - {error}")

    sys.exit(0 if all_valid else 1)


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
