"""CLI for venncv."""

from __future__ import annotations

import logging
import random
from pathlib import Path

import click

from venncv import __version__
from venncv.layout import (
    balance_three_fields,
    check_layout,
    compute_layout,
    relax_and_validate,
    reshuffle_layout,
)
from venncv.layout.validator import Severity
from venncv.logging_config import setup_logging
from venncv.parser import load_document, save_document
from venncv.render import render_svg
from venncv.themes import THEMES


def _load(input_file: Path):
    try:
        return load_document(input_file)
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """venncv: Lay out and render Venn-style research project maps."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output JSON path. Defaults to overwriting the input.")
@click.option("--balance", is_flag=True,
              help="Resize and reposition the fields first (three-field maps).")
@click.option("--full", is_flag=True,
              help="Re-place every project instead of only repairing the layout.")
@click.option("--reshuffle-seed", type=int, default=None,
              help="Re-place projects in a shuffled order seeded with this value.")
def layout(
    input_file: Path,
    output: Path | None,
    balance: bool,
    full: bool,
    reshuffle_seed: int | None,
) -> None:
    """Compute a valid layout for a research map document."""
    doc = _load(input_file)

    if balance:
        balance_three_fields(doc)
    if reshuffle_seed is not None:
        reshuffle_layout(doc, random.Random(reshuffle_seed))
        changed = True
    elif full:
        compute_layout(doc)
        changed = True
    else:
        changed = relax_and_validate(doc) or balance

    if output is None:
        output = input_file
    save_document(doc, output)
    status = "updated" if changed else "unchanged"
    click.echo(f"Laid out {len(doc.projects)} projects in "
               f"{len(doc.fields)} fields ({status}) -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Check a document's layout without changing it."""
    doc = _load(input_file)
    violations = check_layout(doc)

    errors = [v for v in violations if v.severity == Severity.ERROR]
    warnings = [v for v in violations if v.severity == Severity.WARNING]
    for v in warnings:
        click.echo(f"warning: {v.message}", err=True)

    if errors:
        click.echo("Layout errors:", err=True)
        for v in errors:
            click.echo(f"  - {v.message}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(doc.fields)} fields, "
               f"{len(doc.projects)} projects, "
               f"{len(doc.relations)} relations, "
               f"{len(warnings)} warnings")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a research map document."""
    doc = _load(input_file)

    click.echo(f"Fields: {len(doc.fields)}")
    for fid, fld in doc.fields.items():
        click.echo(f"  {fld.name} [{fid}]: "
                   f"{len(doc.projects_in_field(fid))} projects, r={fld.radius:.0f}")
    unassigned = [p for p in doc.projects.values() if not doc.member_fields(p)]
    click.echo(f"Projects: {len(doc.projects)} ({len(unassigned)} outside all fields)")
    graph = doc.relation_graph()
    click.echo(f"Relations: {len(doc.relations)} "
               f"({len(doc.dangling_relations())} dangling, "
               f"{graph.number_of_edges()} drawn)")
    click.echo(f"Tags: {', '.join(doc.tags) if doc.tags else '(none)'}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--width", type=int, default=None, help="SVG width in pixels")
@click.option("--height", type=int, default=None, help="SVG height in pixels")
@click.option("--relayout", is_flag=True, help="Relax and validate before rendering.")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    width: int | None,
    height: int | None,
    relayout: bool,
) -> None:
    """Render a research map document to SVG."""
    doc = _load(input_file)
    if relayout:
        relax_and_validate(doc)

    svg = render_svg(doc, THEMES[theme], width=width, height=height)

    if output is None:
        output = input_file.with_suffix(".svg")
    output.write_text(svg)
    click.echo(f"Rendered {len(doc.fields)} fields, "
               f"{len(doc.projects)} projects, "
               f"{len(doc.relations)} relations -> {output}")
