"""
Command-line interface for protein interaction graph analysis
"""

import click
import logging
from pathlib import Path
from .errors import ProteinGraphError
from .identity import Identifier
from .ingestion import TableFormat, load_graph

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _load(ctx, file_path):
    sep = ctx.obj['sep']
    table_format = TableFormat(sep=sep) if sep else TableFormat.for_path(Path(file_path))
    return load_graph(Path(file_path), table_format)


def _echo_summary(graph):
    summary = graph.summary()
    click.echo("=== Network Summary ===")
    click.echo(f"Proteins: {summary.num_nodes:,}")
    click.echo(f"Interactions: {summary.num_edges:,}")
    click.echo(f"  - Duplicate: {summary.num_duplicate_edges:,}")
    click.echo(f"  - Redundant: {summary.num_redundant_edges:,}")
    click.echo(f"Components: {summary.num_components:,}")
    click.echo(f"Unconnected proteins: {summary.num_unconnected:,}")
    click.echo(f"Density: {summary.density:.4f}")
    click.echo(f"Connected: {'yes' if summary.is_connected else 'no'}")


@click.group()
@click.option('--sep', default=None, help='Column separator (default: guessed from file name)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, sep, verbose):
    """Protein interaction network analysis"""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['sep'] = sep


@cli.command()
@click.argument('network', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def stats(ctx, network):
    """Show statistics for an interaction table"""
    try:
        graph = _load(ctx, network)
    except ProteinGraphError as e:
        raise click.ClickException(str(e))
    _echo_summary(graph)


@cli.command()
@click.argument('destination', type=click.Path(exists=True, dir_okay=False))
@click.argument('sources', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def merge(ctx, destination, sources):
    """Merge one or more datasets into DESTINATION and report the result"""
    try:
        graph = _load(ctx, destination)
        for source_path in sources:
            report = graph.union(_load(ctx, source_path))
            click.echo(f"Merged {source_path}:")
            click.echo(f"  Shared proteins: {report.shared_nodes:,}")
            click.echo(f"  New interactions: {report.primary_added:,}")
            click.echo(f"  Duplicate interactions: {report.duplicates_added:,}")
            click.echo(f"  Redundant interactions: {report.redundant_added:,}")
            click.echo(f"  Proteins copied: {report.nodes_copied:,}")
            if report.ambiguous_matches:
                click.echo(f"  Ambiguous id matches (first used): {report.ambiguous_matches:,}")
    except ProteinGraphError as e:
        raise click.ClickException(str(e))
    click.echo()
    _echo_summary(graph)


@cli.command()
@click.argument('network', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def articulation(ctx, network):
    """List proteins whose removal would fragment the network"""
    try:
        graph = _load(ctx, network)
    except ProteinGraphError as e:
        raise click.ClickException(str(e))

    points = graph.articulation_points()
    if not points:
        click.echo("No articulation points found")
        return

    click.echo(f"Found {len(points)} articulation points:")
    for node in points:
        click.echo(f"  - {node.accession} ({len(graph.neighbors(node.handle))} interactors)")


@cli.command()
@click.argument('network', type=click.Path(exists=True, dir_okay=False))
@click.argument('identifiers', nargs=-1, required=True)
@click.pass_context
def clustering(ctx, network, identifiers):
    """Clustering coefficient of the given proteins"""
    try:
        graph = _load(ctx, network)
        for identifier in identifiers:
            cc = graph.clustering_coefficient(Identifier(identifier))
            if cc == -1:
                click.echo(f"{identifier}: not calculable (fewer than 2 interactors)")
            else:
                click.echo(f"{identifier}: {cc:.4f}")
    except ProteinGraphError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument('network', type=click.Path(exists=True, dir_okay=False))
@click.option('--min-degree', default=10, show_default=True, help='Report proteins with more interactors than this')
@click.pass_context
def hubs(ctx, network, min_degree):
    """List highly connected proteins"""
    try:
        graph = _load(ctx, network)
    except ProteinGraphError as e:
        raise click.ClickException(str(e))

    hub_nodes = graph.hubs(min_degree)
    click.echo(f"{len(hub_nodes)} proteins have > {min_degree} interactors")
    for node in hub_nodes:
        click.echo(f"  - {node.accession}: {len(graph.neighbors(node.handle))}")


@cli.command()
@click.argument('network', type=click.Path(exists=True, dir_okay=False))
@click.argument('identifiers', nargs=-1, required=True)
@click.pass_context
def remove(ctx, network, identifiers):
    """Simulate knocking out proteins and show the resulting network"""
    try:
        graph = _load(ctx, network)
        removed = graph.remove_nodes(*[Identifier(identifier) for identifier in identifiers])
    except ProteinGraphError as e:
        raise click.ClickException(str(e))

    click.echo(f"Removed {len(removed)} proteins: {', '.join(node.accession for node in removed)}")
    _echo_summary(graph)


if __name__ == '__main__':
    cli()
