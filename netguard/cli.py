"""Root CLI group for netguard and its subcommands.

Exit codes: 0 success, 2 usage (click), 3 network file could not be loaded,
4 query rejected.
"""

from __future__ import annotations

import logging
from typing import NoReturn, TextIO

import click

from netguard import __version__
from netguard.config import NetguardSettings
from netguard.errors import NetguardError
from netguard.graph import Graph
from netguard.logging_config import configure_logging
from netguard.network_builder import build_random_network, dump_network, load_network
from netguard.pathfinding.dijkstra import patch_radius
from netguard.pathfinding.infection import infect_path

logger = logging.getLogger(__name__)

EXIT_LOAD_ERROR = 3
EXIT_QUERY_ERROR = 4

_input_option = click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="Network description file.",
)
_directed_option = click.option(
    "--directed/--undirected",
    default=None,
    help="Edge lines are one-way arcs (default: NETGUARD_DIRECTED, else undirected).",
)


def _fail(exc: Exception, code: int) -> NoReturn:
    click.echo(f"Error: {exc}", err=True)
    raise SystemExit(code)


def _load(settings: NetguardSettings, input_path: str, directed: bool | None) -> Graph:
    if directed is None:
        directed = settings.directed
    try:
        return load_network(
            input_path,
            directed=directed,
            allow_negative_latency=settings.allow_negative_latency,
        )
    except (NetguardError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Load failed for %s: %r", input_path, exc)
        _fail(exc, EXIT_LOAD_ERROR)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="netguard")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_json: bool) -> None:
    """netguard: infection and patch analysis for vulnerable networks."""
    settings = NetguardSettings.from_cli(verbose=verbose, log_json=log_json)
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@_input_option
@click.option("--src", required=True, help="Vulnerable node the infection starts from.")
@click.option("--dst", required=True, help="Vulnerable node to reach.")
@_directed_option
@click.option("--show-path", is_flag=True, help="Also print one shortest infection route.")
@click.pass_obj
def infect(
    settings: NetguardSettings,
    input_path: str,
    src: str,
    dst: str,
    directed: bool | None,
    show_path: bool,
) -> None:
    """Minimum hops from SRC to DST through vulnerable nodes only (-1 if impossible)."""
    graph = _load(settings, input_path, directed)
    try:
        path = infect_path(graph, src, dst)
    except NetguardError as exc:
        _fail(exc, EXIT_QUERY_ERROR)
    click.echo(-1 if path is None else len(path) - 1)
    if show_path and path is not None:
        click.echo(" -> ".join(path))


@cli.command()
@_input_option
@click.option("--server", required=True, help="Non-vulnerable node the patch is pushed from.")
@_directed_option
@click.option("--table", is_flag=True, help="Also print per-node distances.")
@click.pass_obj
def patch(
    settings: NetguardSettings,
    input_path: str,
    server: str,
    directed: bool | None,
    table: bool,
) -> None:
    """Largest shortest-path distance from SERVER to any vulnerable node (INF if one is cut off)."""
    graph = _load(settings, input_path, directed)
    try:
        if table:
            from netguard.report import patch_report

            radius, report = patch_report(graph, server, epsilon=settings.relax_epsilon)
        else:
            radius = patch_radius(graph, server, epsilon=settings.relax_epsilon)
    except NetguardError as exc:
        _fail(exc, EXIT_QUERY_ERROR)
    click.echo(radius)
    if table and not report.empty:
        click.echo(report.to_string(index=False))


@cli.command()
@click.option("--nodes", "n_nodes", required=True, type=click.IntRange(min=1), help="Number of nodes.")
@click.option("--edge-prob", default=0.4, show_default=True, type=click.FloatRange(0.0, 1.0))
@click.option("--vulnerable-ratio", default=0.5, show_default=True, type=click.FloatRange(0.0, 1.0))
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible network.")
@click.option("--directed", is_flag=True, help="Emit one-way arcs in both directions.")
@click.option(
    "-o", "--output", type=click.File("w", encoding="utf-8"), default="-", help="Destination file."
)
def generate(
    n_nodes: int,
    edge_prob: float,
    vulnerable_ratio: float,
    seed: int | None,
    directed: bool,
    output: TextIO,
) -> None:
    """Write a random connected network in the input format."""
    graph = build_random_network(
        n_nodes=n_nodes,
        edge_prob=edge_prob,
        vulnerable_ratio=vulnerable_ratio,
        seed=seed,
        directed=directed,
    )
    output.write(dump_network(graph, directed=directed))


@cli.command()
@_input_option
@_directed_option
@click.option("--src", default=None, help="Start of the infection route to highlight.")
@click.option("--dst", default=None, help="End of the infection route to highlight.")
@click.option("-o", "--output", default="plots/network.png", show_default=True, help="PNG path.")
@click.option(
    "--layout",
    type=click.Choice(["spring", "kamada", "shell", "spectral"]),
    default="spring",
    show_default=True,
)
@click.pass_obj
def draw(
    settings: NetguardSettings,
    input_path: str,
    directed: bool | None,
    src: str | None,
    dst: str | None,
    output: str,
    layout: str,
) -> None:
    """Render the network to a PNG, optionally highlighting an infection route."""
    if (src is None) != (dst is None):
        raise click.UsageError("--src and --dst must be given together.")
    graph = _load(settings, input_path, directed)
    path = None
    if src is not None:
        try:
            path = infect_path(graph, src, dst)
        except NetguardError as exc:
            _fail(exc, EXIT_QUERY_ERROR)

    from netguard.visualize_network import draw_network

    click.echo(draw_network(graph, path=path, output_link=output, layout=layout))
