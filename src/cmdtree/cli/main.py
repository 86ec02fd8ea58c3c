"""CLI entry point for cmdtree.

Invoked as::

    cmdtree [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m cmdtree.cli.main

Commands
--------
version     Show version information
node-types  List the node kinds manifests can use
paths       List every leaf command of a manifest with its permission
export      Dump a manifest's tree as JSON or YAML
run         Dispatch a command line against a manifest's tree
complete    Show tab-completion suggestions for a partial command line
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from cmdtree.manifest.loader import Manifest

console = Console()
err_console = Console(stderr=True)


def _load_or_exit(path: str) -> "Manifest":
    """Load a manifest, printing errors and exiting on failure."""
    from cmdtree.core.errors import ManifestError
    from cmdtree.manifest import load_manifest

    try:
        return load_manifest(path)
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except ManifestError as exc:
        err_console.print(f"[red]Invalid manifest[/red] {path}: {exc}")
        sys.exit(1)


def _status_color(status_name: str) -> str:
    """Map a CommandStatus name to a Rich color string."""
    colors = {
        "OK": "green",
        "NO_PERMISSION": "red",
        "FAILED": "red",
        "RESTRICTED": "yellow",
        "BAD_ARGS": "yellow",
        "UNSUPPORTED": "blue",
    }
    return colors.get(status_name, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="cmdtree")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log dispatch decisions")
def cli(verbose: bool) -> None:
    """Hierarchical command dispatch with cascading permissions."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from cmdtree import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]cmdtree[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# node-types command
# ---------------------------------------------------------------------------


@cli.command(name="node-types")
def node_types_command() -> None:
    """List node kinds available to manifests, including installed plugins."""
    from cmdtree.commands import register_builtin_kinds
    from cmdtree.plugins.registry import node_types

    register_builtin_kinds(node_types)
    node_types.load_entrypoints()

    table = Table(title="Node kinds")
    table.add_column("Kind", style="bold")
    table.add_column("Class")
    for kind in node_types.kinds():
        cls = node_types.get(kind)
        table.add_row(kind, f"{cls.__module__}.{cls.__qualname__}")
    console.print(table)


# ---------------------------------------------------------------------------
# paths command
# ---------------------------------------------------------------------------


@cli.command(name="paths")
@click.argument("manifest", type=click.Path(exists=False))
def paths_command(manifest: str) -> None:
    """List every leaf command in MANIFEST with the permission it needs.

    MANIFEST is the path to a YAML tree manifest.
    """
    from cmdtree.export import TreeExporter

    loaded = _load_or_exit(manifest)
    permissions = TreeExporter().permissions(loaded.root)

    table = Table(title=f"Commands: /{loaded.root.name}", show_lines=False)
    table.add_column("Path", style="bold")
    table.add_column("Permission")
    table.add_column("Description")
    for path, node in sorted(loaded.root.flatten_paths().items()):
        table.add_row(f"/{path}", permissions.get(path, ""), node.description)
    console.print(table)


# ---------------------------------------------------------------------------
# export command
# ---------------------------------------------------------------------------


@cli.command(name="export")
@click.argument("manifest", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def export_command(manifest: str, output_format: str, output: str | None) -> None:
    """Dump the tree described by MANIFEST.

    MANIFEST is the path to a YAML tree manifest.
    """
    from cmdtree.export import TreeExporter

    loaded = _load_or_exit(manifest)
    exporter = TreeExporter()
    fmt = output_format.lower()
    text = exporter.to_json(loaded.root) if fmt == "json" else exporter.to_yaml(loaded.root)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Tree written to[/green] {output}")
    else:
        console.print(Syntax(text, fmt, line_numbers=False))


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@cli.command(name="run", context_settings={"ignore_unknown_options": True})
@click.argument("manifest", type=click.Path(exists=False))
@click.argument("tokens", nargs=-1)
@click.option("--grant", "-g", multiple=True, help="Capability to grant the actor (repeatable, supports '.*')")
@click.option("--all", "grant_all", is_flag=True, default=False, help="Grant every capability")
@click.option("--as", "actor_name", default="console", help="Display name of the actor")
def run_command(
    manifest: str,
    tokens: tuple[str, ...],
    grant: tuple[str, ...],
    grant_all: bool,
    actor_name: str,
) -> None:
    """Dispatch TOKENS against the tree described by MANIFEST.

    MANIFEST is the path to a YAML tree manifest; TOKENS is the command
    line after the command word.

    Examples:

    \b
        cmdtree run commands.yml admin reload --all
        cmdtree run commands.yml help 2 -g 'example.cmd.*'
    """
    from cmdtree.actors import SimpleActor
    from cmdtree.core.errors import TreeConfigurationError

    loaded = _load_or_exit(manifest)
    actor = SimpleActor(name=actor_name, capabilities=frozenset(grant), superuser=grant_all)
    dispatcher = loaded.dispatcher()

    try:
        status = dispatcher.handle(actor, tokens)
    except TreeConfigurationError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(2)

    for line in actor.messages:
        console.print(Text(line))
    color = _status_color(status.name)
    console.print(f"[{color}]{status.name}[/{color}] /{loaded.root.name} {' '.join(tokens)}".rstrip())

    if not status.is_success:
        sys.exit(1)


# ---------------------------------------------------------------------------
# complete command
# ---------------------------------------------------------------------------


@cli.command(name="complete", context_settings={"ignore_unknown_options": True})
@click.argument("manifest", type=click.Path(exists=False))
@click.argument("tokens", nargs=-1)
@click.option("--grant", "-g", multiple=True, help="Capability to grant the actor (repeatable)")
@click.option("--all", "grant_all", is_flag=True, default=False, help="Grant every capability")
def complete_command(
    manifest: str, tokens: tuple[str, ...], grant: tuple[str, ...], grant_all: bool
) -> None:
    """Print completions for the partial command line TOKENS, one per line.

    The last token is the word being completed; with no TOKENS every
    option directly below the root is listed.
    """
    from cmdtree.actors import SimpleActor

    loaded = _load_or_exit(manifest)
    actor = SimpleActor(capabilities=frozenset(grant), superuser=grant_all)
    for suggestion in loaded.dispatcher().complete(actor, tokens):
        console.print(Text(suggestion))


if __name__ == "__main__":
    cli()
