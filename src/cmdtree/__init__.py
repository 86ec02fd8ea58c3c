"""cmdtree — hierarchical command dispatch with cascading permissions.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import cmdtree
    from cmdtree.actors import SimpleActor

    app = cmdtree.Application(name="Example", main_command="ex")
    root = cmdtree.RootNode(app)
    root.register(cmdtree.HelpCommand(root))
    admin = root.register(cmdtree.BranchNode(app, "admin", "Admin commands"))
    admin.register(cmdtree.ReloadCommand(app))

    actor = SimpleActor.granted("example.cmd.admin", "example.cmd.admin.reload")
    cmdtree.dispatch(root, actor, ["admin", "reload"])

    # Or describe the whole tree in YAML
    manifest = cmdtree.load_manifest("commands.yml")
    manifest.dispatcher().on_command(actor, ["help"])

    cmdtree.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from cmdtree.commands import HelpCommand, ReloadCommand, StaticCommand
from cmdtree.config import Application, DispatchSettings, ReloadableApplication
from cmdtree.core import (
    Actor,
    BranchNode,
    CommandNode,
    CommandStatus,
    CommandTreeError,
    ManifestError,
    MissingHelpNodeError,
    RootDescriptionError,
    RootNode,
    TreeConfigurationError,
    TreeSealedError,
)
from cmdtree.dispatch import CommandDispatcher, dispatch

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from cmdtree.manifest.loader import Manifest


def load_manifest(path: str | Path) -> "Manifest":
    """Read a YAML manifest and assemble its command tree.

    Parameters
    ----------
    path:
        Path to the manifest file.

    Returns
    -------
    Manifest
        The application, settings and assembled root.

    Raises
    ------
    cmdtree.ManifestError
        If the manifest is malformed.
    """
    from cmdtree.manifest.loader import load_manifest as _load_manifest

    return _load_manifest(path)


def flatten(root: CommandNode) -> dict[str, CommandNode]:
    """Return every leaf of ``root`` keyed by its space-joined path."""
    return root.flatten_paths()


def complete(root: RootNode, actor: Actor, tokens: Sequence[str]) -> list[str]:
    """Return tab-completion suggestions for a partial command line.

    The last token is the word being typed; pass ``""`` as the last token
    to list every option at that position.
    """
    from cmdtree.core.resolution import complete as _complete

    return _complete(root, actor, tokens)


def export_tree(root: RootNode, output_format: str = "json") -> str:
    """Export the tree as ``"json"`` or ``"yaml"`` text."""
    from cmdtree.export import TreeExporter

    exporter = TreeExporter()
    if output_format == "json":
        return exporter.to_json(root)
    if output_format == "yaml":
        return exporter.to_yaml(root)
    raise ValueError(f"Unsupported export format {output_format!r}; use 'json' or 'yaml'")


__all__ = [
    "__version__",
    "Actor",
    "Application",
    "BranchNode",
    "CommandDispatcher",
    "CommandNode",
    "CommandStatus",
    "CommandTreeError",
    "DispatchSettings",
    "HelpCommand",
    "ManifestError",
    "MissingHelpNodeError",
    "ReloadCommand",
    "ReloadableApplication",
    "RootDescriptionError",
    "RootNode",
    "StaticCommand",
    "TreeConfigurationError",
    "TreeSealedError",
    "complete",
    "dispatch",
    "export_tree",
    "flatten",
    "load_manifest",
]
