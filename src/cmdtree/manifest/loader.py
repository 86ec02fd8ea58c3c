"""Assemble a command tree from a declarative YAML manifest.

A manifest describes the application, optional dispatch settings and
the command tree. Every entry picks its node type with ``kind``
(``static`` when omitted); a help node is always attached to the root.

.. code-block:: yaml

    application:
      name: Example
      command: ex
      version: "1.0"
      reloadable: true
    settings:
      help_items_per_page: 5
    commands:
      - name: admin
        kind: branch
        description: Administrative commands
        children:
          - kind: reload
          - name: list
            description: Lists things
            status: ok
            message: "Listing {args}"
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cmdtree.commands import HelpCommand
from cmdtree.config import (
    Application,
    DispatchSettings,
    load_application,
    load_settings,
    parse_yaml,
    read_yaml,
)
from cmdtree.core.errors import ManifestError
from cmdtree.core.node import CommandNode
from cmdtree.core.root import RootNode
from cmdtree.dispatch import CommandDispatcher
from cmdtree.plugins.registry import NodeTypeNotFoundError, NodeTypeRegistry, node_types

logger = logging.getLogger(__name__)

DEFAULT_KIND = "static"


@dataclass(frozen=True)
class Manifest:
    """A fully assembled tree together with the data it was built from."""

    application: Application
    settings: DispatchSettings
    root: RootNode

    def dispatcher(self) -> CommandDispatcher:
        """Publish the tree and return a dispatcher for it."""
        return CommandDispatcher(self.root, self.settings)


def load_manifest(path: str | Path, registry: NodeTypeRegistry | None = None) -> Manifest:
    """Read and assemble the manifest at ``path``.

    Raises
    ------
    ManifestError
        If the document is malformed.
    OSError
        If the file cannot be read.
    """
    return build_manifest(read_yaml(path), registry)


def parse_manifest(text: str, registry: NodeTypeRegistry | None = None) -> Manifest:
    """Assemble a manifest from YAML text."""
    return build_manifest(parse_yaml(text), registry)


def build_manifest(
    data: Mapping[str, Any], registry: NodeTypeRegistry | None = None
) -> Manifest:
    """Assemble a manifest from an already parsed mapping.

    Parameters
    ----------
    data:
        Mapping with ``application`` (required), ``settings`` and
        ``commands`` keys.
    registry:
        Node types to build entries with. Defaults to the shared registry
        with installed entry-point kinds loaded.
    """
    if registry is None:
        registry = node_types
        registry.load_entrypoints()

    unknown = sorted(str(key) for key in data if key not in {"application", "settings", "commands"})
    if unknown:
        raise ManifestError(f"Unknown key(s): {', '.join(unknown)}")
    if "application" not in data:
        raise ManifestError("Missing required section", "application")

    application = load_application(data["application"])
    settings = load_settings(data.get("settings"))

    root = RootNode(application)
    root.register(HelpCommand(root, settings))
    for index, entry in enumerate(_entries(data.get("commands"), "commands")):
        root.register(_build_node(application, entry, registry, f"commands[{index}]"))

    logger.debug(
        "Assembled tree /%s with %d leaf command(s)",
        root.name,
        len(root.flatten_paths()),
    )
    return Manifest(application=application, settings=settings, root=root)


def _entries(raw: Any, location: str) -> list[Mapping[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ManifestError("Expected a list of command entries", location)
    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise ManifestError("Expected a mapping", f"{location}[{index}]")
    return raw


def _build_node(
    owner: Application,
    entry: Mapping[str, Any],
    registry: NodeTypeRegistry,
    location: str,
) -> CommandNode:
    kind = entry.get("kind", DEFAULT_KIND)
    try:
        node = registry.create(str(kind), owner, entry)
    except NodeTypeNotFoundError as exc:
        raise ManifestError(exc.args[0], f"{location}.kind") from None
    except ManifestError as exc:
        where = f"{location}.{exc.location}" if exc.location else location
        raise ManifestError(exc.message, where) from None

    declared = entry.get("name")
    if declared is not None and declared != node.name:
        raise ManifestError(
            f"Node kind {kind!r} is always named {node.name!r}, not {declared!r}",
            f"{location}.name",
        )

    for index, child in enumerate(_entries(entry.get("children"), f"{location}.children")):
        node.register(
            _build_node(owner, child, registry, f"{location}.children[{index}]")
        )
    return node
