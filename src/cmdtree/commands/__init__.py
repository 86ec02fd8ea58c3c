"""Built-in command nodes.

Importing this package registers the built-in manifest kinds
(``static``, ``branch`` and ``reload``) in the default node-type
registry.
"""
from __future__ import annotations

from cmdtree.commands.help import HelpCommand
from cmdtree.commands.reload import ReloadCommand
from cmdtree.commands.static import BranchCommand, StaticCommand
from cmdtree.plugins.registry import NodeTypeRegistry, node_types


def register_builtin_kinds(registry: NodeTypeRegistry) -> None:
    """Register the built-in kinds into ``registry``, skipping existing ones."""
    for kind, cls in (
        ("static", StaticCommand),
        ("branch", BranchCommand),
        ("reload", ReloadCommand),
    ):
        if kind not in registry:
            registry.register_class(kind, cls)


register_builtin_kinds(node_types)

__all__ = [
    "BranchCommand",
    "HelpCommand",
    "ReloadCommand",
    "StaticCommand",
    "register_builtin_kinds",
]
