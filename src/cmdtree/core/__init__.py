"""Core dispatch tree: nodes, the root, the resolution protocol and statuses.

Submodules in core/ should not import from commands/, plugins/ or cli/.
"""
from __future__ import annotations

from cmdtree.core.errors import (
    CommandTreeError,
    ManifestError,
    MissingHelpNodeError,
    RootDescriptionError,
    TreeConfigurationError,
    TreeSealedError,
)
from cmdtree.core.node import BranchNode, CommandNode, NodeKind
from cmdtree.core.protocols import Actor, MessageRecipient, Owner, Reloadable
from cmdtree.core.resolution import base_prefix, can_reach, closest_child, complete, resolve
from cmdtree.core.root import HELP_NODE_NAME, RootNode
from cmdtree.core.status import CommandStatus

__all__ = [
    "Actor",
    "BranchNode",
    "CommandNode",
    "CommandStatus",
    "CommandTreeError",
    "HELP_NODE_NAME",
    "ManifestError",
    "MessageRecipient",
    "MissingHelpNodeError",
    "NodeKind",
    "Owner",
    "Reloadable",
    "RootDescriptionError",
    "RootNode",
    "TreeConfigurationError",
    "TreeSealedError",
    "base_prefix",
    "can_reach",
    "closest_child",
    "complete",
    "resolve",
]
