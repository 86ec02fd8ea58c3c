"""The root of a command tree.

A ``RootNode`` stands for the host command itself (e.g. ``/app``). It is
never permission checked, seeds ``owner.name.lower() + ".cmd"`` as the
prefix for every descendant, and when no child matches it falls back to
the child registered as ``"help"``.
"""
from __future__ import annotations

from typing import ClassVar

from cmdtree.core.errors import MissingHelpNodeError, RootDescriptionError
from cmdtree.core.node import CommandNode, NodeKind
from cmdtree.core.protocols import Actor
from cmdtree.core.resolution import base_prefix
from cmdtree.core.status import CommandStatus

HELP_NODE_NAME = "help"


class RootNode(CommandNode):
    """Entry point of a dispatch tree.

    Parameters
    ----------
    owner:
        The host application. ``owner.main_command`` becomes this node's
        name and ``owner.name`` the permission base.
    """

    kind: ClassVar[NodeKind] = NodeKind.ROOT

    @property
    def name(self) -> str:
        return self.owner.main_command

    @property
    def description(self) -> str:
        raise RootDescriptionError(self.name)

    @property
    def usage(self) -> str:
        return f"/{self.owner.main_command}"

    @property
    def base_prefix(self) -> str:
        """Permission prefix handed to this root's children."""
        return base_prefix(self.owner)

    def execute(self, actor: Actor, tokens: tuple[str, ...]) -> CommandStatus:
        """Delegate to the help child with every token received.

        Raises
        ------
        MissingHelpNodeError
            If no child is registered under ``"help"``.
        """
        help_node = self.walk(HELP_NODE_NAME)
        if help_node is None:
            raise MissingHelpNodeError(self.name, HELP_NODE_NAME)
        return help_node.execute(actor, tokens)
