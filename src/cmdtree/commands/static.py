"""A node whose behaviour is fully described by data.

``StaticCommand`` backs manifest entries: it replies with a fixed
message and returns a fixed status. Without a status it behaves like an
organizational node and reports ``UNSUPPORTED``.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cmdtree.core.errors import ManifestError
from cmdtree.core.node import BranchNode, CommandNode
from cmdtree.core.protocols import Actor, MessageRecipient, Owner
from cmdtree.core.status import CommandStatus


class StaticCommand(BranchNode):
    """A leaf or branch with a fixed reply.

    Parameters
    ----------
    owner:
        The host application.
    name:
        The token that selects this node.
    description:
        One-line summary shown by help.
    status:
        Status returned by ``execute``; ``None`` means ``UNSUPPORTED``.
    message:
        Optional reply. ``{args}`` expands to the received tokens joined
        by spaces.
    min_args:
        Fewest tokens accepted before reporting ``BAD_ARGS``.
    """

    def __init__(
        self,
        owner: Owner,
        name: str,
        description: str = "",
        status: CommandStatus | None = None,
        message: str | None = None,
        min_args: int = 0,
    ) -> None:
        super().__init__(owner, name, description)
        self.status = status
        self.message = message
        self.min_args = min_args

    @classmethod
    def from_manifest(cls, owner: Owner, entry: Mapping[str, Any]) -> CommandNode:
        name = entry.get("name")
        if not isinstance(name, str):
            raise ManifestError("Expected a string", "name")
        raw_status = entry.get("status")
        if raw_status is not None and not isinstance(raw_status, str):
            raise ManifestError("Expected a status name", "status")
        try:
            status = CommandStatus.from_name(raw_status) if raw_status else None
        except ValueError as exc:
            raise ManifestError(str(exc), "status") from None
        min_args = entry.get("min_args", 0)
        if isinstance(min_args, bool) or not isinstance(min_args, int) or min_args < 0:
            raise ManifestError("Expected a non-negative integer", "min_args")
        message = entry.get("message")
        if message is not None and not isinstance(message, str):
            raise ManifestError("Expected a string", "message")
        try:
            return cls(
                owner,
                name,
                description=str(entry.get("description", "")),
                status=status,
                message=message,
                min_args=min_args,
            )
        except ValueError as exc:
            raise ManifestError(str(exc), "name") from None

    def execute(self, actor: Actor, tokens: tuple[str, ...]) -> CommandStatus:
        if self.status is None:
            return CommandStatus.UNSUPPORTED
        if self.message and isinstance(actor, MessageRecipient):
            actor.send_message(self.message.replace("{args}", " ".join(tokens)))
        return self.status


class BranchCommand(BranchNode):
    """Manifest form of ``BranchNode``: a named group with no action."""

    @classmethod
    def from_manifest(cls, owner: Owner, entry: Mapping[str, Any]) -> CommandNode:
        name = entry.get("name")
        if not isinstance(name, str):
            raise ManifestError("Expected a string", "name")
        try:
            return cls(owner, name, str(entry.get("description", "")))
        except ValueError as exc:
            raise ManifestError(str(exc), "name") from None
