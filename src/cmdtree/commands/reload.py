"""Reload command: asks a reloadable owner to reload itself."""
from __future__ import annotations

import logging

from cmdtree.core.node import CommandNode
from cmdtree.core.protocols import Actor, MessageRecipient, Reloadable
from cmdtree.core.status import CommandStatus

logger = logging.getLogger(__name__)


class ReloadCommand(CommandNode):
    """Calls ``owner.reload()`` when the owner supports it.

    Owners that are not ``Reloadable`` report ``UNSUPPORTED``. Errors
    raised by the reload are logged and reported as ``FAILED``.
    """

    @property
    def name(self) -> str:
        return "reload"

    @property
    def description(self) -> str:
        return f"Reloads {self.owner.name}"

    def execute(self, actor: Actor, tokens: tuple[str, ...]) -> CommandStatus:
        owner = self.owner
        if not isinstance(owner, Reloadable):
            _tell(actor, f"{owner.name} does not support reloading.")
            return CommandStatus.UNSUPPORTED
        try:
            owner.reload()
        except Exception:
            logger.exception("Reload of %s failed", owner.name)
            return CommandStatus.FAILED
        version = getattr(owner, "version", None)
        _tell(actor, f"{owner.name} v{version} reloaded." if version else f"{owner.name} reloaded.")
        return CommandStatus.OK


def _tell(actor: Actor, text: str) -> None:
    if isinstance(actor, MessageRecipient):
        actor.send_message(text)
