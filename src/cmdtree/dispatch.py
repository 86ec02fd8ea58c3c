"""Dispatch entry point and the host-side command callback.

``dispatch`` is the only call the host needs: it resolves a token list
from the root of a tree with an empty permission seed.

``CommandDispatcher`` is what a host wires to its command hook. It
seals the tree, runs ``dispatch``, turns unexpected leaf exceptions into
``FAILED`` (configuration faults still propagate), and tells the actor
about non-OK outcomes::

    dispatcher = CommandDispatcher(root, settings)
    dispatcher.on_command(actor, ["admin", "reload"])
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from cmdtree.config import DispatchSettings
from cmdtree.core.errors import TreeConfigurationError
from cmdtree.core.protocols import Actor, MessageRecipient
from cmdtree.core.resolution import complete
from cmdtree.core.root import RootNode
from cmdtree.core.status import CommandStatus

logger = logging.getLogger(__name__)


def dispatch(root: RootNode, actor: Actor, tokens: Sequence[str]) -> CommandStatus:
    """Resolve ``tokens`` against the tree rooted at ``root``."""
    return root.resolve(actor, "", tuple(tokens))


class CommandDispatcher:
    """Host callback around a published command tree.

    Parameters
    ----------
    root:
        The tree to dispatch into. It is sealed on construction.
    settings:
        Supplies the feedback templates sent after non-OK outcomes.
    """

    def __init__(self, root: RootNode, settings: DispatchSettings | None = None) -> None:
        self._root = root
        self._settings = settings or DispatchSettings()
        root.seal()

    @property
    def root(self) -> RootNode:
        return self._root

    def dispatch(self, actor: Actor, tokens: Sequence[str]) -> CommandStatus:
        """Dispatch ``tokens`` and map unexpected leaf exceptions to ``FAILED``.

        Raises
        ------
        TreeConfigurationError
            If the tree was assembled incorrectly.
        """
        try:
            return dispatch(self._root, actor, tokens)
        except TreeConfigurationError:
            raise
        except Exception:
            logger.exception(
                "Unhandled exception executing command '%s %s'",
                self._root.name,
                " ".join(tokens),
            )
            return CommandStatus.FAILED

    def handle(self, actor: Actor, tokens: Sequence[str]) -> CommandStatus:
        """Dispatch ``tokens`` and send the feedback line for the outcome."""
        status = self.dispatch(actor, tokens)
        logger.debug("/%s %s -> %s", self._root.name, " ".join(tokens), status.name)
        if status is not CommandStatus.OK and isinstance(actor, MessageRecipient):
            message = self._settings.feedback_for(status, self._root.name)
            if message:
                actor.send_message(message)
        return status

    def on_command(self, actor: Actor, tokens: Sequence[str]) -> bool:
        """Host hook: run a command for ``actor`` and send feedback.

        Returns
        -------
        bool
            ``False`` only when the outcome was ``FAILED``.
        """
        return self.handle(actor, tokens) is not CommandStatus.FAILED

    def complete(self, actor: Actor, tokens: Sequence[str]) -> list[str]:
        """Return tab-completion suggestions for a partial command line."""
        return complete(self._root, actor, tokens)
