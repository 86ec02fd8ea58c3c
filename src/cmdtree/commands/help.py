"""Paginated help listing built from the tree's leaf paths."""
from __future__ import annotations

import math

from cmdtree.config import DispatchSettings
from cmdtree.core.node import CommandNode
from cmdtree.core.protocols import Actor, MessageRecipient
from cmdtree.core.resolution import can_reach
from cmdtree.core.root import HELP_NODE_NAME, RootNode
from cmdtree.core.status import CommandStatus


class HelpCommand(CommandNode):
    """Lists every command the actor may use, a page at a time.

    Entries come from ``root.flatten_paths()`` and are rendered with
    their full path, so nested commands show every segment. Pages are
    rebuilt on each call from the tree as it is now.

    Parameters
    ----------
    root:
        The tree to list.
    settings:
        Supplies the page size.
    """

    def __init__(self, root: RootNode, settings: DispatchSettings | None = None) -> None:
        super().__init__(root.owner)
        self._root = root
        self._settings = settings or DispatchSettings()

    @property
    def name(self) -> str:
        return HELP_NODE_NAME

    @property
    def description(self) -> str:
        return "Lists the available commands"

    @property
    def usage(self) -> str:
        return f"{super().usage} [page]"

    def entries(self, actor: Actor) -> list[str]:
        """Return one ``/path - description`` line per usable leaf, sorted."""
        lines = []
        for path, node in sorted(self._root.flatten_paths().items()):
            if node is self:
                continue
            if not can_reach(self._root, actor, path.split(" ")[1:]):
                continue
            lines.append(f"/{path} - {node.description}")
        return lines

    def pages(self, actor: Actor) -> list[list[str]]:
        """Split ``entries(actor)`` into pages of the configured size."""
        entries = self.entries(actor)
        size = self._settings.help_items_per_page
        return [entries[i : i + size] for i in range(0, len(entries), size)]

    def execute(self, actor: Actor, tokens: tuple[str, ...]) -> CommandStatus:
        if not isinstance(actor, MessageRecipient):
            return CommandStatus.RESTRICTED
        if len(tokens) > 1:
            return CommandStatus.BAD_ARGS
        try:
            page = int(tokens[0]) if tokens else 1
        except ValueError:
            return CommandStatus.BAD_ARGS

        pages = self.pages(actor)
        if not pages:
            actor.send_message(f"No commands available for /{self._root.name}.")
            return CommandStatus.OK
        if not 1 <= page <= len(pages):
            return CommandStatus.BAD_ARGS

        actor.send_message(f"--- /{self._root.name} help ({page}/{len(pages)}) ---")
        for line in pages[page - 1]:
            actor.send_message(line)
        return CommandStatus.OK

    def tab_complete(self, actor: Actor, tokens: tuple[str, ...]) -> list[str]:
        if len(tokens) != 1:
            return []
        total = math.ceil(len(self.entries(actor)) / self._settings.help_items_per_page)
        return [str(n) for n in range(1, total + 1) if str(n).startswith(tokens[0])]
