"""The recursive resolution protocol shared by all nodes.

``resolve`` consumes one token per level. At each non-root node the
actor's capability is checked against the accumulated permission before
any child is looked at, so a denial at depth *k* prevents all work at
deeper levels. The root is never checked and replaces the incoming
prefix with ``owner.name.lower() + ".cmd"``.

When no child matches the next token, or no tokens remain, the current
node executes with the tokens exactly as it received them; an unmatched
token is ordinary argument data, not stripped.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from cmdtree.core.node import NodeKind
from cmdtree.core.status import CommandStatus

if TYPE_CHECKING:
    from cmdtree.core.node import CommandNode
    from cmdtree.core.protocols import Actor, Owner

logger = logging.getLogger(__name__)


def base_prefix(owner: "Owner") -> str:
    """Return the permission prefix a root seeds for its whole tree."""
    return f"{owner.name.lower()}.cmd"


def enter(node: "CommandNode", actor: "Actor", permission_prefix: str) -> str | None:
    """Return the prefix to hand to ``node``'s children, or ``None`` if denied."""
    if node.kind is NodeKind.ROOT:
        return base_prefix(node.owner)
    permission = node.permission_for(permission_prefix)
    if not actor.has_capability(permission):
        logger.debug("Denied %r: actor lacks %r", node.name, permission)
        return None
    return permission


def resolve(
    node: "CommandNode",
    actor: "Actor",
    permission_prefix: str,
    tokens: Sequence[str],
) -> CommandStatus:
    """Resolve ``tokens`` against ``node`` and return the outcome.

    Parameters
    ----------
    node:
        The node to resolve at.
    actor:
        The invoking identity.
    permission_prefix:
        Permission accumulated from ancestors. Ignored by a root.
    tokens:
        Tokens remaining after the ones consumed to reach ``node``.

    Returns
    -------
    CommandStatus
        ``NO_PERMISSION`` if the actor may not use a node on the path,
        ``BAD_ARGS`` if the executing node needs more tokens, otherwise
        whatever the executing node's ``execute`` returns.
    """
    tokens = tuple(tokens)
    prefix = enter(node, actor, permission_prefix)
    if prefix is None:
        return CommandStatus.NO_PERMISSION
    if tokens:
        child = node.walk(tokens[0])
        if child is not None:
            return child.resolve(actor, prefix, tokens[1:])
    if len(tokens) < node.min_args:
        logger.debug(
            "%r needs %d argument(s), got %d", node.name, node.min_args, len(tokens)
        )
        return CommandStatus.BAD_ARGS
    return node.execute(actor, tokens)


def can_reach(node: "CommandNode", actor: "Actor", path: Sequence[str]) -> bool:
    """Return True if ``actor`` passes every permission check along ``path``.

    ``path`` names children starting below ``node``; a path that leaves
    the tree is not reachable.
    """
    prefix = enter(node, actor, "")
    current = node
    for token in path:
        if prefix is None:
            return False
        child = current.walk(token)
        if child is None:
            return False
        prefix = enter(child, actor, prefix)
        current = child
    return prefix is not None


def closest_child(
    node: "CommandNode", tokens: Sequence[str]
) -> tuple["CommandNode", tuple[str, ...]]:
    """Follow ``tokens`` structurally as far as registered children allow.

    Returns
    -------
    tuple[CommandNode, tuple[str, ...]]
        The deepest node reached and the tokens that were not consumed.
    """
    tokens = tuple(tokens)
    current = node
    for index, token in enumerate(tokens):
        child = current.walk(token)
        if child is None:
            return current, tokens[index:]
        current = child
    return current, ()


def complete(node: "CommandNode", actor: "Actor", tokens: Sequence[str]) -> list[str]:
    """Return tab-completion suggestions for a partially typed command.

    The last token is treated as the word being typed. Completed tokens
    are followed down the tree with the same permission rules as
    ``resolve``; if any of them names a node the actor may not use,
    there are no suggestions. At the node reached, suggestions are that
    node's own ``tab_complete`` results followed by the names of its
    children the actor may use that start with the partial word.
    """
    tokens = tuple(tokens) or ("",)
    prefix = enter(node, actor, "")
    if prefix is None:
        return []
    current = node
    consumed = 0
    while consumed < len(tokens) - 1:
        child = current.walk(tokens[consumed])
        if child is None:
            break
        child_prefix = enter(child, actor, prefix)
        if child_prefix is None:
            return []
        current, prefix = child, child_prefix
        consumed += 1

    remaining = tokens[consumed:]
    suggestions = list(current.tab_complete(actor, remaining))
    if len(remaining) == 1:
        partial = remaining[0]
        for name in current.child_names:
            child = current.children[name]
            if name.startswith(partial) and actor.has_capability(
                child.permission_for(prefix)
            ):
                suggestions.append(name)
    return suggestions
