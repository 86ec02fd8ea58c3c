"""Command nodes: the unit of a dispatch tree.

A ``CommandNode`` owns a map of named children and knows how to resolve
a sequence of tokens against them. Nodes never store a parent reference
or their own fully qualified permission: both are rebuilt top-down on
every traversal, so the same node mounted under a different parent
yields a different permission string.

Subclasses provide ``name`` and ``description`` and override
``execute`` when they represent an action. Organizational nodes that
only group children can use ``BranchNode`` directly::

    admin = BranchNode(app, "admin", "Administrative commands")
    admin.register(ReloadCommand(app))
    root.register(admin)
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, ClassVar

from cmdtree.core.errors import TreeSealedError
from cmdtree.core.protocols import Actor, Owner
from cmdtree.core.status import CommandStatus

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Explicit tag the resolution algorithm branches on.

    ROOT
        The single entry point of a tree. Never permission checked; seeds
        the permission prefix for its descendants.
    BRANCH
        Any other node. Checked against ``prefix + "." + name.lower()``.
    """

    ROOT = auto()
    BRANCH = auto()


class CommandNode(ABC):
    """Base class for every node of a command tree.

    Parameters
    ----------
    owner:
        The host application. Borrowed for the lifetime of the tree and
        used for the permission base and the default usage hint.
    """

    kind: ClassVar[NodeKind] = NodeKind.BRANCH
    #: Fewest positional tokens ``execute`` accepts; fewer yields BAD_ARGS.
    min_args: int = 0

    def __init__(self, owner: Owner) -> None:
        self._owner = owner
        self._children: dict[str, CommandNode] = {}
        self._sealed = False

    @classmethod
    def from_manifest(cls, owner: Owner, entry: Mapping[str, Any]) -> CommandNode:
        """Build a node from a manifest entry.

        The default suits nodes with a fixed name that take no settings;
        configurable node types override this to read ``entry``.
        """
        return cls(owner)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def owner(self) -> Owner:
        """The host application this node belongs to."""
        return self._owner

    @property
    @abstractmethod
    def name(self) -> str:
        """The token that selects this node from its parent."""

    @property
    @abstractmethod
    def description(self) -> str:
        """A one-line summary of what this node does."""

    @property
    def usage(self) -> str:
        """Usage hint shown to actors.

        Only the immediate name is rendered after the command word, so the
        hint of a nested node omits its intermediate path segments. Full
        paths are available from ``flatten_paths``.
        """
        return f"/{self._owner.main_command} {self.name}"

    def permission_for(self, prefix: str) -> str:
        """Return this node's permission when mounted under ``prefix``."""
        return f"{prefix}.{self.name.lower()}"

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    @property
    def children(self) -> Mapping[str, CommandNode]:
        """Read-only view of the registered children, keyed by name."""
        return MappingProxyType(self._children)

    @property
    def child_names(self) -> list[str]:
        """Registered child names in alphabetical order."""
        return sorted(self._children)

    @property
    def is_leaf(self) -> bool:
        """Return True if no children are registered."""
        return not self._children

    @property
    def is_sealed(self) -> bool:
        """Return True once the node has been published for dispatch."""
        return self._sealed

    def register(self, child: CommandNode) -> CommandNode:
        """Register ``child`` under its own name and return it.

        Registering a second child with an existing name replaces the
        first one.

        Raises
        ------
        TreeSealedError
            If this node has already been sealed.
        """
        if self._sealed:
            raise TreeSealedError(self.name, child.name)
        key = child.name
        previous = self._children.get(key)
        if previous is not None and previous is not child:
            logger.warning(
                "Child %r of %r replaced: %r -> %r", key, self.name, previous, child
            )
        self._children[key] = child
        logger.debug("Registered %r under %r", key, self.name)
        return child

    def seal(self) -> None:
        """Publish this subtree; any later ``register`` call fails."""
        self._sealed = True
        for child in self._children.values():
            child.seal()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def walk(self, token: str) -> CommandNode | None:
        """Return the direct child registered under ``token``, if any."""
        return self._children.get(token)

    def get_child(self, *path: str) -> CommandNode | None:
        """Follow ``path`` one child at a time; ``None`` if any step misses."""
        node: CommandNode | None = self
        for token in path:
            node = node.walk(token)
            if node is None:
                return None
        return node

    def closest_child(self, tokens: Sequence[str]) -> CommandNode:
        """Return the deepest node reachable by a prefix of ``tokens``."""
        from cmdtree.core.resolution import closest_child

        node, _ = closest_child(self, tokens)
        return node

    def flatten_paths(self) -> dict[str, CommandNode]:
        """Return every leaf below this node keyed by its space-joined path.

        Paths start with this node's own name. Internal nodes are not
        included; a node without children maps to itself.
        """
        return self._collect_leaves(self.name)

    def _collect_leaves(self, prefix: str) -> dict[str, CommandNode]:
        if not self._children:
            return {prefix: self}
        leaves: dict[str, CommandNode] = {}
        for key, child in self._children.items():
            leaves.update(child._collect_leaves(f"{prefix} {key}"))
        return leaves

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def resolve(
        self, actor: Actor, permission_prefix: str, tokens: Sequence[str]
    ) -> CommandStatus:
        """Resolve ``tokens`` starting at this node.

        Parameters
        ----------
        actor:
            The invoking identity.
        permission_prefix:
            Permission accumulated from ancestors, excluding this node.
        tokens:
            Remaining positional tokens after the ones used to reach here.

        Returns
        -------
        CommandStatus
            The status of the node that ended up executing, or
            ``NO_PERMISSION`` from the first node the actor may not use.
        """
        from cmdtree.core.resolution import resolve

        return resolve(self, actor, permission_prefix, tokens)

    def execute(self, actor: Actor, tokens: tuple[str, ...]) -> CommandStatus:
        """Run this node's action. Organizational nodes have none."""
        return CommandStatus.UNSUPPORTED

    def tab_complete(self, actor: Actor, tokens: tuple[str, ...]) -> list[str]:
        """Return suggestions for the next argument of this node's action."""
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, children={self.child_names})"


class BranchNode(CommandNode):
    """A purely organizational node with a fixed name and description.

    Executing it directly reports ``UNSUPPORTED``; it exists to group
    children under a shared name and permission segment.
    """

    def __init__(self, owner: Owner, name: str, description: str = "") -> None:
        if not name or any(ch.isspace() for ch in name):
            raise ValueError(f"Invalid node name {name!r}: must be a single token")
        self._name = name
        self._description = description
        super().__init__(owner)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description
