"""Registry of node types available to tree manifests.

A manifest entry names its node type with ``kind:``; the registry maps
that name to a ``CommandNode`` subclass whose ``from_manifest``
classmethod builds the node. Built-in kinds are registered by
``cmdtree.commands``; third-party packages contribute more by declaring
entry-points in the "cmdtree.nodes" group.

Example
-------
Register a node type with the decorator::

    from cmdtree.plugins.registry import node_types

    @node_types.register("greet")
    class GreetCommand(CommandNode):
        ...

Declare it from another distribution's ``pyproject.toml``::

    [project.entry-points."cmdtree.nodes"]
    greet = "my_package.commands:GreetCommand"

and load installed kinds at runtime::

    node_types.load_entrypoints()
"""
from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Callable, Mapping
from typing import Any

from cmdtree.core.node import CommandNode
from cmdtree.core.protocols import Owner

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "cmdtree.nodes"

NodeType = type[CommandNode]


class NodeTypeNotFoundError(KeyError):
    """Raised when a requested node kind is not in the registry."""

    def __init__(self, kind: str, available: list[str]) -> None:
        self.kind = kind
        self.available = available
        super().__init__(
            f"Node kind {kind!r} is not registered. "
            f"Available kinds: {', '.join(available) or '(none)'}. "
            "Check that the package providing it is installed."
        )


class NodeTypeAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a kind name that already exists."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(
            f"Node kind {kind!r} is already registered. "
            "Use a unique name or deregister the existing entry first."
        )


class NodeTypeRegistry:
    """Maps manifest ``kind`` names to ``CommandNode`` subclasses."""

    def __init__(self) -> None:
        self._types: dict[str, NodeType] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, kind: str) -> Callable[[NodeType], NodeType]:
        """Return a class decorator that registers the class under ``kind``.

        Raises
        ------
        NodeTypeAlreadyRegisteredError
            If ``kind`` is already in use.
        TypeError
            If the decorated object is not a ``CommandNode`` subclass.
        """

        def decorator(cls: NodeType) -> NodeType:
            self.register_class(kind, cls)
            return cls

        return decorator

    def register_class(self, kind: str, cls: NodeType) -> None:
        """Register ``cls`` under ``kind`` without decorator syntax."""
        if kind in self._types:
            raise NodeTypeAlreadyRegisteredError(kind)
        if not (isinstance(cls, type) and issubclass(cls, CommandNode)):
            raise TypeError(
                f"Cannot register {cls!r} as node kind {kind!r}: "
                "it must be a subclass of CommandNode."
            )
        self._types[kind] = cls
        logger.debug("Registered node kind %r -> %s", kind, cls.__qualname__)

    def deregister(self, kind: str) -> None:
        """Remove ``kind`` from the registry.

        Raises
        ------
        NodeTypeNotFoundError
            If ``kind`` is not registered.
        """
        if kind not in self._types:
            raise NodeTypeNotFoundError(kind, self.kinds())
        del self._types[kind]
        logger.debug("Deregistered node kind %r", kind)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, kind: str) -> NodeType:
        """Return the class registered under ``kind``."""
        try:
            return self._types[kind]
        except KeyError:
            raise NodeTypeNotFoundError(kind, self.kinds()) from None

    def create(self, kind: str, owner: Owner, entry: Mapping[str, Any]) -> CommandNode:
        """Build a node of type ``kind`` from a manifest entry."""
        return self.get(kind).from_manifest(owner, entry)

    def kinds(self) -> list[str]:
        """Return all registered kind names in alphabetical order."""
        return sorted(self._types)

    def __contains__(self, kind: object) -> bool:
        return kind in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"NodeTypeRegistry(kinds={self.kinds()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRY_POINT_GROUP) -> None:
        """Discover and register node types declared as package entry-points.

        Kinds that are already registered are skipped, so repeated calls
        are idempotent. Entry-points that fail to import or are not node
        types are logged and skipped.
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._types:
                logger.debug("Node kind %r already registered; skipping.", ep.name)
                continue
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            try:
                self.register_class(ep.name, cls)
            except (NodeTypeAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but is not a usable node type; skipping.",
                    ep.name,
                )


node_types = NodeTypeRegistry()
