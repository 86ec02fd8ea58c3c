"""Fatal configuration faults for command trees.

These exceptions signal that a tree was assembled incorrectly. They are
raised at the point of misuse and are never translated into a
``CommandStatus``; the dispatcher lets them propagate.
"""
from __future__ import annotations


class CommandTreeError(Exception):
    """Base class for all errors raised by cmdtree."""


class TreeConfigurationError(CommandTreeError):
    """The tree's structure is invalid for the requested operation."""


class RootDescriptionError(TreeConfigurationError):
    """Raised when the description of a root node is requested.

    A root represents the command itself, not an action, and has no
    one-line summary of its own.
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(
            f"Root node {command!r} has no description; "
            "describe its children instead."
        )


class MissingHelpNodeError(TreeConfigurationError, LookupError):
    """Raised when a root falls back to help but no help child exists."""

    def __init__(self, command: str, help_name: str = "help") -> None:
        self.command = command
        self.help_name = help_name
        super().__init__(
            f"Root node {command!r} has no {help_name!r} child to fall back to. "
            "Every tree must register a help node on its root."
        )


class TreeSealedError(TreeConfigurationError):
    """Raised when registering a child onto a published (sealed) node."""

    def __init__(self, parent: str, child: str) -> None:
        self.parent = parent
        self.child = child
        super().__init__(
            f"Cannot register {child!r} under {parent!r}: "
            "the tree has been sealed for dispatch."
        )


class ManifestError(CommandTreeError, ValueError):
    """Raised when a manifest or settings document is malformed.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    location:
        Dotted location inside the document, e.g. ``"commands[0].name"``.
    """

    def __init__(self, message: str, location: str = "") -> None:
        self.message = message
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)
