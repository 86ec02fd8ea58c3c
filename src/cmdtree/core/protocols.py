"""Narrow interfaces the tree consumes from its collaborators."""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Actor(Protocol):
    """The invoking identity; the tree only asks it about capabilities."""

    def has_capability(self, permission: str) -> bool: ...


@runtime_checkable
class MessageRecipient(Protocol):
    """An actor that can receive text feedback."""

    def send_message(self, text: str) -> None: ...


@runtime_checkable
class Owner(Protocol):
    """The host application a tree belongs to.

    ``name`` seeds the permission prefix (``name.lower() + ".cmd"``) and
    ``main_command`` is the command word users type.
    """

    @property
    def name(self) -> str: ...

    @property
    def main_command(self) -> str: ...


@runtime_checkable
class Reloadable(Protocol):
    """An owner that can reload its own configuration."""

    def reload(self) -> None: ...
