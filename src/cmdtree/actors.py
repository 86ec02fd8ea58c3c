"""A concrete actor backed by a set of granted capabilities.

Hosts usually adapt their own user objects to the ``Actor`` protocol;
``SimpleActor`` covers consoles, scripts and tests. A granted capability
ending in ``.*`` covers every permission below it, and ``*`` covers all.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class SimpleActor:
    """An actor that collects the messages sent to it.

    Parameters
    ----------
    name:
        Display name of the actor.
    capabilities:
        Granted permission strings, optionally with ``.*`` wildcards.
    superuser:
        When ``True`` every capability check passes.
    """

    name: str = "console"
    capabilities: frozenset[str] = field(default_factory=frozenset)
    superuser: bool = False
    messages: list[str] = field(default_factory=list, compare=False)

    @classmethod
    def granted(cls, *permissions: str, name: str = "console") -> "SimpleActor":
        """Return an actor holding exactly ``permissions``."""
        return cls(name=name, capabilities=frozenset(permissions))

    def has_capability(self, permission: str) -> bool:
        if self.superuser or permission in self.capabilities:
            return True
        return any(_covers(granted, permission) for granted in self.capabilities)

    def send_message(self, text: str) -> None:
        self.messages.append(text)

    def grant(self, permissions: Iterable[str]) -> None:
        """Add ``permissions`` to this actor's capabilities."""
        self.capabilities = self.capabilities | frozenset(permissions)


def _covers(granted: str, permission: str) -> bool:
    if granted == "*":
        return True
    if granted.endswith(".*"):
        return permission.startswith(granted[:-1])
    return False
