"""Outcome type returned by every dispatch.

Expected results of resolving a command (denied, unknown, unsupported,
failed) are values of ``CommandStatus`` rather than exceptions, so the
host's command callback can decide on feedback without a fault path.
"""
from __future__ import annotations

from enum import Enum, auto


class CommandStatus(Enum):
    """Closed set of dispatch outcomes.

    OK
        The command ran to completion.
    NO_PERMISSION
        The actor lacks the capability of a node on the resolved path.
    UNSUPPORTED
        The resolved node is purely organizational and has no action.
    FAILED
        The command ran but could not complete.
    RESTRICTED
        The command cannot be run by this kind of actor.
    BAD_ARGS
        Fewer positional tokens were supplied than the node requires.
    """

    OK = auto()
    NO_PERMISSION = auto()
    UNSUPPORTED = auto()
    FAILED = auto()
    RESTRICTED = auto()
    BAD_ARGS = auto()

    @property
    def is_success(self) -> bool:
        """Return True only for ``OK``."""
        return self is CommandStatus.OK

    @classmethod
    def from_name(cls, name: str) -> "CommandStatus":
        """Look up a status by case-insensitive name, e.g. ``"no_permission"``.

        Raises
        ------
        ValueError
            If ``name`` is not a member of this enum.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(
                f"Unknown command status {name!r}; expected one of: {valid}"
            ) from None
