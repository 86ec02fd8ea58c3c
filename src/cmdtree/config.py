"""Application identity and dispatch settings.

Both are plain frozen dataclasses built once at bootstrap and injected
into the tree and the dispatcher; nothing here is cached lazily. They
can be loaded from the mapping produced by ``yaml.safe_load``::

    application:
      name: Example
      command: ex
      version: "1.2.0"
    settings:
      help_items_per_page: 8
      feedback:
        no_permission: "Nope."
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from cmdtree.core.errors import ManifestError
from cmdtree.core.status import CommandStatus

logger = logging.getLogger(__name__)

DEFAULT_FEEDBACK: Mapping[CommandStatus, str] = MappingProxyType(
    {
        CommandStatus.NO_PERMISSION: "You do not have permission to do that.",
        CommandStatus.UNSUPPORTED: "That command cannot be run on its own. Try /{command} help",
        CommandStatus.FAILED: "The command failed to complete.",
        CommandStatus.RESTRICTED: "You cannot run that command from here.",
        CommandStatus.BAD_ARGS: "Invalid arguments. Try /{command} help",
    }
)


@dataclass(frozen=True)
class Application:
    """The host application a command tree belongs to.

    Parameters
    ----------
    name:
        Application name; ``name.lower() + ".cmd"`` is the permission base.
    main_command:
        The command word users type, without the leading slash.
    version:
        Version string shown by the reload command.
    """

    name: str
    main_command: str
    version: str = "0.0.0"


@dataclass(frozen=True)
class ReloadableApplication(Application):
    """An ``Application`` whose ``reload`` runs a supplied callback."""

    on_reload: Callable[[], None] | None = field(default=None, compare=False, repr=False)

    def reload(self) -> None:
        logger.info("Reloading %s v%s", self.name, self.version)
        if self.on_reload is not None:
            self.on_reload()


@dataclass(frozen=True)
class DispatchSettings:
    """Tunables for the built-in commands and the dispatcher.

    Parameters
    ----------
    help_items_per_page:
        Number of commands listed per help page.
    feedback:
        Message template per non-OK status, sent to the actor after
        dispatch. ``{command}`` expands to the host command word.
    """

    help_items_per_page: int = 5
    feedback: Mapping[CommandStatus, str] = field(default_factory=lambda: DEFAULT_FEEDBACK)

    def __post_init__(self) -> None:
        if self.help_items_per_page < 1:
            raise ValueError(
                f"help_items_per_page must be at least 1, got {self.help_items_per_page}"
            )
        for template in self.feedback.values():
            check_template(template)

    def feedback_for(self, status: CommandStatus, command: str) -> str | None:
        """Return the rendered feedback line for ``status``, if any."""
        template = self.feedback.get(status)
        if template is None:
            return None
        return template.format(command=command)


def check_template(template: str) -> None:
    """Raise ``ValueError`` unless ``template`` formats with ``command`` alone."""
    try:
        template.format(command="cmd")
    except (AttributeError, IndexError, KeyError, ValueError) as exc:
        raise ValueError(
            f"Invalid feedback template {template!r}: only {{command}} may be used ({exc!r})"
        ) from None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def read_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML document whose top level must be a mapping.

    Raises
    ------
    ManifestError
        If the file is not valid YAML or its top level is not a mapping.
    OSError
        If the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    return parse_yaml(text, source=str(path))


def parse_yaml(text: str, source: str = "<string>") -> dict[str, Any]:
    """Parse YAML text whose top level must be a mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML: {exc}", source) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError("Top level must be a mapping", source)
    return data


def load_application(data: Mapping[str, Any], location: str = "application") -> Application:
    """Build an ``Application`` from an ``application:`` mapping.

    Recognised keys are ``name`` and ``command`` (both required),
    ``version`` and ``reloadable``.
    """
    if not isinstance(data, Mapping):
        raise ManifestError("Expected a mapping", location)
    _reject_unknown(data, {"name", "command", "version", "reloadable"}, location)
    name = _require_str(data, "name", location)
    command = _require_str(data, "command", location)
    if any(ch.isspace() for ch in command):
        raise ManifestError(f"Command word {command!r} must be a single token", f"{location}.command")
    version = str(data.get("version", "0.0.0"))
    reloadable = data.get("reloadable", False)
    if not isinstance(reloadable, bool):
        raise ManifestError("Expected true or false", f"{location}.reloadable")
    if reloadable:
        return ReloadableApplication(name=name, main_command=command, version=version)
    return Application(name=name, main_command=command, version=version)


def load_settings(data: Mapping[str, Any] | None, location: str = "settings") -> DispatchSettings:
    """Build ``DispatchSettings`` from a ``settings:`` mapping.

    Missing keys keep their defaults. Feedback templates given here are
    merged over ``DEFAULT_FEEDBACK``; status names are case-insensitive.
    """
    if data is None:
        return DispatchSettings()
    if not isinstance(data, Mapping):
        raise ManifestError("Expected a mapping", location)
    _reject_unknown(data, {"help_items_per_page", "feedback"}, location)

    per_page = data.get("help_items_per_page", 5)
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
        raise ManifestError(
            "Expected a positive integer", f"{location}.help_items_per_page"
        )

    feedback = dict(DEFAULT_FEEDBACK)
    raw_feedback = data.get("feedback") or {}
    if not isinstance(raw_feedback, Mapping):
        raise ManifestError("Expected a mapping of status to message", f"{location}.feedback")
    for key, template in raw_feedback.items():
        try:
            status = CommandStatus.from_name(str(key))
        except ValueError as exc:
            raise ManifestError(str(exc), f"{location}.feedback.{key}") from None
        if template is None:
            feedback.pop(status, None)
        elif isinstance(template, str):
            try:
                check_template(template)
            except ValueError as exc:
                raise ManifestError(str(exc), f"{location}.feedback.{key}") from None
            feedback[status] = template
        else:
            raise ManifestError("Expected a string or null", f"{location}.feedback.{key}")

    return DispatchSettings(
        help_items_per_page=per_page, feedback=MappingProxyType(feedback)
    )


def _require_str(data: Mapping[str, Any], key: str, location: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ManifestError("Expected a non-empty string", f"{location}.{key}")
    return value


def _reject_unknown(data: Mapping[str, Any], allowed: set[str], location: str) -> None:
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise ManifestError(f"Unknown key(s): {', '.join(unknown)}", location)
