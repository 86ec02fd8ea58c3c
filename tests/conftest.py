"""Shared test fixtures for cmdtree.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from cmdtree.actors import SimpleActor
from cmdtree.config import Application
from cmdtree.core.node import BranchNode
from cmdtree.core.protocols import Owner
from cmdtree.core.root import RootNode
from cmdtree.core.status import CommandStatus


class RecordingNode(BranchNode):
    """A node that records how it was reached and executed."""

    def __init__(
        self,
        owner: Owner,
        name: str,
        description: str = "",
        status: CommandStatus = CommandStatus.OK,
    ) -> None:
        super().__init__(owner, name, description or f"{name} command")
        self.status = status
        self.calls: list[tuple[str, ...]] = []
        self.resolve_calls = 0

    def resolve(self, actor, permission_prefix: str, tokens: Sequence[str]) -> CommandStatus:
        self.resolve_calls += 1
        return super().resolve(actor, permission_prefix, tokens)

    def execute(self, actor, tokens: tuple[str, ...]) -> CommandStatus:
        self.calls.append(tokens)
        return self.status


class AuditingActor(SimpleActor):
    """A ``SimpleActor`` that remembers every capability it was asked about."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.checked: list[str] = []

    def has_capability(self, permission: str) -> bool:
        self.checked.append(permission)
        return super().has_capability(permission)


@dataclass
class SampleTree:
    """``ex -> {help, admin -> {reload, list}}`` built from recording nodes."""

    root: RootNode
    help: RecordingNode
    admin: RecordingNode
    reload: RecordingNode
    list: RecordingNode


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "cmdtree"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def app() -> Application:
    return Application(name="Example", main_command="ex", version="1.2.0")


@pytest.fixture()
def tree(app: Application) -> SampleTree:
    root = RootNode(app)
    help_node = RecordingNode(app, "help", status=CommandStatus.OK)
    admin = RecordingNode(app, "admin", status=CommandStatus.UNSUPPORTED)
    reload = RecordingNode(app, "reload")
    listing = RecordingNode(app, "list")
    root.register(help_node)
    root.register(admin)
    admin.register(reload)
    admin.register(listing)
    return SampleTree(root=root, help=help_node, admin=admin, reload=reload, list=listing)


@pytest.fixture()
def superuser() -> AuditingActor:
    return AuditingActor(name="op", superuser=True)


@pytest.fixture()
def nobody() -> AuditingActor:
    return AuditingActor(name="guest")


MANIFEST_YAML = """\
application:
  name: Example
  command: ex
  version: "1.2.0"
  reloadable: true
settings:
  help_items_per_page: 2
commands:
  - name: admin
    kind: branch
    description: Administrative commands
    children:
      - kind: reload
      - name: list
        description: Lists things
        status: ok
        message: "Listing {args}"
  - name: give
    description: Gives an item
    status: ok
    min_args: 1
    message: "Gave {args}"
"""


@pytest.fixture()
def manifest_path(tmp_path) -> str:
    """Write the sample manifest to a temporary file and return its path."""
    path = tmp_path / "commands.yml"
    path.write_text(MANIFEST_YAML, encoding="utf-8")
    return str(path)
