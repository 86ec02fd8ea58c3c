"""Unit tests for cmdtree.dispatch — the entry point and the host callback."""
from __future__ import annotations

import logging
from types import MappingProxyType

import pytest

from cmdtree.actors import SimpleActor
from cmdtree.commands import HelpCommand
from cmdtree.config import Application, DispatchSettings
from cmdtree.core.errors import MissingHelpNodeError, TreeSealedError
from cmdtree.core.node import BranchNode
from cmdtree.core.root import RootNode
from cmdtree.core.status import CommandStatus
from cmdtree.dispatch import CommandDispatcher, dispatch

from tests.conftest import RecordingNode, SampleTree


class ExplodingNode(BranchNode):
    def execute(self, actor, tokens):
        raise RuntimeError("boom")


class TestDispatchFunction:
    def test_starts_with_empty_prefix(self, tree: SampleTree) -> None:
        actor = SimpleActor(superuser=True)
        assert dispatch(tree.root, actor, ("admin", "reload")) is CommandStatus.OK

    def test_accepts_any_sequence(self, tree: SampleTree) -> None:
        dispatch(tree.root, SimpleActor(superuser=True), ["admin", "list", "x"])
        assert tree.list.calls == [("x",)]

    def test_leaf_exceptions_are_not_translated(self, app: Application) -> None:
        root = RootNode(app)
        root.register(RecordingNode(app, "help"))
        root.register(ExplodingNode(app, "explode"))
        with pytest.raises(RuntimeError):
            dispatch(root, SimpleActor(superuser=True), ["explode"])


class TestCommandDispatcher:
    def test_construction_seals_tree(self, tree: SampleTree, app: Application) -> None:
        CommandDispatcher(tree.root)
        with pytest.raises(TreeSealedError):
            tree.root.register(BranchNode(app, "late"))

    def test_root_property(self, tree: SampleTree) -> None:
        assert CommandDispatcher(tree.root).root is tree.root

    def test_unexpected_exception_becomes_failed(
        self, app: Application, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = RootNode(app)
        root.register(RecordingNode(app, "help"))
        root.register(ExplodingNode(app, "explode"))
        dispatcher = CommandDispatcher(root)
        with caplog.at_level(logging.ERROR, logger="cmdtree.dispatch"):
            status = dispatcher.dispatch(SimpleActor(superuser=True), ["explode", "now"])
        assert status is CommandStatus.FAILED
        assert "ex explode now" in caplog.text

    def test_configuration_errors_propagate(self, app: Application) -> None:
        root = RootNode(app)
        dispatcher = CommandDispatcher(root)
        with pytest.raises(MissingHelpNodeError):
            dispatcher.dispatch(SimpleActor(), [])

    def test_on_command_true_unless_failed(self, tree: SampleTree) -> None:
        dispatcher = CommandDispatcher(tree.root)
        assert dispatcher.on_command(SimpleActor(superuser=True), ["admin", "reload"]) is True
        assert dispatcher.on_command(SimpleActor(), ["admin", "reload"]) is True

    def test_on_command_false_on_failure(self, app: Application) -> None:
        root = RootNode(app)
        root.register(RecordingNode(app, "help"))
        root.register(ExplodingNode(app, "explode"))
        assert CommandDispatcher(root).on_command(SimpleActor(superuser=True), ["explode"]) is False

    def test_feedback_sent_for_denial(self, tree: SampleTree) -> None:
        actor = SimpleActor()
        status = CommandDispatcher(tree.root).handle(actor, ["admin"])
        assert status is CommandStatus.NO_PERMISSION
        assert actor.messages == ["You do not have permission to do that."]

    def test_feedback_expands_command_word(self, tree: SampleTree) -> None:
        actor = SimpleActor(superuser=True)
        CommandDispatcher(tree.root).handle(actor, ["admin"])
        assert actor.messages == ["That command cannot be run on its own. Try /ex help"]

    def test_unknown_subcommand_feedback(self, app: Application) -> None:
        root = RootNode(app)
        root.register(HelpCommand(root))
        actor = SimpleActor(superuser=True)
        status = CommandDispatcher(root).handle(actor, ["bogus"])
        assert status is CommandStatus.BAD_ARGS
        assert actor.messages == ["Invalid arguments. Try /ex help"]

    def test_no_feedback_on_success(self, tree: SampleTree) -> None:
        actor = SimpleActor(superuser=True)
        CommandDispatcher(tree.root).handle(actor, ["admin", "list"])
        assert actor.messages == []

    def test_custom_feedback_templates(self, tree: SampleTree) -> None:
        settings = DispatchSettings(
            feedback=MappingProxyType({CommandStatus.NO_PERMISSION: "Denied on /{command}."})
        )
        actor = SimpleActor()
        CommandDispatcher(tree.root, settings).handle(actor, ["admin"])
        assert actor.messages == ["Denied on /ex."]

    def test_status_without_template_sends_nothing(self, tree: SampleTree) -> None:
        settings = DispatchSettings(feedback=MappingProxyType({}))
        actor = SimpleActor()
        CommandDispatcher(tree.root, settings).handle(actor, ["admin"])
        assert actor.messages == []

    def test_complete_delegates(self, tree: SampleTree) -> None:
        dispatcher = CommandDispatcher(tree.root)
        assert dispatcher.complete(SimpleActor(superuser=True), ["admin", "r"]) == ["reload"]
