"""Unit tests for cmdtree.core.resolution — the recursive dispatch protocol,
permission accumulation, fallback, completion and reachability.
"""
from __future__ import annotations

import logging

import pytest

from cmdtree.actors import SimpleActor
from cmdtree.config import Application
from cmdtree.core.node import BranchNode
from cmdtree.core.resolution import (
    base_prefix,
    can_reach,
    closest_child,
    complete,
    resolve,
)
from cmdtree.core.root import RootNode
from cmdtree.core.status import CommandStatus
from cmdtree.dispatch import dispatch

from tests.conftest import AuditingActor, RecordingNode, SampleTree


# ===========================================================================
# Permission short-circuit
# ===========================================================================


class TestPermissionShortCircuit:
    def test_denied_branch_returns_no_permission(
        self, tree: SampleTree, nobody: AuditingActor
    ) -> None:
        assert dispatch(tree.root, nobody, ["admin", "reload"]) is CommandStatus.NO_PERMISSION

    def test_denied_branch_never_consults_children(
        self, tree: SampleTree, nobody: AuditingActor
    ) -> None:
        dispatch(tree.root, nobody, ["admin", "reload"])
        assert tree.reload.resolve_calls == 0
        assert tree.reload.calls == []
        assert tree.admin.calls == []

    def test_denial_stops_at_first_missing_capability(self, tree: SampleTree) -> None:
        actor = AuditingActor(capabilities=frozenset({"example.cmd.admin"}))
        status = dispatch(tree.root, actor, ["admin", "reload", "now"])
        assert status is CommandStatus.NO_PERMISSION
        assert actor.checked == ["example.cmd.admin", "example.cmd.admin.reload"]
        assert tree.reload.calls == []

    def test_child_permission_alone_is_not_enough(self, tree: SampleTree) -> None:
        actor = SimpleActor.granted("example.cmd.admin.reload")
        assert dispatch(tree.root, actor, ["admin", "reload"]) is CommandStatus.NO_PERMISSION

    def test_denial_logs_debug(
        self, tree: SampleTree, nobody: AuditingActor, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="cmdtree.core.resolution"):
            dispatch(tree.root, nobody, ["admin"])
        assert "example.cmd.admin" in caplog.text


# ===========================================================================
# Root behaviour
# ===========================================================================


class TestRootAlwaysPermitted:
    def test_actor_without_capabilities_reaches_root_execute(
        self, tree: SampleTree, nobody: AuditingActor
    ) -> None:
        status = dispatch(tree.root, nobody, [])
        assert status is CommandStatus.OK
        assert tree.help.calls == [()]

    def test_root_is_never_checked(self, tree: SampleTree, nobody: AuditingActor) -> None:
        dispatch(tree.root, nobody, [])
        assert nobody.checked == []

    def test_root_ignores_incoming_prefix(self, tree: SampleTree, superuser: AuditingActor) -> None:
        tree.root.resolve(superuser, "something.else", ["admin", "reload"])
        assert superuser.checked == ["example.cmd.admin", "example.cmd.admin.reload"]

    def test_base_prefix_is_lowercased(self) -> None:
        assert base_prefix(Application(name="MyApp", main_command="m")) == "myapp.cmd"


# ===========================================================================
# Token consumption and fallback
# ===========================================================================


class TestTokenConsumption:
    def test_matched_tokens_are_consumed(self, tree: SampleTree, superuser: AuditingActor) -> None:
        assert dispatch(tree.root, superuser, ["admin", "reload"]) is CommandStatus.OK
        assert tree.reload.calls == [()]

    def test_trailing_tokens_reach_leaf(self, tree: SampleTree, superuser: AuditingActor) -> None:
        dispatch(tree.root, superuser, ["admin", "list", "a", "b"])
        assert tree.list.calls == [("a", "b")]

    def test_unmatched_token_passed_through_at_root(
        self, tree: SampleTree, superuser: AuditingActor
    ) -> None:
        dispatch(tree.root, superuser, ["bogus", "x"])
        assert tree.help.calls == [("bogus", "x")]

    def test_unmatched_token_passed_through_at_branch(
        self, tree: SampleTree, superuser: AuditingActor
    ) -> None:
        status = dispatch(tree.root, superuser, ["admin", "bogus", "x"])
        assert status is CommandStatus.UNSUPPORTED
        assert tree.admin.calls == [("bogus", "x")]

    def test_lookup_is_case_sensitive(self, tree: SampleTree, superuser: AuditingActor) -> None:
        dispatch(tree.root, superuser, ["ADMIN", "reload"])
        assert tree.admin.resolve_calls == 0
        assert tree.help.calls == [("ADMIN", "reload")]

    def test_root_default_returns_help_result(self, app: Application, superuser: AuditingActor) -> None:
        root = RootNode(app)
        root.register(RecordingNode(app, "help", status=CommandStatus.BAD_ARGS))
        root.register(BranchNode(app, "admin"))
        assert dispatch(root, superuser, []) is CommandStatus.BAD_ARGS

    def test_organizational_node_reports_unsupported(
        self, app: Application, superuser: AuditingActor
    ) -> None:
        root = RootNode(app)
        root.register(RecordingNode(app, "help"))
        root.register(BranchNode(app, "admin"))
        assert dispatch(root, superuser, ["admin"]) is CommandStatus.UNSUPPORTED


# ===========================================================================
# Permission strings
# ===========================================================================


class TestPermissionStrings:
    def test_permission_uses_lowercased_names(self, app: Application, superuser: AuditingActor) -> None:
        root = RootNode(app)
        root.register(RecordingNode(app, "help"))
        admin = root.register(BranchNode(app, "Admin"))
        admin.register(RecordingNode(app, "Reload"))
        assert dispatch(root, superuser, ["Admin", "Reload"]) is CommandStatus.OK
        assert superuser.checked == ["example.cmd.admin", "example.cmd.admin.reload"]

    def test_same_node_mounted_elsewhere_checks_different_permission(
        self, app: Application
    ) -> None:
        leaf = RecordingNode(app, "list")
        root = RootNode(app)
        root.register(RecordingNode(app, "help"))
        root.register(BranchNode(app, "users")).register(leaf)
        other = RootNode(Application(name="Other", main_command="ot"))
        other.register(RecordingNode(app, "help"))
        other.register(leaf)

        first = AuditingActor(superuser=True)
        second = AuditingActor(superuser=True)
        dispatch(root, first, ["users", "list"])
        dispatch(other, second, ["list"])
        assert first.checked[-1] == "example.cmd.users.list"
        assert second.checked[-1] == "other.cmd.list"

    def test_wildcard_grant_covers_subtree(self, tree: SampleTree) -> None:
        actor = SimpleActor.granted("example.cmd.*")
        assert dispatch(tree.root, actor, ["admin", "reload"]) is CommandStatus.OK

    def test_resolve_free_function_matches_method(
        self, tree: SampleTree, superuser: AuditingActor
    ) -> None:
        assert resolve(tree.admin, superuser, "example.cmd", ["list"]) is CommandStatus.OK
        assert tree.list.calls == [()]


# ===========================================================================
# Minimum arguments
# ===========================================================================


class TestMinimumArguments:
    def test_too_few_tokens_is_bad_args(self, tree: SampleTree, superuser: AuditingActor) -> None:
        tree.list.min_args = 1
        assert dispatch(tree.root, superuser, ["admin", "list"]) is CommandStatus.BAD_ARGS
        assert tree.list.calls == []

    def test_enough_tokens_executes(self, tree: SampleTree, superuser: AuditingActor) -> None:
        tree.list.min_args = 1
        assert dispatch(tree.root, superuser, ["admin", "list", "x"]) is CommandStatus.OK

    def test_permission_checked_before_argument_count(
        self, tree: SampleTree, nobody: AuditingActor
    ) -> None:
        tree.admin.min_args = 3
        assert dispatch(tree.root, nobody, ["admin"]) is CommandStatus.NO_PERMISSION


# ===========================================================================
# Idempotence
# ===========================================================================


class TestIdempotence:
    @pytest.mark.parametrize(
        "tokens",
        [[], ["admin"], ["admin", "reload"], ["bogus", "x"], ["admin", "list", "1"]],
    )
    def test_repeated_dispatch_gives_same_status(
        self, tree: SampleTree, superuser: AuditingActor, tokens: list[str]
    ) -> None:
        first = dispatch(tree.root, superuser, tokens)
        second = dispatch(tree.root, superuser, tokens)
        assert first is second

    def test_repeated_denial_is_stable(self, tree: SampleTree, nobody: AuditingActor) -> None:
        statuses = {dispatch(tree.root, nobody, ["admin", "list"]) for _ in range(3)}
        assert statuses == {CommandStatus.NO_PERMISSION}


# ===========================================================================
# closest_child / can_reach
# ===========================================================================


class TestStructuralLookup:
    def test_closest_child_follows_registered_names(self, tree: SampleTree) -> None:
        node, rest = closest_child(tree.root, ["admin", "reload", "extra"])
        assert node is tree.reload
        assert rest == ("extra",)

    def test_closest_child_stops_at_unknown_token(self, tree: SampleTree) -> None:
        node, rest = closest_child(tree.root, ["admin", "nope", "reload"])
        assert node is tree.admin
        assert rest == ("nope", "reload")

    def test_closest_child_of_empty_tokens_is_self(self, tree: SampleTree) -> None:
        assert closest_child(tree.root, []) == (tree.root, ())

    def test_can_reach_with_permissions(self, tree: SampleTree) -> None:
        actor = SimpleActor.granted("example.cmd.admin", "example.cmd.admin.list")
        assert can_reach(tree.root, actor, ["admin", "list"])
        assert not can_reach(tree.root, actor, ["admin", "reload"])

    def test_can_reach_unknown_path_is_false(self, tree: SampleTree, superuser: AuditingActor) -> None:
        assert not can_reach(tree.root, superuser, ["admin", "ghost"])

    def test_can_reach_root_itself(self, tree: SampleTree, nobody: AuditingActor) -> None:
        assert can_reach(tree.root, nobody, [])


# ===========================================================================
# complete
# ===========================================================================


class TestComplete:
    def test_empty_input_lists_permitted_root_children(self, tree: SampleTree) -> None:
        actor = SimpleActor.granted("example.cmd.help")
        assert complete(tree.root, actor, []) == ["help"]

    def test_partial_word_is_filtered(self, tree: SampleTree, superuser: AuditingActor) -> None:
        assert complete(tree.root, superuser, ["ad"]) == ["admin"]

    def test_nested_completion(self, tree: SampleTree, superuser: AuditingActor) -> None:
        assert complete(tree.root, superuser, ["admin", ""]) == ["list", "reload"]

    def test_denied_path_yields_nothing(self, tree: SampleTree, nobody: AuditingActor) -> None:
        assert complete(tree.root, nobody, ["admin", ""]) == []

    def test_unknown_prefix_yields_nothing(self, tree: SampleTree, superuser: AuditingActor) -> None:
        assert complete(tree.root, superuser, ["zzz"]) == []
