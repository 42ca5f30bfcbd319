# -*- coding: utf-8 -*-
"""
Tests for coordinator - event routing, busy tracking, tree re-rendering
"""

import pytest
from unittest.mock import Mock, call
from orangefish.coordinator import ViewUpdateCoordinator
from orangefish.core.namespace_tree import NamespaceEntry, NamespaceKind
from orangefish.core.result import INVALID_PAYLOAD, AppError, BackendUnavailableError
from orangefish.core.settings import ViewConfig
from orangefish.protocol import commands as cmd
from orangefish.protocol import events as ev


class FakeHandle:
    def __init__(self):
        self.expanded = False

    def is_expanded(self):
        return self.expanded

    def set_expanded(self, expanded):
        self.expanded = expanded


class FakeSurface:
    def __init__(self):
        self.rows = {}
        self.clear_count = 0

    def clear(self):
        self.rows = {}
        self.clear_count += 1

    def render_node(self, node, path, parent):
        handle = FakeHandle() if node.children else path
        self.rows[path] = handle
        return handle


class RecordingTransport:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, command):
        if self.fail:
            raise BackendUnavailableError("The backend process is not running.")
        self.sent.append(command)


@pytest.fixture
def surfaces():
    return {kind: FakeSurface() for kind in NamespaceKind}


@pytest.fixture
def view(surfaces):
    view = Mock()
    view.namespace_surface.side_effect = lambda kind: surfaces[kind]
    return view


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def coordinator(view, transport):
    return ViewUpdateCoordinator(view, transport)


def local(*names):
    return tuple(NamespaceEntry(full_name=name) for name in names)


def update_all(namespaces=(), **info):
    return ev.UpdateAll(
        general_info=ev.GeneralInfo(**info),
        changes=ev.ChangeList(),
        namespaces=namespaces,
        remotes=("origin",),
    )


class TestActivity:

    def test_three_starts_two_ends_stays_busy(self, coordinator, view):
        coordinator.fetch()
        coordinator.pull()
        coordinator.push()
        coordinator.handle(ev.EndProcess())
        coordinator.handle(ev.EndProcess())

        assert coordinator.activity.count == 1
        assert coordinator.state.busy is True
        view.set_busy.assert_called_once_with(True)

        coordinator.handle(update_all())
        assert view.set_busy.call_args_list == [call(True), call(False)]

    def test_start_process_event_counts(self, coordinator, view):
        coordinator.handle(ev.StartProcess())
        assert coordinator.state.busy
        coordinator.handle(ev.EndProcess())
        assert not coordinator.state.busy

    def test_stray_completion_is_absorbed(self, coordinator, view):
        coordinator.handle(ev.EndProcess())
        coordinator.handle(ev.UpdateChanges(ev.ChangeList()))
        assert coordinator.activity.count == 0
        view.set_busy.assert_not_called()

    def test_error_ends_activity_and_is_shown(self, coordinator, view):
        coordinator.commit("Fix")
        coordinator.handle(ev.ErrorNotice("merge conflict"))
        assert coordinator.activity.count == 0
        view.show_error.assert_called_once_with("merge conflict")

    def test_file_diff_does_not_go_busy(self, coordinator, view, transport):
        change = ev.FileChange("a.py", ev.FileStatus.MODIFIED)
        assert coordinator.request_file_diff(change, staged=True)
        assert transport.sent == [cmd.FileDiff("a.py", cmd.STAGED)]
        view.set_busy.assert_not_called()

    def test_transport_failure_releases_busy(self, coordinator, view, transport):
        transport.fail = True
        assert coordinator.fetch() is False
        assert coordinator.activity.count == 0
        assert view.set_busy.call_args_list == [call(True), call(False)]
        view.show_error.assert_called_once()


class TestRejectedMessages:

    def test_error_without_payload_still_completes(self, coordinator, view):
        coordinator.fetch()
        assert coordinator.handle_message("error", None) is True
        assert coordinator.activity.count == 0
        view.show_error.assert_called_once_with(ev.UNKNOWN_ERROR_MESSAGE)

    def test_malformed_update_all_releases_busy(self, coordinator, view):
        coordinator.fetch()
        payload = {
            "general_info": {},
            "files_changed_info_list": {
                "files_changed": 0, "unstaged_files": [], "staged_files": [],
            },
            "branch_info_list": [{"branch_type": "stash", "branch_shorthand": "wip"}],
        }
        assert coordinator.handle_message("update_all", payload) is False
        assert coordinator.activity.count == 0
        assert view.set_busy.call_args_list == [call(True), call(False)]
        view.show_error.assert_called_once()
        assert "update_all" in view.show_error.call_args[0][0]
        view.show_general_info.assert_not_called()

    def test_malformed_update_changes_releases_busy(self, coordinator, view):
        coordinator.pull()
        assert coordinator.handle_message("update_changes", {"files_changed": "many"}) is False
        assert coordinator.activity.count == 0
        view.show_changes.assert_not_called()
        view.show_error.assert_called_once()

    @pytest.mark.parametrize("name", sorted(ev.COMPLETION_EVENTS))
    def test_every_rejected_completion_ends_once(self, coordinator, name):
        coordinator.fetch()
        coordinator.pull()
        coordinator.reject(AppError(INVALID_PAYLOAD, f"Malformed '{name}' payload", meta={"event": name}))
        assert coordinator.activity.count == 1

    def test_other_events_leave_counter_alone(self, coordinator, view):
        coordinator.fetch()
        assert coordinator.handle_message("show-preferences", []) is False
        assert coordinator.handle_message("commit-info", {}) is False
        assert coordinator.activity.count == 1
        view.show_error.assert_not_called()

    def test_undecodable_line_only_logged(self, coordinator, view):
        coordinator.fetch()
        coordinator.reject(AppError("INVALID_JSON", "Backend sent a line that is not JSON"))
        assert coordinator.activity.count == 1
        view.show_error.assert_not_called()


class TestBackendLost:

    def test_releases_every_outstanding_operation(self, coordinator, view):
        coordinator.fetch()
        coordinator.push()
        coordinator.backend_lost("The backend exited unexpectedly (code 1).")
        assert coordinator.activity.count == 0
        assert view.set_busy.call_args_list == [call(True), call(False)]
        view.show_error.assert_called_once_with("The backend exited unexpectedly (code 1).")

    def test_idle_backend_loss_only_reports(self, coordinator, view):
        coordinator.backend_lost("Could not start the backend 'git-backend'.")
        view.set_busy.assert_not_called()
        view.show_error.assert_called_once()


class TestUpdateAll:

    def test_renders_every_section(self, coordinator, view, surfaces):
        entries = local("main", "feature/a") + (
            NamespaceEntry(full_name="origin/main", kind=NamespaceKind.REMOTE),
            NamespaceEntry(full_name="v1.0", kind=NamespaceKind.TAG),
        )
        coordinator.handle(update_all(entries, head_has_upstream=True))

        view.show_general_info.assert_called_once()
        view.show_changes.assert_called_once_with(ev.ChangeList())
        view.show_remotes.assert_called_once_with(("origin",))
        view.show_commits.assert_not_called()
        assert set(surfaces[NamespaceKind.LOCAL].rows) == {"main", "feature", "feature/a"}
        assert set(surfaces[NamespaceKind.REMOTE].rows) == {"origin", "origin/main"}
        assert set(surfaces[NamespaceKind.TAG].rows) == {"v1.0"}
        assert coordinator.state.remotes == ("origin",)
        assert coordinator.state.namespaces[NamespaceKind.LOCAL] == local("main", "feature/a")

    def test_commits_shown_when_present(self, coordinator, view):
        commits = (ev.CommitSummary("abc", "Fix"),)
        event = ev.UpdateAll(ev.GeneralInfo(), ev.ChangeList(), commits=commits)
        coordinator.handle(event)
        view.show_commits.assert_called_once_with(commits)

    def test_expanded_folder_survives_branch_removal(self, coordinator, surfaces):
        coordinator.handle(update_all(local("main", "feature/a", "feature/b")))
        assert coordinator.toggle_namespace(NamespaceKind.LOCAL, "feature")
        assert coordinator.state.expanded[NamespaceKind.LOCAL] == frozenset({"feature"})

        coordinator.handle(update_all(local("main", "feature/a")))

        surface = surfaces[NamespaceKind.LOCAL]
        assert set(surface.rows) == {"main", "feature", "feature/a"}
        assert surface.rows["feature"].is_expanded()
        assert coordinator.state.expanded[NamespaceKind.LOCAL] == frozenset({"feature"})

    def test_removed_folder_expansion_dropped(self, coordinator):
        coordinator.handle(update_all(local("main", "feature/a")))
        coordinator.toggle_namespace(NamespaceKind.LOCAL, "feature")
        coordinator.handle(update_all(local("main")))
        assert coordinator.state.expanded[NamespaceKind.LOCAL] == frozenset()

    def test_toggle_unknown_path(self, coordinator):
        coordinator.handle(update_all(local("main")))
        assert coordinator.toggle_namespace(NamespaceKind.LOCAL, "main") is False

    def test_custom_separator(self, view, transport, surfaces):
        coordinator = ViewUpdateCoordinator(view, transport, config=ViewConfig(path_separator="."))
        coordinator.handle(update_all(local("team.alpha", "team.beta")))
        assert set(surfaces[NamespaceKind.LOCAL].rows) == {"team", "team.alpha", "team.beta"}


class TestUpdateChanges:

    def test_leaves_trees_untouched(self, coordinator, view, surfaces):
        coordinator.handle(update_all(local("feature/a")))
        coordinator.toggle_namespace(NamespaceKind.LOCAL, "feature")
        clears = surfaces[NamespaceKind.LOCAL].clear_count

        changes = ev.ChangeList(files_changed=1, unstaged=(ev.FileChange("a.py", ev.FileStatus.MODIFIED),))
        coordinator.handle(ev.UpdateChanges(changes))

        assert surfaces[NamespaceKind.LOCAL].clear_count == clears
        assert surfaces[NamespaceKind.LOCAL].rows["feature"].is_expanded()
        view.show_changes.assert_called_with(changes)
        assert coordinator.state.changes == changes

    def test_resets_diff_target(self, coordinator):
        coordinator.request_file_diff(ev.FileChange("a.py", ev.FileStatus.MODIFIED), staged=False)
        assert coordinator.state.diff_target is not None
        coordinator.handle(ev.UpdateChanges(ev.ChangeList()))
        assert coordinator.state.diff_target is None


class TestOtherEvents:

    def test_file_lines(self, coordinator, view):
        lines = (ev.DiffLine(None, 1, "+", "x\n"),)
        coordinator.handle(ev.ShowFileLines(lines))
        view.show_file_diff.assert_called_once_with(lines)

    def test_commit_info(self, coordinator, view):
        detail = ev.CommitDetail("abc", "Fix")
        coordinator.handle(ev.CommitInfo(detail))
        view.show_commit_info.assert_called_once_with(detail)

    def test_credentials_prompt(self, coordinator, view):
        coordinator.handle(ev.GetCredentials())
        view.prompt_credentials.assert_called_once_with()

    def test_preferences(self, coordinator, view):
        preferences = ev.Preferences(limit_commits=False, commit_count=10)
        coordinator.handle(ev.ShowPreferences(preferences))
        assert coordinator.state.preferences == preferences
        view.show_preferences.assert_called_once_with(preferences)

    def test_handle_message_validates(self, coordinator, view):
        assert coordinator.handle_message("error", "boom") is True
        assert coordinator.handle_message("no-such-event") is False
        assert coordinator.handle_message("show-preferences", []) is False
        view.show_error.assert_called_once_with("boom")

    def test_unknown_event_type(self, coordinator):
        with pytest.raises(TypeError):
            coordinator.handle(object())


class TestCommands:

    def test_push_drops_remote_with_upstream(self, coordinator, transport):
        coordinator.handle(update_all(head_has_upstream=True))
        coordinator.push(remote="origin", force=True)
        assert transport.sent[-1] == cmd.Push(remote=None, force=True)

    def test_push_keeps_remote_without_upstream(self, coordinator, transport):
        coordinator.push(remote="origin")
        assert transport.sent[-1] == cmd.Push(remote="origin", force=False)

    def test_checkout_local_and_remote(self, coordinator, transport):
        coordinator.checkout(NamespaceEntry(full_name="feature/a", ref_name="refs/heads/feature/a"))
        coordinator.checkout(
            NamespaceEntry(
                full_name="origin/dev",
                kind=NamespaceKind.REMOTE,
                ref_name="refs/remotes/origin/dev",
            )
        )
        assert transport.sent == [
            cmd.Checkout("refs/heads/feature/a"),
            cmd.CheckoutRemote(ref_name="refs/remotes/origin/dev", branch_name="origin/dev"),
        ]

    def test_checkout_tag_ignored(self, coordinator, transport):
        assert coordinator.checkout(NamespaceEntry(full_name="v1", kind=NamespaceKind.TAG)) is False
        assert transport.sent == []

    @pytest.mark.parametrize(
        "kind, command_type",
        [
            (NamespaceKind.LOCAL, cmd.DeleteLocalBranch),
            (NamespaceKind.REMOTE, cmd.DeleteRemoteBranch),
            (NamespaceKind.TAG, cmd.DeleteTag),
        ],
    )
    def test_delete_entry(self, coordinator, transport, kind, command_type):
        coordinator.delete_entry(NamespaceEntry(full_name="old", kind=kind))
        assert transport.sent == [command_type(ref_name="old")]

    def test_stage_unstage_commit(self, coordinator, transport):
        change = ev.FileChange("a.py", ev.FileStatus.UNTRACKED)
        coordinator.stage(change)
        coordinator.unstage(change)
        coordinator.commit("Fix", "Body", push=True)
        coordinator.create_branch("feature/x", checkout=True)
        assert transport.sent == [
            cmd.Stage(change),
            cmd.Unstage(change),
            cmd.CommitPush("Fix", "Body"),
            cmd.CreateBranch("feature/x", checkout=True),
        ]

    def test_save_preferences_and_credentials(self, coordinator, transport):
        preferences = ev.Preferences(limit_commits=True, commit_count=50)
        coordinator.save_preferences(preferences)
        coordinator.save_credentials("ann", "hunter2")
        assert coordinator.state.preferences == preferences
        assert transport.sent == [
            cmd.SavePreferences(preferences),
            cmd.SaveCredentials("ann", "hunter2"),
        ]
