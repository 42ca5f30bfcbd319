# -*- coding: utf-8 -*-
"""
View Update Coordinator
Routes backend events into the views and user intents out to the backend.

The coordinator owns the view state and the activity counter. It has no Qt
dependency: views and the transport are plain objects satisfying the
protocols below, so the whole event flow is testable without a display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from orangefish.core import log
from orangefish.core.activity import ActivityCounter
from orangefish.core.namespace_tree import (
    NamespaceEntry,
    NamespaceKind,
    NamespaceTreeNode,
    build_namespace_tree,
)
from orangefish.core.reconcile import TreeStateReconciler
from orangefish.core.result import AppError, BackendUnavailableError
from orangefish.core.settings import ViewConfig
from orangefish.protocol import commands as cmd
from orangefish.protocol import events as ev
from orangefish.protocol.transport import CommandTransport


class NamespaceSurface(Protocol):
    """One branch/tag tree in the view."""

    def clear(self) -> None: ...

    def render_node(self, node: NamespaceTreeNode, path: str, parent: Any) -> Any: ...


class RepositoryView(Protocol):
    """Everything the coordinator renders into."""

    def set_busy(self, busy: bool) -> None: ...

    def show_general_info(self, info: ev.GeneralInfo) -> None: ...

    def show_commits(self, commits: tuple[ev.CommitSummary, ...]) -> None: ...

    def show_changes(self, changes: ev.ChangeList) -> None: ...

    def show_remotes(self, remotes: tuple[str, ...]) -> None: ...

    def namespace_surface(self, kind: NamespaceKind) -> NamespaceSurface: ...

    def show_file_diff(self, lines: tuple[ev.DiffLine, ...]) -> None: ...

    def show_commit_info(self, commit: ev.CommitDetail) -> None: ...

    def prompt_credentials(self) -> None: ...

    def show_preferences(self, preferences: ev.Preferences) -> None: ...

    def show_error(self, message: str) -> None: ...


@dataclass
class ViewState:
    """Coordinator-owned state; handlers receive it explicitly."""

    general_info: ev.GeneralInfo = field(default_factory=ev.GeneralInfo)
    remotes: tuple[str, ...] = ()
    changes: ev.ChangeList = field(default_factory=ev.ChangeList)
    namespaces: dict[NamespaceKind, tuple[NamespaceEntry, ...]] = field(
        default_factory=lambda: {kind: () for kind in NamespaceKind}
    )
    expanded: dict[NamespaceKind, frozenset[str]] = field(
        default_factory=lambda: {kind: frozenset() for kind in NamespaceKind}
    )
    diff_target: Optional[cmd.FileDiff] = None
    preferences: Optional[ev.Preferences] = None
    busy: bool = False

    @property
    def operation(self) -> str:
        return self.general_info.operation


class ViewUpdateCoordinator:
    """
    Top-level orchestrator between the backend and the views.

    Events are handled one at a time, in arrival order, each to completion.
    Tracked commands bump the activity counter when sent; completion events
    (end-process, update_all, update_changes, error) bring it back down.
    """

    def __init__(
        self,
        view: RepositoryView,
        transport: CommandTransport,
        config: Optional[ViewConfig] = None,
        activity: Optional[ActivityCounter] = None,
    ):
        self._view = view
        self._transport = transport
        self._config = config or ViewConfig()
        self.state = ViewState()
        self.activity = activity or ActivityCounter()
        self.activity.subscribe(self._on_busy_changed)
        self._reconcilers = {
            kind: TreeStateReconciler(self._config.path_separator) for kind in NamespaceKind
        }
        self._handlers = {
            ev.StartProcess: self._on_start_process,
            ev.EndProcess: self._on_end_process,
            ev.UpdateAll: self._on_update_all,
            ev.UpdateChanges: self._on_update_changes,
            ev.ShowFileLines: self._on_show_file_lines,
            ev.CommitInfo: self._on_commit_info,
            ev.GetCredentials: self._on_get_credentials,
            ev.ShowPreferences: self._on_show_preferences,
            ev.ErrorNotice: self._on_error,
        }

    # =========================================================================
    # Inbound
    # =========================================================================

    def handle(self, event: ev.InboundEvent):
        """Dispatch one typed backend event."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")
        log.debug(f"Event: {event.name}")
        handler(self.state, event)

    def handle_message(self, name: str, payload: Any = None) -> bool:
        """
        Validate and dispatch a raw wire message.

        Returns:
            True if the message was valid and handled
        """
        result = ev.parse_event(name, payload)
        if not result.ok:
            self.reject(result.error)
            return False
        self.handle(result.value)
        return True

    def reject(self, error: AppError):
        """
        Drop a message that failed validation.

        A rejected completion event still closes its operation; otherwise
        the busy indicator would never clear.
        """
        log.warning(f"{error.message}: {error.details}")
        name = (error.meta or {}).get("event")
        if name in ev.COMPLETION_EVENTS:
            self.activity.end()
            self._view.show_error(f"{error.message}. The view may be out of date.")

    def backend_lost(self, message: str):
        """The backend process is gone; nothing outstanding will complete."""
        self.activity.reset()
        self._view.show_error(message)

    def _on_start_process(self, state: ViewState, event: ev.StartProcess):
        self.activity.start()

    def _on_end_process(self, state: ViewState, event: ev.EndProcess):
        self.activity.end()

    def _on_update_all(self, state: ViewState, event: ev.UpdateAll):
        state.general_info = event.general_info
        self._view.show_general_info(event.general_info)
        if event.commits is not None:
            self._view.show_commits(event.commits)
        self._render_changes(state, event.changes)
        self._render_namespaces(state, event.namespaces)
        state.remotes = event.remotes
        self._view.show_remotes(event.remotes)
        self.activity.end()

    def _on_update_changes(self, state: ViewState, event: ev.UpdateChanges):
        self._render_changes(state, event.changes)
        self.activity.end()

    def _on_show_file_lines(self, state: ViewState, event: ev.ShowFileLines):
        self._view.show_file_diff(event.lines)

    def _on_commit_info(self, state: ViewState, event: ev.CommitInfo):
        self._view.show_commit_info(event.commit)

    def _on_get_credentials(self, state: ViewState, event: ev.GetCredentials):
        self._view.prompt_credentials()

    def _on_show_preferences(self, state: ViewState, event: ev.ShowPreferences):
        state.preferences = event.preferences
        self._view.show_preferences(event.preferences)

    def _on_error(self, state: ViewState, event: ev.ErrorNotice):
        # Release the busy indicator before the error is displayed
        self.activity.end()
        log.error(f"Backend error: {event.message}")
        self._view.show_error(event.message)

    def _render_changes(self, state: ViewState, changes: ev.ChangeList):
        state.changes = changes
        # A fresh change list invalidates the selected row and its diff
        state.diff_target = None
        self._view.show_changes(changes)

    def _render_namespaces(self, state: ViewState, entries):
        by_kind = {kind: [] for kind in NamespaceKind}
        for entry in entries:
            by_kind[entry.kind].append(entry)

        for kind, kind_entries in by_kind.items():
            reconciler = self._reconcilers[kind]
            surface = self._view.namespace_surface(kind)
            previous = reconciler.capture_expansion()
            surface.clear()
            tree = build_namespace_tree(kind_entries, reconciler.separator)
            state.namespaces[kind] = tuple(kind_entries)
            state.expanded[kind] = reconciler.reconcile(tree, previous, surface.render_node)

    # =========================================================================
    # Outbound
    # =========================================================================

    def issue(self, command: cmd.OutboundCommand) -> bool:
        """
        Send a command to the backend without waiting for its result.

        Returns:
            True if the command was handed to the transport
        """
        if command.tracked:
            self.activity.start()
        log.debug(f"Command: {command!r}")
        try:
            self._transport.send(command)
        except BackendUnavailableError as e:
            # No completion event will ever arrive for this command
            if command.tracked:
                self.activity.end()
            log.error_safe(f"Could not send '{command.name}'", e)
            self._view.show_error(str(e))
            return False
        return True

    def stage(self, change: ev.FileChange) -> bool:
        return self.issue(cmd.Stage(change))

    def unstage(self, change: ev.FileChange) -> bool:
        return self.issue(cmd.Unstage(change))

    def commit(self, summary: str, message: str = "", push: bool = False) -> bool:
        command_type = cmd.CommitPush if push else cmd.Commit
        return self.issue(command_type(summary=summary, message=message))

    def fetch(self) -> bool:
        return self.issue(cmd.Fetch())

    def pull(self) -> bool:
        return self.issue(cmd.Pull())

    def push(self, remote: Optional[str] = None, force: bool = False) -> bool:
        if self.state.general_info.head_has_upstream:
            remote = None
        return self.issue(cmd.Push(remote=remote, force=force))

    def checkout(self, entry: NamespaceEntry) -> bool:
        """Check out a local branch, or create a tracking branch for a remote one."""
        if entry.kind is NamespaceKind.REMOTE:
            return self.issue(cmd.CheckoutRemote(ref_name=entry.ref_name, branch_name=entry.full_name))
        if entry.kind is NamespaceKind.LOCAL:
            return self.issue(cmd.Checkout(ref_name=entry.ref_name))
        log.debug(f"Checkout ignored for {entry.kind.value} {entry.full_name}")
        return False

    def create_branch(self, branch_name: str, checkout: bool = False) -> bool:
        return self.issue(cmd.CreateBranch(branch_name=branch_name, checkout=checkout))

    def delete_entry(self, entry: NamespaceEntry) -> bool:
        command_types = {
            NamespaceKind.LOCAL: cmd.DeleteLocalBranch,
            NamespaceKind.REMOTE: cmd.DeleteRemoteBranch,
            NamespaceKind.TAG: cmd.DeleteTag,
        }
        return self.issue(command_types[entry.kind](ref_name=entry.ref_name))

    def save_credentials(self, username: str, password: str) -> bool:
        return self.issue(cmd.SaveCredentials(username=username, password=password))

    def save_preferences(self, preferences: ev.Preferences) -> bool:
        self.state.preferences = preferences
        return self.issue(cmd.SavePreferences(preferences))

    def request_file_diff(self, change: ev.FileChange, staged: bool) -> bool:
        command = cmd.FileDiff(path=change.path, change_type=cmd.STAGED if staged else cmd.UNSTAGED)
        self.state.diff_target = command
        return self.issue(command)

    def toggle_namespace(self, kind: NamespaceKind, path: str) -> bool:
        """Flip one folder in a branch/tag tree (user click)."""
        toggled = self._reconcilers[kind].toggle(path)
        if toggled:
            self.state.expanded[kind] = self._reconcilers[kind].capture_expansion()
        return toggled

    # =========================================================================
    # Internal
    # =========================================================================

    def _on_busy_changed(self, busy: bool):
        self.state.busy = busy
        self._view.set_busy(busy)
