# -*- coding: utf-8 -*-
"""
OrangeFish Main Window
Repository view: branch/tag trees, commit history, working-tree changes.

The window is the RepositoryView the coordinator renders into. User
actions are forwarded to the coordinator, never straight to the backend.
"""

from PySide6 import QtCore, QtWidgets

from orangefish.core import log
from orangefish.core.namespace_tree import NamespaceKind
from orangefish.protocol.events import Preferences
from orangefish.ui import dialogs
from orangefish.ui.components.changes_widget import ChangesWidget
from orangefish.ui.components.commit_list_widget import CommitListWidget
from orangefish.ui.components.diff_widget import DiffWidget
from orangefish.ui.components.namespace_tree_widget import NamespaceTreeWidget

NAMESPACE_TITLES = {
    NamespaceKind.LOCAL: "Local Branches",
    NamespaceKind.REMOTE: "Remote Branches",
    NamespaceKind.TAG: "Tags",
}

# Banner text and commit button label per repository operation
OPERATION_MODES = {
    "commit": ("", "Commit"),
    "merge": ("Merge in progress. Resolve conflicts, then commit.", "Commit Merge"),
    "rebase": ("Rebase in progress.", "Continue Rebase"),
    "cherrypick": ("Cherry-pick in progress. Resolve conflicts, then commit.", "Commit Cherry-pick"),
    "revert": ("Revert in progress.", "Commit Revert"),
}

COMMITS_TAB = 0
CHANGES_TAB = 1


class MainWindow(QtWidgets.QMainWindow):
    """Top-level OrangeFish window."""

    def __init__(self, ellipsis="...", step=4, parent=None):
        super().__init__(parent)
        self.setObjectName("OrangeFish_MainWindow")
        self.setWindowTitle("OrangeFish")
        self.resize(1100, 720)

        self._coordinator = None
        self._remotes = ()
        self._head_has_upstream = False
        self._operation = "commit"

        self._build_toolbar()

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        splitter.addWidget(self._build_sidebar())
        splitter.addWidget(self._build_main_area(ellipsis, step))
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([260, 840])
        self.setCentralWidget(splitter)

        self.busy_bar = QtWidgets.QProgressBar()
        self.busy_bar.setRange(0, 0)
        self.busy_bar.setMaximumWidth(160)
        self.busy_bar.setTextVisible(False)
        self.busy_bar.setVisible(False)
        self.statusBar().addPermanentWidget(self.busy_bar)

        self.show_general_info_mode("commit")

    # =========================================================================
    # Construction
    # =========================================================================

    def _build_toolbar(self):
        toolbar = self.addToolBar("Repository")
        toolbar.setObjectName("OrangeFish_Toolbar")
        toolbar.setMovable(False)

        self.fetch_action = toolbar.addAction("Fetch")
        self.pull_action = toolbar.addAction("Pull")
        self.push_action = toolbar.addAction("Push")
        toolbar.addSeparator()
        self.branch_action = toolbar.addAction("New Branch")
        toolbar.addSeparator()
        self.credentials_action = toolbar.addAction("Credentials")
        self.preferences_action = toolbar.addAction("Preferences")

        self.fetch_action.triggered.connect(self._on_fetch)
        self.pull_action.triggered.connect(self._on_pull)
        self.push_action.triggered.connect(self._on_push)
        self.branch_action.triggered.connect(self._on_new_branch)
        self.credentials_action.triggered.connect(self.prompt_credentials)
        self.preferences_action.triggered.connect(self._on_preferences)

    def _build_sidebar(self):
        sidebar = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(sidebar)
        layout.setContentsMargins(4, 4, 4, 4)

        self.namespace_trees = {}
        for kind in NamespaceKind:
            label = QtWidgets.QLabel(f"<b>{NAMESPACE_TITLES[kind]}</b>")
            tree = NamespaceTreeWidget(kind)
            tree.folder_toggled.connect(
                lambda path, kind=kind: self._on_folder_toggled(kind, path)
            )
            tree.checkout_requested.connect(self._on_checkout_requested)
            tree.delete_requested.connect(self._on_delete_requested)
            layout.addWidget(label)
            layout.addWidget(tree, 1)
            self.namespace_trees[kind] = tree

        return sidebar

    def _build_main_area(self, ellipsis, step):
        self.tabs = QtWidgets.QTabWidget()

        self.commit_list = CommitListWidget()
        self.tabs.addTab(self.commit_list, "Commits")

        changes_page = QtWidgets.QWidget()
        changes_layout = QtWidgets.QHBoxLayout(changes_page)
        changes_layout.setContentsMargins(0, 0, 0, 0)

        left = QtWidgets.QWidget()
        left_layout = QtWidgets.QVBoxLayout(left)
        left_layout.setContentsMargins(0, 0, 0, 0)
        self.changes_widget = ChangesWidget(ellipsis=ellipsis, step=step)
        left_layout.addWidget(self.changes_widget, 1)
        left_layout.addWidget(self._build_commit_controls())

        self.diff_widget = DiffWidget()

        changes_splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        changes_splitter.addWidget(left)
        changes_splitter.addWidget(self.diff_widget)
        changes_splitter.setSizes([320, 520])
        changes_layout.addWidget(changes_splitter)
        self.tabs.addTab(changes_page, "Changes")

        self.changes_widget.stage_requested.connect(self._on_stage_requested)
        self.changes_widget.unstage_requested.connect(self._on_unstage_requested)
        self.changes_widget.diff_requested.connect(self._on_diff_requested)
        self.changes_widget.title_changed.connect(
            lambda title: self.tabs.setTabText(CHANGES_TAB, title)
        )
        self.tabs.currentChanged.connect(self._on_tab_changed)

        return self.tabs

    def _build_commit_controls(self):
        group = QtWidgets.QGroupBox("Commit")
        layout = QtWidgets.QVBoxLayout(group)

        self.mode_label = QtWidgets.QLabel("")
        self.mode_label.setWordWrap(True)
        self.mode_label.setStyleSheet("color: #b36b00; font-weight: bold;")
        layout.addWidget(self.mode_label)

        self.summary_edit = QtWidgets.QLineEdit()
        self.summary_edit.setPlaceholderText("Summary (required)")
        self.summary_edit.textChanged.connect(self._update_commit_buttons)
        layout.addWidget(self.summary_edit)

        self.message_edit = QtWidgets.QPlainTextEdit()
        self.message_edit.setPlaceholderText("Description")
        self.message_edit.setMaximumHeight(90)
        layout.addWidget(self.message_edit)

        buttons = QtWidgets.QHBoxLayout()
        self.commit_button = QtWidgets.QPushButton("Commit")
        self.commit_push_button = QtWidgets.QPushButton("Commit && Push")
        self.commit_button.clicked.connect(lambda: self._on_commit(push=False))
        self.commit_push_button.clicked.connect(lambda: self._on_commit(push=True))
        buttons.addWidget(self.commit_button)
        buttons.addWidget(self.commit_push_button)
        layout.addLayout(buttons)

        self._update_commit_buttons()
        return group

    def set_coordinator(self, coordinator):
        """Attach the coordinator that user actions are forwarded to."""
        self._coordinator = coordinator

    # =========================================================================
    # RepositoryView
    # =========================================================================

    def set_busy(self, busy: bool):
        self.busy_bar.setVisible(busy)
        if busy:
            self.statusBar().showMessage("Working...")
        else:
            self.statusBar().clearMessage()

    def show_general_info(self, info):
        self._head_has_upstream = info.head_has_upstream
        self.show_general_info_mode(info.operation)

    def show_general_info_mode(self, operation: str):
        self._operation = operation if operation in OPERATION_MODES else "commit"
        banner, button_text = OPERATION_MODES[self._operation]
        self.mode_label.setText(banner)
        self.mode_label.setVisible(bool(banner))
        self.commit_button.setText(button_text)
        # Pushing mid-operation would publish a half-finished history
        self.commit_push_button.setVisible(self._operation == "commit")
        self._update_commit_buttons()

    def show_commits(self, commits):
        self.commit_list.show_commits(commits)

    def show_changes(self, changes):
        self.changes_widget.update_changes(changes)
        self.diff_widget.clear_view()

    def show_remotes(self, remotes):
        self._remotes = tuple(remotes)

    def namespace_surface(self, kind: NamespaceKind):
        return self.namespace_trees[kind]

    def show_file_diff(self, lines):
        self.diff_widget.show_lines(lines)

    def show_commit_info(self, commit):
        self.commit_list.show_commit_detail(commit)
        self.tabs.setCurrentIndex(COMMITS_TAB)

    # Reached from backend event handlers: the dialogs open window-modal and
    # return at once so no nested event loop runs inside a handler.

    def prompt_credentials(self):
        dialog = dialogs.CredentialsDialog(self)
        dialog.setAttribute(QtCore.Qt.WA_DeleteOnClose)

        def on_accepted():
            if self._coordinator:
                self._coordinator.save_credentials(dialog.username, dialog.password)

        dialog.accepted.connect(on_accepted)
        dialog.open()
        return dialog

    def show_preferences(self, preferences):
        dialog = dialogs.PreferencesDialog(preferences, self)
        dialog.setAttribute(QtCore.Qt.WA_DeleteOnClose)

        def on_accepted():
            if self._coordinator:
                self._coordinator.save_preferences(dialog.preferences)

        dialog.accepted.connect(on_accepted)
        dialog.open()
        return dialog

    def show_error(self, message: str):
        self.statusBar().showMessage(message, 8000)
        box = QtWidgets.QMessageBox(
            QtWidgets.QMessageBox.Warning, "OrangeFish", message, QtWidgets.QMessageBox.Ok, self
        )
        box.setAttribute(QtCore.Qt.WA_DeleteOnClose)
        box.open()
        return box

    # =========================================================================
    # User actions
    # =========================================================================

    def _on_fetch(self):
        if self._coordinator:
            self._coordinator.fetch()

    def _on_pull(self):
        if self._coordinator:
            self._coordinator.pull()

    def _on_push(self):
        if not self._coordinator:
            return
        dialog = dialogs.PushDialog(self._remotes, self._head_has_upstream, self)
        if dialog.exec() == QtWidgets.QDialog.Accepted:
            self._coordinator.push(remote=dialog.remote, force=dialog.force)

    def _on_new_branch(self):
        if not self._coordinator:
            return
        dialog = dialogs.NewBranchDialog(self)
        if dialog.exec() == QtWidgets.QDialog.Accepted:
            self._coordinator.create_branch(dialog.branch_name, checkout=dialog.checkout)

    def _on_preferences(self):
        if not self._coordinator:
            return
        self.show_preferences(self._coordinator.state.preferences or Preferences())

    def _on_commit(self, push: bool):
        summary = self.summary_edit.text().strip()
        if not summary or not self._coordinator:
            return
        if self._coordinator.commit(summary, self.message_edit.toPlainText(), push=push):
            self.summary_edit.clear()
            self.message_edit.clear()

    def _update_commit_buttons(self):
        has_summary = bool(self.summary_edit.text().strip())
        self.commit_button.setEnabled(has_summary)
        self.commit_push_button.setEnabled(has_summary)

    def _on_folder_toggled(self, kind, path):
        if self._coordinator:
            self._coordinator.toggle_namespace(kind, path)

    def _on_checkout_requested(self, entry):
        if self._coordinator:
            self._coordinator.checkout(entry)

    def _on_delete_requested(self, entry):
        if not self._coordinator:
            return
        answer = QtWidgets.QMessageBox.question(
            self,
            "Delete",
            f"Delete {entry.kind.value} '{entry.full_name}'?",
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No,
            QtWidgets.QMessageBox.No,
        )
        if answer == QtWidgets.QMessageBox.Yes:
            self._coordinator.delete_entry(entry)

    def _on_stage_requested(self, change):
        if self._coordinator:
            self._coordinator.stage(change)

    def _on_unstage_requested(self, change):
        if self._coordinator:
            self._coordinator.unstage(change)

    def _on_diff_requested(self, change, staged):
        if self._coordinator:
            self._coordinator.request_file_diff(change, staged)

    def _on_tab_changed(self, index):
        # Labels measured while hidden have zero width; refit once visible
        if index == CHANGES_TAB:
            log.debug("Changes tab shown, refitting labels")
            self.changes_widget.refit_labels()
