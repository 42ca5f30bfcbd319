# -*- coding: utf-8 -*-
"""
Changes Widget Component
Unstaged and staged file lists with per-file stage/unstage buttons.

File paths are shown in ElidedLabels so long paths keep their most
specific (rightmost) components visible.
"""

from PySide6 import QtCore, QtWidgets

from orangefish.core import log
from orangefish.protocol.events import ChangeList, FileChange, FileStatus
from orangefish.ui.components.base_widget import BaseWidget
from orangefish.ui.components.elided_label import ElidedLabel

CHANGE_ROLE = QtCore.Qt.UserRole

# (glyph, colour) per status
_STATUS_STYLE = {
    FileStatus.DELETED: ("−", "red"),
    FileStatus.MODIFIED: ("✎", "goldenrod"),
    FileStatus.UNTRACKED: ("+", "green"),
    FileStatus.ADDED: ("+", "green"),
    FileStatus.RENAMED: ("→", "mediumpurple"),
    FileStatus.COPIED: ("C", "green"),
    FileStatus.CONFLICTED: ("!", "goldenrod"),
}
_UNKNOWN_STYLE = ("?", "blue")


def status_style(status: FileStatus):
    """Return the (glyph, colour) pair used to mark a file status."""
    return _STATUS_STYLE.get(status, _UNKNOWN_STYLE)


def changes_tab_title(files_changed: int) -> str:
    if files_changed > 0:
        return f"Changes ({files_changed})"
    return "Changes"


class ChangeRow(QtWidgets.QWidget):
    """One changed file: status glyph, elided path, stage/unstage button."""

    action_clicked = QtCore.Signal()

    def __init__(self, change: FileChange, staged: bool, ellipsis: str, step: int, parent=None):
        super().__init__(parent)
        self.change = change
        self.staged = staged

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(4, 1, 4, 1)
        layout.setSpacing(4)

        glyph, colour = status_style(change.status)
        self.status_label = QtWidgets.QLabel(glyph)
        self.status_label.setStyleSheet(f"color: {colour}; font-weight: bold;")
        self.status_label.setToolTip(change.status.name.title())
        layout.addWidget(self.status_label)

        self.path_label = ElidedLabel(change.path, ellipsis=ellipsis, step=step)
        layout.addWidget(self.path_label, 1)

        self.action_button = QtWidgets.QToolButton()
        self.action_button.setText("−" if staged else "+")
        self.action_button.setToolTip("Unstage" if staged else "Stage")
        self.action_button.clicked.connect(lambda: self.action_clicked.emit())
        layout.addWidget(self.action_button)


class ChangesWidget(BaseWidget):
    """
    Widget for displaying and staging file changes.

    Signals:
        stage_requested: User pressed + on an unstaged file (FileChange)
        unstage_requested: User pressed - on a staged file (FileChange)
        diff_requested: User selected a file (FileChange, staged flag)
        title_changed: Tab title reflecting the number of changed files
    """

    stage_requested = QtCore.Signal(object)
    unstage_requested = QtCore.Signal(object)
    diff_requested = QtCore.Signal(object, bool)
    title_changed = QtCore.Signal(str)

    def __init__(self, parent=None, ellipsis="...", step=4):
        super().__init__(parent)
        self._ellipsis = ellipsis
        self._step = step
        self._changes = ChangeList()

        layout = QtWidgets.QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.unstaged_list = self._build_group(layout, "Unstaged Changes")
        self.staged_list = self._build_group(layout, "Staged Changes")

        self.setLayout(layout)

    # =========================================================================
    # UI Construction
    # =========================================================================

    def _build_group(self, layout, title):
        group = self.create_group_box(title)
        group_layout = QtWidgets.QVBoxLayout()
        group_layout.setContentsMargins(6, 4, 6, 4)
        group.setLayout(group_layout)

        file_list = QtWidgets.QListWidget()
        file_list.setHorizontalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        file_list.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        file_list.setResizeMode(QtWidgets.QListView.Adjust)
        file_list.itemClicked.connect(self._on_item_clicked)
        group_layout.addWidget(file_list)

        layout.addWidget(group)
        return file_list

    # =========================================================================
    # Public API
    # =========================================================================

    def update_changes(self, changes: ChangeList):
        """
        Replace both lists with a new change list.

        Args:
            changes: ChangeList from the backend
        """
        self._changes = changes
        self.unselect_all()
        self._fill(self.unstaged_list, changes.unstaged, staged=False)
        self._fill(self.staged_list, changes.staged, staged=True)
        self.title_changed.emit(changes_tab_title(changes.files_changed))
        log.debug(
            f"Changes updated: {len(changes.unstaged)} unstaged, {len(changes.staged)} staged"
        )

    def changes(self) -> ChangeList:
        return self._changes

    def rows(self, staged: bool):
        file_list = self.staged_list if staged else self.unstaged_list
        return [file_list.itemWidget(file_list.item(i)) for i in range(file_list.count())]

    def refit_labels(self):
        """Recompute truncated paths (after tab activation or resize)."""
        for staged in (False, True):
            for row in self.rows(staged):
                row.path_label.refit()

    def unselect_all(self):
        self.unstaged_list.clearSelection()
        self.staged_list.clearSelection()

    def clear_view(self):
        self.update_changes(ChangeList())

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _fill(self, file_list, files, staged):
        file_list.clear()
        for change in files:
            item = QtWidgets.QListWidgetItem()
            item.setData(CHANGE_ROLE, change)
            row = ChangeRow(change, staged, self._ellipsis, self._step)
            if staged:
                row.action_clicked.connect(lambda c=change: self.unstage_requested.emit(c))
            else:
                row.action_clicked.connect(lambda c=change: self.stage_requested.emit(c))
            # Width follows the list viewport so the path label can elide
            item.setSizeHint(QtCore.QSize(0, row.sizeHint().height()))
            file_list.addItem(item)
            file_list.setItemWidget(item, row)

    def _on_item_clicked(self, item):
        change = item.data(CHANGE_ROLE)
        staged = item.listWidget() is self.staged_list
        # Only one row is selected across both lists
        other = self.unstaged_list if staged else self.staged_list
        other.clearSelection()
        self.diff_requested.emit(change, staged)
