# -*- coding: utf-8 -*-
"""
Namespace Tree Widget
Branch/tag tree rendered from a NamespaceTreeNode, one node at a time.

The widget is the render surface of a TreeStateReconciler pass: the
coordinator clears it, then calls render_node for every node depth-first.
"""

from PySide6 import QtCore, QtGui, QtWidgets

from orangefish.core import log
from orangefish.core.namespace_tree import NamespaceKind

PATH_ROLE = QtCore.Qt.UserRole
ENTRY_ROLE = QtCore.Qt.UserRole + 1

HEAD_MARKER = "* "


class FolderHandle:
    """Expansion handle wrapping the tree item of one folder."""

    def __init__(self, item: QtWidgets.QTreeWidgetItem):
        self.item = item

    def is_expanded(self) -> bool:
        return self.item.isExpanded()

    def set_expanded(self, expanded: bool):
        self.item.setExpanded(expanded)


def format_tracking(ahead: int, behind: int) -> str:
    """Ahead/behind annotation, e.g. '↑2 ↓1'; empty when in sync."""
    parts = []
    if ahead:
        parts.append(f"↑{ahead}")
    if behind:
        parts.append(f"↓{behind}")
    return " ".join(parts)


class NamespaceTreeWidget(QtWidgets.QTreeWidget):
    """
    Tree of local branches, remote branches, or tags.

    Signals:
        folder_toggled: User clicked a folder header (path identity)
        checkout_requested: User double-clicked a branch (NamespaceEntry)
        delete_requested: User chose delete from the context menu (NamespaceEntry)
    """

    folder_toggled = QtCore.Signal(str)
    checkout_requested = QtCore.Signal(object)
    delete_requested = QtCore.Signal(object)

    def __init__(self, kind: NamespaceKind, parent=None):
        super().__init__(parent)
        self._kind = kind
        self._double_clicked_item = None

        self.setColumnCount(2)
        self.setHeaderHidden(True)
        self.setExpandsOnDoubleClick(False)
        self.setContextMenuPolicy(QtCore.Qt.CustomContextMenu)
        header = self.header()
        header.setStretchLastSection(False)
        header.setSectionResizeMode(0, QtWidgets.QHeaderView.Stretch)
        header.setSectionResizeMode(1, QtWidgets.QHeaderView.ResizeToContents)

        self.itemClicked.connect(self._on_item_clicked)
        self.itemDoubleClicked.connect(self._on_item_double_clicked)
        self.customContextMenuRequested.connect(self._on_context_menu)

    @property
    def kind(self) -> NamespaceKind:
        return self._kind

    # =========================================================================
    # Render surface
    # =========================================================================

    def render_node(self, node, path, parent):
        """
        Add one node below ``parent`` (a FolderHandle, or None for top level).

        Returns:
            FolderHandle for folders, the tree item for leaves
        """
        parent_item = parent.item if parent is not None else self.invisibleRootItem()
        item = QtWidgets.QTreeWidgetItem(parent_item)
        item.setData(0, PATH_ROLE, path)

        entry = node.entry
        if node.children:
            item.setText(0, node.segment)
            item.setChildIndicatorPolicy(QtWidgets.QTreeWidgetItem.ShowIndicator)
            self._set_bold(item)
        else:
            item.setText(0, entry.shorthand or node.segment)

        # A name can be both a branch and the prefix of other branches
        if entry is not None:
            if entry.is_head:
                item.setText(0, HEAD_MARKER + item.text(0))
                self._set_bold(item)
            item.setText(1, format_tracking(entry.ahead, entry.behind))
            item.setToolTip(0, entry.ref_name)
            item.setData(0, ENTRY_ROLE, entry)

        if node.children:
            return FolderHandle(item)
        return item

    @staticmethod
    def _set_bold(item):
        font = item.font(0)
        font.setBold(True)
        item.setFont(0, font)

    # =========================================================================
    # Interaction
    # =========================================================================

    def entry_for_item(self, item):
        if item is None:
            return None
        return item.data(0, ENTRY_ROLE)

    def mousePressEvent(self, event):
        self._double_clicked_item = None
        super().mousePressEvent(event)

    def _on_item_clicked(self, item, column):
        # The release that ends a double-click arrives as a second click
        if item is self._double_clicked_item:
            self._double_clicked_item = None
            return
        if item.childCount() > 0:
            self.folder_toggled.emit(item.data(0, PATH_ROLE))

    def _on_item_double_clicked(self, item, column):
        self._double_clicked_item = item
        entry = self.entry_for_item(item)
        if entry is None or self._kind is NamespaceKind.TAG:
            return
        log.debug(f"Checkout requested: {entry.ref_name}")
        self.checkout_requested.emit(entry)

    def _on_context_menu(self, pos):
        entry = self.entry_for_item(self.itemAt(pos))
        if entry is None:
            return

        menu = QtWidgets.QMenu(self)
        if self._kind is not NamespaceKind.TAG:
            checkout_action = menu.addAction("Check Out")
            checkout_action.triggered.connect(lambda: self.checkout_requested.emit(entry))
        delete_action = menu.addAction(QtGui.QIcon.fromTheme("edit-delete"), f"Delete {entry.full_name}")
        delete_action.setEnabled(not entry.is_head)
        delete_action.triggered.connect(lambda: self.delete_requested.emit(entry))
        menu.exec(self.viewport().mapToGlobal(pos))
