# -*- coding: utf-8 -*-
"""
Diff Widget Component
Table of one file's diff lines with added/removed highlighting.
"""

from PySide6 import QtGui, QtWidgets

from orangefish.ui.components.base_widget import BaseWidget

ADDED_BACKGROUND = "#d4f8d4"
REMOVED_BACKGROUND = "#f8d4d4"

COLUMNS = ("Old", "New", "", "Content")


def _lineno_text(lineno):
    return "" if lineno is None else str(lineno)


class DiffWidget(BaseWidget):
    """Read-only diff viewer fed by show-file-lines events."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._file_type = ""

        layout = QtWidgets.QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QtWidgets.QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.table.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        header = self.table.horizontalHeader()
        for column in range(3):
            header.setSectionResizeMode(column, QtWidgets.QHeaderView.ResizeToContents)
        header.setStretchLastSection(True)

        font = QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.FixedFont)
        self.table.setFont(font)

        layout.addWidget(self.table)
        self.setLayout(layout)

    @property
    def file_type(self) -> str:
        """Syntax tag of the file currently shown (e.g. 'py')."""
        return self._file_type

    def show_lines(self, lines):
        self.table.setRowCount(0)
        self.table.setRowCount(len(lines))
        self._file_type = lines[0].file_type if lines else ""

        for row, line in enumerate(lines):
            cells = (
                _lineno_text(line.old_lineno),
                _lineno_text(line.new_lineno),
                line.origin,
                line.content.rstrip("\n"),
            )
            background = None
            if line.origin == "+":
                background = QtGui.QColor(ADDED_BACKGROUND)
            elif line.origin == "-":
                background = QtGui.QColor(REMOVED_BACKGROUND)

            for column, text in enumerate(cells):
                item = QtWidgets.QTableWidgetItem(text)
                if background is not None:
                    item.setBackground(background)
                self.table.setItem(row, column, item)

    def clear_view(self):
        self.table.setRowCount(0)
        self._file_type = ""
