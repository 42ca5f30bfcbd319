# -*- coding: utf-8 -*-
"""
Commit List Widget Component
Commit graph and summaries from the latest snapshot plus details of one commit.
"""

from PySide6 import QtCore, QtGui, QtWidgets

from orangefish.core.commit_graph import lane_count, layout_graph
from orangefish.ui.components.base_widget import BaseWidget

OID_ROLE = QtCore.Qt.UserRole
GRAPH_ROLE = QtCore.Qt.UserRole + 1
SHORT_OID_LENGTH = 7

GRAPH_COLUMN = 0
SUMMARY_COLUMN = 1
OID_COLUMN = 2

LANE_WIDTH = 16
NODE_RADIUS = 4

LANE_COLORS = [
    QtGui.QColor("#4CAF50"),
    QtGui.QColor("#2196F3"),
    QtGui.QColor("#FF9800"),
    QtGui.QColor("#9C27B0"),
    QtGui.QColor("#F44336"),
    QtGui.QColor("#00BCD4"),
    QtGui.QColor("#E91E63"),
    QtGui.QColor("#795548"),
]


def lane_color(lane: int) -> QtGui.QColor:
    return LANE_COLORS[lane % len(LANE_COLORS)]


class GraphDelegate(QtWidgets.QStyledItemDelegate):
    """Paints the lanes, edges and node of one commit row."""

    def paint(self, painter, option, index):
        super().paint(painter, option, index)
        graph_row = index.data(GRAPH_ROLE)
        if graph_row is None:
            return

        rect = option.rect
        painter.save()
        painter.setRenderHint(QtGui.QPainter.Antialiasing)

        def point(lane, y):
            return QtCore.QPointF(
                rect.left() + lane * LANE_WIDTH + LANE_WIDTH / 2,
                rect.top() + y * rect.height(),
            )

        for segment in graph_row.segments:
            # Edges take the colour of the lane they lead into
            pen = QtGui.QPen(lane_color(segment.end_lane), 2)
            pen.setCapStyle(QtCore.Qt.RoundCap)
            painter.setPen(pen)
            painter.drawLine(
                point(segment.start_lane, segment.start_y),
                point(segment.end_lane, segment.end_y),
            )

        color = lane_color(graph_row.lane)
        painter.setPen(QtGui.QPen(color.darker(130), 1))
        painter.setBrush(color)
        painter.drawEllipse(point(graph_row.lane, 0.5), NODE_RADIUS, NODE_RADIUS)
        painter.restore()


class CommitListWidget(BaseWidget):
    """Commit table (graph, summary, short id) and detail pane."""

    def __init__(self, parent=None):
        super().__init__(parent)

        layout = QtWidgets.QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        splitter = QtWidgets.QSplitter(QtCore.Qt.Vertical)

        self.table = QtWidgets.QTreeWidget()
        self.table.setColumnCount(3)
        self.table.setHeaderLabels(["Graph", "Summary", "Commit"])
        self.table.setRootIsDecorated(False)
        self.table.setUniformRowHeights(True)
        self.table.setItemDelegateForColumn(GRAPH_COLUMN, GraphDelegate(self.table))
        splitter.addWidget(self.table)

        details = QtWidgets.QWidget()
        details_layout = QtWidgets.QVBoxLayout(details)
        details_layout.setContentsMargins(0, 0, 0, 0)
        self.summary_label = self.create_strong_label("")
        self.author_label = self.create_meta_label("")
        self.message_view = QtWidgets.QPlainTextEdit()
        self.message_view.setReadOnly(True)
        self.files_list = QtWidgets.QListWidget()
        details_layout.addWidget(self.summary_label)
        details_layout.addWidget(self.author_label)
        details_layout.addWidget(self.message_view)
        details_layout.addWidget(self.files_list)
        splitter.addWidget(details)

        layout.addWidget(splitter)
        self.setLayout(layout)

    def show_commits(self, commits):
        self.table.clear()
        commits_by_oid = {commit.oid: commit for commit in commits}
        graph_rows = layout_graph(commits)
        for graph_row in graph_rows:
            commit = commits_by_oid[graph_row.oid]
            item = QtWidgets.QTreeWidgetItem(["", commit.summary, commit.oid[:SHORT_OID_LENGTH]])
            item.setData(GRAPH_COLUMN, GRAPH_ROLE, graph_row)
            item.setData(SUMMARY_COLUMN, OID_ROLE, commit.oid)
            item.setToolTip(OID_COLUMN, commit.oid)
            self.table.addTopLevelItem(item)
        self.table.setColumnWidth(GRAPH_COLUMN, max(1, lane_count(graph_rows)) * LANE_WIDTH + 4)

    def graph_rows(self):
        return [
            self.table.topLevelItem(i).data(GRAPH_COLUMN, GRAPH_ROLE)
            for i in range(self.table.topLevelItemCount())
        ]

    def show_commit_detail(self, commit):
        self.summary_label.setText(commit.summary)
        self.author_label.setText(f"{commit.author}  {commit.oid[:SHORT_OID_LENGTH]}".strip())
        self.message_view.setPlainText(commit.message)
        self.files_list.clear()
        for change in commit.files:
            self.files_list.addItem(f"{change.status.name.title()}: {change.path}")

    def clear_view(self):
        self.table.clear()
        self.summary_label.clear()
        self.author_label.clear()
        self.message_view.clear()
        self.files_list.clear()
