# -*- coding: utf-8 -*-
"""
Commit Graph Layout
Turns positioned commits into per-row line segments for a lane graph.

Rows are drawn top to bottom, newest first. An edge from a child to its
parent runs straight down the child's lane and bends into the parent's
lane inside the parent's row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

# Vertical anchors inside one row
TOP = 0.0
CENTER = 0.5
BOTTOM = 1.0


@dataclass(frozen=True)
class GraphSegment:
    """A line inside one row, from (start_lane, start_y) to (end_lane, end_y)."""

    start_lane: int
    start_y: float
    end_lane: int
    end_y: float


@dataclass
class GraphRow:
    """Everything painted in the graph cell of one commit row."""

    oid: str
    lane: int
    segments: list[GraphSegment]


def layout_graph(commits: Iterable) -> list[GraphRow]:
    """
    Lay out commits (objects with oid, parent_oids, child_oids, column, row).

    Commits are ordered by their row; the result has one GraphRow per
    commit in that order. Parents outside the list get a stub to the bottom
    of the row, children outside the list a stub from the top.

    Returns:
        GraphRow list aligned with the display order
    """
    ordered = sorted(commits, key=lambda c: c.row)
    position = {commit.oid: index for index, commit in enumerate(ordered)}
    rows = [GraphRow(commit.oid, commit.column, []) for commit in ordered]

    for index, commit in enumerate(ordered):
        lane = commit.column
        segments = rows[index].segments

        if any(child not in position for child in commit.child_oids):
            segments.append(GraphSegment(lane, TOP, lane, CENTER))

        if commit.parent_oids:
            segments.append(GraphSegment(lane, CENTER, lane, BOTTOM))

        for parent_oid in commit.parent_oids:
            parent_index = position.get(parent_oid)
            if parent_index is None or parent_index <= index:
                continue
            for between in range(index + 1, parent_index):
                rows[between].segments.append(GraphSegment(lane, TOP, lane, BOTTOM))
            rows[parent_index].segments.append(
                GraphSegment(lane, TOP, ordered[parent_index].column, CENTER)
            )

    return rows


def lane_count(rows: Iterable[GraphRow]) -> int:
    """Number of lanes needed to draw every row."""
    widest = -1
    for row in rows:
        widest = max(widest, row.lane)
        for segment in row.segments:
            widest = max(widest, segment.start_lane, segment.end_lane)
    return widest + 1
