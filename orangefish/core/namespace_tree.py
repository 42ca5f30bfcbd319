# -*- coding: utf-8 -*-
"""
Namespace Tree
Groups flat branch/tag names into folders by path separator.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from orangefish.core import log

DEFAULT_SEPARATOR = "/"


class NamespaceKind(str, enum.Enum):
    LOCAL = "local"
    REMOTE = "remote"
    TAG = "tag"


@dataclass(frozen=True)
class NamespaceEntry:
    """
    A branch, remote branch, or tag as reported in one snapshot.

    Attributes:
        full_name: Path-like name the tree is built from ("feature/a")
        shorthand: Label shown on the leaf row (defaults to the last segment)
        kind: Local branch, remote branch, or tag
        is_head: True for the checked-out branch
        ahead: Commits ahead of upstream
        behind: Commits behind upstream
        ref_name: Fully qualified reference ("refs/heads/feature/a")
    """

    full_name: str
    shorthand: str = ""
    kind: NamespaceKind = NamespaceKind.LOCAL
    is_head: bool = False
    ahead: int = 0
    behind: int = 0
    ref_name: str = ""

    def __post_init__(self):
        if self.ahead < 0 or self.behind < 0:
            raise ValueError("ahead/behind counts cannot be negative")
        if not self.shorthand:
            object.__setattr__(
                self, "shorthand", self.full_name.rsplit(DEFAULT_SEPARATOR, 1)[-1]
            )
        if not self.ref_name:
            object.__setattr__(self, "ref_name", self.full_name)


@dataclass
class NamespaceTreeNode:
    """One path segment; interior nodes group children, leaves carry an entry."""

    segment: str = ""
    children: dict[str, NamespaceTreeNode] = field(default_factory=dict)
    entry: Optional[NamespaceEntry] = None

    @property
    def is_leaf(self) -> bool:
        return self.entry is not None and not self.children

    @property
    def is_interior(self) -> bool:
        return self.entry is None and bool(self.children)

    def child(self, segment: str) -> Optional[NamespaceTreeNode]:
        return self.children.get(segment)

    def iter_children(self) -> Iterator[NamespaceTreeNode]:
        # dict preserves insertion order, which is first-seen order
        return iter(self.children.values())

    def iter_leaves(self, separator: str = DEFAULT_SEPARATOR, prefix=()):
        """Yield (path, entry) for every leaf below this node, depth-first."""
        for node in self.iter_children():
            segments = prefix + (node.segment,)
            if node.entry is not None:
                yield separator.join(segments), node.entry
            yield from node.iter_leaves(separator, segments)

    def interior_paths(self, separator: str = DEFAULT_SEPARATOR, prefix=()):
        """Return the path identities of all interior nodes below this node."""
        paths = []
        for node in self.iter_children():
            segments = prefix + (node.segment,)
            if node.children:
                paths.append(separator.join(segments))
                paths.extend(node.interior_paths(separator, segments))
        return paths


def build_namespace_tree(
    entries: Iterable[NamespaceEntry], separator: str = DEFAULT_SEPARATOR
) -> NamespaceTreeNode:
    """
    Build a nested tree from flat entries.

    Entries are processed in input order; siblings keep first-seen order.
    Empty segments are kept as ordinary path components. When two entries
    share a full path the later one replaces the earlier leaf's entry.

    Args:
        entries: Entries of one snapshot
        separator: Path separator, must be non-empty

    Returns:
        Synthetic root node (empty segment, never displayed)
    """
    if not separator:
        raise ValueError("path separator must be non-empty")

    root = NamespaceTreeNode()
    for entry in entries:
        node = root
        for segment in entry.full_name.split(separator):
            child = node.children.get(segment)
            if child is None:
                child = NamespaceTreeNode(segment=segment)
                node.children[segment] = child
            node = child
        if node.entry is not None:
            log.debug(f"Duplicate namespace path {entry.full_name!r}, keeping later entry")
        node.entry = entry
    return root
