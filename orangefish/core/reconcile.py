# -*- coding: utf-8 -*-
"""
Tree State Reconciler
Keeps user expand/collapse state alive across full tree replacement.

A reconciliation pass is:
    previous = reconciler.capture_expansion()   # read live view once
    surface.clear()                             # old view discarded
    realized = reconciler.reconcile(tree, previous, surface.render_node)

All three steps run inside one event handler, so no other handler can
observe a half-built view.
"""

from __future__ import annotations

from typing import AbstractSet, Any, Callable, Optional, Protocol, runtime_checkable

from orangefish.core import log
from orangefish.core.namespace_tree import DEFAULT_SEPARATOR, NamespaceTreeNode


@runtime_checkable
class ExpandableHandle(Protocol):
    """View handle of an interior node."""

    def is_expanded(self) -> bool: ...

    def set_expanded(self, expanded: bool) -> None: ...


RenderNode = Callable[[NamespaceTreeNode, str, Optional[Any]], Any]


class TreeStateReconciler:
    """
    Re-renders a namespace tree while preserving expanded folders.

    The reconciler remembers the handles of interior nodes rendered by the
    last completed pass; those are the live view the next capture reads from.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR):
        if not separator:
            raise ValueError("path separator must be non-empty")
        self._separator = separator
        self._handles: dict[str, ExpandableHandle] = {}

    @property
    def separator(self) -> str:
        return self._separator

    def interior_handles(self) -> dict[str, ExpandableHandle]:
        return dict(self._handles)

    def capture_expansion(self) -> frozenset[str]:
        """Read the expanded flag of every interior node in the current view."""
        return frozenset(path for path, handle in self._handles.items() if handle.is_expanded())

    def reconcile(
        self,
        tree: NamespaceTreeNode,
        previous_expansion: AbstractSet[str],
        render_node: RenderNode,
    ) -> frozenset[str]:
        """
        Render ``tree`` and re-expand folders that were open before.

        Args:
            tree: Root returned by build_namespace_tree
            previous_expansion: Paths expanded in the view being replaced
            render_node: Called as render_node(node, path, parent_handle) in
                depth-first child order; returns the node's view handle

        Returns:
            Paths that exist in the new tree and were re-expanded
        """
        handles: dict[str, ExpandableHandle] = {}
        self._render_children(tree, (), None, render_node, handles)

        realized = set()
        for path, handle in handles.items():
            if path in previous_expansion:
                handle.set_expanded(True)
                realized.add(path)

        dropped = len(previous_expansion) - len(realized)
        if dropped:
            log.debug(f"Reconcile: {dropped} expanded folder(s) no longer present")

        self._handles = handles
        return frozenset(realized)

    def toggle(self, path: str) -> bool:
        """
        Flip the expansion of exactly one interior node.

        Returns:
            True if the path was found in the current view
        """
        handle = self._handles.get(path)
        if handle is None:
            return False
        handle.set_expanded(not handle.is_expanded())
        return True

    def forget(self):
        """Drop handles of a view that was cleared without a new pass."""
        self._handles = {}

    def _render_children(self, node, prefix, parent_handle, render_node, handles):
        for child in node.iter_children():
            segments = prefix + (child.segment,)
            path = self._separator.join(segments)
            handle = render_node(child, path, parent_handle)
            if child.children:
                if not isinstance(handle, ExpandableHandle):
                    raise TypeError(f"Handle for folder {path!r} cannot be expanded")
                handles[path] = handle
                self._render_children(child, segments, handle, render_node, handles)
