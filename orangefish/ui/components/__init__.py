# -*- coding: utf-8 -*-
"""
Reusable UI components for the OrangeFish main window.
"""

from orangefish.ui.components.base_widget import BaseWidget
from orangefish.ui.components.changes_widget import ChangesWidget
from orangefish.ui.components.commit_list_widget import CommitListWidget
from orangefish.ui.components.diff_widget import DiffWidget
from orangefish.ui.components.elided_label import ElidedLabel
from orangefish.ui.components.namespace_tree_widget import NamespaceTreeWidget

__all__ = [
    "BaseWidget",
    "ChangesWidget",
    "CommitListWidget",
    "DiffWidget",
    "ElidedLabel",
    "NamespaceTreeWidget",
]
