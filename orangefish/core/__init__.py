"""
OrangeFish Core Module
View-layer algorithms and ambient utilities (logging, results, settings).
No Qt imports at module import time.
"""

from . import log
from . import result
from . import settings
from . import activity
from . import namespace_tree
from . import reconcile
from . import text_fit
from . import commit_graph

__all__ = [
    "log",
    "result",
    "settings",
    "activity",
    "namespace_tree",
    "reconcile",
    "text_fit",
    "commit_graph",
]
