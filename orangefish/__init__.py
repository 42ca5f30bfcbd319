# -*- coding: utf-8 -*-
"""
OrangeFish package root
Presentation layer of a desktop source-control client
"""

__version__ = "1.0.0"
__title__ = "OrangeFish"

# Import core modules to ensure they're available
from . import core

# UI is imported only when needed (requires a QApplication)
__all__ = ["core"]
