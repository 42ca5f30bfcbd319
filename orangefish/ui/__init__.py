# -*- coding: utf-8 -*-
"""
OrangeFish UI Module
Qt widgets, dialogs and the backend process bridge
"""
