# -*- coding: utf-8 -*-
"""
Elided Label
QLabel that front-truncates its text to the available width.
"""

from PySide6 import QtCore, QtWidgets

from orangefish.core.text_fit import ELLIPSIS, TRUNCATION_STEP, fit_text


class ElidedLabel(QtWidgets.QLabel):
    """
    Label showing as much of the end of its text as fits.

    The full text is kept separately and every refit starts from it, so
    repeated resizes never shrink the label cumulatively.
    """

    def __init__(self, text="", parent=None, ellipsis=ELLIPSIS, step=TRUNCATION_STEP):
        super().__init__(parent)
        self._full_text = ""
        self._ellipsis = ellipsis
        self._step = step
        self._fitting = False

        # Let layouts shrink the label below its full text width
        self.setMinimumWidth(0)
        self.setSizePolicy(QtWidgets.QSizePolicy.Ignored, QtWidgets.QSizePolicy.Preferred)
        self.set_full_text(text)

    def full_text(self) -> str:
        return self._full_text

    def set_full_text(self, text: str):
        self._full_text = text or ""
        self.setToolTip(self._full_text)
        self.refit()

    def refit(self):
        """Recompute the rendered text for the current width."""
        if self._fitting:
            return
        self._fitting = True
        try:
            metrics = self.fontMetrics()
            rendered = fit_text(
                self._full_text,
                metrics.horizontalAdvance,
                self.contentsRect().width(),
                ellipsis=self._ellipsis,
                step=self._step,
            )
            if rendered != self.text():
                self.setText(rendered)
        finally:
            self._fitting = False

    def sizeHint(self) -> QtCore.QSize:
        hint = super().sizeHint()
        hint.setWidth(self.fontMetrics().horizontalAdvance(self._full_text))
        return hint

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.refit()

    def showEvent(self, event):
        super().showEvent(event)
        self.refit()
