# -*- coding: utf-8 -*-
"""
Base Widget for UI Components
Common functionality for all OrangeFish view components.
"""

from PySide6 import QtWidgets

from orangefish.core import log


class BaseWidget(QtWidgets.QWidget):
    """
    Base class for OrangeFish UI components.

    Provides:
    - Consistent initialization
    - Layout helpers

    Components never talk to the backend themselves; they emit signals that
    the main window forwards to the coordinator.
    """

    def __init__(self, parent=None):
        """
        Initialize base widget.

        Args:
            parent: Parent widget (usually the main window)
        """
        super().__init__(parent)

        self._meta_font_size = 9
        self._strong_font_size = 11

        log.debug(f"{self.__class__.__name__} initialized")

    # =========================================================================
    # Layout Helpers
    # =========================================================================

    def create_group_box(self, title: str) -> QtWidgets.QGroupBox:
        """
        Create a styled group box.

        Args:
            title: Group box title

        Returns:
            QGroupBox: Configured group box
        """
        group = QtWidgets.QGroupBox(title)
        group.setStyleSheet("""
            QGroupBox {
                font-weight: bold;
                border: 1px solid #cccccc;
                border-radius: 4px;
                margin-top: 0.5em;
                padding-top: 0.5em;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 5px 0 5px;
            }
        """)
        return group

    def create_meta_label(self, text: str, color: str = "gray") -> QtWidgets.QLabel:
        """
        Create a small metadata label.

        Args:
            text: Label text
            color: Text color

        Returns:
            QLabel: Styled label
        """
        label = QtWidgets.QLabel(text)
        label.setStyleSheet(f"color: {color}; font-size: {self._meta_font_size}px;")
        return label

    def create_strong_label(self, text: str, color: str = "black") -> QtWidgets.QLabel:
        """Create an emphasized label."""
        label = QtWidgets.QLabel(text)
        label.setStyleSheet(
            f"font-weight: bold; color: {color}; font-size: {self._strong_font_size}px;"
        )
        return label

    # =========================================================================
    # Abstract Methods (Override in Subclasses)
    # =========================================================================

    def clear_view(self):
        """
        Reset the component to its empty state.

        Override this in subclasses.
        """
        pass
