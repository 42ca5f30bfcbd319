# -*- coding: utf-8 -*-
"""
OrangeFish Dialog UI Module
Credentials, preferences, push and new-branch dialogs.

Dialogs only collect input; the main window turns accepted dialogs into
coordinator calls.
"""

from PySide6 import QtWidgets

from orangefish.protocol.events import Preferences

DEFAULT_REMOTE = "origin"
MAX_COMMIT_COUNT = 1_000_000


def _button_box(dialog, on_accept):
    button_box = QtWidgets.QDialogButtonBox(
        QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel
    )
    button_box.accepted.connect(on_accept)
    button_box.rejected.connect(dialog.reject)
    return button_box


class CredentialsDialog(QtWidgets.QDialog):
    """Ask for the username/password the backend should store."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Set Credentials")
        self.setModal(True)
        self.setMinimumWidth(320)

        self.username = ""
        self.password = ""

        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        form = QtWidgets.QFormLayout()
        self.username_edit = QtWidgets.QLineEdit()
        self.password_edit = QtWidgets.QLineEdit()
        self.password_edit.setEchoMode(QtWidgets.QLineEdit.Password)
        form.addRow("Username:", self.username_edit)
        form.addRow("Password:", self.password_edit)
        layout.addLayout(form)

        layout.addWidget(_button_box(self, self._on_accept))

    def _on_accept(self):
        self.username = self.username_edit.text()
        self.password = self.password_edit.text()
        # Fields are cleared so the secret does not linger in the widget
        self.username_edit.clear()
        self.password_edit.clear()
        self.accept()


class PreferencesDialog(QtWidgets.QDialog):
    """Commit history limit preferences."""

    def __init__(self, preferences: Preferences, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.setModal(True)

        self.preferences = preferences

        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        self.limit_checkbox = QtWidgets.QCheckBox("Limit number of commits shown")
        self.limit_checkbox.setChecked(preferences.limit_commits)
        self.limit_checkbox.toggled.connect(self._on_limit_toggled)
        layout.addWidget(self.limit_checkbox)

        form = QtWidgets.QFormLayout()
        self.count_spin = QtWidgets.QSpinBox()
        self.count_spin.setRange(0, MAX_COMMIT_COUNT)
        self.count_spin.setValue(preferences.commit_count)
        form.addRow("Commit count:", self.count_spin)
        layout.addLayout(form)

        layout.addWidget(_button_box(self, self._on_accept))
        self._on_limit_toggled(preferences.limit_commits)

    def _on_limit_toggled(self, checked):
        self.count_spin.setEnabled(checked)

    def _on_accept(self):
        self.preferences = Preferences(
            limit_commits=self.limit_checkbox.isChecked(),
            commit_count=self.count_spin.value(),
        )
        self.accept()


class PushDialog(QtWidgets.QDialog):
    """
    Push options.

    The remote selector is hidden when HEAD already tracks an upstream,
    since the backend pushes to the upstream in that case.
    """

    def __init__(self, remotes, head_has_upstream: bool, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Push")
        self.setModal(True)

        self.remote = None
        self.force = False

        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        form = QtWidgets.QFormLayout()
        self.remote_combo = QtWidgets.QComboBox()
        self.remote_combo.addItems(list(remotes))
        if DEFAULT_REMOTE in remotes:
            self.remote_combo.setCurrentText(DEFAULT_REMOTE)
        form.addRow("Remote:", self.remote_combo)
        layout.addLayout(form)
        self.remote_combo.setVisible(not head_has_upstream)
        form.labelForField(self.remote_combo).setVisible(not head_has_upstream)

        self.force_checkbox = QtWidgets.QCheckBox("Force push")
        self.force_checkbox.setChecked(False)
        layout.addWidget(self.force_checkbox)

        layout.addWidget(_button_box(self, self._on_accept))

    def _on_accept(self):
        self.remote = self.remote_combo.currentText() if self.remote_combo.isVisibleTo(self) else None
        self.force = self.force_checkbox.isChecked()
        self.accept()


class NewBranchDialog(QtWidgets.QDialog):
    """Dialog for creating a new branch from HEAD."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("New Branch")
        self.setModal(True)
        self.setMinimumWidth(360)

        self.branch_name = ""
        self.checkout = True

        layout = QtWidgets.QVBoxLayout()
        self.setLayout(layout)

        form = QtWidgets.QFormLayout()
        form.setFieldGrowthPolicy(QtWidgets.QFormLayout.ExpandingFieldsGrow)
        self.name_edit = QtWidgets.QLineEdit()
        self.name_edit.setPlaceholderText("e.g., feature/login-form")
        self.name_edit.textChanged.connect(self._on_name_changed)
        form.addRow("Branch name:", self.name_edit)
        layout.addLayout(form)

        self.checkout_checkbox = QtWidgets.QCheckBox("Check out after creating")
        self.checkout_checkbox.setChecked(True)
        layout.addWidget(self.checkout_checkbox)

        button_box = _button_box(self, self._on_accept)
        layout.addWidget(button_box)

        self.ok_button = button_box.button(QtWidgets.QDialogButtonBox.Ok)
        self._on_name_changed()
        self.name_edit.setFocus()

    def _on_name_changed(self):
        """Enable OK only for names without whitespace."""
        name = self.name_edit.text().strip()
        self.ok_button.setEnabled(bool(name) and not any(c.isspace() for c in name))

    def _on_accept(self):
        self.branch_name = self.name_edit.text().strip()
        self.checkout = self.checkout_checkbox.isChecked()
        self.accept()


__all__ = [
    "CredentialsDialog",
    "PreferencesDialog",
    "PushDialog",
    "NewBranchDialog",
]
