"""Sign-in strip along the top of the window."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QHBoxLayout, QLabel, QLineEdit, QPushButton,
)

from ..auth import AuthError, LocalAuth


class AuthBar(QWidget):
    """Email (+ optional name) with Sign in / Sign up, or the signed-in
    user with Sign out.  ``auth_changed`` fires after every change and
    ``error(str)`` when a sign-in attempt fails."""

    auth_changed = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, auth: LocalAuth, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._auth = auth
        self._build_ui()
        self.sync()

    def _build_ui(self) -> None:
        h = QHBoxLayout(self)
        h.setContentsMargins(0, 0, 0, 0)

        self._email = QLineEdit(self)
        self._email.setPlaceholderText("Email")
        self._name = QLineEdit(self)
        self._name.setPlaceholderText("Name (sign up)")
        self._sign_in_btn = QPushButton("Sign in", self)
        self._sign_up_btn = QPushButton("Sign up", self)
        self._user_label = QLabel("", self)
        self._sign_out_btn = QPushButton("Sign out", self)

        for w in (
            self._email, self._name, self._sign_in_btn, self._sign_up_btn,
            self._user_label, self._sign_out_btn,
        ):
            h.addWidget(w)

        self._email.returnPressed.connect(self.sign_in)
        self._sign_in_btn.clicked.connect(self.sign_in)
        self._sign_up_btn.clicked.connect(self.sign_up)
        self._sign_out_btn.clicked.connect(self.sign_out)

    def sync(self) -> None:
        signed_in = self._auth.signed_in
        for w in (self._email, self._name, self._sign_in_btn, self._sign_up_btn):
            w.setVisible(not signed_in)
        self._user_label.setVisible(signed_in)
        self._sign_out_btn.setVisible(signed_in)
        self._user_label.setText(
            f"Signed in as {self._auth.display_name}" if signed_in else ""
        )

    # ── actions ───────────────────────────────────────────────────────

    def sign_in(self) -> None:
        self._attempt(lambda: self._auth.sign_in(self._email.text()))

    def sign_up(self) -> None:
        self._attempt(lambda: self._auth.sign_up(self._email.text(), self._name.text()))

    def sign_out(self) -> None:
        self._auth.sign_out()
        self.sync()
        self.auth_changed.emit()

    def _attempt(self, action) -> None:
        try:
            action()
        except AuthError as exc:
            self.error.emit(str(exc))
            return
        self._name.clear()
        self.sync()
        self.auth_changed.emit()

    def set_email(self, email: str) -> None:
        self._email.setText(email)

    @property
    def user_text(self) -> str:
        return self._user_label.text()
