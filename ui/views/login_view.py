import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFormLayout, QLabel, QLineEdit, QVBoxLayout, QWidget

from services.auth.auth_service import AuthError
from ui.common.styled_widgets import styled_button

logger = logging.getLogger(__name__)


class LoginView(QWidget):
    """Страница входа; саму аутентификацию выполняет провайдер."""

    def __init__(self, auth, parent=None, *, runner=None):
        super().__init__(parent)
        if runner is None:
            from ui.common.workers import run_in_thread as runner
        self.auth = auth
        self._run = runner

        outer = QVBoxLayout(self)
        outer.addStretch()

        title = QLabel("Вход")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 18pt; font-weight: bold;")
        outer.addWidget(title)

        form = QFormLayout()
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("you@example.com")
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Email", self.email_edit)
        form.addRow("Пароль", self.password_edit)
        outer.addLayout(form)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #b71c1c;")
        self.error_label.setWordWrap(True)
        outer.addWidget(self.error_label)

        self.sign_in_btn = styled_button("Войти", icon="🔐", role="primary")
        self.sign_in_btn.setDefault(True)
        self.sign_in_btn.clicked.connect(self.sign_in)
        self.password_edit.returnPressed.connect(self.sign_in)
        outer.addWidget(self.sign_in_btn)
        outer.addStretch()

    def sign_in(self) -> bool:
        """Запускает вход в фоне; ``False``, если запрос не отправлен."""
        email = self.email_edit.text().strip()
        password = self.password_edit.text()
        if not email or not password:
            self.error_label.setText("Введите email и пароль")
            return False
        if not self.sign_in_btn.isEnabled():
            return False
        self.error_label.clear()
        self.sign_in_btn.setEnabled(False)
        self._run(
            lambda: self.auth.sign_in(email, password),
            self._on_signed_in,
            self._on_sign_in_failed,
        )
        return True

    def _on_signed_in(self, _session):
        self.sign_in_btn.setEnabled(True)
        self.password_edit.clear()

    def _on_sign_in_failed(self, exc):
        self.sign_in_btn.setEnabled(True)
        if isinstance(exc, AuthError):
            logger.warning("Вход не выполнен: %s", exc)
            self.error_label.setText(str(exc))
            return
        logger.exception("❌ Ошибка входа", exc_info=exc)
        self.error_label.setText(f"Не удалось войти: {exc}")
