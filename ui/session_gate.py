"""Переключение между страницей входа и приложением по состоянию сессии."""

import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QStackedWidget, QWidget

from services.auth.session import AuthEvent

logger = logging.getLogger(__name__)

UNAUTHENTICATED = "unauthenticated"
AUTHENTICATED = "authenticated"


class SessionGate(QStackedWidget):
    """Два состояния: без сессии показывается вход, с сессией – приложение.

    События провайдера пересылаются через сигнал, поэтому обновление
    токена из фонового потока обрабатывается в UI-потоке.
    """

    auth_event = Signal(object, object)  # AuthEvent, AuthSession | None
    state_changed = Signal(str)

    def __init__(self, auth, controller, login_view: QWidget, shell: QWidget, parent=None):
        super().__init__(parent)
        self.auth = auth
        self.controller = controller
        self.login_view = login_view
        self.shell = shell
        self.state = UNAUTHENTICATED
        self.session = None

        self.addWidget(self.login_view)
        self.addWidget(self.shell)
        self.setCurrentWidget(self.login_view)

        self.auth_event.connect(self.on_auth_event)
        unsubscribe = auth.subscribe(self.auth_event.emit)
        self._unsubscribe = unsubscribe
        self.destroyed.connect(lambda *_: unsubscribe())

    def on_auth_event(self, event: AuthEvent, session) -> None:
        logger.debug("session gate: %s (session=%s)", event, session is not None)
        self.session = session
        if session is None or event == AuthEvent.SIGNED_OUT:
            self._enter_unauthenticated()
        else:
            self._enter_authenticated(session)

    def _enter_authenticated(self, session) -> None:
        nav_bar = getattr(self.shell, "nav_bar", None)
        if nav_bar is not None:
            nav_bar.set_user(session.user_email)
        if self.state == AUTHENTICATED:
            return
        self.state = AUTHENTICATED
        self.setCurrentWidget(self.shell)
        self.state_changed.emit(self.state)
        self.controller.fetch_all()

    def _enter_unauthenticated(self) -> None:
        if self.state == UNAUTHENTICATED:
            self.setCurrentWidget(self.login_view)
            return
        self.state = UNAUTHENTICATED
        self.session = None
        self.controller.reset()
        search_box = getattr(getattr(self.shell, "nav_bar", None), "search_box", None)
        if search_box is not None:
            search_box.clear()
        self.setCurrentWidget(self.login_view)
        self.state_changed.emit(self.state)

    def detach(self) -> None:
        """Отписывается от событий провайдера."""
        self._unsubscribe()
