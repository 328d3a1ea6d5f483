import logging

from PySide6.QtCore import QSize
from PySide6.QtWidgets import QApplication, QMainWindow, QStatusBar

from core.app_context import AppContext, get_app_context
from services.clients.clients_controller import ClientsController
from ui.session_gate import SessionGate
from ui.views.clients_page import ClientsPage
from ui.views.login_view import LoginView


logger = logging.getLogger(__name__)


def get_scaled_size(base_width: int, base_height: int, ratio: float = 0.8) -> QSize:
    """Размер окна с учётом доступной области экрана."""
    screen = QApplication.primaryScreen()
    if not screen:
        return QSize(base_width, base_height)
    geom = screen.availableGeometry()
    width = min(geom.width(), max(base_width, int(geom.width() * ratio)))
    height = min(geom.height(), max(base_height, int(geom.height() * ratio)))
    return QSize(width, height)


class MainWindow(QMainWindow):
    def __init__(
        self,
        *,
        context: AppContext | None = None,
        controller: ClientsController | None = None,
    ):
        super().__init__()
        self._context = context or get_app_context()
        self.setWindowTitle("Клиенты")
        self.resize(get_scaled_size(1100, 700))
        self.setMinimumSize(800, 500)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        auth = self._context.auth_service
        self.controller = controller or ClientsController(
            self._context.client_api,
            auth,
            error_timeout_ms=self._context.settings.error_timeout_ms,
            parent=self,
        )
        self.clients_page = ClientsPage(self.controller, on_sign_out=auth.sign_out)
        self.login_view = LoginView(auth)
        self.gate = SessionGate(auth, self.controller, self.login_view, self.clients_page)
        self.setCentralWidget(self.gate)

        self.clients_page.table_view.data_loaded.connect(self.show_count)
        self.gate.state_changed.connect(lambda _state: self.status_bar.clearMessage())

    def show_count(self, count: int):
        self.status_bar.showMessage(f"Записей: {count}")

    def start(self):
        """Восстанавливает сессию; при её наличии загружается список."""
        self._context.auth_service.restore()
