import logging

from PySide6.QtWidgets import QProgressBar, QVBoxLayout, QWidget

from services.clients.clients_controller import MODE_ADD, MODE_EDIT, ClientsController
from ui.forms.client_form import ClientForm
from ui.views.client_table_view import ClientTableView
from ui.widgets.error_banner import ErrorBanner
from ui.widgets.nav_bar import NavBar

logger = logging.getLogger(__name__)


class ClientsPage(QWidget):
    """Оболочка приложения: баннер ошибок, панель, таблица и форма."""

    def __init__(
        self,
        controller: ClientsController,
        *,
        on_sign_out=None,
        form_class=ClientForm,
        parent=None,
    ):
        super().__init__(parent)
        self.controller = controller
        self.form_class = form_class
        self.form: ClientForm | None = None

        self.error_banner = ErrorBanner(self)

        self.progress = QProgressBar(self)
        self.progress.setRange(0, 0)  # бесконечная анимация
        self.progress.setTextVisible(False)
        self.progress.setMaximumHeight(6)
        self.progress.hide()

        self.nav_bar = NavBar(
            on_open=lambda: controller.open_modal(MODE_ADD),
            on_search=controller.set_search_term,
            on_sign_out=on_sign_out,
            parent=self,
        )

        self.table_view = ClientTableView(
            self,
            on_edit=lambda client: controller.open_modal(MODE_EDIT, client),
            on_delete=controller.delete,
            on_toggle_status=controller.toggle_status,
        )

        layout = QVBoxLayout(self)
        layout.addWidget(self.error_banner)
        layout.addWidget(self.progress)
        layout.addWidget(self.nav_bar)
        layout.addWidget(self.table_view)

        controller.clients_changed.connect(self.table_view.set_clients)
        controller.error_changed.connect(self.error_banner.show_message)
        controller.loading_changed.connect(self.progress.setVisible)
        controller.modal_requested.connect(self.open_form)
        controller.modal_closed.connect(self.close_form)

        self.table_view.set_clients(controller.filtered_clients())

    # ------------------------------------------------------------------
    # Форма
    # ------------------------------------------------------------------
    def open_form(self, mode: str, client=None) -> ClientForm:
        self.close_form()
        target = client if mode == MODE_EDIT else None
        form = self.form_class(target, parent=self)
        form.submitted.connect(self.controller.submit)
        form.rejected.connect(self.controller.close_modal)
        self.form = form
        form.open()
        return form

    def close_form(self) -> None:
        form, self.form = self.form, None
        if form is None:
            return
        form.rejected.disconnect(self.controller.close_modal)
        if form.isVisible():
            form.done(0)
        form.deleteLater()
