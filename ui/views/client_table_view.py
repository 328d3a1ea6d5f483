# ui/views/client_table_view.py

from collections.abc import Callable

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QStackedWidget,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from services.clients.dto import ClientDTO
from ui.common.styled_widgets import status_button, styled_button
from ui.views.client_table_model import (
    ACTIONS_COLUMN,
    STATUS_COLUMN,
    ClientTableModel,
)

EMPTY_TEXT = "Клиенты не найдены"


class ClientTableView(QWidget):
    """Таблица клиентов без собственного состояния.

    Строки строятся по переданному списку, а кнопки строк вызывают
    колбэки владельца.
    """

    data_loaded = Signal(int)  # количество отображаемых строк

    def __init__(
        self,
        parent=None,
        *,
        on_edit: Callable[[ClientDTO], None] | None = None,
        on_delete: Callable[[object], None] | None = None,
        on_toggle_status: Callable[[ClientDTO], None] | None = None,
    ):
        super().__init__(parent)
        self.on_edit = on_edit or (lambda _client: None)
        self.on_delete = on_delete or (lambda _client_id: None)
        self.on_toggle_status = on_toggle_status or (lambda _client: None)

        self.model = ClientTableModel(parent=self)

        self.table = QTableView(self)
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setAlternatingRowColors(True)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.doubleClicked.connect(self._on_double_click)

        self.empty_label = QLabel(EMPTY_TEXT, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setStyleSheet("color: gray; padding: 24px;")

        self.stack = QStackedWidget(self)
        self.stack.addWidget(self.table)
        self.stack.addWidget(self.empty_label)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 12, 0, 0)
        layout.addWidget(self.stack)

        self.set_clients([])

    # ------------------------------------------------------------------
    # Отрисовка
    # ------------------------------------------------------------------
    def set_clients(self, clients: list[ClientDTO]) -> None:
        self.model.set_clients(clients)
        for row, client in enumerate(self.model.clients):
            self._install_row_widgets(row, client)
        if clients:
            self.stack.setCurrentWidget(self.table)
        else:
            self.stack.setCurrentWidget(self.empty_label)
        self.data_loaded.emit(len(clients))

    def is_empty(self) -> bool:
        return self.stack.currentWidget() is self.empty_label

    def _install_row_widgets(self, row: int, client: ClientDTO) -> None:
        toggle_btn = status_button(client.isactive)
        toggle_btn.clicked.connect(lambda _=False, c=client: self.on_toggle_status(c))
        self.table.setIndexWidget(self.model.index(row, STATUS_COLUMN), toggle_btn)

        actions = QWidget(self.table)
        box = QHBoxLayout(actions)
        box.setContentsMargins(2, 0, 2, 0)
        box.setSpacing(6)
        edit_btn = styled_button("Изменить", icon="✏️", role="secondary")
        edit_btn.clicked.connect(lambda _=False, c=client: self.on_edit(c))
        delete_btn = styled_button("Удалить", icon="🗑", role="danger")
        delete_btn.clicked.connect(lambda _=False, cid=client.id: self.on_delete(cid))
        box.addWidget(edit_btn)
        box.addWidget(delete_btn)
        actions.edit_btn = edit_btn
        actions.delete_btn = delete_btn
        self.table.setIndexWidget(self.model.index(row, ACTIONS_COLUMN), actions)

    # ------------------------------------------------------------------
    # Доступ к строкам
    # ------------------------------------------------------------------
    def row_widgets(self, row: int):
        """Кнопки строки: (статус, изменить, удалить)."""
        status = self.table.indexWidget(self.model.index(row, STATUS_COLUMN))
        actions = self.table.indexWidget(self.model.index(row, ACTIONS_COLUMN))
        return status, actions.edit_btn, actions.delete_btn

    def get_selected(self) -> ClientDTO | None:
        index = self.table.currentIndex()
        if not index.isValid():
            return None
        return self.model.get_item(index.row())

    def _on_double_click(self, index):
        if index.isValid():
            self.on_edit(self.model.get_item(index.row()))
