import logging

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QColor

from services.clients.dto import ClientDTO

logger = logging.getLogger(__name__)


COLUMNS = [
    ("index", "#"),
    ("name", "Имя"),
    ("email", "Email"),
    ("job", "Должность"),
    ("rate", "Ставка ($)"),
    ("isactive", "Статус"),
    ("actions", "Действия"),
]
STATUS_COLUMN = 5
ACTIONS_COLUMN = 6

ACTIVE_COLOR = "#c8e6c9"
INACTIVE_COLOR = "#ffcdd2"


class ClientTableModel(QAbstractTableModel):
    """Только чтение: строки строятся по переданному списку клиентов."""

    def __init__(self, clients: list[ClientDTO] | None = None, parent=None):
        super().__init__(parent)
        self.clients: list[ClientDTO] = list(clients or [])
        self.headers = [title for _key, title in COLUMNS]

    def set_clients(self, clients: list[ClientDTO]) -> None:
        self.beginResetModel()
        self.clients = list(clients)
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self.clients)

    def columnCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(COLUMNS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal and 0 <= section < len(self.headers):
            return self.headers[section]
        return None

    def get_item(self, row: int) -> ClientDTO:
        return self.clients[row]

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None

        client = self.clients[index.row()]
        key = COLUMNS[index.column()][0]

        # ─── текст в ячейке ────────────────────────────
        if role == Qt.DisplayRole:
            if key == "index":
                return str(index.row() + 1)
            if key == "rate":
                return self.format_rate(client.rate)
            if key == "isactive":
                return "Активен" if client.isactive else "Неактивен"
            if key == "actions":
                return None
            value = getattr(client, key)
            return "" if value is None else str(value)

        # ─── цвет статуса ──────────────────────────────
        if role == Qt.BackgroundRole and key == "isactive":
            return QColor(ACTIVE_COLOR if client.isactive else INACTIVE_COLOR)

        # ─── выравнивание ──────────────────────────────
        if role == Qt.TextAlignmentRole:
            if key in ("index", "isactive"):
                return Qt.AlignCenter
            if key == "rate":
                return Qt.AlignRight | Qt.AlignVCenter

        if role == Qt.UserRole:
            return client

        return None

    def format_rate(self, value):
        if value is None:
            return ""
        return f"{value:,.2f}".replace(",", " ")

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemIsEnabled
        return Qt.ItemIsSelectable | Qt.ItemIsEnabled
