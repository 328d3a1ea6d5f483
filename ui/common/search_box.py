import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLineEdit, QWidget

logger = logging.getLogger(__name__)


class SearchBox(QWidget):
    """Строка поиска клиентов: фильтрация на каждое изменение текста."""

    search_changed = Signal(str)

    def __init__(self, search_callback=None, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("🔍 Имя, email или должность")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.setMinimumWidth(260)
        self.search_input.textChanged.connect(self._on_text_changed)
        layout.addWidget(self.search_input)

        if search_callback is not None:
            self.search_changed.connect(search_callback)

    def _on_text_changed(self, text: str):
        logger.debug("🔎 Поиск клиентов: %r", text)
        self.search_changed.emit(text)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape and self.search_input.text():
            self.clear()
            return
        super().keyPressEvent(event)

    def get_text(self) -> str:
        return self.search_input.text().strip()

    def set_text(self, text: str):
        self.search_input.setText(text)

    def clear(self):
        self.search_input.clear()
