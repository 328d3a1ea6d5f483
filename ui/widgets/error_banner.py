from PySide6.QtWidgets import QLabel


class ErrorBanner(QLabel):
    """Строка с последней ошибкой; пустое сообщение скрывает баннер."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWordWrap(True)
        self.setStyleSheet(
            "background-color: #ffebee; color: #b71c1c;"
            " border: 1px solid #e57373; border-radius: 6px; padding: 8px;"
        )
        self.hide()

    def show_message(self, message: str | None) -> None:
        if message:
            self.setText(message)
            self.show()
        else:
            self.clear()
            self.hide()
