import logging

from PySide6.QtWidgets import QMessageBox

logger = logging.getLogger(__name__)


def confirm(text: str, title="Подтверждение", parent=None) -> bool:
    return (
        QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        == QMessageBox.Yes
    )


def show_error(message: str, title="Ошибка", parent=None):
    logger.error("❌ UI ошибка: %s", message)
    QMessageBox.critical(parent, title, message)
