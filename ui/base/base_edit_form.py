"""ui/base/base_edit_form.py – каркас диалога создания/редактирования.

Потомки строят поля в ``build_form``, заполняют их в ``fill_from_obj``
и собирают данные в ``collect_data``. Сохранение идёт через ``save_data``.
"""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from ui.common.message_boxes import confirm
from ui.common.styled_widgets import styled_button

logger = logging.getLogger(__name__)


class BaseEditForm(QDialog):
    """Универсальная форма: кнопки, отслеживание изменений, шаблонные методы."""

    def __init__(self, instance=None, entity_name="объект", parent=None):
        super().__init__(parent)
        self.instance = instance
        self.entity_name = entity_name
        self.fields: dict[str, QWidget] = {}
        self._dirty = False

        self.setWindowTitle(self.title_text())
        self.setMinimumWidth(420)

        # ── layout ──
        self.layout = QVBoxLayout(self)
        self.form_layout = QFormLayout()
        self.layout.addLayout(self.form_layout)

        # build widgets
        self.build_form()
        if self.instance is not None:
            self.fill_from_obj(self.instance)
        self._connect_dirty_tracking()
        self._create_button_panel()
        self._dirty = False

    def title_text(self) -> str:
        if self.instance is not None:
            return f"Редактировать {self.entity_name}"
        return f"Добавить {self.entity_name}"

    def save_button_text(self) -> str:
        return "Сохранить"

    # ------------------------------------------------------------------
    # UI helpers
    # ------------------------------------------------------------------
    def _create_button_panel(self):
        btns = QHBoxLayout()
        self.save_btn = styled_button(
            self.save_button_text(), icon="💾", role="primary", shortcut="Ctrl+S"
        )
        self.save_btn.setDefault(True)
        self.cancel_btn = styled_button("Отмена", icon="❌", shortcut="Esc")

        self.save_btn.clicked.connect(self.save)
        self.cancel_btn.clicked.connect(self.reject)
        btns.addStretch()
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.save_btn)
        self.layout.addLayout(btns)

    def _connect_dirty_tracking(self):
        for widget in self.fields.values():
            if isinstance(widget, QLineEdit):
                widget.textChanged.connect(self._mark_dirty)
            elif isinstance(widget, QComboBox):
                widget.currentIndexChanged.connect(self._mark_dirty)

    def _mark_dirty(self, *_):
        self._dirty = True

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def closeEvent(self, event):
        if self._dirty:
            if not confirm("Есть несохранённые изменения. Закрыть без сохранения?"):
                event.ignore()
                return
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Template methods
    # ------------------------------------------------------------------
    def save(self):
        try:
            saved = self.save_data()
            if saved is not None:
                self.saved_instance = saved
                self._dirty = False
                self.accept()
        except Exception:
            logger.exception("❌ Ошибка при сохранении в %s", self.__class__.__name__)
            QMessageBox.critical(
                self, "Ошибка", f"Не удалось сохранить {self.entity_name}."
            )

    def build_form(self):
        raise NotImplementedError

    def fill_from_obj(self, obj):
        raise NotImplementedError

    def collect_data(self):
        raise NotImplementedError

    def validate_data(self, data) -> bool:
        return True

    def save_data(self):
        raise NotImplementedError
