import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QComboBox, QLineEdit

from services.clients.dto import (
    STATUS_ACTIVE,
    STATUS_INACTIVE,
    ClientDTO,
    ClientFormData,
)
from services.validators import is_valid_email, parse_rate
from ui.base.base_edit_form import BaseEditForm
from ui.common.message_boxes import show_error


logger = logging.getLogger(__name__)

STATUS_LABELS = {STATUS_ACTIVE: "Активен", STATUS_INACTIVE: "Неактивен"}


class ClientForm(BaseEditForm):
    """Форма клиента. Сама в сеть не ходит, данные отдаёт сигналом ``submitted``."""

    submitted = Signal(object)  # ClientFormData

    def __init__(self, client: ClientDTO | None = None, parent=None):
        self.name_edit: QLineEdit | None = None
        self.email_edit: QLineEdit | None = None
        self.job_edit: QLineEdit | None = None
        self.rate_edit: QLineEdit | None = None
        self.status_combo: QComboBox | None = None
        super().__init__(instance=client, entity_name="клиента", parent=parent)

    def save_button_text(self) -> str:  # type: ignore[override]
        return "Сохранить изменения" if self.instance is not None else "Добавить клиента"

    def build_form(self):  # type: ignore[override]
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Полное имя")
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("Email")
        self.job_edit = QLineEdit()
        self.job_edit.setPlaceholderText("Должность")
        self.rate_edit = QLineEdit()
        self.rate_edit.setPlaceholderText("Ставка")
        self.status_combo = QComboBox()
        for status in (STATUS_ACTIVE, STATUS_INACTIVE):
            self.status_combo.addItem(STATUS_LABELS[status], status)

        self.fields = {
            "name": self.name_edit,
            "email": self.email_edit,
            "job": self.job_edit,
            "rate": self.rate_edit,
            "status": self.status_combo,
        }

        self.form_layout.addRow("Имя *", self.name_edit)
        self.form_layout.addRow("Email *", self.email_edit)
        self.form_layout.addRow("Должность", self.job_edit)
        self.form_layout.addRow("Ставка ($)", self.rate_edit)
        self.form_layout.addRow("Статус", self.status_combo)

        self.set_form_data(ClientFormData.blank())

    def set_form_data(self, data: ClientFormData) -> None:
        self.name_edit.setText(data.name)
        self.email_edit.setText(data.email)
        self.job_edit.setText(data.job)
        self.rate_edit.setText(data.rate)
        idx = self.status_combo.findData(data.status)
        self.status_combo.setCurrentIndex(idx if idx >= 0 else 1)

    def fill_from_obj(self, obj):  # type: ignore[override]
        if not isinstance(obj, ClientDTO):
            return
        self.set_form_data(ClientFormData.from_client(obj))

    def collect_data(self) -> ClientFormData:  # type: ignore[override]
        return ClientFormData(
            name=self.name_edit.text().strip(),
            email=self.email_edit.text().strip(),
            job=self.job_edit.text().strip(),
            rate=self.rate_edit.text().strip(),
            status=self.status_combo.currentData() or STATUS_INACTIVE,
        )

    def validate_data(self, data: ClientFormData) -> bool:  # type: ignore[override]
        if not data.name:
            show_error("Имя обязательно", parent=self)
            return False
        if not data.email:
            show_error("Email обязателен", parent=self)
            return False
        if not is_valid_email(data.email):
            show_error("Некорректный email", parent=self)
            return False
        try:
            parse_rate(data.rate)
        except ValueError as exc:
            show_error(str(exc), parent=self)
            return False
        return True

    def save_data(self):  # type: ignore[override]
        data = self.collect_data()
        logger.debug("📤 Отправка формы клиента: %r", data)
        if not self.validate_data(data):
            return None
        self.submitted.emit(data)
        return data
