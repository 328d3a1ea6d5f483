from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QPushButton, QSizePolicy


STATUS_STYLES = {
    True: "background-color: #2e7d32; color: white; border-radius: 10px; padding: 2px 12px;",
    False: "background-color: #c62828; color: white; border-radius: 10px; padding: 2px 12px;",
}


def styled_button(
    label: str, icon: str = "", tooltip: str = "", shortcut: str = "", role: str = None
) -> QPushButton:
    """
    Создаёт кнопку с иконкой, подсказкой и шорткатом.

    Parameters
    ----------
    label : str
        Текст кнопки
    icon : str
        Эмоджи или иконка
    tooltip : str
        Всплывающая подсказка
    shortcut : str
        Горячая клавиша, например: "Ctrl+N"
    role : str
        Визуальная роль ("primary", "secondary", "danger")
    """
    btn = QPushButton(f"{icon} {label}".strip())
    if shortcut:
        btn.setShortcut(QKeySequence(shortcut))
        tooltip = f"{tooltip} ({shortcut})" if tooltip else shortcut
    if tooltip:
        btn.setToolTip(tooltip)
    if role:
        btn.setProperty("role", role)
    btn.setMinimumHeight(30)
    btn.setSizePolicy(QSizePolicy.Minimum, QSizePolicy.Fixed)
    return btn


def status_button(isactive: bool) -> QPushButton:
    """Кнопка-индикатор статуса клиента, по нажатию меняет статус."""
    btn = QPushButton("Активен" if isactive else "Неактивен")
    btn.setStyleSheet(STATUS_STYLES[bool(isactive)])
    btn.setToolTip("Нажмите, чтобы сменить статус")
    btn.setProperty("active", bool(isactive))
    return btn
