from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from ui.common.search_box import SearchBox
from ui.common.styled_widgets import styled_button


class NavBar(QWidget):
    """Верхняя панель: заголовок, поиск, добавление клиента и выход."""

    def __init__(self, on_open, on_search, on_sign_out=None, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        title = QLabel("Клиенты")
        title.setStyleSheet("font-size: 16pt; font-weight: bold;")
        layout.addWidget(title)
        layout.addStretch()

        self.search_box = SearchBox(on_search, parent=self)
        layout.addWidget(self.search_box)

        self.add_btn = styled_button(
            "Добавить клиента", icon="➕", role="primary", shortcut="Ctrl+N"
        )
        self.add_btn.clicked.connect(lambda _=False: on_open())
        layout.addWidget(self.add_btn)

        self.user_label = QLabel("")
        self.user_label.setStyleSheet("color: gray;")
        layout.addWidget(self.user_label)

        self.sign_out_btn = styled_button("Выйти", icon="🚪")
        if on_sign_out is not None:
            self.sign_out_btn.clicked.connect(lambda _=False: on_sign_out())
        else:
            self.sign_out_btn.hide()
        layout.addWidget(self.sign_out_btn)

    def set_user(self, email: str | None) -> None:
        self.user_label.setText(email or "")
