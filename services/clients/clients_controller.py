"""Контроллер экрана клиентов: состояние, вызовы API и фильтрация."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from PySide6.QtCore import QObject, Qt, QTimer, Signal

from services.clients.dto import ClientDTO, ClientFormData

logger = logging.getLogger(__name__)

MODE_ADD = "add"
MODE_EDIT = "edit"

DEFAULT_ERROR_TIMEOUT_MS = 3000


class SessionProvider(Protocol):
    @property
    def current_session(self) -> Any: ...


def filter_clients(clients: Iterable[ClientDTO], term: str | None) -> list[ClientDTO]:
    """Клиенты, у которых имя, email или должность содержат ``term``."""
    needle = (term or "").lower()
    if not needle:
        return list(clients)
    return [
        client
        for client in clients
        if any(
            needle in value.lower()
            for value in (client.name, client.email, client.job)
            if value
        )
    ]


def _replace_by_id(
    clients: list[ClientDTO], client_id, updated: ClientDTO
) -> list[ClientDTO]:
    return [updated if client.id == client_id else client for client in clients]


@dataclass
class ClientsState:
    clients: list[ClientDTO] = field(default_factory=list)
    search_term: str = ""
    error: str | None = None
    loading: bool = False
    modal_open: bool = False
    modal_mode: str = MODE_ADD
    current_client: ClientDTO | None = None


class ClientsController(QObject):
    """Владеет списком клиентов и единственный меняет его.

    Представления получают данные через сигналы и методы чтения,
    а действия пользователя передают вызовами методов контроллера.
    """

    state_changed = Signal()
    clients_changed = Signal(list)
    error_changed = Signal(object)
    loading_changed = Signal(bool)
    modal_requested = Signal(str, object)
    modal_closed = Signal()

    def __init__(
        self,
        api,
        auth: SessionProvider,
        *,
        confirm: Callable[[str], bool] | None = None,
        runner=None,
        error_timeout_ms: int = DEFAULT_ERROR_TIMEOUT_MS,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        if confirm is None:
            from ui.common.message_boxes import confirm
        if runner is None:
            from ui.common.workers import run_in_thread as runner
        self.api = api
        self.auth = auth
        self._confirm = confirm
        self._run = runner
        self.state = ClientsState()

        self._error_timer = QTimer(self)
        self._error_timer.setSingleShot(True)
        self._error_timer.setTimerType(Qt.PreciseTimer)
        self._error_timer.setInterval(error_timeout_ms)
        self._error_timer.timeout.connect(self.clear_error)

    # ------------------------------------------------------------------
    # Чтение состояния
    # ------------------------------------------------------------------
    @property
    def clients(self) -> list[ClientDTO]:
        return list(self.state.clients)

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def loading(self) -> bool:
        return self.state.loading

    def filtered_clients(self) -> list[ClientDTO]:
        return filter_clients(self.state.clients, self.state.search_term)

    # ------------------------------------------------------------------
    # Служебные сеттеры
    # ------------------------------------------------------------------
    def _set_clients(self, clients: list[ClientDTO]) -> None:
        self.state.clients = clients
        self.clients_changed.emit(self.filtered_clients())
        self.state_changed.emit()

    def _set_loading(self, value: bool) -> None:
        if self.state.loading == value:
            return
        self.state.loading = value
        self.loading_changed.emit(value)
        self.state_changed.emit()

    def set_error(self, message: str) -> None:
        logger.error("❌ %s", message)
        self.state.error = message
        # новый текст перезапускает таймер, старый отсчёт отменяется
        self._error_timer.start()
        self.error_changed.emit(message)
        self.state_changed.emit()

    def clear_error(self) -> None:
        self._error_timer.stop()
        if self.state.error is None:
            return
        self.state.error = None
        self.error_changed.emit(None)
        self.state_changed.emit()

    def set_search_term(self, term: str) -> None:
        self.state.search_term = term or ""
        self.clients_changed.emit(self.filtered_clients())
        self.state_changed.emit()

    def reset(self) -> None:
        """Сбрасывает состояние после выхода пользователя."""
        self._error_timer.stop()
        self.state = ClientsState()
        self.modal_closed.emit()
        self.error_changed.emit(None)
        self.loading_changed.emit(False)
        self.clients_changed.emit([])
        self.state_changed.emit()

    # ------------------------------------------------------------------
    # Модальное окно
    # ------------------------------------------------------------------
    def open_modal(self, mode: str, client: ClientDTO | None = None) -> None:
        self.state.modal_mode = mode
        self.state.current_client = client
        self.state.modal_open = True
        self.modal_requested.emit(mode, client)
        self.state_changed.emit()

    def close_modal(self) -> None:
        was_open = self.state.modal_open
        self.state.modal_open = False
        self.state.current_client = None
        if was_open:
            self.modal_closed.emit()
        self.state_changed.emit()

    # ------------------------------------------------------------------
    # Операции с API
    # ------------------------------------------------------------------
    def fetch_all(self) -> None:
        # без сетевого вызова: просроченный токен обновит фоновый запрос
        if self.auth.current_session is None:
            logger.debug("fetch_all пропущен: нет сессии")
            return
        self._set_loading(True)

        def on_success(clients):
            logger.info("Загружено клиентов: %d", len(clients))
            self._set_clients(list(clients))
            self._set_loading(False)

        def on_error(exc):
            self.set_error(f"Ошибка загрузки клиентов: {exc}")
            self._set_loading(False)

        self._run(self.api.list_clients, on_success, on_error)

    def submit(
        self,
        form_data: ClientFormData,
        mode: str | None = None,
        target: ClientDTO | None = None,
    ) -> None:
        mode = mode or self.state.modal_mode
        if target is None:
            target = self.state.current_client
        logger.debug("📤 Сохранение клиента (%s): %r", mode, form_data)

        try:
            # при редактировании очищенные поля передаются как null
            payload = form_data.to_payload(include_empty=mode == MODE_EDIT)
        except ValueError as exc:
            self.set_error(f"Ошибка сохранения клиента: {exc}")
            self.close_modal()
            return

        if mode == MODE_ADD:
            call = lambda: self.api.create_client(payload)  # noqa: E731

            def apply(created: ClientDTO):
                self._set_clients(self.state.clients + [created])

        elif mode == MODE_EDIT and target is not None:
            target_id = target.id
            call = lambda: self.api.update_client(target_id, payload)  # noqa: E731

            def apply(updated: ClientDTO):
                self._set_clients(
                    _replace_by_id(self.state.clients, target_id, updated)
                )

        else:
            logger.warning("submit без цели редактирования: mode=%s", mode)
            self.close_modal()
            return

        self._set_loading(True)

        def on_success(result):
            apply(result)
            self._finish_submit()

        def on_error(exc):
            self.set_error(f"Ошибка сохранения клиента: {exc}")
            self._finish_submit()

        self._run(call, on_success, on_error)

    def _finish_submit(self) -> None:
        self._set_loading(False)
        self.close_modal()

    def delete(self, client_id) -> None:
        if not self._confirm("Удалить этого клиента?"):
            return
        self._set_loading(True)

        def on_success(_result):
            self._set_clients(
                [client for client in self.state.clients if client.id != client_id]
            )
            self._set_loading(False)

        def on_error(exc):
            self.set_error(f"Ошибка удаления клиента: {exc}")
            self._set_loading(False)

        self._run(lambda: self.api.delete_client(client_id), on_success, on_error)

    def toggle_status(self, client: ClientDTO) -> None:
        # без флага загрузки: быстрые переключения не блокируют интерфейс
        payload = client.with_toggled_status().to_payload()

        def on_success(updated: ClientDTO):
            self._set_clients(_replace_by_id(self.state.clients, client.id, updated))

        def on_error(exc):
            self.set_error(f"Ошибка смены статуса: {exc}")

        self._run(
            lambda: self.api.update_client(client.id, payload), on_success, on_error
        )
