"""Контекст приложения: ленивое создание сервиса входа и API клиентов."""

from __future__ import annotations

from collections.abc import Callable

from config import Settings, get_settings
from services.auth.auth_service import AuthService
from services.clients.client_api import ClientApi


def _default_client_api(context: "AppContext") -> ClientApi:
    # API берёт токен у того же сервиса, что и окно входа
    return ClientApi(context.settings, auth=context.auth_service)


class AppContext:
    """Хранит настройки и создаёт зависимости при первом обращении.

    Фабрики подменяются в тестах, чтобы окно работало с заглушками.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        auth_service_factory: Callable[[Settings], AuthService] = AuthService,
        client_api_factory: Callable[["AppContext"], ClientApi] = _default_client_api,
    ) -> None:
        self.settings = settings
        self._auth_service_factory = auth_service_factory
        self._client_api_factory = client_api_factory
        self._auth_service: AuthService | None = None
        self._client_api: ClientApi | None = None

    @property
    def auth_service(self) -> AuthService:
        if self._auth_service is None:
            self._auth_service = self._auth_service_factory(self.settings)
        return self._auth_service

    @property
    def client_api(self) -> ClientApi:
        if self._client_api is None:
            self._client_api = self._client_api_factory(self)
        return self._client_api


_app_context: AppContext | None = None


def get_app_context(settings: Settings | None = None) -> AppContext:
    """Общий контекст процесса; создаётся при первом вызове."""

    global _app_context
    if _app_context is None:
        _app_context = AppContext(settings or get_settings())
    return _app_context


__all__ = ["AppContext", "get_app_context"]
