"""
Клиент внешнего провайдера аутентификации (GoTrue-совместимый REST).

Сессия хранится только в памяти процесса. Подписчики получают события
входа, выхода и обновления токена.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import requests

from config import Settings, get_settings
from services.auth.session import AuthEvent, AuthSession

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, "AuthSession | None"], None]


class AuthError(Exception):
    """Ошибка входа или обновления сессии."""


class AuthService:
    """
    Обёртка над REST-интерфейсом провайдера аутентификации.

    Отвечает за:
    - вход по email и паролю
    - обновление токена
    - выход
    - уведомление подписчиков об изменениях сессии
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http: requests.Session | None = None,
    ):
        self._settings = settings or get_settings()
        self._http = http or requests.Session()
        self._session: AuthSession | None = None
        self._listeners: list[AuthListener] = []
        # обновление из нескольких фоновых запросов идёт по одному:
        # refresh-токен одноразовый
        self._refresh_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Подписки
    # ------------------------------------------------------------------
    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """
        Подписаться на изменения сессии.

        Args:
            listener: функция ``(event, session)``

        Returns:
            Функция отписки
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent) -> None:
        logger.debug("auth event %s", event.value)
        for listener in list(self._listeners):
            listener(event, self._session)

    def restore(self) -> AuthSession | None:
        """Сообщает подписчикам о текущей сессии при запуске."""
        self._emit(AuthEvent.INITIAL_SESSION)
        return self._session

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    def _headers(self, access_token: str | None = None) -> dict:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._settings.auth_api_key:
            headers["apikey"] = self._settings.auth_api_key
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _token_request(self, grant_type: str, body: dict) -> AuthSession:
        if not self._settings.auth_url:
            raise AuthError("AUTH_URL не задан в .env")
        url = f"{self._settings.auth_url}/token"
        try:
            response = self._http.post(
                url,
                params={"grant_type": grant_type},
                json=body,
                headers=self._headers(),
                timeout=self._settings.api_timeout,
            )
            response.raise_for_status()
            return AuthSession.from_token_response(response.json())
        except requests.HTTPError as exc:
            raise AuthError(self._describe_http_error(exc)) from exc
        except ValueError as exc:
            raise AuthError(f"Некорректный ответ провайдера: {exc}") from exc
        except requests.RequestException as exc:
            raise AuthError(f"Провайдер недоступен: {exc}") from exc

    @staticmethod
    def _describe_http_error(exc: requests.HTTPError) -> str:
        response = exc.response
        if response is None:
            return str(exc)
        try:
            data = response.json()
        except ValueError:
            data = {}
        if isinstance(data, dict):
            for key in ("error_description", "msg", "message", "error"):
                if data.get(key):
                    return str(data[key])
        return f"HTTP {response.status_code}"

    # ------------------------------------------------------------------
    # Операции
    # ------------------------------------------------------------------
    def sign_in(self, email: str, password: str) -> AuthSession:
        session = self._token_request(
            "password", {"email": email.strip(), "password": password}
        )
        self._session = session
        logger.info("🔐 Вход выполнен: %s", session.user_email or email)
        self._emit(AuthEvent.SIGNED_IN)
        return session

    def refresh(self, stale_token: str | None = None) -> AuthSession:
        """
        Обновить токен доступа.

        Args:
            stale_token: токен, который отклонил сервер. Если к моменту
                получения блокировки сессия уже обновлена другим потоком,
                повторный запрос не выполняется.

        При неудаче сессия сбрасывается и подписчики получают SIGNED_OUT.
        """
        with self._refresh_lock:
            previous = self._session
            if previous is None or not previous.refresh_token:
                raise AuthError("Нет refresh-токена, требуется повторный вход")
            if stale_token is not None and previous.access_token != stale_token:
                logger.debug("Токен уже обновлён другим запросом")
                return previous
            try:
                session = self._token_request(
                    "refresh_token", {"refresh_token": previous.refresh_token}
                )
            except AuthError:
                logger.error("Не удалось обновить сессию, требуется повторный вход")
                self._session = None
                self._emit(AuthEvent.SIGNED_OUT)
                raise
            if session.user_email is None and previous.user_email:
                session = AuthSession(
                    access_token=session.access_token,
                    refresh_token=session.refresh_token or previous.refresh_token,
                    expires_at=session.expires_at,
                    user_email=previous.user_email,
                )
            self._session = session
        logger.info("🔄 Токен обновлён")
        self._emit(AuthEvent.TOKEN_REFRESHED)
        return session

    def sign_out(self) -> None:
        session = self._session
        if session and self._settings.auth_url:
            try:
                self._http.post(
                    f"{self._settings.auth_url}/logout",
                    headers=self._headers(session.access_token),
                    timeout=self._settings.api_timeout,
                )
            except requests.RequestException as exc:
                logger.warning("Не удалось завершить сессию на сервере: %s", exc)
        self._session = None
        logger.info("👋 Выход из учётной записи")
        self._emit(AuthEvent.SIGNED_OUT)

    @property
    def current_session(self) -> AuthSession | None:
        """Сессия в памяти без обращения к провайдеру."""
        return self._session

    def get_session(self) -> AuthSession | None:
        """Текущая сессия; просроченная обновляется автоматически.

        Может выполнять сетевой запрос, поэтому вызывается из фоновых задач.
        """
        session = self._session
        if session and session.is_expired:
            logger.info("Token expired, refreshing...")
            try:
                return self.refresh(stale_token=session.access_token)
            except AuthError as exc:
                logger.error("Автоматическое обновление не удалось: %s", exc)
                return None
        return session

    def get_access_token(self) -> str | None:
        session = self.get_session()
        return session.access_token if session else None

    @property
    def is_authenticated(self) -> bool:
        return self.get_session() is not None
