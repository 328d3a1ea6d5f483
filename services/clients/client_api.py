"""HTTP-клиент REST-ресурса клиентов."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from config import Settings, get_settings
from services.clients.dto import ClientDTO, ClientPayloadError

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    def get_access_token(self) -> str | None: ...

    def refresh(self, stale_token: str | None = None) -> Any: ...

class ClientApiError(Exception):
    """Ошибка обращения к API клиентов."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ClientApi:
    """Обёртка над ``GET/POST/PUT/DELETE`` ресурса ``/clients``."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        auth: TokenProvider | None = None,
        http: requests.Session | None = None,
    ):
        settings = settings or get_settings()
        self.base_url = settings.clients_api_url.rstrip("/")
        self.timeout = settings.api_timeout
        self._auth = auth
        self._http = http or requests.Session()

    def _token(self) -> str | None:
        return self._auth.get_access_token() if self._auth else None

    def _headers(self, token: str | None) -> dict:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _url(self, client_id: int | str | None = None) -> str:
        if client_id is None:
            return self.base_url
        return f"{self.base_url}/{client_id}"

    def _request(self, method: str, url: str, **kwargs) -> Any:
        logger.debug("%s %s", method, url)
        try:
            token = self._token()
            response = self._http.request(
                method, url, headers=self._headers(token), timeout=self.timeout, **kwargs
            )
            if response.status_code == 401 and self._auth is not None:
                logger.info("Token rejected (401), refreshing...")
                try:
                    self._auth.refresh(stale_token=token)
                except Exception as exc:  # noqa: BLE001
                    raise ClientApiError(
                        f"Сессия истекла: {exc}", status_code=401
                    ) from exc
                response = self._http.request(
                    method,
                    url,
                    headers=self._headers(self._token()),
                    timeout=self.timeout,
                    **kwargs,
                )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise ClientApiError(
                f"Сервер вернул ошибку {status}", status_code=status
            ) from exc
        except requests.RequestException as exc:
            raise ClientApiError(f"Сетевая ошибка: {exc}") from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ClientApiError(
                "Некорректный JSON в ответе", status_code=response.status_code
            ) from exc

    @staticmethod
    def _parse(parser, data):
        try:
            return parser(data)
        except ClientPayloadError as exc:
            raise ClientApiError(f"Некорректный ответ сервера: {exc}") from exc

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def list_clients(self) -> list[ClientDTO]:
        data = self._request("GET", self._url())
        return self._parse(ClientDTO.parse_many, data)

    def create_client(self, payload: dict) -> ClientDTO:
        data = self._request("POST", self._url(), json=payload)
        client = self._parse(ClientDTO.from_api, data)
        logger.info("✅ Клиент создан: id=%s", client.id)
        return client

    def update_client(self, client_id: int | str, payload: dict) -> ClientDTO:
        data = self._request("PUT", self._url(client_id), json=payload)
        client = self._parse(ClientDTO.from_api, data)
        logger.info("✏️ Клиент обновлён: id=%s", client_id)
        return client

    def delete_client(self, client_id: int | str) -> None:
        self._request("DELETE", self._url(client_id))
        logger.info("🗑 Клиент удалён: id=%s", client_id)
