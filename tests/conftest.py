import json
import os
from types import SimpleNamespace

import pytest
import requests
from PySide6.QtWidgets import QApplication

from services.auth.session import AuthEvent, AuthSession
from services.clients.client_api import ClientApiError
from services.clients.dto import ClientDTO
from ui.common.workers import run_sync, wait_for_workers


@pytest.fixture(scope="session")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
    wait_for_workers()
    app.processEvents()


@pytest.fixture
def make_client():
    def _make_client(id=1, name="Ann", email="a@x.com", job=None, rate=None, isactive=True):
        return ClientDTO(
            id=id, name=name, email=email, job=job, rate=rate, isactive=isactive
        )

    return _make_client


class StubClientApi:
    """Имитирует сервер: хранит записи и запоминает вызовы."""

    def __init__(self, clients=None):
        self.clients: list[ClientDTO] = list(clients or [])
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None
        self._next_id = 100

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def list_clients(self):
        self.calls.append(("GET",))
        self._maybe_fail()
        return list(self.clients)

    def create_client(self, payload):
        self.calls.append(("POST", payload))
        self._maybe_fail()
        self._next_id += 1
        created = ClientDTO.from_api({"id": self._next_id, **payload})
        self.clients.append(created)
        return created

    def update_client(self, client_id, payload):
        self.calls.append(("PUT", client_id, payload))
        self._maybe_fail()
        updated = ClientDTO.from_api({"id": client_id, **payload})
        self.clients = [updated if c.id == client_id else c for c in self.clients]
        return updated

    def delete_client(self, client_id):
        self.calls.append(("DELETE", client_id))
        self._maybe_fail()
        self.clients = [c for c in self.clients if c.id != client_id]


class StubAuth:
    def __init__(self, session=None):
        self.session = session
        self.listeners = []
        self.sign_in_calls = []
        self.sign_in_error: Exception | None = None

    @property
    def current_session(self):
        return self.session

    def get_session(self):
        return self.session

    def get_access_token(self):
        return self.session.access_token if self.session else None

    def subscribe(self, listener):
        self.listeners.append(listener)

        def unsubscribe():
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def emit(self, event, session):
        self.session = session
        for listener in list(self.listeners):
            listener(event, session)

    def sign_in(self, email, password):
        self.sign_in_calls.append((email, password))
        if self.sign_in_error is not None:
            raise self.sign_in_error
        self.emit(AuthEvent.SIGNED_IN, AuthSession("token", user_email=email))

    def sign_out(self):
        self.emit(AuthEvent.SIGNED_OUT, None)

    def restore(self):
        self.emit(AuthEvent.INITIAL_SESSION, self.session)
        return self.session


@pytest.fixture
def stub_api():
    return StubClientApi()


@pytest.fixture
def api_error():
    return ClientApiError("Сервер вернул ошибку 500", status_code=500)


@pytest.fixture
def signed_in_auth():
    return StubAuth(AuthSession("token", user_email="user@example.com"))


@pytest.fixture
def signed_out_auth():
    return StubAuth()


@pytest.fixture
def confirm_answer():
    return SimpleNamespace(value=True, questions=[])


@pytest.fixture
def make_controller(qapp, stub_api, signed_in_auth, confirm_answer):
    from services.clients.clients_controller import ClientsController

    def _make(*, api=None, auth=None, error_timeout_ms=3000):
        def confirm(text):
            confirm_answer.questions.append(text)
            return confirm_answer.value

        return ClientsController(
            api or stub_api,
            auth or signed_in_auth,
            confirm=confirm,
            runner=run_sync,
            error_timeout_ms=error_timeout_ms,
        )

    return _make


def _make_response(status: int, body=None, *, raw: bytes | None = None):
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if raw is not None:
        response._content = raw
    else:
        response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response


@pytest.fixture
def make_response():
    """Собирает настоящий ``requests.Response`` с JSON-телом."""
    return _make_response
