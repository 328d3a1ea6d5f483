from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from services.validators import normalize_email, parse_rate


STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"
STATUS_CHOICES = (STATUS_ACTIVE, STATUS_INACTIVE)


class ClientPayloadError(ValueError):
    """Ответ API не соответствует структуре клиента."""


def status_to_active(status: str | None) -> bool:
    return status == STATUS_ACTIVE


def active_to_status(isactive: bool) -> str:
    return STATUS_ACTIVE if isactive else STATUS_INACTIVE


def format_rate_input(rate: float | None) -> str:
    """Ставка для поля ввода без округления: 45.0 -> "45", 12.345 -> "12.345"."""
    if rate is None:
        return ""
    text = repr(float(rate))
    return text[:-2] if text.endswith(".0") else text


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def _optional_rate(value: Any) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ClientPayloadError(f"Некорректная ставка: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ClientPayloadError(f"Некорректная ставка: {value!r}") from None


@dataclass(frozen=True)
class ClientDTO:
    id: int | str
    name: str
    email: str
    job: str | None = None
    rate: float | None = None
    isactive: bool = False

    @classmethod
    def from_api(cls, payload: Any) -> "ClientDTO":
        if not isinstance(payload, Mapping):
            raise ClientPayloadError(
                f"Ожидался объект клиента, получено {type(payload).__name__}"
            )
        missing = [key for key in ("id", "name", "email") if payload.get(key) is None]
        if missing:
            raise ClientPayloadError(
                "В ответе нет обязательных полей: " + ", ".join(missing)
            )
        return cls(
            id=payload["id"],
            name=str(payload["name"]),
            email=str(payload["email"]),
            job=_optional_text(payload.get("job")),
            rate=_optional_rate(payload.get("rate")),
            isactive=bool(payload.get("isactive", False)),
        )

    @classmethod
    def parse_many(cls, payload: Any) -> list["ClientDTO"]:
        if not isinstance(payload, list):
            raise ClientPayloadError(
                f"Ожидался список клиентов, получено {type(payload).__name__}"
            )
        return [cls.from_api(item) for item in payload]

    def to_payload(self) -> dict:
        payload = asdict(self)
        payload.pop("id")
        return payload

    def with_toggled_status(self) -> "ClientDTO":
        return replace(self, isactive=not self.isactive)


@dataclass
class ClientFormData:
    """Состояние формы: статус хранится строкой, как в выпадающем списке."""

    name: str = ""
    email: str = ""
    job: str = ""
    rate: str = ""
    status: str = STATUS_INACTIVE

    @classmethod
    def blank(cls) -> "ClientFormData":
        return cls()

    @classmethod
    def from_client(cls, client: ClientDTO) -> "ClientFormData":
        return cls(
            name=client.name or "",
            email=client.email or "",
            job=client.job or "",
            rate=format_rate_input(client.rate),
            status=active_to_status(client.isactive),
        )

    def to_payload(self, include_empty: bool = False) -> dict:
        """Тело запроса к API.

        Пустые ``job``/``rate`` по умолчанию не передаются; с
        ``include_empty=True`` они уходят как ``None``, чтобы сервер
        очистил сохранённое значение.
        """
        payload: dict[str, object] = {
            "name": self.name.strip(),
            "email": normalize_email(self.email),
        }
        job = self.job.strip() or None
        rate = parse_rate(self.rate)
        if include_empty or job is not None:
            payload["job"] = job
        if include_empty or rate is not None:
            payload["rate"] = rate
        payload["isactive"] = status_to_active(self.status)
        return payload
