"""Простая конфигурация логирования для клиентского приложения."""

import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

from config import Settings, get_settings


class HttpNoiseFilter(logging.Filter):
    """Фильтрует служебные сообщения пула соединений urllib3."""

    NOISE_PREFIXES = ("Starting new HTTP", "Resetting dropped connection")

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - short doc
        """True, если сообщение не относится к открытию соединений."""
        msg = str(record.getMessage()).lstrip()
        return not msg.startswith(self.NOISE_PREFIXES)


def setup_logging(settings: Settings | None = None) -> None:
    """Настраивает вывод логов в консоль и файл ``clients.log``."""
    settings = settings or get_settings()
    logs_dir = Path(settings.log_dir).expanduser()
    logs_dir.mkdir(parents=True, exist_ok=True)

    level_name = settings.log_level
    level = getattr(logging, level_name, logging.INFO)
    if settings.detailed_logging:
        level = logging.DEBUG

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_h = RotatingFileHandler(
        logs_dir / "clients.log",
        maxBytes=2_000_000,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_h.setFormatter(fmt)
    file_h.setLevel(level)

    console_h = logging.StreamHandler()
    console_h.setFormatter(fmt)
    console_h.setLevel(level)

    logging.basicConfig(
        level=level,
        handlers=[file_h, console_h],
        force=True,  # перезаписываем базовую конфигурацию
        format="%(asctime)s | %(levelname)-8s | %(name)20s │ %(message)s",
    )

    logging.getLogger().setLevel(level)

    # Скрываем открытие соединений urllib3
    urllib3_logger = logging.getLogger("urllib3.connectionpool")
    if not settings.detailed_logging:
        urllib3_logger.addFilter(HttpNoiseFilter())
