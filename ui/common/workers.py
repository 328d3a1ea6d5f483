"""Фоновое выполнение сетевых вызовов с возвратом результата в UI-поток."""

import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, QThread, Signal, Slot

logger = logging.getLogger(__name__)

Runner = Callable[
    [Callable[[], Any], Callable[[Any], None], Callable[[Exception], None]], None
]


class ApiWorker(QThread):
    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(self, func: Callable[[], Any]):
        super().__init__()
        self._func = func

    def run(self):
        try:
            result = self._func()
        except Exception as exc:  # noqa: BLE001 - передаём в UI-поток
            logger.debug("worker failed: %s", exc)
            self.failed.emit(exc)
            return
        self.succeeded.emit(result)


class _Relay(QObject):
    """Живёт в UI-потоке, поэтому сигналы воркера приходят через очередь."""

    def __init__(self, on_success, on_error):
        super().__init__()
        self._on_success = on_success
        self._on_error = on_error

    @Slot(object)
    def deliver(self, result):
        self._on_success(result)

    @Slot(object)
    def fail(self, exc):
        self._on_error(exc)

    @Slot()
    def release(self):
        for entry in [e for e in _active if e[1] is self]:
            _active.discard(entry)
            entry[0].deleteLater()
        self.deleteLater()


_active: set[tuple[ApiWorker, _Relay]] = set()


def run_in_thread(
    func: Callable[[], Any],
    on_success: Callable[[Any], None],
    on_error: Callable[[Exception], None],
) -> ApiWorker:
    """Запускает ``func`` в отдельном потоке.

    Колбэки вызываются в потоке, где был вызван ``run_in_thread``.
    """
    worker = ApiWorker(func)
    relay = _Relay(on_success, on_error)
    worker.succeeded.connect(relay.deliver)
    worker.failed.connect(relay.fail)
    _active.add((worker, relay))
    worker.finished.connect(relay.release)
    worker.start()
    return worker


def wait_for_workers(timeout_ms: int = 5000) -> None:
    """Дожидается фоновых запросов перед выходом из приложения."""
    for worker, _relay in list(_active):
        if not worker.wait(timeout_ms):
            logger.warning("Фоновый запрос не завершился за %d мс", timeout_ms)
    _active.clear()


def run_sync(
    func: Callable[[], Any],
    on_success: Callable[[Any], None],
    on_error: Callable[[Exception], None],
) -> None:
    """Синхронный вариант для тестов и отладки."""
    try:
        result = func()
    except Exception as exc:  # noqa: BLE001
        on_error(exc)
        return
    on_success(result)
