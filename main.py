import logging
import sys

from PySide6.QtWidgets import QApplication

from config import Settings, get_settings
from core.app_context import get_app_context
from ui.common.workers import wait_for_workers
from ui.main_window import MainWindow
from utils.logging_config import setup_logging

__all__ = ["main"]


def main(settings: Settings | None = None) -> int:
    """Запускает настольное приложение для работы с клиентами."""

    settings = settings or get_settings()
    setup_logging(settings)
    logger = logging.getLogger(__name__)

    if not settings.auth_url:
        logger.warning("AUTH_URL не задан в .env, вход будет недоступен")
    logger.info("API клиентов: %s", settings.clients_api_url)

    # ───── GUI ─────
    app = QApplication.instance() or QApplication(sys.argv)
    app.aboutToQuit.connect(wait_for_workers)

    context = get_app_context(settings)

    window = MainWindow(context=context)
    window.show()
    window.start()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
