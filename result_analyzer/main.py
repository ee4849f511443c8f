import logging

import flet as ft

from result_analyzer.config.settings import settings
from result_analyzer.services.storage import SnapshotFile
from result_analyzer.services.store import ResultStore
from result_analyzer.ui.app import main as app_main
from result_analyzer.ui.console import ConsoleMenu


def run() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.ui_mode == "console":
        ConsoleMenu(ResultStore(), SnapshotFile()).run()
        return

    web_mode = settings.ui_mode == "web"
    ft.app(
        target=app_main,
        view=ft.AppView.WEB_BROWSER if web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
