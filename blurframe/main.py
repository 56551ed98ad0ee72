"""Точка входа в приложение."""
import logging
import sys

from blurframe.app import BlurFrameApp
from blurframe.config import config


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    """Настраивает вывод логов в stdout (один раз на процесс)."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(asctime)s :: %(levelname)s :: %(message)s'))
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    setup_logging()

    app = BlurFrameApp()
    app.mainloop()


if __name__ == "__main__":
    main()
