"""Сессия редактирования: кэш декодированного источника и защита от гонок.

Сессией владеет вызывающая сторона (контроллер UI). Ядро не хранит
состояние между вызовами; повторное использование декодированного
изображения возможно только через явно переданную сессию.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from blurframe.models.errors import SessionBusy
from blurframe.models.image_model import ImageData

logger = logging.getLogger(__name__)


class EditSession:
    """Один открытый пользователем снимок.

    Одновременно допускается только один вызов обработки: второй
    пересекающийся вызов отклоняется (`SessionBusy`), а не ставится в очередь.
    """

    def __init__(self) -> None:
        self._source: Optional[ImageData] = None
        self._lock = threading.Lock()

    @property
    def source(self) -> Optional[ImageData]:
        return self._source

    @property
    def has_source(self) -> bool:
        return self._source is not None

    def set_source(self, image_data: ImageData) -> None:
        """Запоминает декодированный источник (новое изображение)."""
        self._source = image_data
        logger.info("Session source set: %sx%s (%s)", image_data.width, image_data.height, image_data.path or "<bytes>")

    def clear(self) -> None:
        self._source = None

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    def begin(self) -> None:
        if not self._lock.acquire(blocking=False):
            raise SessionBusy("Processing already in progress for this session")

    def end(self) -> None:
        self._lock.release()

    @contextmanager
    def busy(self) -> Iterator["EditSession"]:
        """Контекст «обработка в процессе»; бросает `SessionBusy` при пересечении."""
        self.begin()
        try:
            yield self
        finally:
            self.end()
