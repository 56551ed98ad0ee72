"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: зависит от сервисов как от абстрактных ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы и выполняется в рабочем потоке.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import Callable, Optional

import customtkinter as ctk

from blurframe.config import config
from blurframe.models.errors import DecodeError, ErrorKind
from blurframe.models.image_model import EXPORT, PREVIEW, ProcessResult
from blurframe.models.session import EditSession
from blurframe.services.border_service import BorderService
from blurframe.services.image_service import ImageService
from blurframe.ui.bottom_bar import BottomBar
from blurframe.ui.image_viewer import ImageViewer
from blurframe.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 40

ERROR_MESSAGES = {
    ErrorKind.INVALID_BLUR_RADIUS: f"Размытие должно быть от {config.BLUR_MIN} до {config.BLUR_MAX}",
    ErrorKind.DECODE_ERROR: "Файл не является поддерживаемым изображением",
    ErrorKind.PROCESSING_FAILED: "Не удалось обработать изображение",
    ErrorKind.SESSION_BUSY: "Обработка уже выполняется",
}


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка изображения в `EditSession` через `ImageService`.
    - Превью с размытой рамкой при изменении силы размытия (с задержкой).
    - Экспорт в полном разрешении и запись JPEG на диск.

    Обработка идёт в одном рабочем потоке; результат забирается в поток Tk
    опросом `Future` через `window.after`.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _border_service: BorderService = field(default_factory=BorderService)
    _session: EditSession = field(default_factory=EditSession)
    _executor: ThreadPoolExecutor = field(default_factory=lambda: ThreadPoolExecutor(max_workers=1))
    _debounce_id: Optional[str] = None
    _in_flight: bool = False
    _preview_dirty: bool = False

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге и общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_blur_change = self._handle_blur_change
        self.sidebar.on_save_file = self._handle_save_file

        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_view_change = self._handle_view_change

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        if self._in_flight:
            self.sidebar.set_status(ERROR_MESSAGES[ErrorKind.SESSION_BUSY])
            return

        try:
            image_data = self._image_service.load_image(file_path)
        except (FileNotFoundError, DecodeError) as exc:
            logger.warning("Cannot open %s: %s", file_path, exc)
            self.sidebar.set_status(ERROR_MESSAGES[ErrorKind.DECODE_ERROR])
            return

        self._session.clear()
        self._session.set_source(image_data)

        self.viewer.set_image(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self.sidebar.set_save_enabled(False)
        self._request_preview()

    def _handle_blur_change(self, _intensity: int) -> None:
        if not self._session.has_source:
            return
        # debounce slider drags
        if self._debounce_id is not None:
            self.window.after_cancel(self._debounce_id)
        self._debounce_id = self.window.after(config.PREVIEW_DEBOUNCE_MS, self._request_preview)

    def _handle_save_file(self) -> None:
        if not self._session.has_source:
            return
        if self._in_flight:
            self.sidebar.set_status(ERROR_MESSAGES[ErrorKind.SESSION_BUSY])
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить результат",
                defaultextension=".jpg",
                filetypes=(("JPEG", "*.jpg *.jpeg"),),
            )
        except TclError:
            return
        if not file_path:
            return

        self.sidebar.set_status("Экспорт в полном разрешении…")
        intensity = self.sidebar.get_blur_intensity()
        self._submit(
            lambda: self._border_service.process_image(self._session.source, intensity, EXPORT, self._session),
            lambda result: self._on_export_done(result, file_path),
        )

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()

    def _handle_view_change(self, show_original: bool) -> None:
        self.viewer.set_show_original(show_original)

    # ---- Helpers ----
    def _request_preview(self) -> None:
        self._debounce_id = None
        if self._in_flight:
            self._preview_dirty = True
            return
        self._preview_dirty = False
        self.sidebar.set_status("Обработка…")
        intensity = self.sidebar.get_blur_intensity()
        self._submit(
            lambda: self._border_service.process_image(self._session.source, intensity, PREVIEW, self._session),
            self._on_preview_done,
        )

    def _submit(self, job: Callable[[], ProcessResult], on_done: Callable[[ProcessResult], None]) -> None:
        self._in_flight = True
        future = self._executor.submit(job)
        self.window.after(POLL_INTERVAL_MS, self._poll, future, on_done)

    def _poll(self, future: Future, on_done: Callable[[ProcessResult], None]) -> None:
        if not future.done():
            self.window.after(POLL_INTERVAL_MS, self._poll, future, on_done)
            return
        self._in_flight = False
        on_done(future.result())
        if self._preview_dirty:
            self._request_preview()

    def _on_preview_done(self, result: ProcessResult) -> None:
        if not result.ok:
            self.viewer.set_processed_image(None)
            self.sidebar.set_save_enabled(False)
            self.sidebar.set_status(ERROR_MESSAGES.get(result.error, result.message))
            return
        self.viewer.set_processed_image(result.image)
        self.sidebar.set_result_dims(result.image.width, result.image.height)
        self.sidebar.set_save_enabled(True)
        self.sidebar.set_status("Превью готово")

    def _on_export_done(self, result: ProcessResult, file_path: str) -> None:
        if not result.ok:
            self.sidebar.set_status(ERROR_MESSAGES.get(result.error, result.message))
            return
        try:
            path = self._image_service.save_bytes(result.data, file_path)
        except OSError as exc:
            logger.error("Cannot save %s: %s", file_path, exc)
            self.sidebar.set_status(f"Не удалось сохранить: {exc}")
            return
        self.sidebar.set_status(f"Сохранено: {path.name} ({result.image.width}×{result.image.height})")
