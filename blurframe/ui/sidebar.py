"""Боковая панель: открытие файла, информация, сила размытия, сохранение.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from blurframe.config import config
from blurframe.models.image_model import ImageData


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    if size_bytes >= 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} МБ"
    return f"{size_bytes / 1024:.1f} КБ"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, рамка, экспорт."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_blur_change: Optional[Callable[[int], None]] = None
        self.on_save_file: Optional[Callable[[], None]] = None

        # File
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._result_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_result = ctk.CTkLabel(self, textvariable=self._result_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_result.grid(row=6, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Blur
        self._blur_title = ctk.CTkLabel(self, text="Размытие рамки", font=ctk.CTkFont(size=16, weight="bold"))
        self._blur_title.grid(row=7, column=0, padx=8, pady=(8, 4), sticky="w")

        self._blur_val = ctk.StringVar(value=str(config.BLUR_DEFAULT))
        self._blur_slider = ctk.CTkSlider(
            self,
            from_=config.BLUR_MIN,
            to=config.BLUR_MAX,
            number_of_steps=config.BLUR_MAX - config.BLUR_MIN,
            command=self._on_blur_slider,
        )
        self._blur_slider.set(config.BLUR_DEFAULT)
        self._blur_value_label = ctk.CTkLabel(self, textvariable=self._blur_val, width=48, anchor="w")
        self._blur_slider.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._blur_value_label.grid(row=9, column=0, padx=8, pady=(0, 10), sticky="w")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # Export
        self._save_btn = ctk.CTkButton(self, text="Сохранить JPEG…", command=self._emit_save_file, state="disabled")
        self._save_btn.grid(row=100, column=0, padx=8, pady=(0, 4), sticky="ew")

        self._status_val = ctk.StringVar(value="Откройте изображение")
        self._status = ctk.CTkLabel(self, textvariable=self._status_val, wraplength=250, anchor="w", justify="left")
        self._status.grid(row=101, column=0, padx=8, pady=(0, 8), sticky="ew")

    # public API (sync from controller)
    def set_image_info(self, image_data: ImageData) -> None:
        self._path_val.set(str(image_data.path) if image_data.path else "—")
        self._size_val.set(f"Размер файла: {_format_size(image_data.size_bytes)}")
        self._dims_val.set(f"Исходник: {image_data.width}×{image_data.height} ({image_data.mode})")
        self._result_val.set("Результат: —")

    def set_result_dims(self, width: int, height: int) -> None:
        self._result_val.set(f"Результат: {width}×{height}")

    def set_status(self, text: str) -> None:
        self._status_val.set(text)

    def set_save_enabled(self, enabled: bool) -> None:
        self._save_btn.configure(state="normal" if enabled else "disabled")

    def get_blur_intensity(self) -> int:
        return int(round(self._blur_slider.get()))

    # events
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_save_file(self) -> None:
        if self.on_save_file:
            self.on_save_file()

    def _on_blur_slider(self, value: float) -> None:
        intensity = int(round(value))
        self._blur_val.set(str(intensity))
        if self.on_blur_change:
            self.on_blur_change(intensity)
