"""
Ядро приложения - настройки и инфраструктура.

Этот модуль содержит основные компоненты приложения:
- config: настройки приложения и переменные окружения
- middleware: этапы обработки запроса (ошибки, аутентификация, логирование)
"""

from .config import settings, Settings
from .middleware import build_pipeline, setup_middleware, setup_exception_handlers

__all__ = [
    "settings",
    "Settings",
    "build_pipeline",
    "setup_middleware",
    "setup_exception_handlers"
]
