import os
import logging


class Settings:
    """
    Настройки приложения
    """

    # === ОСНОВНЫЕ НАСТРОЙКИ ===
    APP_NAME: str = os.getenv("APP_NAME", "User Management API")
    APP_DESCRIPTION: str = "API для управления пользователями (HR / IT)"
    APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")

    # === НАСТРОЙКИ СЕРВЕРА ===
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # === НАСТРОЙКИ БЕЗОПАСНОСТИ ===
    # Единый статический токен, сравнивается с заголовком "Bearer <token>"
    API_TOKEN: str = os.getenv("API_TOKEN", "my-secret-token")

    # === НАСТРОЙКИ ЛОГИРОВАНИЯ ===
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # === НАСТРОЙКИ ПАГИНАЦИИ ===
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))

    def setup_logging(self):
        """
        Настройка логирования приложения
        """
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL.upper()),
            format=self.LOG_FORMAT
        )

        # Настройка логгера для uvicorn (если нужно)
        if self.DEBUG:
            logging.getLogger("uvicorn").setLevel(logging.DEBUG)
            logging.getLogger("uvicorn.access").setLevel(logging.DEBUG)

    def get_app_config(self) -> dict:
        """
        Получить конфигурацию FastAPI приложения.

        Документация OpenAPI доступна только в режиме DEBUG.
        """
        config = {
            "title": self.APP_NAME,
            "description": self.APP_DESCRIPTION,
            "version": self.APP_VERSION,
            "debug": self.DEBUG,
        }
        if not self.DEBUG:
            config.update({"docs_url": None, "redoc_url": None, "openapi_url": None})
        return config


# Создаем глобальный экземпляр настроек
settings = Settings()

# Настраиваем логирование при импорте модуля
settings.setup_logging()
