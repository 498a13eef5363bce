from typing import Optional

from fastapi import FastAPI
from dotenv import load_dotenv
import os

# Загружаем переменные окружения из корневого .env файла
env_file = os.path.join(os.path.dirname(__file__), '..', '.env')
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Пробуем загрузить из текущей директории
    load_dotenv(override=False)

from app.core.config import settings, Settings
from app.core.middleware import build_pipeline, setup_middleware, setup_exception_handlers
from app.features.user.crud import UserRepository
from app.features.user.routes import user_router


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Собрать приложение: репозиторий, конвейер middleware, маршруты.
    Репозиторий создается один раз на приложение и хранится в app.state.
    """
    app_settings = app_settings or settings

    # Создаем FastAPI приложение с настройками из config
    application = FastAPI(**app_settings.get_app_config())
    application.state.settings = app_settings
    application.state.user_repository = UserRepository()

    # Настраиваем middleware
    setup_middleware(application, build_pipeline(app_settings))

    # Настраиваем обработчики исключений
    setup_exception_handlers(application)

    # Подключаем роутеры
    application.include_router(user_router)

    return application


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
