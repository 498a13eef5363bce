from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from typing import Awaitable, Callable, List
import logging
import time

from .config import Settings

# Настройка логирования
logger = logging.getLogger(__name__)

# Этап обработки запроса: получает запрос и функцию вызова следующего этапа
Stage = Callable[[Request, RequestResponseEndpoint], Awaitable[Response]]


async def error_boundary(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """
    Перехватывает любые необработанные ошибки внутренних этапов.
    Клиент получает только общее сообщение, подробности - в лог.
    """
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(
            f"Необработанная ошибка: {request.method} {request.url.path}: {str(e)}",
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error."}
        )


def token_auth(expected_token: str) -> Stage:
    """
    Проверка заголовка Authorization: "Bearer <token>" (точное совпадение).
    Применяется ко всем методам и путям.
    """
    expected_header = f"Bearer {expected_token}"

    async def check_token(request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_host = request.client.host if request.client else "unknown"
        auth_header = request.headers.get("Authorization")

        if auth_header is None:
            logger.warning(
                f"❌ Неудачная попытка аутентификации: отсутствует заголовок Authorization | "
                f"{request.method} {request.url.path} | IP: {client_host}"
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Missing Authorization header."}
            )

        if auth_header != expected_header:
            logger.warning(
                f"❌ Неудачная попытка аутентификации: неверный токен | "
                f"{request.method} {request.url.path} | IP: {client_host}"
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Invalid token."}
            )

        logger.debug(f"✅ Аутентификация успешна для {request.url.path}")
        return await call_next(request)

    return check_token


async def request_logging(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """
    Логирует метод и путь до обработки и статус ответа после.
    """
    start_time = time.time()
    logger.info(f"Входящий запрос: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time

    # Разный уровень логирования в зависимости от статуса
    if response.status_code >= 500:
        logger.error(
            f"❌ Запрос {request.method} {request.url.path} завершился с ошибкой | "
            f"Статус: {response.status_code} | Время: {process_time:.4f}s"
        )
    elif response.status_code >= 400:
        logger.warning(
            f"⚠️ Запрос {request.method} {request.url.path} завершился с ошибкой клиента | "
            f"Статус: {response.status_code} | Время: {process_time:.4f}s"
        )
    else:
        logger.info(
            f"✅ Запрос {request.method} {request.url.path} выполнен успешно | "
            f"Статус: {response.status_code} | Время: {process_time:.4f}s"
        )

    return response


def build_pipeline(settings: Settings) -> List[Stage]:
    """
    Порядок этапов обработки запроса, от внешнего к внутреннему:
    ошибки -> аутентификация -> логирование -> маршруты.
    """
    return [
        error_boundary,
        token_auth(settings.API_TOKEN),
        request_logging,
    ]


def setup_middleware(app: FastAPI, stages: List[Stage]):
    """
    Настройка middleware для приложения.

    Starlette оборачивает ранее добавленные middleware новыми,
    поэтому этапы добавляются с конца списка.
    """
    for stage in reversed(stages):
        app.add_middleware(BaseHTTPMiddleware, dispatch=stage)


def setup_exception_handlers(app: FastAPI):
    """
    Настройка обработчиков исключений
    """
    from ..features.user.schemas import errors_from_pydantic

    # Ошибки разбора запроса (JSON, параметры пути и строки запроса) -> 400
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            f"Некорректный запрос {request.method} {request.url.path}: {exc.errors()}"
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=errors_from_pydantic(exc.errors())
        )
