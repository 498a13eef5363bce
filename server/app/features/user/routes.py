from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from typing import Any, List, Optional
import logging

from .crud import UserRepository, get_user_repository, paginate
from .schemas import UserResponse, validate_user_payload

# Настройка логирования для routes
logger = logging.getLogger(__name__)

# Создаем роутер для пользователей
user_router = APIRouter(prefix="/users", tags=["users"])


def user_not_found(user_id: int) -> JSONResponse:
    logger.warning(f"API: Пользователь не найден: id={user_id}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": f"User with ID {user_id} not found"}
    )


def validation_failed(errors: list) -> JSONResponse:
    logger.warning(f"API: Ошибка валидации: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=errors
    )


# === ПОЛЬЗОВАТЕЛИ ===

@user_router.get("", response_model=List[UserResponse])
async def get_all_users(
    request: Request,
    page: int = Query(1, description="Номер страницы (с 1)"),
    page_size: Optional[int] = Query(
        None, alias="pageSize", description="Размер страницы"
    ),
    repo: UserRepository = Depends(get_user_repository)
):
    """
    Получить список пользователей с пагинацией.
    Порядок - порядок создания. Границы page/pageSize не проверяются.
    """
    if page_size is None:
        page_size = request.app.state.settings.DEFAULT_PAGE_SIZE

    users = paginate(repo.get_all(), page, page_size)
    return [UserResponse.from_user(user) for user in users]


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository)
):
    """
    Получить пользователя по id.
    """
    user = repo.get_by_id(user_id)
    if user is None:
        return user_not_found(user_id)
    return UserResponse.from_user(user)


@user_router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    response: Response,
    payload: Any = Body(None),
    repo: UserRepository = Depends(get_user_repository)
):
    """
    Создать пользователя.
    id назначается сервером, заголовок Location указывает на новый ресурс.
    """
    result = validate_user_payload(payload)
    if not result.is_valid:
        return validation_failed(result.errors)

    user = repo.create(result.user)
    logger.info(
        f"API: Создан новый пользователь id={user.id}, "
        f"всего пользователей: {repo.count()}"
    )
    response.headers["Location"] = f"/users/{user.id}"
    return UserResponse.from_user(user)


@user_router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    user_id: int,
    payload: Any = Body(None),
    repo: UserRepository = Depends(get_user_repository)
):
    """
    Обновить все поля пользователя (кроме id).
    """
    result = validate_user_payload(payload)
    if not result.is_valid:
        return validation_failed(result.errors)

    if not repo.update(user_id, result.user):
        return user_not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@user_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository)
):
    """
    Удалить пользователя.
    """
    if not repo.delete(user_id):
        return user_not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
