import logging
import threading
from typing import List, Optional, Sequence, TypeVar

from fastapi import Request

from .models import User
from .schemas import UserPayload

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserRepository:
    """
    Хранилище пользователей в памяти процесса.

    Все операции выполняются под одной блокировкой: обработчики FastAPI
    могут вызываться конкурентно (event loop + threadpool).
    Поиск линейный, id выдаются по возрастанию с 1 и не переиспользуются.
    """

    def __init__(self):
        self._users: List[User] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def _find(self, user_id: int) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def get_all(self) -> List[User]:
        """Получить всех пользователей в порядке добавления"""
        with self._lock:
            return list(self._users)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Получить пользователя по id"""
        with self._lock:
            return self._find(user_id)

    def count(self) -> int:
        """Количество пользователей"""
        with self._lock:
            return len(self._users)

    def create(self, user_data: UserPayload) -> User:
        """Создать пользователя. id из запроса игнорируется."""
        with self._lock:
            user = User(
                id=self._next_id,
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                department=user_data.department,
                email=user_data.email,
            )
            self._next_id += 1
            self._users.append(user)
        logger.info(f"Создан пользователь: id={user.id}")
        return user

    def update(self, user_id: int, user_data: UserPayload) -> bool:
        """Перезаписать все поля пользователя, кроме id"""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                return False

            user.first_name = user_data.first_name
            user.last_name = user_data.last_name
            user.department = user_data.department
            user.email = user_data.email
        logger.info(f"Обновлен пользователь: id={user_id}")
        return True

    def delete(self, user_id: int) -> bool:
        """Удалить пользователя"""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                return False
            self._users.remove(user)
        logger.info(f"Удален пользователь: id={user_id}")
        return True


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """
    Вернуть страницу page (с 1) размером page_size.

    Границы не проверяются: отрицательное смещение считается нулевым,
    неположительный размер страницы дает пустой список.
    """
    if page_size <= 0:
        return []
    skip = max((page - 1) * page_size, 0)
    return list(items[skip:skip + page_size])


def get_user_repository(request: Request) -> UserRepository:
    """Репозиторий, созданный при старте приложения (app.state)"""
    return request.app.state.user_repository
