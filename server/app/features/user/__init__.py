"""
Управление пользователями.

Этот модуль содержит:
- models: запись пользователя, хранящаяся в памяти
- schemas: схемы API (Pydantic) и валидация тела запроса
- crud: репозиторий в памяти (CRUD - Create, Read, Update, Delete) и пагинация
- routes: маршруты для работы с пользователями (/users, /users/{id})
"""

from .models import User
from .crud import UserRepository, get_user_repository, paginate
from .routes import user_router

__all__ = [
    "User",
    "UserRepository",
    "get_user_repository",
    "paginate",
    "user_router"
]
