"""
Функциональные возможности приложения - бизнес-логика.

Этот модуль содержит все функциональные модули:
- user: управление пользователями
"""

from .user.routes import user_router

__all__ = [
    "user_router"
]
