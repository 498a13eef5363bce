import os

# Токен для тестов задаем до импорта настроек
os.environ["API_TOKEN"] = "my-secret-token"

import pytest
from fastapi.testclient import TestClient

# Импорты из приложения
from app.core.config import settings
from app.features.user.crud import UserRepository
from app.features.user.schemas import UserPayload
from main import create_app


@pytest.fixture(scope="function")
def app():
    """Фикстура с новым приложением (и пустым репозиторием) для каждого теста"""
    return create_app()


@pytest.fixture(scope="function")
def repo(app):
    """Репозиторий, подключенный к приложению"""
    return app.state.user_repository


@pytest.fixture(scope="function")
def raw_client(app):
    """Тестовый клиент без заголовка Authorization"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def client(raw_client):
    """Фикстура для тестового клиента FastAPI с токеном"""

    # Создаем обертку для автоматической передачи заголовков
    class TestClientWithAuth:
        def __init__(self, client):
            self.client = client
            self.headers = {
                "Authorization": f"Bearer {settings.API_TOKEN}"
            }

        def _merge(self, kwargs):
            headers = {**self.headers, **kwargs.get('headers', {})}
            kwargs['headers'] = headers
            return kwargs

        def get(self, url, **kwargs):
            return self.client.get(url, **self._merge(kwargs))

        def post(self, url, **kwargs):
            return self.client.post(url, **self._merge(kwargs))

        def put(self, url, **kwargs):
            return self.client.put(url, **self._merge(kwargs))

        def delete(self, url, **kwargs):
            return self.client.delete(url, **self._merge(kwargs))

    return TestClientWithAuth(raw_client)


@pytest.fixture
def sample_user_data():
    """Фикстура с тестовыми данными пользователя"""
    return {
        "firstName": "John",
        "lastName": "Doe",
        "department": "IT",
        "email": "john.doe@acme.org"
    }


@pytest.fixture
def sample_user_payload(sample_user_data):
    """Фикстура для создания UserPayload объекта"""
    return UserPayload(**sample_user_data)


@pytest.fixture
def empty_repo():
    """Отдельный репозиторий, не связанный с приложением"""
    return UserRepository()


@pytest.fixture
def multiple_users(repo):
    """Фикстура с тремя пользователями (id 1, 2, 3)"""
    people = [
        ("Alice", "Smith", "HR", "alice@acme.org"),
        ("Bob", "Jones", "IT", "bob@acme.org"),
        ("Carol", "White", "HR", "carol@acme.org"),
    ]
    return [
        repo.create(UserPayload(
            firstName=first_name,
            lastName=last_name,
            department=department,
            email=email
        ))
        for first_name, last_name, department, email in people
    ]
