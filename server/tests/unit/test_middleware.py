import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.middleware import (
    build_pipeline,
    error_boundary,
    request_logging,
    setup_middleware,
    token_auth,
)

AUTH = {"Authorization": "Bearer my-secret-token"}


def make_app(stages):
    """Минимальное приложение с заданными этапами и тестовыми маршрутами"""
    app = FastAPI()
    app.state.calls = 0

    @app.get("/ok")
    async def ok():
        app.state.calls += 1
        return {"status": "ok"}

    @app.get("/boom")
    async def boom():
        app.state.calls += 1
        raise RuntimeError("secret internal detail")

    setup_middleware(app, stages)
    return app


class TestPipeline:
    """Тесты порядка этапов"""

    def test_build_pipeline_order(self):
        stages = build_pipeline(Settings())

        assert len(stages) == 3
        assert stages[0] is error_boundary
        assert stages[2] is request_logging

    def test_error_boundary_wraps_everything(self):
        """Тест: ошибка маршрута перехватывается внешним этапом"""
        app = make_app(build_pipeline(Settings()))

        with TestClient(app) as client:
            response = client.get("/boom", headers=AUTH)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error."}
        assert "secret internal detail" not in response.text

    def test_error_in_auth_stage_is_caught(self):
        """Тест: ошибка внутри этапа аутентификации тоже перехватывается"""
        async def broken_auth(request, call_next):
            raise ValueError("auth backend down")

        app = make_app([error_boundary, broken_auth, request_logging])

        with TestClient(app) as client:
            response = client.get("/ok", headers=AUTH)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error."}
        assert app.state.calls == 0

    def test_error_is_logged(self, caplog):
        app = make_app(build_pipeline(Settings()))

        with caplog.at_level(logging.ERROR, logger="app.core.middleware"):
            with TestClient(app) as client:
                client.get("/boom", headers=AUTH)

        assert any("secret internal detail" in r.getMessage() for r in caplog.records)
        assert any(r.exc_info for r in caplog.records)


class TestTokenAuth:
    """Тесты проверки токена"""

    @pytest.fixture
    def client(self):
        app = make_app([error_boundary, token_auth("my-secret-token")])
        with TestClient(app) as test_client:
            yield test_client

    def test_missing_header(self, client):
        response = client.get("/ok")

        assert response.status_code == 401
        assert response.json() == {"error": "Missing Authorization header."}

    @pytest.mark.parametrize("header", [
        "Bearer wrong-token",
        "my-secret-token",
        "bearer my-secret-token",
        "Bearer  my-secret-token",
        "",
    ])
    def test_invalid_token(self, client, header):
        response = client.get("/ok", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token."}

    def test_valid_token(self, client):
        response = client.get("/ok", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_handler_not_called_when_rejected(self):
        app = make_app([token_auth("my-secret-token")])

        with TestClient(app) as client:
            client.get("/ok")

        assert app.state.calls == 0

    def test_custom_token(self):
        app = make_app([token_auth("other")])

        with TestClient(app) as client:
            assert client.get("/ok", headers=AUTH).status_code == 401
            assert client.get("/ok", headers={"Authorization": "Bearer other"}).status_code == 200


class TestRequestLogging:
    """Тесты логирования запросов"""

    def test_logs_request_and_status(self, caplog):
        app = make_app([request_logging])

        with caplog.at_level(logging.INFO, logger="app.core.middleware"):
            with TestClient(app) as client:
                client.get("/ok")

        messages = [r.getMessage() for r in caplog.records]
        assert any("GET /ok" in m and "Входящий запрос" in m for m in messages)
        assert any("Статус: 200" in m for m in messages)

    def test_client_error_logged_as_warning(self, caplog):
        app = make_app([request_logging])

        with caplog.at_level(logging.INFO, logger="app.core.middleware"):
            with TestClient(app) as client:
                client.get("/missing")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("Статус: 404" in r.getMessage() for r in warnings)

    def test_auth_rejection_not_seen_by_logging(self, caplog):
        """Тест: логирование стоит внутри аутентификации"""
        app = make_app(build_pipeline(Settings()))

        with caplog.at_level(logging.INFO, logger="app.core.middleware"):
            with TestClient(app) as client:
                client.get("/ok")

        messages = [r.getMessage() for r in caplog.records]
        assert not any("Входящий запрос" in m for m in messages)
        assert any("отсутствует заголовок Authorization" in m for m in messages)
