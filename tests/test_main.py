"""
Unit tests for app.main module and error handlers.
"""
import json
import pytest
from unittest.mock import Mock, patch
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from app.core.errors import InvalidTransition, NoMatchFound, SessionNotFound
from app.main import create_app


class TestCreateApp:
    """Test create_app function."""

    def test_create_app_returns_fastapi_instance(self):
        app = create_app()

        assert isinstance(app, FastAPI)
        assert app.title == "Tiny Milestone API"

    def test_app_includes_all_routers(self):
        app = create_app()
        paths = app.openapi()["paths"]

        assert "/health" in paths
        assert "/health/full" in paths
        assert "/api/activities" in paths
        assert "/api/suggestions" in paths
        assert "/api/sessions" in paths
        assert "/api/sessions/{session_id}/reroll" in paths
        assert "delete" in paths["/api/sessions/{session_id}"]
        assert "/api/history" in paths
        assert "/api/data" in paths

    def test_startup_survives_database_failure(self):
        """Test a broken database never stops the app from starting."""
        app = create_app()

        with patch("app.main.init_db", side_effect=OperationalError("CREATE TABLE", {}, Exception("read-only"))):
            with TestClient(app) as client:
                assert client.get("/health").status_code == 200

    def test_startup_initialises_database(self):
        app = create_app()

        with patch("app.main.init_db") as init:
            with TestClient(app):
                pass

        init.assert_called_once_with()


class TestExceptionHandlers:
    """Test exception handlers."""

    def test_exception_handlers_registered(self):
        app = create_app()

        for exc in (NoMatchFound, InvalidTransition, SessionNotFound, OperationalError):
            assert exc in app.exception_handlers

    @pytest.mark.asyncio
    async def test_no_match_handler(self):
        app = create_app()
        handler = app.exception_handlers[NoMatchFound]

        response = await handler(Mock(), NoMatchFound("calm", "move", 10))

        assert response.status_code == 404
        body = json.loads(response.body)
        assert body["error_code"] == "NO_MATCH"
        assert body["error"] == NoMatchFound.message

    @pytest.mark.asyncio
    async def test_invalid_transition_handler(self):
        app = create_app()
        handler = app.exception_handlers[InvalidTransition]

        response = await handler(Mock(), InvalidTransition("completed", "reroll"))

        assert response.status_code == 409
        body = json.loads(response.body)
        assert body["detail"] == "cannot reroll while completed"

    @pytest.mark.asyncio
    async def test_operational_error_handler(self):
        app = create_app()
        handler = app.exception_handlers[OperationalError]

        response = await handler(Mock(), OperationalError("SELECT 1", {}, Exception("locked")))

        assert response.status_code == 503
        assert json.loads(response.body)["error_code"] == "DATABASE_CONNECTION_ERROR"
