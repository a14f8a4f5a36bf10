"""
Tests for the application entry point: startup checks and the server runner.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from crud_app.main import create_app, run, settings


class TestLifespan:
    def test_unreachable_database_aborts_startup(self):
        """Test that a failed connection check stops the app from starting."""
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with patch("crud_app.main.check_connection", side_effect=error):
            with pytest.raises(OperationalError):
                with TestClient(create_app()):
                    pass

    def test_table_creation_failure_aborts_startup(self):
        error = OperationalError("CREATE TABLE", {}, Exception("permission denied"))

        with patch("crud_app.main.create_tables", side_effect=error):
            with pytest.raises(OperationalError):
                with TestClient(create_app()):
                    pass

    def test_startup_creates_tables(self):
        with patch("crud_app.main.create_tables") as create_tables:
            with TestClient(create_app()):
                pass

        create_tables.assert_called_once_with()


class TestRun:
    def test_run_passes_graceful_shutdown_window(self):
        """Test that uvicorn waits SHUTDOWN_TIMEOUT seconds for in-flight requests."""
        with patch("uvicorn.run") as uvicorn_run:
            run()

        uvicorn_run.assert_called_once()
        args, kwargs = uvicorn_run.call_args
        assert args == ("crud_app.main:app",)
        assert kwargs["timeout_graceful_shutdown"] == settings.shutdown_timeout == 10
        assert kwargs["host"] == settings.host
        assert kwargs["port"] == settings.port == 8080
