"""
Test suite for the health endpoint and application assembly.

System role: Verification of liveness probe and app wiring
"""

import logging
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from ragchat.api.main import create_app, report_missing_settings


class TestHealthEndpoint:
    """Test suite for GET /healthz."""

    def test_health_reports_ok_and_uptime(self) -> None:
        # Arrange
        client = TestClient(create_app())

        # Act
        response = client.get("/healthz")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["uptime"] >= 0

    def test_correlation_header_echoed(self) -> None:
        client = TestClient(create_app())

        response = client.get("/healthz", headers={"X-Correlation-ID": "req-123"})

        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_correlation_header_generated(self) -> None:
        client = TestClient(create_app())

        response = client.get("/healthz")

        assert response.headers["X-Correlation-ID"]

    def test_cors_allows_any_origin(self) -> None:
        client = TestClient(create_app())

        response = client.options(
            "/chat",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_chat_routes_registered(self) -> None:
        paths = {route.path for route in create_app().routes}

        assert {"/healthz", "/chat", "/chat/upload"} <= paths


class TestStartupConfigurationCheck:
    """Test suite for report_missing_settings."""

    def test_each_missing_variable_logged(self, caplog) -> None:
        # Arrange
        settings = MagicMock()
        with patch("ragchat.api.main.get_settings", return_value=settings), patch(
            "ragchat.api.main.missing_required_settings",
            return_value=["SEARCH_SERVICE", "SEARCH_API_KEY"],
        ):
            # Act
            with caplog.at_level(logging.ERROR, logger="ragchat.api.main"):
                missing = report_missing_settings()

        # Assert
        assert missing == ["SEARCH_SERVICE", "SEARCH_API_KEY"]
        messages = [r.getMessage() for r in caplog.records]
        assert any("SEARCH_SERVICE" in m for m in messages)
        assert any("SEARCH_API_KEY" in m for m in messages)
