"""Tests for GET /health and GET /."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from api.main import app, SERVICE_NAME, VERSION
from api.dependencies import get_mongo_connection


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.connection = MagicMock()
        app.dependency_overrides[get_mongo_connection] = lambda: self.connection

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_reports_connected_store(self):
        self.connection.is_connected.return_value = True

        response = self.client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["mongo"] == "connected"
        assert data["timestamp"].endswith("Z")

    def test_reports_disconnected_store(self):
        self.connection.is_connected.return_value = False

        response = self.client.get("/health")

        assert response.status_code == 200
        assert response.json()["mongo"] == "disconnected"


class TestRoot(unittest.TestCase):

    def test_banner(self):
        response = TestClient(app).get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == f"{SERVICE_NAME} is running"
        assert data["version"] == VERSION

    def test_unknown_path_uses_error_body(self):
        response = TestClient(app).get("/no-such-route")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


if __name__ == '__main__':
    unittest.main()
