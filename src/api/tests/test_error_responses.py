"""Tests for the {"error": ...} response contract on failures."""

import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import get_mongo_connection, get_user_repo
from api.security import create_access_token
from domain.model.user import User


def _exploding_repo():
    raise RuntimeError("driver blew up: secret-connection-string")


class TestUnhandledErrors(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app, raise_server_exceptions=False)
        app.dependency_overrides[get_user_repo] = _exploding_repo

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_detail_suppressed_outside_development(self):
        response = self.client.post("/auth/google/token", json={"access_token": "t", "user_info": {}})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}

    @patch('api.errors.ENVIRONMENT', 'development')
    def test_detail_shown_in_development(self):
        response = self.client.post("/auth/google/token", json={"access_token": "t", "user_info": {}})

        assert response.status_code == 500
        assert "driver blew up" in response.json()["error"]


class DownConnection:
    def get_database(self):
        return None


class TestStoreUnavailable(unittest.TestCase):
    """Store down: token problems are still 401, only store access is 500."""

    def setUp(self):
        self.client = TestClient(app)
        app.dependency_overrides[get_mongo_connection] = lambda: DownConnection()

    def tearDown(self):
        app.dependency_overrides.clear()

    def _token(self) -> str:
        user = User(
            id='user-1', google_id='g-1', name='Ada', email='ada@example.com',
            created_at=datetime.now(timezone.utc), updated_at=datetime.now(timezone.utc),
        )
        return create_access_token(user)

    def test_valid_token_is_500(self):
        response = self.client.get("/auth/verify", headers={"Authorization": f"Bearer {self._token()}"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}

    def test_missing_token_is_401(self):
        response = self.client.get("/auth/verify")

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_invalid_token_is_401(self):
        response = self.client.get("/auth/verify", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_analyze_password_without_token_is_401(self):
        response = self.client.post("/analyze-password", json={"password": "Xyz12345!"})

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}


if __name__ == '__main__':
    unittest.main()
