"""HTTP tests for app-level wiring: discovery route and store-failure mapping."""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.services.user_service import UserService
from tests.support import MASTER_KEY, ApiTestCase


class TestRoot(ApiTestCase):
    def test_root(self) -> None:
        res = self.client.get("/")
        self.assertEqual(res.status_code, 200)
        self.assertIn("message", res.json())


class TestStoreFailure(ApiTestCase):
    """A SQLAlchemyError becomes a logged, generic 500."""

    def test_store_error_returns_generic_500_and_logs(self) -> None:
        self.register(email="admin@x.com", password="pw", master_key=MASTER_KEY)
        token = self.token_for("admin@x.com", "pw")
        failure = OperationalError("SELECT * FROM users", {}, Exception("connection refused at 10.0.0.5"))

        with patch.object(UserService, "list_users", side_effect=failure), \
                self.assertLogs("app.main", level="ERROR") as logs:
            res = self.client.get("/users", headers=self.bearer(token))

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"error": "Internal server error"})
        self.assertNotIn("10.0.0.5", res.text)
        self.assertNotIn("SELECT", res.text)
        self.assertTrue(any("Store failure" in line for line in logs.output))


class TestDatabaseUrl(ApiTestCase):
    def test_sqlite_detection(self) -> None:
        from app.core.database import is_sqlite_url

        self.assertTrue(is_sqlite_url("sqlite://"))
        self.assertTrue(is_sqlite_url("sqlite:///./portcullis.db"))
        self.assertFalse(is_sqlite_url("postgresql+psycopg2://u:p@db/portcullis"))
