"""Shared fixtures for unittest cases: an in-memory store and a wired TestClient."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import get_db
from app.models import Base, User

MASTER_KEY = "test-master-key"


class StoreTestCase(unittest.TestCase):
    """Fresh in-memory SQLite schema per test, plus a configured master key."""

    def setUp(self) -> None:
        # One shared connection so every session sees the same in-memory database
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db: Session = self.SessionTesting()

        master_patch = patch.object(settings, "MASTER_KEY", SecretStr(MASTER_KEY))
        master_patch.start()
        self.addCleanup(master_patch.stop)

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def count_users(self, email: str | None = None) -> int:
        with self.SessionTesting() as s:
            q = s.query(User)
            if email is not None:
                q = q.filter(User.email == email)
            return q.count()


class ApiTestCase(StoreTestCase):
    """StoreTestCase plus a TestClient whose requests each get their own session."""

    def setUp(self) -> None:
        super().setUp()
        from app.main import app

        def override_get_db():
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def register(self, name: str = "Test User", email: str = "test@example.com",
                 password: str = "123456", master_key: str | None = None):
        body = {"name": name, "email": email, "password": password}
        if master_key is not None:
            body["masterKey"] = master_key
        return self.client.post("/auth/register", json=body)

    def login(self, email: str = "test@example.com", password: str = "123456",
              mode: str | None = None):
        body = {"email": email, "password": password}
        if mode is not None:
            body["mode"] = mode
        return self.client.post("/auth/login", json=body)

    def token_for(self, email: str = "test@example.com", password: str = "123456") -> str:
        res = self.login(email, password)
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()["token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
