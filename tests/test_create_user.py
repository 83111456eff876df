"""Tests for the create_user CLI, run against an in-memory store."""

import io
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from app.models import User
from app.scripts import create_user
from tests.support import StoreTestCase


class TestCreateUserCli(StoreTestCase):
    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with patch.object(create_user, "SessionLocal", self.SessionTesting), \
                redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("Ada", "Ada@Example.com", "pw", "admin")
        self.assertEqual(code, 0)
        self.assertIn("ada@example.com", out)
        with self.SessionTesting() as s:
            user = s.query(User).filter(User.email == "ada@example.com").one()
            self.assertEqual(user.role, "ADMIN")

    def test_defaults_to_user_role(self) -> None:
        code, _, _ = self._run("Bo", "bo@example.com", "pw")
        self.assertEqual(code, 0)
        with self.SessionTesting() as s:
            self.assertEqual(s.query(User).one().role, "USER")

    def test_existing_email_fails(self) -> None:
        self._run("Bo", "bo@example.com", "pw")
        code, _, err = self._run("Bo 2", "bo@example.com", "pw")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)
        self.assertEqual(self.count_users(), 1)

    def test_blank_name_fails(self) -> None:
        code, _, err = self._run("  ", "x@example.com", "pw")
        self.assertEqual(code, 1)
        self.assertTrue(err)
