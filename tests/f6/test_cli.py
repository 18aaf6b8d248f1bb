"""Tests for the academy CLI."""

import json

import pytest
from typer.testing import CliRunner

from academy.cli import commands
from academy.cli.commands import app
from academy.config import app_config

runner = CliRunner()


def _user(user_id: str = "u1", role: str = "student") -> dict:
    return {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "role": role,
        "firstName": "Sara",
        "lastName": "Adel",
    }


@pytest.fixture
def token_file(tmp_path):
    return tmp_path / "state" / "auth.json"


@pytest.fixture
def cli_backend(tmp_path, token_file, backend, monkeypatch):
    """Point the CLI at a temp config and the fake backend."""
    config_file = tmp_path / "academy.yaml"
    config_file.write_text(
        "api:\n"
        "  base_url: http://backend.test\n"
        "auth:\n"
        f"  token_file: {token_file}\n"
        "  logout_redirect_delay: 0\n"
    )
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_file)
    monkeypatch.setattr(commands, "_transport", backend.transport())
    return backend


def _store_session(token_file, token="tok"):
    token_file.parent.mkdir(parents=True, exist_ok=True)
    token_file.write_text(json.dumps({"authToken": token, "currentUser": _user()}))


class TestSession:
    """Tests for login and logout."""

    def test_login_stores_token(self, cli_backend, token_file):
        cli_backend.add("POST", "/api/auth/login", {"token": "tok-1", "user": _user()})

        result = runner.invoke(app, ["login", "u1@example.com", "--password", "secret"])

        assert result.exit_code == 0
        assert "Signed in as Sara Adel" in result.stdout
        stored = json.loads(token_file.read_text())
        assert stored["authToken"] == "tok-1"
        assert cli_backend.last_json() == {"email": "u1@example.com", "password": "secret"}

    def test_login_rejected(self, cli_backend, token_file):
        cli_backend.add("POST", "/api/auth/login", {"message": "Invalid credentials"}, status=401)

        result = runner.invoke(app, ["login", "u1@example.com", "-p", "wrong"])

        assert result.exit_code == 1
        assert "Invalid credentials" in result.stdout
        assert not token_file.exists()

    def test_logout_success(self, cli_backend, token_file):
        _store_session(token_file)
        cli_backend.add("POST", "/api/auth/logout", {"message": "ok"})

        result = runner.invoke(app, ["logout"])

        assert result.exit_code == 0
        assert "You have been logged out successfully" in result.stdout
        assert "/auth/login" in result.stdout
        assert cli_backend.last.headers["authorization"] == "Bearer tok"
        assert "authToken" not in json.loads(token_file.read_text())

    def test_logout_backend_failure_is_masked(self, cli_backend, token_file):
        _store_session(token_file)
        cli_backend.add("POST", "/api/auth/logout", {"message": "boom"}, status=500)

        result = runner.invoke(app, ["logout"])

        assert result.exit_code == 0
        assert "You have been logged out" in result.stdout
        assert "authToken" not in json.loads(token_file.read_text())


class TestListings:
    """Tests for the listing commands."""

    def test_users_table(self, cli_backend, token_file):
        cli_backend.add(
            "GET",
            "/api/users",
            {
                "users": [_user("u1"), _user("u2", "teacher")],
                "pagination": {"current": 1, "total": 3, "totalItems": 42},
            },
        )

        result = runner.invoke(app, ["users", "--role", "teacher"])

        assert result.exit_code == 0
        assert "u2@example.com" in result.stdout
        assert "Page 1/3" in result.stdout
        assert cli_backend.last.url.params["role"] == "teacher"

    def test_unknown_role_rejected_before_request(self, cli_backend, token_file):
        result = runner.invoke(app, ["users", "--role", "wizard"])

        assert result.exit_code == 2
        assert cli_backend.requests == []

    def test_payments_status_filter(self, cli_backend, token_file):
        cli_backend.add("GET", "/api/payments", {"payments": []})

        result = runner.invoke(app, ["payments", "--status", "approved"])

        assert result.exit_code == 0
        assert cli_backend.last.url.params["status"] == "approved"

    def test_unknown_payment_status_rejected(self, cli_backend, token_file):
        result = runner.invoke(app, ["payments", "--status", "lost"])

        assert result.exit_code == 2
        assert cli_backend.requests == []

    def test_years_table(self, cli_backend, token_file):
        cli_backend.add(
            "GET",
            "/api/academic/academic-years",
            {"academicYears": [{"id": "y1", "name": "2025-2026", "isCurrent": True}]},
        )

        result = runner.invoke(app, ["years"])

        assert result.exit_code == 0
        assert "2025-2026" in result.stdout

    def test_backend_error_exits_1(self, cli_backend, token_file):
        result = runner.invoke(app, ["years"])

        assert result.exit_code == 1


class TestActivate:
    """Tests for activation code redemption."""

    def test_invalid_format_never_calls_backend(self, cli_backend, token_file):
        result = runner.invoke(app, ["activate", "ABC-123"])

        assert result.exit_code == 1
        assert "LMS-" in result.stdout
        assert cli_backend.requests == []


class TestUpload:
    """Tests for the upload command."""

    def test_upload_document(self, cli_backend, token_file, tmp_path):
        document = tmp_path / "notes.pdf"
        document.write_bytes(b"%PDF-1.4 " + b"x" * 2048)
        cli_backend.add("POST", "/api/uploads/document", {"url": "https://cdn.test/notes.pdf"})

        result = runner.invoke(app, ["upload", str(document)])

        assert result.exit_code == 0
        assert "Uploaded notes.pdf" in result.stdout
        assert "https://cdn.test/notes.pdf" in result.stdout

    def test_missing_file_exits_1(self, cli_backend, token_file, tmp_path):
        result = runner.invoke(app, ["upload", str(tmp_path / "missing.pdf")])

        assert result.exit_code == 1
        assert cli_backend.requests == []
