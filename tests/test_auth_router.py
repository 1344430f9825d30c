"""Tests for the authentication endpoints."""

from datetime import UTC, datetime, timedelta

from authcore.dependencies.auth import get_password_checker
from authcore.main import app
from authcore.models import Account, Session


def _register(test_client, name: str) -> dict:
    response = test_client.post("/api/auth/register", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


def _activate(test_client, name: str, password: str) -> dict:
    account = _register(test_client, name)
    response = test_client.post(
        "/api/auth/activate",
        json={"name": name, "tempPassword": account["tempPassword"], "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestRegister:
    """Tests for the register endpoint."""

    def test_register_returns_temp_password(self, auth_client):
        test_client, _ = auth_client

        body = _register(test_client, "alice")

        assert body["name"] == "alice"
        assert body["id"]
        assert len(body["tempPassword"]) == 8
        assert body["tempExpiry"]
        assert "passwordHash" not in body

    def test_register_duplicate(self, auth_client):
        test_client, _ = auth_client
        _register(test_client, "bob")

        response = test_client.post("/api/auth/register", json={"name": "bob"})

        assert response.status_code == 409
        assert response.json()["kind"] == "duplicate_name"

    def test_register_missing_name(self, auth_client):
        test_client, _ = auth_client

        response = test_client.post("/api/auth/register", json={})

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"


class TestActivateAndLogin:
    """Tests for activation, login and logout."""

    def test_full_flow(self, auth_client):
        """Register, activate, login, logout, logout again."""
        test_client, db_session_maker = auth_client

        activation_session = _activate(test_client, "alice", "Abcd1234")
        assert activation_session["id"]
        assert activation_session["ended"] is False

        db = db_session_maker()
        account = db.query(Account).filter(Account.name == "alice").first()
        assert account.password_hash
        assert account.temp_password == ""
        db.close()

        response = test_client.post(
            "/api/auth/login", json={"name": "alice", "password": "Abcd1234"}
        )
        assert response.status_code == 200, response.text
        session = response.json()
        assert session["accountId"] == account.id
        assert session["ended"] is False

        response = test_client.post("/api/auth/logout", json={"id": session["id"]})
        assert response.status_code == 200
        assert response.json()["ended"] is True
        assert response.json()["id"] == ""

        response = test_client.post("/api/auth/logout", json={"id": session["id"]})
        assert response.status_code == 403
        assert response.json() == {"detail": "Not authorized"}

        db = db_session_maker()
        stored = db.query(Session).filter(Session.id == session["id"]).first()
        assert stored.ended is True
        db.close()

    def test_activate_weak_password(self, auth_client):
        test_client, _ = auth_client
        account = _register(test_client, "alice")

        response = test_client.post(
            "/api/auth/activate",
            json={"name": "alice", "tempPassword": account["tempPassword"], "password": "weak"},
        )

        assert response.status_code == 400
        assert "not strong enough" in response.json()["detail"]

    def test_activate_with_overridden_checker(self, auth_client):
        """The password policy is pluggable."""
        test_client, _ = auth_client
        app.dependency_overrides[get_password_checker] = lambda: (lambda password: None)
        account = _register(test_client, "alice")

        response = test_client.post(
            "/api/auth/activate",
            json={"name": "alice", "tempPassword": account["tempPassword"], "password": "weak"},
        )

        assert response.status_code == 200

    def test_activate_password_over_72_bytes(self, auth_client):
        test_client, _ = auth_client
        account = _register(test_client, "alice")

        response = test_client.post(
            "/api/auth/activate",
            json={
                "name": "alice",
                "tempPassword": account["tempPassword"],
                "password": "Aa1" + "x" * 80,
            },
        )

        assert response.status_code == 400
        assert "not strong enough" in response.json()["detail"]

    def test_activate_over_72_bytes_with_overridden_checker(self, auth_client):
        """The hasher still refuses what bcrypt cannot hash."""
        test_client, _ = auth_client
        app.dependency_overrides[get_password_checker] = lambda: (lambda password: None)
        account = _register(test_client, "alice")

        response = test_client.post(
            "/api/auth/activate",
            json={
                "name": "alice",
                "tempPassword": account["tempPassword"],
                "password": "Aa1" + "é" * 40,
            },
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"

    def test_login_password_over_72_bytes(self, auth_client):
        test_client, _ = auth_client
        _activate(test_client, "alice", "Abcd1234")
        long_password = "Abcd1234" + "x" * 80

        known = test_client.post("/api/auth/login", json={"name": "alice", "password": long_password})
        unknown = test_client.post("/api/auth/login", json={"name": "nobody", "password": long_password})

        assert known.status_code == 403
        assert unknown.status_code == 404

    def test_activate_wrong_temp_password(self, auth_client):
        test_client, _ = auth_client
        _register(test_client, "alice")

        response = test_client.post(
            "/api/auth/activate",
            json={"name": "alice", "tempPassword": "nope", "password": "Abcd1234"},
        )

        assert response.status_code == 403
        assert "kind" not in response.json()

    def test_activate_expired_temp_password(self, auth_client):
        test_client, db_session_maker = auth_client
        account = _register(test_client, "alice")
        db = db_session_maker()
        db.query(Account).filter(Account.id == account["id"]).update(
            {Account.temp_expiry: datetime.now(UTC) - timedelta(minutes=1)}
        )
        db.commit()
        db.close()

        response = test_client.post(
            "/api/auth/activate",
            json={"name": "alice", "tempPassword": account["tempPassword"], "password": "Abcd1234"},
        )

        assert response.status_code == 403

    def test_login_wrong_password(self, auth_client):
        test_client, _ = auth_client
        _activate(test_client, "alice", "Abcd1234")

        response = test_client.post(
            "/api/auth/login", json={"name": "alice", "password": "Wrong1234"}
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "Not authorized"}

    def test_login_by_id(self, auth_client):
        test_client, _ = auth_client
        session = _activate(test_client, "alice", "Abcd1234")

        response = test_client.post(
            "/api/auth/login", json={"id": session["accountId"], "password": "Abcd1234"}
        )

        assert response.status_code == 200
        assert response.json()["accountId"] == session["accountId"]

    def test_login_unknown_account(self, auth_client):
        test_client, _ = auth_client

        response = test_client.post(
            "/api/auth/login", json={"name": "nobody", "password": "Abcd1234"}
        )

        assert response.status_code == 404

    def test_logout_malformed_id(self, auth_client):
        test_client, _ = auth_client

        response = test_client.post("/api/auth/logout", json={"id": "garbage"})

        assert response.status_code == 403


class TestReset:
    """Tests for the reset endpoint."""

    def test_reset_keeps_old_password(self, auth_client):
        test_client, _ = auth_client
        _activate(test_client, "alice", "Abcd1234")

        response = test_client.post("/api/auth/reset", json={"name": "alice"})
        assert response.status_code == 200
        reset = response.json()
        assert reset["tempPassword"]

        response = test_client.post(
            "/api/auth/login", json={"name": "alice", "password": "Abcd1234"}
        )
        assert response.status_code == 200

        response = test_client.post(
            "/api/auth/activate",
            json={"name": "alice", "tempPassword": reset["tempPassword"], "password": "Efgh5678"},
        )
        assert response.status_code == 200

        response = test_client.post(
            "/api/auth/login", json={"name": "alice", "password": "Efgh5678"}
        )
        assert response.status_code == 200

    def test_reset_unknown_account(self, auth_client):
        test_client, _ = auth_client

        response = test_client.post("/api/auth/reset", json={"name": "nobody"})

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"


class TestCurrentSession:
    """Tests for the current-session endpoint."""

    def test_current_session_refreshes(self, auth_client):
        test_client, db_session_maker = auth_client
        session = _activate(test_client, "alice", "Abcd1234")
        db = db_session_maker()
        db.query(Session).filter(Session.id == session["id"]).update(
            {Session.last_time: datetime.now(UTC) - timedelta(minutes=9)}
        )
        db.commit()
        db.close()

        response = test_client.get(
            "/api/auth/session", headers={"Authorization": f"Bearer {session['id']}"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == session["id"]
        assert datetime.fromisoformat(body["lastTime"]) >= datetime.fromisoformat(session["lastTime"])

    def test_current_session_expired(self, auth_client):
        test_client, db_session_maker = auth_client
        session = _activate(test_client, "alice", "Abcd1234")
        db = db_session_maker()
        db.query(Session).filter(Session.id == session["id"]).update(
            {Session.last_time: datetime.now(UTC) - timedelta(minutes=11)}
        )
        db.commit()
        db.close()

        response = test_client.get(
            "/api/auth/session", headers={"Authorization": f"Bearer {session['id']}"}
        )

        assert response.status_code == 403

    def test_current_session_missing_header(self, auth_client):
        test_client, _ = auth_client

        response = test_client.get("/api/auth/session")

        assert response.status_code == 403


def test_health(auth_client):
    test_client, _ = auth_client

    assert test_client.get("/health").json() == {"status": "healthy"}
