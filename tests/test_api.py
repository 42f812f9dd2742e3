from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from profile_api.app import create_app, status_for
from profile_api.core.errors import InvalidRequest
from profile_api.core.security import CredentialHelper

from fakes import store_down

JONATHAN = {"full_name": "jonathan", "phone_number": "+62345", "password": "12345A!"}


@pytest.fixture()
def client(settings, fake_repo, credentials):
    app = create_app(settings, repository=fake_repo, credentials=credentials)
    with TestClient(app) as test_client:
        yield test_client


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _login(client, phone="+62345", password="12345A!") -> str:
    resp = client.post("/login", json={"phone_number": phone, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_register_login_get_profile(client, fake_repo):
    resp = client.post("/register", json=JONATHAN)
    assert resp.status_code == 200
    assert resp.json() == {"profile_id": "profile-id-1"}

    token = _login(client)
    resp = client.get("/profile", headers=_auth(token))

    assert resp.status_code == 200
    assert resp.json() == {"full_name": "jonathan", "phone_number": "+62345"}
    assert fake_repo.rows["profile-id-1"]["success_login_count"] == 1


def test_register_twice_is_conflict(client):
    assert client.post("/register", json=JONATHAN).status_code == 200
    resp = client.post("/register", json=JONATHAN)
    assert resp.status_code == 409
    assert resp.json()["message"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"full_name": "jo"},
        {"full_name": "j0nathan"},
        {"phone_number": "62345"},
        {"phone_number": "+1555123456"},
        {"password": "12345a!"},
        {"password": "ABCDEF!"},
        {"password": "12345AB"},
        {"password": "A1!" + "x" * 62},
    ],
)
def test_register_validation_errors(client, overrides):
    resp = client.post("/register", json={**JONATHAN, **overrides})
    assert resp.status_code == 400
    assert "message" in resp.json()


def test_register_missing_body_is_bad_request(client):
    assert client.post("/register").status_code == 400


def test_register_store_failure_is_500(client, fake_repo):
    fake_repo.failures["get_profile_by_phone"] = store_down()
    resp = client.post("/register", json=JONATHAN)
    assert resp.status_code == 500
    assert resp.json() == {"message": "error when register a new profile"}


def test_login_wrong_password_is_bad_request(client, fake_repo):
    client.post("/register", json=JONATHAN)
    resp = client.post("/login", json={"phone_number": "+62345", "password": "wrong"})
    assert resp.status_code == 400
    assert fake_repo.rows["profile-id-1"]["success_login_count"] == 0


def test_login_unknown_phone_is_bad_request(client):
    resp = client.post("/login", json={"phone_number": "+62999", "password": "12345A!"})
    assert resp.status_code == 400


def test_login_counter_failure_is_500(client, fake_repo):
    client.post("/register", json=JONATHAN)
    fake_repo.failures["increment_login_count"] = store_down("UPDATE profiles")
    resp = client.post("/login", json={"phone_number": "+62345", "password": "12345A!"})
    assert resp.status_code == 500
    assert "token" not in resp.json()


def test_profile_requires_authorization(client):
    assert client.get("/profile").status_code == 403
    assert client.get("/profile", headers={"Authorization": "Basic abc"}).status_code == 403
    assert client.get("/profile", headers={"Authorization": "Bearer "}).status_code == 403


def test_profile_rejects_invalid_token(client):
    resp = client.get("/profile", headers=_auth("not-a-token"))
    assert resp.status_code == 400
    assert resp.json() == {"message": "error invalid token"}


def test_profile_rejects_token_from_other_key(client):
    forged = CredentialHelper("someone-elses-signing-key-0123456789abcd").generate_token("profile-id-1")
    assert client.get("/profile", headers=_auth(forged)).status_code == 400


def test_profile_not_found(client, credentials):
    token = credentials.generate_token("profile-id-404")
    assert client.get("/profile", headers=_auth(token)).status_code == 404


def test_update_profile(client):
    client.post("/register", json=JONATHAN)
    token = _login(client)

    resp = client.put("/profile", headers=_auth(token), json={"full_name": "jonathan doe", "phone_number": "+62346"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Success update profile"}

    resp = client.get("/profile", headers=_auth(token))
    assert resp.json() == {"full_name": "jonathan doe", "phone_number": "+62346"}


def test_update_profile_conflict(client, fake_repo):
    client.post("/register", json=JONATHAN)
    client.post("/register", json={**JONATHAN, "full_name": "maria", "phone_number": "+62999"})
    token = _login(client, phone="+62999")

    resp = client.put("/profile", headers=_auth(token), json={"full_name": "maria", "phone_number": "+62345"})

    assert resp.status_code == 409
    assert fake_repo.rows["profile-id-2"]["phone_number"] == "+62999"


def test_update_profile_requires_authorization(client):
    resp = client.put("/profile", json={"full_name": "maria", "phone_number": "+62345"})
    assert resp.status_code == 403


def test_commit_failure_is_500(client, fake_repo):
    fake_repo.commit_error = store_down("COMMIT")
    resp = client.post("/register", json=JONATHAN)
    assert resp.status_code == 500
    assert fake_repo.rows == {}


def test_app_factory_builds_app_from_environment(monkeypatch):
    import importlib

    from profile_api.core import config as core_config

    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.delenv("JWT_KEY", raising=False)
    core_config.get_settings.cache_clear()
    try:
        module = importlib.import_module("profile_api.app_factory")
        module = importlib.reload(module)
        with TestClient(module.app) as test_client:
            assert test_client.get("/health").status_code == 200
    finally:
        core_config.get_settings.cache_clear()


def test_production_requires_signing_key(monkeypatch):
    from profile_api.core import config as core_config

    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("JWT_KEY", raising=False)
    core_config.get_settings.cache_clear()
    try:
        with pytest.raises(RuntimeError):
            core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()


@pytest.mark.parametrize(
    "env",
    [
        {"JWT_ALGORITHM": "none"},
        {"JWT_ALGORITHM": "RS256"},
        {"TOKEN_TTL_SECONDS": "0"},
        {"TOKEN_TTL_SECONDS": "-60"},
    ],
)
def test_unsafe_token_settings_are_refused(monkeypatch, env):
    from profile_api.core import config as core_config

    monkeypatch.setenv("APP_ENV", "dev")
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    core_config.get_settings.cache_clear()
    try:
        with pytest.raises(RuntimeError):
            core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()


def test_hmac_algorithm_setting_is_normalised(monkeypatch):
    from profile_api.core import config as core_config

    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.setenv("JWT_ALGORITHM", "hs512")
    core_config.get_settings.cache_clear()
    try:
        assert core_config.get_settings().jwt_algorithm == "HS512"
    finally:
        core_config.get_settings.cache_clear()


def test_app_stores_profiles_in_configured_database(sql_settings):
    app = create_app(sql_settings)
    with TestClient(app) as sql_client:
        resp = sql_client.post("/register", json=JONATHAN)
        assert resp.status_code == 200, resp.text
        profile_id = resp.json()["profile_id"]

        token = _login(sql_client)
        resp = sql_client.get("/profile", headers=_auth(token))

    assert resp.json() == {"full_name": "jonathan", "phone_number": "+62345"}
    assert CredentialHelper.from_settings(sql_settings).verify_token(token) == profile_id


def test_validation_error_uses_invalid_request(client):
    assert status_for(InvalidRequest()) == 400
    resp = client.post("/login", json={"phone_number": "+62345"})
    assert resp.status_code == 400
    assert resp.json()["message"]
    assert resp.json()["message"] != InvalidRequest.default_message


def test_error_body_is_documented(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    register_responses = schema["paths"]["/register"]["post"]["responses"]
    assert register_responses["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
