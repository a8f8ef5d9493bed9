import json
import time
from datetime import datetime, timedelta, timezone
from http import HTTPStatus

import jwt
import pytest
from werkzeug.test import Client
from werkzeug.wrappers import Request

from authdemo import jwt_app
from authdemo.jwt_app import (
    AuthError,
    AuthHandler,
    AuthStorage,
    UserHandler,
    create_app,
)

secret_key = b"secret"
EMAIL = "ann@example.com"


@pytest.fixture
def client():
    return Client(create_app(secret_key))


def _register(client, email=EMAIL, name="Ann"):
    return client.post(
        "/register", json={"email": email, "name": name, "password": "password"}
    )


def _login(client, email=EMAIL):
    resp = client.post("/login", json={"email": email, "password": "password"})
    return resp.get_json()["access_token"]


def _bearer(access_token):
    return {"Authorization": f"Bearer {access_token}"}


def test_register_created(client):
    resp = _register(client)
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.get_data(as_text=True) == "Created"


def test_register_twice_fails(client):
    _register(client)
    resp = _register(client)
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.get_data(as_text=True) == "the user already exists"


def test_login_token_claims(client):
    _register(client)
    claims = jwt.decode(_login(client), secret_key, algorithms=["HS256"])
    assert claims["sub"] == EMAIL
    lifetime = claims["exp"] - time.time()
    limit = jwt_app.TOKEN_LIFETIME.total_seconds()
    assert limit - 60 < lifetime <= limit + 1


@pytest.mark.parametrize("email", [EMAIL, "bob@example.com"])
def test_login_bad_credentials(client, email):
    _register(client)
    resp = client.post("/login", json={"email": email, "password": "placeholder"})
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.get_data(as_text=True) == jwt_app.BAD_CREDENTIALS


def test_profile_round_trip(client):
    _register(client)
    resp = client.get("/profile", headers=_bearer(_login(client)))
    assert resp.status_code == HTTPStatus.OK
    assert resp.get_json() == {"email": EMAIL, "name": "Ann"}


def test_profile_without_token(client):
    resp = client.get("/profile")
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.get_data(as_text=True) == jwt_app.MISSING_TOKEN_MESSAGE


def test_profile_with_garbage_token(client):
    resp = client.get("/profile", headers={"Authorization": "Bearer token"})
    assert resp.status_code == HTTPStatus.UNAUTHORIZED
    assert resp.get_data(as_text=True) == jwt_app.INVALID_TOKEN_MESSAGE


def test_profile_with_foreign_key(client):
    _register(client)
    forged = jwt.encode({"sub": EMAIL}, b"placeholder", algorithm="HS256")
    resp = client.get("/profile", headers=_bearer(forged))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_profile_with_expired_token(client):
    _register(client)
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    expired = jwt.encode({"sub": EMAIL, "exp": past}, secret_key, algorithm="HS256")
    resp = client.get("/profile", headers=_bearer(expired))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_profile_unknown_subject(client):
    stranger = jwt.encode({"sub": "ghost@example.com"}, secret_key, algorithm="HS256")
    resp = client.get("/profile", headers=_bearer(stranger))
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.get_data(as_text=True) == "user not found"


def test_register_with_form_body(client):
    resp = client.post(
        "/register", data={"email": EMAIL, "name": "Ann", "password": "password"}
    )
    assert resp.status_code == HTTPStatus.CREATED
    profile = client.get("/profile", headers=_bearer(_login(client))).get_json()
    assert profile["name"] == "Ann"


def test_register_unsupported_content_type(client):
    resp = client.post("/register", data="x", content_type="text/plain")
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_unknown_route_requires_token(client):
    assert client.get("/nowhere").status_code == HTTPStatus.BAD_REQUEST


def test_unknown_route_with_token(client):
    _register(client)
    resp = client.get("/nowhere", headers=_bearer(_login(client)))
    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.get_data(as_text=True).startswith("Cannot GET")


def test_handler_register_stores_account():
    storage = AuthStorage()
    handler = AuthHandler(storage, secret_key)
    req = Request.from_values(
        method="POST",
        data=json.dumps({"email": EMAIL, "name": "Ann", "password": "password"}),
        content_type="application/json",
    )
    handler.register(req)
    assert storage.users[EMAIL].name == "Ann"
    assert storage.users[EMAIL].email == EMAIL


def test_handler_login_raises_on_bad_credentials():
    handler = AuthHandler(AuthStorage(), secret_key)
    req = Request.from_values(
        method="POST",
        data=json.dumps({"email": EMAIL, "password": "password"}),
        content_type="application/json",
    )
    with pytest.raises(AuthError) as info:
        handler.login(req)
    assert info.value.status == HTTPStatus.INTERNAL_SERVER_ERROR
    assert str(info.value) == jwt_app.BAD_CREDENTIALS


def test_profile_without_claims_is_unauthorized():
    resp = UserHandler(AuthStorage()).profile(Request.from_values(method="GET"))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED