"""Registration, login and profile service authorised by HS256 JWTs."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Any, Iterable, Sequence

import jwt
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

CONTEXT_KEY_USER = "user"
JWT_SECRET_KEY = b"secret"
TOKEN_LIFETIME = timedelta(hours=72)
PORT = 1234

BAD_CREDENTIALS = "email or password is incorrect"
MISSING_TOKEN_MESSAGE = "Missing or malformed JWT"
INVALID_TOKEN_MESSAGE = "Invalid or expired JWT"

_ALGORITHM = "HS256"
_ENVIRON_KEY = f"authdemo.jwt.{CONTEXT_KEY_USER}"
_AUTH_SCHEME = "Bearer"
_TEXT = "text/plain; charset=utf-8"

_log = logging.getLogger(__name__)


class AuthError(Exception):
    """A request failure, replied to with *status* and the message as body."""

    def __init__(self, message: str, status: int = HTTPStatus.INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.status = int(status)


@dataclass
class Account:
    """A registered account."""

    email: str
    name: str
    password: str = field(repr=False)


@dataclass
class AuthStorage:
    """Accounts held in memory, keyed by e-mail."""

    users: dict[str, Account] = field(default_factory=dict)


def _status_reply(status: int) -> Response:
    return Response(HTTPStatus(status).phrase, status=status, content_type=_TEXT)


def _json_reply(body: dict[str, Any]) -> Response:
    return Response(json.dumps(body), content_type="application/json")


def _parse_body(request: Request, fields: Iterable[str]) -> dict[str, str]:
    mimetype = request.mimetype
    if mimetype.startswith("application/json"):
        try:
            data = json.loads(request.get_data(as_text=True))
        except ValueError as exc:
            raise AuthError(f"body parser: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise AuthError("body parser: request body must be a JSON object")
        result = {}
        for name in fields:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise AuthError(f"body parser: field {name!r} must be a string")
            result[name] = value or ""
        return result
    if mimetype in ("application/x-www-form-urlencoded", "multipart/form-data"):
        return {name: request.form.get(name, "") for name in fields}
    raise AuthError(
        f"body parser: {HTTPStatus.UNPROCESSABLE_ENTITY.phrase}",
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@dataclass
class AuthHandler:
    """Handles registration and login."""

    storage: AuthStorage
    secret_key: bytes = JWT_SECRET_KEY

    def register(self, request: Request) -> Response:
        """Register a new account from the request body."""
        data = _parse_body(request, ("email", "name", "password"))
        email = data["email"]
        if email in self.storage.users:
            raise AuthError("the user already exists")
        password = data["password"]
        self.storage.users[email] = Account(email=email, name=data["name"], password=password)
        return _status_reply(HTTPStatus.CREATED)

    def login(self, request: Request) -> Response:
        """Check credentials and reply with a signed access token."""
        data = _parse_body(request, ("email", "password"))
        account = self.storage.users.get(data["email"])
        if account is None or account.password != data["password"]:
            raise AuthError(BAD_CREDENTIALS)

        payload = {
            "sub": account.email,
            "exp": int((datetime.now(timezone.utc) + TOKEN_LIFETIME).timestamp()),
        }
        try:
            signed = jwt.encode(payload, self.secret_key, algorithm=_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError):
            _log.exception("JWT token signing")
            return _status_reply(HTTPStatus.INTERNAL_SERVER_ERROR)
        return _json_reply({"access_token": signed})


@dataclass
class UserHandler:
    """Handles requests about the authorised user."""

    storage: AuthStorage

    def profile(self, request: Request) -> Response:
        """Reply with the e-mail and name of the token's subject."""
        claims = request.environ.get(_ENVIRON_KEY)
        if not isinstance(claims, dict):
            _log.error("wrong type of JWT token claims: %r", claims)
            return _status_reply(HTTPStatus.UNAUTHORIZED)
        subject = claims.get("sub")
        account = self.storage.users.get(subject) if isinstance(subject, str) else None
        if account is None:
            raise AuthError("user not found")
        return _json_reply({"email": account.email, "name": account.name})


def _authenticate(request: Request, secret_key: bytes) -> dict[str, Any]:
    header = request.headers.get("Authorization", "")
    scheme_len = len(_AUTH_SCHEME)
    if len(header) <= scheme_len + 1 or header[:scheme_len].lower() != _AUTH_SCHEME.lower():
        raise AuthError(MISSING_TOKEN_MESSAGE, HTTPStatus.BAD_REQUEST)
    encoded = header[scheme_len:].strip()
    try:
        return jwt.decode(encoded, secret_key, algorithms=[_ALGORITHM])
    except jwt.PyJWTError as exc:
        raise AuthError(INVALID_TOKEN_MESSAGE, HTTPStatus.UNAUTHORIZED) from exc


def create_app(secret_key: bytes = JWT_SECRET_KEY):
    """Return the WSGI application; every route but /register and /login needs a JWT."""
    storage = AuthStorage()
    auth = AuthHandler(storage, secret_key)
    users = UserHandler(storage)
    public = {("POST", "/register"): auth.register, ("POST", "/login"): auth.login}
    protected = {("GET", "/profile"): users.profile}

    @Request.application
    def app(request: Request) -> Response:
        route = (request.method, request.path)
        try:
            handler = public.get(route)
            if handler is None:
                request.environ[_ENVIRON_KEY] = _authenticate(request, secret_key)
                handler = protected.get(route)
            if handler is None:
                return Response(
                    f"Cannot {request.method} {request.path}",
                    status=HTTPStatus.NOT_FOUND,
                    content_type=_TEXT,
                )
            return handler(request)
        except AuthError as exc:
            return Response(str(exc), status=exc.status, content_type=_TEXT)

    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Serve the JWT application."""
    parser = argparse.ArgumentParser(
        prog="authdemo-jwt", description="Serve registration and login with JWTs."
    )
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)
    try:
        run_simple("0.0.0.0", args.port, create_app())
    except OSError as exc:
        _log.critical("server stopped: %s", exc)
        return 1
    return 0