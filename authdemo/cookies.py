"""Cookie-backed sessions kept in memory."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from werkzeug.wrappers import Request, Response

_SESSION_LIFETIME = timedelta(hours=24)
_NOT_FOUND = 404


@dataclass
class SessionStore:
    """Known session ids, each set as a cookie on a response."""

    sessions: dict[str, str] = field(default_factory=dict)

    def set_cookie(
        self, logger: logging.Logger | logging.LoggerAdapter, name: str, response: Response
    ) -> str:
        """Start a session, set it as cookie *name* and return its id."""
        op = "cookies.SessionStore.set_cookie"
        value = str(uuid.uuid4())
        response.set_cookie(
            name,
            value,
            path="/",
            expires=datetime.now(timezone.utc) + _SESSION_LIFETIME,
        )
        self.sessions[value] = "TRUE"
        logger.info("cookies are set", extra={"op": op})
        return value

    def get_cookie(
        self, logger: logging.Logger | logging.LoggerAdapter, name: str, request: Request
    ) -> str:
        """Return the session value for cookie *name*, or "" when there is none."""
        op = "cookies.SessionStore.get_cookie"
        cookie = request.cookies.get(name)
        if cookie is None:
            logger.error(
                "request cookie not found", extra={"op": op, "status": _NOT_FOUND}
            )
            return ""
        value = self.sessions.get(cookie)
        if value is None:
            logger.error(
                "sessions cookie not found", extra={"op": op, "status": _NOT_FOUND}
            )
            return ""
        return value

    def delete_cookie(
        self, logger: logging.Logger | logging.LoggerAdapter, name: str, response: Response
    ) -> None:
        """Expire cookie *name* and forget the session stored under that key."""
        op = "cookies.SessionStore.delete_cookie"
        if name not in self.sessions:
            logger.error(
                "there are no cookies to delete", extra={"op": op, "status": _NOT_FOUND}
            )
            return
        response.delete_cookie(name, path="/")
        del self.sessions[name]
        logger.info("cookie deletion successful", extra={"op": op})