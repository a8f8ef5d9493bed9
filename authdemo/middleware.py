"""Middleware guarding the sign-in and sign-up routes."""

from werkzeug.wrappers import Response

from authdemo.handlers import _Credentials
from authdemo.storage import UserNotFoundError

SESSION_COOKIE = "session_id"


class RequestData(_Credentials):
    """Credentials sent to sign in."""


def sign_in(logger, sessions, store, next_handler):
    """Let known sessions through; otherwise check the user and start a session."""
    op = "middleware.sign_in"

    def handle(request):
        if request.method != "POST":
            logger.info("Method not POST", extra={"op": op})
            return Response()
        if sessions.get_cookie(logger, SESSION_COOKIE, request):
            logger.info("Session - we have session", extra={"op": op})
            return next_handler(request)
        logger.info("Session - not found", extra={"op": op})
        try:
            data = RequestData.from_request(request)
        except ValueError as exc:
            logger.error("failed decoder to body", extra={"op": op, "error": str(exc)})
            return Response()
        if not data.user or not data.email:
            logger.error("need to enter right data user/email", extra={"op": op})
            return Response()
        try:
            store.load(data.email)
        except UserNotFoundError as exc:
            logger.error("need to authorization", extra={"op": op, "error": str(exc)})
            return Response()
        response = next_handler(request)
        sessions.set_cookie(logger, SESSION_COOKIE, response)
        return response

    return handle


def sign_up(logger, sessions, store, next_handler):
    """Pass POST requests on to *next_handler*; ignore other methods."""

    def handle(request):
        if request.method != "POST":
            logger.info("method not POST", extra={"op": "middleware.sign_up"})
            return Response()
        return next_handler(request)

    return handle


def validate(logger):
    """A handler that accepts every request with an empty reply."""

    def handle(request):
        return Response()

    return handle