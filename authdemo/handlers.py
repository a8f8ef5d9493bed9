"""Request handlers behind the sign-in and sign-up routes."""

from dataclasses import dataclass

from werkzeug.wrappers import Response

from authdemo import render
from authdemo.storage import UserExistsError


@dataclass(frozen=True)
class _Credentials:
    user: str = ""
    email: str = ""

    @classmethod
    def from_json(cls, value):
        """Build from a decoded JSON value; null gives empty fields."""
        if value is None:
            return cls()
        if not isinstance(value, dict):
            raise ValueError("request body must be a JSON object")
        fields = {}
        for key in ("user", "email"):
            item = value.get(key)
            if item is not None and not isinstance(item, str):
                raise ValueError(f"field {key!r} must be a string")
            fields[key] = item or ""
        return cls(**fields)

    @classmethod
    def from_request(cls, request):
        """Decode the request's JSON body."""
        return cls.from_json(render.decode_json(render.request_body(request)))


class SaveRequest(_Credentials):
    """Body of a sign-up request."""


def load_handler(logger, store):
    """Handler run after a successful sign-in; it replies with an empty body."""

    def handle(request):
        return Response()

    return handle


def save_handler(logger, store):
    """Handler that registers the user named in the JSON body."""
    op = "handlers.save"

    def handle(request):
        try:
            req = SaveRequest.from_request(request)
        except ValueError as exc:
            logger.error("failed to decode request body", extra={"op": op, "error": str(exc)})
            return render.bad_request_json()
        try:
            user = store.save(req.user, req.email)
        except UserExistsError as exc:
            logger.error("have user", extra={"op": op, "error": str(exc)})
            return Response()
        logger.info(f"signup new user: {user.name} {user.email}", extra={"op": op})
        return Response()

    return handle