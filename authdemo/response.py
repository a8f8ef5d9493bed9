"""Uniform JSON response bodies."""

from dataclasses import dataclass

STATUS_OK = "OK"
STATUS_ERROR = "Error"


@dataclass(frozen=True)
class Response:
    """A status with an optional error message."""

    status: str
    error: str = ""

    def to_dict(self):
        """Return the JSON form; an empty error is left out."""
        return {"status": self.status, "error": self.error} if self.error else {"status": self.status}


def ok():
    return Response(STATUS_OK)


def error(msg):
    return Response(STATUS_ERROR, msg)