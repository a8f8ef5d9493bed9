"""Cookie-session and JWT authentication services over WSGI, with in-memory storage."""

__version__ = "0.1.0"