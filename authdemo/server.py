"""HTTP server with cookie sessions for sign-up and sign-in."""

import argparse
import sys

from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from authdemo.config import ConfigError, must_config
from authdemo.cookies import SessionStore
from authdemo.handlers import load_handler, save_handler
from authdemo.logger import setup_logger
from authdemo.middleware import sign_in, sign_up
from authdemo.storage import UserStore

PORT = 1234


def create_app(logger, sessions, store):
    """Return the WSGI application serving /sign-in, /sign-up and /get."""

    def dump_state(request):
        print("1", store)
        print("2", sessions)
        return Response()

    routes = {
        "/sign-in": sign_in(logger, sessions, store, load_handler(logger, store)),
        "/sign-up": sign_up(logger, sessions, store, save_handler(logger, store)),
        "/get": dump_state,
    }

    @Request.application
    def app(request):
        handler = routes.get(request.path)
        if handler is None:
            return Response("404 page not found\n", status=404, content_type="text/plain; charset=utf-8")
        return handler(request)

    return app


def main(argv=None):
    """Read config/config.yaml from the working directory and serve."""
    argparse.ArgumentParser(prog="authdemo-server").parse_args(argv)
    try:
        logger = setup_logger(must_config().env)
    except (ConfigError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    logger.info(f"server starting on port :{PORT}")
    try:
        run_simple("0.0.0.0", PORT, create_app(logger, SessionStore(), UserStore()))
    except OSError:
        return 1
    return 0