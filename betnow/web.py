"""The public web front page of the betting app."""

from __future__ import annotations

import argparse
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Sequence
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

WELCOME = "Welcome to the Sports Betting App!\n"
ABOUT = "About the Sports Betting App\n"
METHOD_NOT_ALLOWED = "Method Not Allowed\n"
DEFAULT_PORT = 8080


def route(method: str, path: str) -> tuple[HTTPStatus, str]:
    """Resolve a request to its status and body text."""
    if method.upper() not in ("GET", "HEAD"):
        return HTTPStatus.METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED
    if path == "/about":
        return HTTPStatus.OK, ABOUT
    return HTTPStatus.OK, WELCOME


class _Handler(BaseHTTPRequestHandler):
    def _dispatch(self) -> None:
        status, text = route(self.command, urlsplit(self.path).path)
        payload = text.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        if status == HTTPStatus.METHOD_NOT_ALLOWED:
            self.send_header("Allow", "GET, HEAD")
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    do_GET = do_HEAD = do_POST = do_PUT = do_PATCH = do_DELETE = _dispatch

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(host: str = "", port: int = DEFAULT_PORT) -> ThreadingHTTPServer:
    """Create (but do not start) the web server."""
    return ThreadingHTTPServer((host, port), _Handler)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the betting app web server.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    server = make_server(args.host, args.port)
    print(f"Server is listening on port :{server.server_address[1]}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0