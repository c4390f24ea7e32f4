"""The order book service: match registration and order placement over HTTP."""

from __future__ import annotations

import argparse
import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Sequence
from urllib.parse import urlsplit

from betnow.engine import Engine
from betnow.handlers import INVALID_INPUT, Match, handle_place_order

logger = logging.getLogger(__name__)

REGISTERED = "Match registered successfully"
NOT_FOUND = "404 page not found\n"
DEFAULT_PORT = 8081


def register_match_request(engine: Engine, match_id: str, team_a: str, team_b: str) -> str:
    """Register a match with the engine and return the status message."""
    logger.info("Registering match: %s (%s vs %s)", match_id, team_a, team_b)
    engine.register_match(match_id, team_a, team_b)
    return REGISTERED


def _register_endpoint(engine: Engine, body: bytes) -> tuple[HTTPStatus, str, str]:
    try:
        data = json.loads(body.decode("utf-8"))
        match = Match.from_dict({} if data is None else data)
    except ValueError:
        return HTTPStatus.BAD_REQUEST, INVALID_INPUT, "text/plain; charset=utf-8"
    status = register_match_request(engine, match.match_id, match.team_a, match.team_b)
    return HTTPStatus.OK, json.dumps({"status": status}), "application/json"


def _handler_for(engine: Engine) -> type[BaseHTTPRequestHandler]:
    class _Handler(BaseHTTPRequestHandler):
        def _dispatch(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length > 0 else b""
            path = urlsplit(self.path).path
            content_type = "text/plain; charset=utf-8"
            if path == "/place-order":
                status, text = handle_place_order(engine, body)
            elif path == "/register-match":
                status, text, content_type = _register_endpoint(engine, body)
            else:
                status, text = HTTPStatus.NOT_FOUND, NOT_FOUND
            payload = text.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = _dispatch

        def log_message(self, format: str, *args) -> None:  # noqa: A002
            logger.debug("%s - %s", self.address_string(), format % args)

    return _Handler


def make_server(engine: Engine, host: str = "", port: int = DEFAULT_PORT) -> ThreadingHTTPServer:
    """Create (but do not start) the service's HTTP server."""
    return ThreadingHTTPServer((host, port), _handler_for(engine))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the order book service.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    server = make_server(Engine(), args.host, args.port)
    logger.info("Starting HTTP server on %s:%d", args.host, server.server_address[1])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0