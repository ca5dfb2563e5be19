"""An HTTP server that answers every request with a greeting."""

from __future__ import annotations

import logging
import sys
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

GREETING = b"Hello, World!"

_log = logging.getLogger(__name__)


class HelloHandler(BaseHTTPRequestHandler):
    """Replies to any method with the greeting."""

    protocol_version = "HTTP/1.1"

    def _respond(self, with_body: bool = True) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        if length:
            self.rfile.read(length)
        self.send_response(200)
        self.send_header("Content-Length", str(len(GREETING)))
        self.end_headers()
        if with_body:
            self.wfile.write(GREETING)

    def do_HEAD(self) -> None:
        self._respond(with_body=False)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = _respond

    def log_message(self, format: str, *args) -> None:
        _log.debug("%s - %s", self.address_string(), format % args)


def make_server(host: str = "127.0.0.1", port: int = 3000) -> ThreadingHTTPServer:
    """Bind the greeting server to ``host:port``."""
    return ThreadingHTTPServer((host, port), HelloHandler)


def main(argv: list[str] | None = None) -> int:
    """Serve on 127.0.0.1:3000 until interrupted."""
    try:
        with make_server("127.0.0.1", 3000) as server:
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"server error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())