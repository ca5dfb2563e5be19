"""A tiny HTTP server answering from static files on a thread pool."""

from __future__ import annotations

import argparse
import functools
import socket
import sys
import time
from pathlib import Path

from workbench.threadpool import ThreadPool

_GET = b"GET / HTTP/1.1\r\n"
_SLEEP = b"GET /sleep HTTP/1.1\r\n"
_OK = "HTTP/1.1 200 OK\r\n\r\n"
_NOT_FOUND = "HTTP/1.1 404 NOT FOUND\r\n\r\n"
SLEEP_SECONDS = 5
_BUFFER_SIZE = 512


def build_response(request: bytes, root: Path | str) -> bytes:
    """Return the full response for a raw request, reading pages from ``root``."""
    if request.startswith(_GET):
        status_line, filename = _OK, "index.html"
    elif request.startswith(_SLEEP):
        time.sleep(SLEEP_SECONDS)
        status_line, filename = _OK, "index.html"
    else:
        status_line, filename = _NOT_FOUND, "404.html"
    contents = (Path(root) / filename).read_text(encoding="utf-8")
    return (status_line + contents).encode("utf-8")


def handle_connection(conn: socket.socket, root: Path | str) -> None:
    """Read one request from ``conn``, answer it and close the connection."""
    with conn:
        request = conn.recv(_BUFFER_SIZE)
        conn.sendall(build_response(request, root))


def main(argv: list[str] | None = None) -> int:
    """Serve pages until interrupted."""
    parser = argparse.ArgumentParser(prog="web-server")
    parser.add_argument("--root", default="web-server", help="directory holding the pages")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    root = Path(args.root)

    with ThreadPool(4) as pool, socket.create_server((args.host, args.port)) as listener:
        try:
            while True:
                conn, _ = listener.accept()
                pool.execute(functools.partial(handle_connection, conn, root))
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())