"""An in-memory file store served over HTTP."""

from __future__ import annotations

import logging
import sys
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import unquote, urlsplit

_log = logging.getLogger(__name__)


class FileStore:
    """Thread-safe mapping of file names to their contents."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def put(self, name: str, data: bytes) -> None:
        """Store ``data`` under ``name``, replacing any earlier contents."""
        with self._lock:
            self._files[name] = bytes(data)

    def get(self, name: str) -> Optional[bytes]:
        """Return the contents of ``name``, or None if there is no such file."""
        with self._lock:
            return self._files.get(name)

    def delete(self, name: str) -> bool:
        """Remove ``name``; return whether it existed."""
        with self._lock:
            return self._files.pop(name, None) is not None

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._files

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)


class _FileStoreServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address, store: FileStore):
        super().__init__(address, FileStoreHandler)
        self.store = store


class FileStoreHandler(BaseHTTPRequestHandler):
    """Serves ``/{filename}``: GET downloads, PUT and POST upload, DELETE removes."""

    protocol_version = "HTTP/1.1"
    server: _FileStoreServer

    def _filename(self) -> Optional[str]:
        path = urlsplit(self.path).path
        if not path.startswith("/"):
            return None
        name = path[1:]
        if not name or "/" in name:
            return None
        return unquote(name)

    def _read_chunked(self) -> bytes:
        chunks = []
        while True:
            size_line = self.rfile.readline()
            size = int(size_line.split(b";", 1)[0].strip() or b"0", 16)
            if size == 0:
                while self.rfile.readline() not in (b"\r\n", b"\n", b""):
                    pass
                return b"".join(chunks)
            chunks.append(self.rfile.read(size))
            self.rfile.readline()

    def _read_body(self) -> bytes:
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            return self._read_chunked()
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _reply(self, status: HTTPStatus, body: bytes = b"", content_type: str = "") -> None:
        self.send_response(status)
        if content_type:
            self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if body and self.command != "HEAD":
            self.wfile.write(body)

    def _invalid(self) -> None:
        self._read_body()
        print(f'Invalid URI: "{self.path}"')
        self._reply(HTTPStatus.NOT_FOUND)

    def do_GET(self) -> None:
        name = self._filename()
        if name is None:
            self._invalid()
            return
        self._read_body()
        data = self.server.store.get(name)
        if data is None:
            self._reply(HTTPStatus.NOT_FOUND)
        else:
            self._reply(HTTPStatus.OK, data, "application/octet-stream")

    def do_DELETE(self) -> None:
        name = self._filename()
        if name is None:
            self._invalid()
            return
        self._read_body()
        found = self.server.store.delete(name)
        self._reply(HTTPStatus.OK if found else HTTPStatus.NOT_FOUND)

    def do_PUT(self) -> None:
        name = self._filename()
        if name is None:
            self._invalid()
            return
        self.server.store.put(name, self._read_body())
        self._reply(HTTPStatus.OK)

    do_POST = do_PUT

    def _not_allowed(self) -> None:
        if self._filename() is None:
            self._invalid()
            return
        self._read_body()
        self._reply(HTTPStatus.METHOD_NOT_ALLOWED)

    do_HEAD = do_PATCH = do_OPTIONS = _not_allowed

    def log_message(self, format: str, *args) -> None:
        _log.debug("%s - %s", self.address_string(), format % args)


def make_server(
    host: str = "127.0.0.1", port: int = 8080, store: Optional[FileStore] = None
) -> ThreadingHTTPServer:
    """Bind a file-store server to ``host:port`` backed by ``store``."""
    return _FileStoreServer((host, port), store if store is not None else FileStore())


def main(argv: list[str] | None = None) -> int:
    """Serve an empty store on 127.0.0.1:8080 until interrupted."""
    host, port = "127.0.0.1", 8080
    print(f"Listening at address {host}:{port}...")
    try:
        with make_server(host, port) as server:
            server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())