import http.client
import threading
from http import HTTPStatus

import pytest

from workbench.filestore import FileStore, make_server


@pytest.fixture
def running():
    store = FileStore()
    server = make_server("127.0.0.1", 0, store)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield store, server.server_address[1]
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


def _request(port, method, path, body=None):
    conn = http.client.HTTPConnection("127.0.0.1", port, timeout=5)
    try:
        conn.request(method, path, body=body)
        response = conn.getresponse()
        return response.status, response.getheader("Content-Type"), response.read()
    finally:
        conn.close()


def test_store_round_trip():
    store = FileStore()
    store.put("a.txt", b"hello")
    assert store.get("a.txt") == b"hello"
    assert "a.txt" in store
    assert len(store) == 1
    assert store.delete("a.txt") is True
    assert store.get("a.txt") is None
    assert len(store) == 0


def test_store_missing():
    store = FileStore()
    assert store.get("nothing") is None
    assert store.delete("nothing") is False


def test_store_keeps_snapshot():
    store = FileStore()
    data = bytearray(b"abc")
    store.put("f", data)
    data[0] = ord("z")
    assert store.get("f") == b"abc"


def test_store_overwrite():
    store = FileStore()
    store.put("f", b"one")
    store.put("f", b"two")
    assert store.get("f") == b"two"
    assert len(store) == 1


def test_put_then_get(running):
    store, port = running
    status, _, _ = _request(port, "PUT", "/data.bin", b"\x00\x01payload")
    assert status == HTTPStatus.OK
    assert store.get("data.bin") == b"\x00\x01payload"

    status, content_type, body = _request(port, "GET", "/data.bin")
    assert status == HTTPStatus.OK
    assert content_type == "application/octet-stream"
    assert body == b"\x00\x01payload"


def test_post_overwrites(running):
    store, port = running
    _request(port, "PUT", "/f", b"first")
    status, _, _ = _request(port, "POST", "/f", b"second")
    assert status == HTTPStatus.OK
    assert _request(port, "GET", "/f")[2] == b"second"
    assert store.get("f") == b"second"


def test_delete(running):
    store, port = running
    store.put("gone", b"x")
    status, _, _ = _request(port, "DELETE", "/gone")
    assert status == HTTPStatus.OK
    assert "gone" not in store
    assert _request(port, "GET", "/gone")[0] == HTTPStatus.NOT_FOUND


def test_delete_missing(running):
    _, port = running
    assert _request(port, "DELETE", "/never")[0] == HTTPStatus.NOT_FOUND


def test_get_missing(running):
    _, port = running
    assert _request(port, "GET", "/never")[0] == HTTPStatus.NOT_FOUND


@pytest.mark.parametrize("path", ["/", "/a/b"])
def test_invalid_resource(running, path):
    store, port = running
    status, _, _ = _request(port, "PUT", path, b"data")
    assert status == HTTPStatus.NOT_FOUND
    assert len(store) == 0


def test_percent_encoded_name(running):
    store, port = running
    _request(port, "PUT", "/my%20file.txt", b"spaced")
    assert store.get("my file.txt") == b"spaced"


def test_empty_upload(running):
    store, port = running
    status, _, _ = _request(port, "PUT", "/empty", b"")
    assert status == HTTPStatus.OK
    assert store.get("empty") == b""