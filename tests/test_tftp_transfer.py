import errno
import socket
import threading
import time

import pytest

from workbench.tftp_transfer import (
    download,
    main,
    receive_file,
    serve_file,
    upload,
)


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _wait_bound(port, errors):
    deadline = time.monotonic() + 5
    while time.monotonic() < deadline:
        if errors:
            raise errors[0]
        probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            probe.bind(("127.0.0.1", port))
        except OSError:
            return
        finally:
            probe.close()
        time.sleep(0.02)
    raise AssertionError("server did not bind in time")


def _start_server(func, filename, port):
    errors = []

    def run():
        for _ in range(200):
            try:
                func(filename, f"127.0.0.1:{port}")
                return
            except OSError as exc:
                if exc.errno != errno.EADDRINUSE:
                    errors.append(exc)
                    return
                time.sleep(0.01)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    _wait_bound(port, errors)
    return thread, errors


@pytest.mark.parametrize("size", [4, 512, 1200])
def test_download(tmp_path, size):
    content = bytes(i % 251 for i in range(size))
    source = tmp_path / "README.md"
    source.write_bytes(content)
    target = tmp_path / "README-downloaded.md"
    port = _free_port()

    server, server_errors = _start_server(serve_file, source, port)
    download(target, ("127.0.0.1", port))
    server.join(timeout=10)

    assert not server.is_alive()
    assert server_errors == []
    assert target.read_bytes() == content


@pytest.mark.parametrize("size", [0, 512, 1500])
def test_upload(tmp_path, size):
    content = bytes((i * 7) % 256 for i in range(size))
    source = tmp_path / "README.md"
    source.write_bytes(content)
    target = tmp_path / "README-uploaded.md"
    port = _free_port()

    server, server_errors = _start_server(receive_file, target, port)
    upload(source, ("127.0.0.1", port))
    server.join(timeout=10)

    assert not server.is_alive()
    assert server_errors == []
    assert target.read_bytes() == content


def test_main_without_command(capsys):
    assert main([]) == 1
    assert "No command" in capsys.readouterr().err


def test_main_without_filename(capsys):
    assert main(["upload"]) == 1
    assert "No filename" in capsys.readouterr().err


def test_main_invalid_command(capsys):
    assert main(["bogus", "file.txt"]) == 0
    assert capsys.readouterr().out == "invalid command: bogus\n"


def test_main_empty_command(capsys):
    assert main(["", "file.txt"]) == 0
    assert capsys.readouterr().out == "no command is given.\n"


def test_main_upload_missing_file(tmp_path, capsys):
    assert main(["upload", str(tmp_path / "missing.txt")]) == 1
    assert "Error" in capsys.readouterr().err


def test_invalid_address_raises(tmp_path):
    source = tmp_path / "a.txt"
    source.write_bytes(b"x")
    with pytest.raises(ValueError):
        upload(source, "no-port-here")