"""TFTP client and single-transfer server over UDP."""

from __future__ import annotations

import socket
import sys
from pathlib import Path
from typing import Tuple, Union

from workbench.tftp import Packet, ReadRequest, Receiver, Sender, WriteRequest, parse_packet

DEFAULT_SERVER_ADDR = "127.0.0.1:34254"
_MODE = "octet"
_RECV_SIZE = 1024

Address = Union[str, Tuple[str, int]]
PathLike = Union[str, Path]


def _resolve(address: Address) -> Tuple[str, int]:
    if isinstance(address, tuple):
        return address
    host, _, port = address.rpartition(":")
    if not host or not port:
        raise ValueError(f"invalid address: {address!r}")
    return host.strip("[]"), int(port)


def _lock_step(sock: socket.socket, stepper: Union[Sender, Receiver]) -> None:
    while not stepper.done:
        payload, origin = sock.recvfrom(_RECV_SIZE)
        try:
            packet = parse_packet(payload)
        except ValueError:
            continue
        if packet is None:
            continue
        reply = stepper.process(packet)
        if reply is not None:
            sock.sendto(reply.to_bytes(), origin)


def _request(address: Address, stepper: Union[Sender, Receiver], request: Packet) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(("0.0.0.0", 0))
        sock.sendto(request.to_bytes(), _resolve(address))
        _lock_step(sock, stepper)


def _serve(address: Address, stepper: Union[Sender, Receiver]) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind(_resolve(address))
        _lock_step(sock, stepper)


def upload(filename: PathLike, address: Address = DEFAULT_SERVER_ADDR) -> None:
    """Send a local file to the server with a write request."""
    with Sender(filename) as sender:
        _request(address, sender, WriteRequest(str(filename), _MODE))


def download(filename: PathLike, address: Address = DEFAULT_SERVER_ADDR) -> None:
    """Fetch a file from the server with a read request, saving it as ``filename``."""
    with Receiver(filename) as receiver:
        _request(address, receiver, ReadRequest(str(filename), _MODE))


def serve_file(filename: PathLike, address: Address = DEFAULT_SERVER_ADDR) -> None:
    """Wait at ``address`` for one read request and send ``filename``."""
    with Sender(filename) as sender:
        _serve(address, sender)


def receive_file(filename: PathLike, address: Address = DEFAULT_SERVER_ADDR) -> None:
    """Wait at ``address`` for one write request and store it as ``filename``."""
    with Receiver(filename) as receiver:
        _serve(address, receiver)


_COMMANDS = {
    "upload": upload,
    "download": download,
    "send": serve_file,
    "recv": receive_file,
}


def main(argv: list[str] | None = None) -> int:
    """Run ``upload``, ``download``, ``send`` or ``recv`` on a file."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Error: No command", file=sys.stderr)
        return 1
    if len(args) < 2:
        print("Error: No filename", file=sys.stderr)
        return 1
    command, filename = args[0], args[1]
    action = _COMMANDS.get(command)
    if action is None:
        if command == "":
            print("no command is given.")
        else:
            print(f"invalid command: {command}")
        return 0
    try:
        action(filename, DEFAULT_SERVER_ADDR)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())