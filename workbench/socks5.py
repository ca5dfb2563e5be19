"""SOCKS5 reply codes and reply encoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

SOCKS_VERSION = 5
_ATYP_IPV4 = 1


class ResponseCode(IntEnum):
    SUCCESS = 0x00
    FAILURE = 0x01
    RULE_FAILURE = 0x02
    NETWORK_UNREACHABLE = 0x03
    HOST_UNREACHABLE = 0x04
    CONNECTION_REFUSED = 0x05
    TTL_EXPIRED = 0x06
    COMMAND_NOT_SUPPORTED = 0x07
    ADDR_TYPE_NOT_SUPPORTED = 0x08


@dataclass(frozen=True)
class SocksReply:
    """A server reply with an all-zero IPv4 bound address and port."""

    status: ResponseCode

    def to_bytes(self) -> bytes:
        """Encode as VER, REP, RSV, ATYP, BND.ADDR (4 bytes), BND.PORT (2 bytes)."""
        return bytes([SOCKS_VERSION, int(self.status), 0, _ATYP_IPV4, 0, 0, 0, 0, 0, 0])