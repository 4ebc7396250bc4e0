"""Host/port encoding shared by PORT and PASV."""

import ipaddress
import re
from typing import NamedTuple

from ftpc.errors import InvalidResponse

_TUPLE = re.compile(r"\(([^()]*)\)")


class HostPort(NamedTuple):
    """IPv4 address and TCP port."""

    host: str
    port: int


def to_ftp_port(high: int, low: int) -> int:
    return high * 256 + low


def encode_address(host: str, port: int) -> str:
    """Render an address as ``o1,o2,o3,o4,p1,p2``.

    Args:
        host: Dotted IPv4 address
        port: TCP port (0-65535)

    Returns:
        Comma separated decimal octets

    Raises:
        ValueError: If host is not IPv4 or port is out of range
    """
    octets = ipaddress.IPv4Address(host).packed
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"Port out of range: {port}")
    fields = list(octets) + [port // 256, port % 256]
    return ",".join(str(field) for field in fields)


def decode_address(text: str) -> HostPort:
    """Parse ``o1,o2,o3,o4,p1,p2`` back into host and port.

    Raises:
        InvalidResponse: If there are not six numeric fields in 0-255
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 6 or not all(
        part.isascii() and part.isdigit() for part in parts
    ):
        raise InvalidResponse(text)

    nums = [int(part) for part in parts]
    if any(num > 255 for num in nums):
        raise InvalidResponse(text)

    host = ".".join(str(num) for num in nums[:4])
    return HostPort(host, to_ftp_port(nums[4], nums[5]))


def parse_pasv_text(text: str) -> HostPort:
    """Extract the address announced in a ``227`` reply text.

    Example: ``Entering Passive Mode (127,0,0,1,19,136).`` -> 127.0.0.1:5000
    """
    matches = _TUPLE.findall(text)
    if not matches:
        raise InvalidResponse(text)
    # Servers put the tuple last; earlier parentheses belong to prose.
    return decode_address(matches[-1])
