"""Chunked copying between data sockets and local files."""

import socket
from typing import BinaryIO

from ftpc.errors import IoError

DEFAULT_CHUNK_SIZE = 4096


def receive_to_file(
    data: socket.socket, fileobj: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """Write everything read from ``data`` to ``fileobj`` until end-of-stream.

    Returns:
        Number of bytes written

    Raises:
        IoError: If reading the socket or writing the file fails
    """
    total = 0
    try:
        while True:
            chunk = data.recv(chunk_size)
            if not chunk:
                break
            fileobj.write(chunk)
            total += len(chunk)
    except OSError as e:
        raise IoError(e) from e
    return total


def receive_all(data: socket.socket, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Accumulate everything read from ``data`` until end-of-stream."""
    chunks = []
    try:
        while True:
            chunk = data.recv(chunk_size)
            if not chunk:
                break
            chunks.append(chunk)
    except OSError as e:
        raise IoError(e) from e
    return b"".join(chunks)


def send_from_file(
    fileobj: BinaryIO, data: socket.socket, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """Copy ``fileobj`` to ``data`` in chunks until the file is exhausted.

    Returns:
        Number of bytes sent
    """
    total = 0
    try:
        while chunk := fileobj.read(chunk_size):
            data.sendall(chunk)
            total += len(chunk)
    except OSError as e:
        raise IoError(e) from e
    return total
