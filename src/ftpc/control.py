"""Control channel: one command out, one reply in."""

import logging
import socket
from typing import Optional

from .errors import IoError, error_for_response
from .models.command import Command, encode_command, redacted
from .models.response import (
    Response,
    continuation_code,
    is_continuation,
    parse_response,
)

logger = logging.getLogger(__name__)


class ControlChannel:
    """Owns the control connection and its buffered reader/writer.

    Every write is flushed immediately. Transport failures are raised as
    IoError, never left as bare OSError.
    """

    def __init__(self, sock: socket.socket):
        """Initialize control channel.

        Args:
            sock: Connected TCP socket to the server
        """
        self.sock = sock
        self._reader = sock.makefile("rb")
        self._writer = sock.makefile("wb")
        self._closed = False

    @property
    def local_address(self) -> tuple:
        """Local (host, port) of the control connection."""
        return self.sock.getsockname()[:2]

    @property
    def peer_address(self) -> tuple:
        """Remote (host, port) of the control connection."""
        return self.sock.getpeername()[:2]

    @property
    def timeout(self) -> Optional[float]:
        return self.sock.gettimeout()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, command: Command) -> None:
        """Write one command line and flush.

        Raises:
            IoError: If the write or flush fails
        """
        logger.debug(f"--> {redacted(command)}")
        try:
            self._writer.write(encode_command(command).encode("utf-8"))
            self._writer.flush()
        except OSError as e:
            raise IoError(e) from e

    def read_response(self) -> Response:
        """Read one reply, folding multi-line continuations into it.

        Raises:
            InvalidResponse: If the status line is malformed
            IoError: If the read fails
        """
        line = self._read_line()
        if is_continuation(line):
            code = continuation_code(line)
            texts = [line[4:].strip()]
            while True:
                line = self._read_line()
                if line.startswith(f"{code} ") or not line:
                    break
                texts.append(line.strip())
            response = parse_response(line)
            texts.append(response.text)
            response = Response(response.code, "\n".join(texts))
        else:
            response = parse_response(line)

        logger.debug(f"<-- {response}")
        return response

    def expect(self, *codes: int) -> Response:
        """Read one reply and require its code to be one of ``codes``.

        Raises:
            OperationFailed: If the server answered 550
            UnexpectedReturnCode: If the server answered anything else
        """
        response = self.read_response()
        if response.code not in codes:
            raise error_for_response(response)
        return response

    def command(self, command: Command, *codes: int) -> Response:
        """Send a command and require one of ``codes`` in its reply."""
        self.send(command)
        return self.expect(*codes)

    def close(self) -> None:
        """Close reader, writer and socket. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        for stream in (self._reader, self._writer):
            try:
                stream.close()
            except OSError:
                logger.debug("Ignoring error while closing control stream")
        self.sock.close()

    def _read_line(self) -> str:
        try:
            raw = self._reader.readline()
        except OSError as e:
            raise IoError(e) from e
        return raw.decode("utf-8", errors="replace")
