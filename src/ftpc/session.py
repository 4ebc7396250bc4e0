"""FTP control session: connect, authenticate, run commands."""

import logging
import socket
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from .control import ControlChannel
from .errors import (
    EncodingError,
    FTPError,
    InvalidResponse,
    IoError,
    error_for_response,
)
from .models import (
    Command,
    Cwd,
    Dele,
    List,
    Mkd,
    Pass,
    PassiveMode,
    Pwd,
    Quit,
    Response,
    Retr,
    Rmd,
    StatusCode,
    Stor,
    TransferCommand,
    TransferMode,
    TransferType,
    Type,
    User,
)
from .transfer import EstablisherFactory
from .transfer.stream import (
    DEFAULT_CHUNK_SIZE,
    receive_all,
    receive_to_file,
    send_from_file,
)

logger = logging.getLogger(__name__)

_AUTH_FAILED = (
    StatusCode.NOT_LOGGED_IN,
    StatusCode.INVALID_USERNAME_OR_PASSWORD,
)


class SessionState(Enum):
    READY = "ready"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class FTPSession:
    """One control connection to an FTP server.

    Commands are strictly sequential: each one is written, then its reply is
    read before anything else happens. Data transfers open a fresh data
    channel according to the current transfer mode.
    """

    def __init__(
        self,
        control: ControlChannel,
        mode: Optional[TransferMode] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_port_attempts: int = 10,
    ):
        """Initialize session over an already greeted control channel.

        Use ``FTPSession.connect`` to open a connection and check the greeting.

        Args:
            control: Control channel past the 220 greeting
            mode: Transfer mode (default: passive)
            chunk_size: Transfer chunk size in bytes (default: 4096)
            max_port_attempts: Active mode port probe bound (default: 10)
        """
        self.control = control
        self._mode: TransferMode = mode or PassiveMode()
        self.chunk_size = chunk_size
        self.max_port_attempts = max_port_attempts
        self.state = SessionState.READY

    @classmethod
    def connect(
        cls,
        host: str,
        port: int = 21,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> "FTPSession":
        """Connect to a server and wait for its greeting.

        Args:
            host: Server host name or address
            port: Server port (default: 21)
            timeout: Socket timeout in seconds; None blocks indefinitely
            **kwargs: Passed to the FTPSession constructor

        Returns:
            Session in the READY state

        Raises:
            IoError: If the connection cannot be opened
            UnexpectedReturnCode: If the greeting is not 220
        """
        logger.info(f"Connecting to FTP server: {host}:{port}")
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise IoError(e) from e

        return cls.from_socket(sock, **kwargs)

    @classmethod
    def from_socket(cls, sock: socket.socket, **kwargs) -> "FTPSession":
        """Wrap a connected socket and consume the greeting."""
        control = ControlChannel(sock)
        try:
            greeting = control.expect(StatusCode.READY_FOR_NEW_USER)
        except Exception:
            control.close()
            raise

        logger.info(f"Server ready: {greeting.text}")
        return cls(control, **kwargs)

    @property
    def mode(self) -> TransferMode:
        """Current transfer mode."""
        return self._mode

    def set_mode(self, mode: TransferMode) -> None:
        """Set transfer mode (ActiveMode or PassiveMode)."""
        logger.debug(f"Transfer mode set to {mode.name}")
        self._mode = mode

    def login(self, user: str, password: str) -> bool:
        """Try to authenticate.

        Returns:
            True if the server accepted the credentials, False if it
            rejected them

        Raises:
            FTPError: For any reply that is neither success nor rejection
        """
        self._ensure_open()
        self.control.send(User(user))
        response = self.control.read_response()

        if response.code == StatusCode.USERNAME_OK_NEED_PASSWORD:
            self.control.send(Pass(password))
            response = self.control.read_response()

        if response.code == StatusCode.LOGIN_SUCCESSFUL:
            self.state = SessionState.AUTHENTICATED
            logger.info(f"Logged in as {user}")
            return True
        if response.code in _AUTH_FAILED:
            logger.info(f"Login rejected for {user}: {response.text}")
            return False
        raise error_for_response(response)

    def cd(self, path: str) -> None:
        """Change remote directory."""
        self._simple(Cwd(path), StatusCode.FILE_ACTION_OK)

    def delete(self, path: str) -> None:
        """Delete file on server."""
        self._simple(Dele(path), StatusCode.FILE_ACTION_OK)

    def mkdir(self, path: str) -> None:
        """Make directory on server."""
        self._simple(Mkd(path), StatusCode.PATHNAME_CREATED)

    def rmdir(self, path: str) -> None:
        """Remove directory on server."""
        self._simple(Rmd(path), StatusCode.FILE_ACTION_OK)

    def pwd(self) -> str:
        """Get current working directory on server.

        Raises:
            InvalidResponse: If the reply does not contain a quoted path
        """
        response = self._simple(Pwd(), StatusCode.PATHNAME_CREATED)
        return _quoted_path(response.text)

    def get(self, remote_path: str, local_path: str) -> int:
        """Download a remote file to ``local_path``.

        Returns:
            Number of bytes received
        """
        self._ensure_open()
        logger.info(f"Downloading: {remote_path} -> {local_path}")

        with self._data_channel(Retr(remote_path), TransferType.BINARY) as data:
            try:
                with _open_local(local_path, "wb") as f:
                    size = receive_to_file(data, f, self.chunk_size)
            except IoError:
                self._abandon_transfer(data)
                raise

        self._end_data_transfer()
        logger.info(f"Download complete: {size} bytes")
        return size

    def put(self, local_path: str, remote_path: str) -> int:
        """Upload ``local_path`` to the server.

        Returns:
            Number of bytes sent
        """
        self._ensure_open()
        logger.info(f"Uploading: {local_path} -> {remote_path}")

        with _open_local(local_path, "rb") as f:
            with self._data_channel(Stor(remote_path), TransferType.BINARY) as data:
                try:
                    size = send_from_file(f, data, self.chunk_size)
                except IoError:
                    self._abandon_transfer(data)
                    raise

        self._end_data_transfer()
        logger.info(f"Upload complete: {size} bytes")
        return size

    def list(self, path: str = "") -> str:
        """List a remote directory.

        Raises:
            EncodingError: If the listing is not UTF-8
        """
        self._ensure_open()
        with self._data_channel(List(path), TransferType.TEXT) as data:
            try:
                raw = receive_all(data, self.chunk_size)
            except IoError:
                self._abandon_transfer(data)
                raise

        self._end_data_transfer()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(e) from e

    def quit(self) -> None:
        """Send QUIT and close the connection.

        Write errors are ignored and the reply is not read.
        """
        if self.state is SessionState.CLOSED:
            return
        try:
            self.control.send(Quit())
        except IoError as e:
            logger.debug(f"Ignoring QUIT failure: {e}")
        self.close()

    def close(self) -> None:
        """Close the control connection without QUIT."""
        self.control.close()
        self.state = SessionState.CLOSED
        logger.info("FTP connection closed")

    def __enter__(self) -> "FTPSession":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.quit()

    def _ensure_open(self) -> None:
        if self.state is SessionState.CLOSED:
            raise ConnectionError("FTP session is closed")

    def _simple(self, command: Command, code: int) -> Response:
        self._ensure_open()
        return self.control.command(command, code)

    @contextmanager
    def _data_channel(
        self, command: TransferCommand, transfer_type: TransferType
    ) -> Iterator[socket.socket]:
        """Negotiate type and data channel; close the channel on exit."""
        self.control.command(Type(transfer_type), StatusCode.SUCCESS)

        establisher = EstablisherFactory.create(
            self._mode, self.control, **self._establisher_options()
        )
        data = establisher.establish(command)
        try:
            yield data
        finally:
            data.close()

    def _establisher_options(self) -> dict:
        if self._mode.name == "active":
            return {"max_port_attempts": self.max_port_attempts}
        return {}

    def _end_data_transfer(self) -> None:
        self.control.expect(StatusCode.CLOSING_DATA_CONNECTION)

    def _abandon_transfer(self, data: socket.socket) -> None:
        """Close a failed data channel and consume the final transfer reply.

        The server answers every transfer command with a closing reply
        (226, 426, ...) once the data channel is gone; it is read and
        dropped so the next command gets its own reply.
        """
        data.close()
        try:
            response = self.control.read_response()
        except FTPError as e:
            logger.warning(f"No final reply after failed transfer: {e}")
            return
        logger.debug(f"Discarded reply after failed transfer: {response}")


@contextmanager
def _open_local(path: str, mode: str):
    try:
        f = open(path, mode)
    except OSError as e:
        raise IoError(e) from e
    with f:
        yield f


def _quoted_path(text: str) -> str:
    """Extract the path from ``"<path>" comment`` (doubled quotes unescaped)."""
    start = text.find('"')
    if start < 0:
        raise InvalidResponse(text)

    chars = []
    pos = start + 1
    while pos < len(text):
        char = text[pos]
        if char == '"':
            if text[pos + 1:pos + 2] == '"':
                chars.append('"')
                pos += 2
                continue
            return "".join(chars)
        chars.append(char)
        pos += 1
    raise InvalidResponse(text)
