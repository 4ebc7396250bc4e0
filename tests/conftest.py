"""Pytest configuration and fixtures."""

import socket
import sys
import threading
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Load test environment
from dotenv import load_dotenv

test_env = Path(__file__).parent.parent / ".env.test"
load_dotenv(test_env)

SOCKET_TIMEOUT = 5.0


@pytest.fixture
def test_env_file():
    """Return path to test .env file."""
    return str(test_env)


class ScriptedServer:
    """Server end of a control connection driven by the test.

    Replies can be queued before the client sends anything: the client reads
    exactly one reply per command, so queued replies are consumed in order.
    """

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._buffer = b""

    def reply(self, *lines: str) -> None:
        """Queue reply lines, each terminated by CRLF."""
        self.sock.sendall("".join(f"{line}\r\n" for line in lines).encode("utf-8"))

    def read_line(self) -> str:
        """Read one command line sent by the client (without newline)."""
        while b"\n" not in self._buffer:
            chunk = self.sock.recv(4096)
            if not chunk:
                raise ConnectionError("Client closed control connection")
            self._buffer += chunk
        line, self._buffer = self._buffer.split(b"\n", 1)
        return line.decode("utf-8")

    def read_lines(self, count: int) -> list[str]:
        return [self.read_line() for _ in range(count)]


@pytest.fixture
def tcp_pair():
    """Connected loopback TCP pair: (client socket, server socket)."""
    listener = socket.create_server(("127.0.0.1", 0))
    client = socket.create_connection(listener.getsockname(), timeout=SOCKET_TIMEOUT)
    server, _ = listener.accept()
    listener.close()
    server.settimeout(SOCKET_TIMEOUT)

    yield client, server

    client.close()
    server.close()


@pytest.fixture
def server(tcp_pair):
    """Scripted server end of the control connection."""
    return ScriptedServer(tcp_pair[1])


@pytest.fixture
def session(tcp_pair, server):
    """FTPSession past the 220 greeting, in passive mode."""
    from ftpc.session import FTPSession

    server.reply("220 Service ready for new user.")
    sess = FTPSession.from_socket(tcp_pair[0])
    yield sess
    sess.close()


@pytest.fixture
def data_listener():
    """Loopback listener standing in for the server's passive data port."""
    listener = socket.create_server(("127.0.0.1", 0))
    listener.settimeout(SOCKET_TIMEOUT)
    yield listener
    listener.close()


def _serve_data(listener: socket.socket, payload: bytes | None = None) -> tuple:
    """Accept one data connection in a thread.

    Sends ``payload`` and closes when given; otherwise collects everything
    the client sends until it closes.

    Returns:
        (thread, received) where received is a list filled with the upload
    """
    received: list[bytes] = []

    def run():
        conn, _ = listener.accept()
        with conn:
            conn.settimeout(SOCKET_TIMEOUT)
            if payload is not None:
                conn.sendall(payload)
                return
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                received.append(chunk)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread, received


@pytest.fixture
def serve_data():
    """Start a one-shot data server on a listener (see _serve_data)."""
    return _serve_data


@pytest.fixture
def sample_file(tmp_path):
    """Create a temporary local file to upload."""
    path = tmp_path / "upload.bin"
    path.write_bytes(b"upload content " * 1000)
    return path


# =============================================================================
# Priority-Based Test Ordering
# =============================================================================

# Priority mapping: lower number = higher priority (runs first)
MARKER_PRIORITY = {
    "integration": 1,
    "unit": 2,
}

DEFAULT_PRIORITY = 99  # Tests without markers run last


def get_test_priority(item):
    """Get priority for a test item based on its markers."""
    for marker_name, priority in MARKER_PRIORITY.items():
        if marker_name in item.keywords:
            return priority
    return DEFAULT_PRIORITY


def pytest_collection_modifyitems(session, config, items):
    """Run integration tests before unit tests (stable within a level)."""
    items.sort(key=get_test_priority)
