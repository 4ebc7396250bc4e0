"""Active mode: the client listens and the server connects back."""

import logging
import socket

from ftpc.errors import IoError
from ftpc.models import ActiveMode, Port, StatusCode, TransferCommand

from .base import DataChannelEstablisher, EstablisherFactory

logger = logging.getLogger(__name__)

DEFAULT_PORT_ATTEMPTS = 10


class ActiveEstablisher(DataChannelEstablisher):
    """PORT negotiation with a listener scoped to one transfer."""

    def __init__(
        self,
        control,
        mode: ActiveMode,
        max_port_attempts: int = DEFAULT_PORT_ATTEMPTS,
    ):
        """Initialize active establisher.

        Args:
            control: Control channel used for negotiation
            mode: Active mode holding the bind host and optional start port
            max_port_attempts: Ports to probe before giving up (default: 10)
        """
        super().__init__(control, mode)
        self.max_port_attempts = max(1, max_port_attempts)

    def establish(self, command: TransferCommand) -> socket.socket:
        with self._bind_listener() as listener:
            host, port = listener.getsockname()[:2]
            self.control.command(Port(host, port), StatusCode.SUCCESS)
            self.control.command(command, StatusCode.OPEN_DATA_CONNECTION)

            try:
                data, peer = listener.accept()
            except OSError as e:
                raise IoError(e) from e

        logger.debug(f"Accepted data connection from {peer[0]}:{peer[1]}")
        self._apply_timeout(data)
        return data

    def _start_port(self) -> int:
        if self.mode.port is not None:
            return self.mode.port
        return self.control.local_address[1] + 1

    def _bind_listener(self) -> socket.socket:
        """Bind a listener, probing successive ports on failure.

        Raises:
            IoError: If no port could be bound; names the last address tried
        """
        start = self._start_port()
        last_error = None
        address = (self.mode.host, start)

        for offset in range(self.max_port_attempts):
            port = start + offset
            if port > 0xFFFF:
                break
            address = (self.mode.host, port)
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            try:
                listener.bind(address)
                listener.listen(1)
            except OSError as e:
                listener.close()
                last_error = e
                logger.debug(f"Cannot listen on {address[0]}:{address[1]}: {e}")
                continue

            self._apply_timeout(listener)
            logger.debug(f"Listening for data connection on {address[0]}:{address[1]}")
            return listener

        raise IoError(
            last_error,
            f"Could not bind data listener, last attempted "
            f"{address[0]}:{address[1]}: {last_error}",
        ) from last_error


# Register active handler with factory
EstablisherFactory.register("active", ActiveEstablisher)
