"""Passive mode: the client connects to an address the server announces."""

import logging
import socket

from ftpc.errors import IoError
from ftpc.models import Pasv, StatusCode, TransferCommand, parse_pasv_text

from .base import DataChannelEstablisher, EstablisherFactory

logger = logging.getLogger(__name__)


class PassiveEstablisher(DataChannelEstablisher):
    """PASV negotiation."""

    def establish(self, command: TransferCommand) -> socket.socket:
        response = self.control.command(Pasv(), StatusCode.ENTERING_PASSIVE_MODE)
        addr = parse_pasv_text(response.text)
        logger.debug(f"Connecting data channel to {addr.host}:{addr.port}")

        try:
            data = socket.create_connection(addr, timeout=self.control.timeout)
        except OSError as e:
            raise IoError(e) from e

        try:
            self.control.command(command, StatusCode.OPEN_DATA_CONNECTION)
        except Exception:
            data.close()
            raise

        return data


# Register passive handler with factory
EstablisherFactory.register("passive", PassiveEstablisher)
