"""Data channel establishment and streaming."""

from .active import ActiveEstablisher
from .base import DataChannelEstablisher, EstablisherFactory
from .passive import PassiveEstablisher
from .stream import DEFAULT_CHUNK_SIZE, receive_all, receive_to_file, send_from_file

__all__ = [
    "ActiveEstablisher",
    "DEFAULT_CHUNK_SIZE",
    "DataChannelEstablisher",
    "EstablisherFactory",
    "PassiveEstablisher",
    "receive_all",
    "receive_to_file",
    "send_from_file",
]
