"""Transport interface.

This is the (small) contract that channel implementations should follow.
It lives outside :mod:`groundctl.protocol` so the protocol remains
transport-agnostic; a channel moves opaque bytes on a named topic.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Optional


# Option names recognized by Channel.configure().

SUBSCRIBE_ADDRESS = "SubscribeIP"
SUBSCRIBE_PORT = "SubscribePort"
PUBLISH_ADDRESS = "PublishIP"
PUBLISH_PORT = "PublishPort"

OPTIONS = (SUBSCRIBE_ADDRESS, SUBSCRIBE_PORT, PUBLISH_ADDRESS, PUBLISH_PORT)


class Direction(enum.Enum):
    READ = "read"
    WRITE = "write"


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportOpenError(TransportError):
    """A channel could not be opened, or never became ready."""


class ChannelStateError(TransportError):
    """An operation was attempted in the wrong channel state."""


class PublishError(TransportError):
    """A message could not be handed to the transport."""


class ReceiveError(TransportError):
    """No usable message could be received."""


class TransportTimeout(ReceiveError):
    """A receive did not complete in the allotted time."""


class Channel(ABC):
    """ Minimal contract for one directional transport endpoint.

        A channel is configured, then opened exactly once for either
        reading or writing; read channels are then subscribed to each topic
        of interest. Options cannot be changed once the channel is open.
    """

    def __init__(self):
        self.options = {}
        self.direction: Optional[Direction] = None
        self.topics = []

    def configure(self, option: str, value) -> None:
        """Set an endpoint option; only valid before :func:`open`."""

        if option in OPTIONS:
            pass
        else:
            raise ValueError(f"unknown channel option: {option!r}")

        if self.is_open:
            raise ChannelStateError(f"cannot set {option} on an open channel")

        self.options[option] = str(value)

    def _require(self, direction: Direction) -> None:
        if not self.is_open:
            raise ChannelStateError("channel is not open")
        if self.direction is not direction:
            raise ChannelStateError(f"operation requires a {direction.value} channel, this is a {self.direction.value} channel")

    @abstractmethod
    def open(self, direction: Direction) -> None:
        """Establish the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the connection is established; False on timeout."""

    @abstractmethod
    def subscribe(self, topic: str) -> None:
        """Register interest in *topic* on a read channel."""

    @abstractmethod
    def unsubscribe(self, topic: str) -> None:
        """Withdraw interest in *topic* on a read channel."""

    @abstractmethod
    def publish(self, topic: str, data: bytes) -> None:
        """Send *data* on *topic* from a write channel."""

    @abstractmethod
    def receive(self, max_size: int, timeout: Optional[float] = None) -> bytes:
        """Return the payload of the next message on a read channel."""

    @property
    def is_open(self) -> bool:
        """Whether the channel is currently open."""
        return False
