"""Transport layer implementations."""

import os

from .base import (
    Channel,
    ChannelStateError,
    Direction,
    OPTIONS,
    PUBLISH_ADDRESS,
    PUBLISH_PORT,
    PublishError,
    ReceiveError,
    SUBSCRIBE_ADDRESS,
    SUBSCRIBE_PORT,
    TransportError,
    TransportOpenError,
    TransportTimeout,
)

BACKENDS = ("zmq",)


def channel(backend=None, **kwargs):
    """ Return a new, unopened :class:`Channel` for the requested *backend*.
        The backend defaults to the ``GROUNDCTL_TRANSPORT`` environment
        variable, or ``zmq`` if it is not set.
    """

    if backend is None:
        backend = os.environ.get("GROUNDCTL_TRANSPORT", "zmq")

    if backend == "zmq":
        from .zmq import ZmqChannel
        return ZmqChannel(**kwargs)

    raise ValueError(f"unknown transport backend: {backend!r}")
