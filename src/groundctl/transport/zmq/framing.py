"""ZMQ multipart framing for published messages.

Publish (PUB/SUB)
    topic_with_trailing_dot, version, payload
"""

from __future__ import annotations

from typing import Sequence, Tuple


# Version of the on-the-wire framing implemented here, a single byte.

VERSION = b"1"


def topic_bytes(topic: str) -> bytes:
    """ Return the subscription prefix for *topic*. The trailing dot keeps
        a subscription to ``afrl.cmasi.CameraAction`` from also matching
        ``afrl.cmasi.CameraActionStatus``.
    """

    return (topic + ".").encode()


def to_pub_frames(topic: str, payload: bytes) -> Tuple[bytes, ...]:
    """Encode a publish message for PUB/SUB sockets."""

    return (topic_bytes(topic), VERSION, bytes(payload))


def from_pub_frames(parts: Sequence[bytes]) -> Tuple[str, bytes]:
    """Return the (topic, payload) carried by *parts*."""

    if len(parts) < 3:
        raise ValueError(f"invalid PUB message: {len(parts)} frames")

    topic = parts[0].decode()
    if topic.endswith("."):
        topic = topic[:-1]

    their_version = parts[1]
    if their_version != VERSION:
        raise ValueError(f"message is framing version {their_version!r}, recipient expects {VERSION!r}")

    return topic, parts[2]
