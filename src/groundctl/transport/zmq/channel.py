"""ZeroMQ publish/subscribe channel."""

from __future__ import annotations

import atexit
import time
from typing import Optional

import zmq
from zmq.utils.monitor import recv_monitor_message

from ..base import (
    Channel,
    ChannelStateError,
    Direction,
    PUBLISH_ADDRESS,
    PUBLISH_PORT,
    PublishError,
    ReceiveError,
    SUBSCRIBE_ADDRESS,
    SUBSCRIBE_PORT,
    TransportOpenError,
    TransportTimeout,
)
from .framing import from_pub_frames, to_pub_frames, topic_bytes

zmq_context = zmq.Context()


class ZmqChannel(Channel):
    """ A PUB (write) or SUB (read) socket connected to a message proxy.
        The channel never binds; both directions connect out to the
        configured address and port.

        A socket monitor is attached before connecting; :func:`wait_ready`
        blocks until it reports the connection. After the connection is up
        there is still a short *settle* period while subscriptions propagate
        upstream.
    """

    settle = 0.01

    def __init__(self, settle: Optional[float] = None):
        super().__init__()
        self.endpoint: Optional[str] = None
        self.socket: Optional[zmq.Socket] = None
        self._monitor: Optional[zmq.Socket] = None
        self._ready = False

        if settle is not None:
            self.settle = float(settle)

    def __repr__(self) -> str:
        direction = self.direction.value if self.direction else "unopened"
        return f"ZmqChannel({direction}, {self.endpoint})"

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def _endpoint(self, direction: Direction) -> str:
        if direction is Direction.READ:
            address_option, port_option = SUBSCRIBE_ADDRESS, SUBSCRIBE_PORT
        else:
            address_option, port_option = PUBLISH_ADDRESS, PUBLISH_PORT

        try:
            address = self.options[address_option]
            port = int(self.options[port_option])
        except KeyError as missing:
            raise TransportOpenError(f"{missing.args[0]} is not configured") from None
        except ValueError:
            raise TransportOpenError(f"invalid {port_option}: {self.options[port_option]!r}") from None

        return f"tcp://{address}:{port}"

    def open(self, direction: Direction) -> None:
        if self.socket is not None:
            raise ChannelStateError(f"channel is already open: {self.endpoint}")

        direction = Direction(direction)
        endpoint = self._endpoint(direction)

        if direction is Direction.READ:
            socket = zmq_context.socket(zmq.SUB)
        else:
            socket = zmq_context.socket(zmq.PUB)

        socket.setsockopt(zmq.LINGER, 0)
        monitor = None

        try:
            monitor = socket.get_monitor_socket(zmq.EVENT_CONNECTED)
            socket.connect(endpoint)
        except zmq.ZMQError as exc:
            if monitor is not None:
                socket.disable_monitor()
                monitor.close(linger=0)
            socket.close(linger=0)
            raise TransportOpenError(f"failed to open {direction.value} channel to {endpoint}: {exc}") from exc

        self.socket = socket
        self.direction = direction
        self.endpoint = endpoint
        self._monitor = monitor

    def _stop_monitor(self) -> None:
        if self._monitor is None:
            return

        self.socket.disable_monitor()
        self._monitor.close(linger=0)
        self._monitor = None

    def _poll_flush(self, timeout: float) -> None:
        """ Give subscriptions a moment to reach the other side. For a
            read channel the poll returns early if a message is already
            waiting; the message is not consumed.
        """

        if self.direction is Direction.READ:
            self.socket.poll(int(timeout * 1000), zmq.POLLIN)
        else:
            time.sleep(timeout)

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        if self.socket is None:
            raise ChannelStateError("channel is not open")

        if self._ready:
            return True

        if timeout is None:
            deadline = None
        else:
            deadline = time.monotonic() + timeout

        while True:
            if deadline is None:
                remaining = None
            else:
                remaining = max(0, int((deadline - time.monotonic()) * 1000))

            if not self._monitor.poll(remaining, zmq.POLLIN):
                return False

            event = recv_monitor_message(self._monitor)
            if event["event"] == zmq.EVENT_CONNECTED:
                break

        self._stop_monitor()
        self._poll_flush(self.settle)
        self._ready = True
        return True

    def subscribe(self, topic: str) -> None:
        self._require(Direction.READ)
        self.socket.setsockopt(zmq.SUBSCRIBE, topic_bytes(topic))
        self.topics.append(topic)

    def unsubscribe(self, topic: str) -> None:
        self._require(Direction.READ)
        self.socket.setsockopt(zmq.UNSUBSCRIBE, topic_bytes(topic))

        try:
            self.topics.remove(topic)
        except ValueError:
            pass

    def publish(self, topic: str, data: bytes) -> None:
        self._require(Direction.WRITE)

        frames = to_pub_frames(topic, data)

        try:
            self.socket.send_multipart(frames)
        except zmq.ZMQError as exc:
            raise PublishError(f"failed to publish on {topic}: {exc}") from exc

    def receive(self, max_size: int, timeout: Optional[float] = None) -> bytes:
        self._require(Direction.READ)

        if timeout is None:
            wait = None
        else:
            wait = int(timeout * 1000)

        if not self.socket.poll(wait, zmq.POLLIN):
            raise TransportTimeout(f"nothing received from {self.endpoint} in {timeout:.2f} sec")

        try:
            parts = self.socket.recv_multipart(zmq.NOBLOCK)
        except zmq.ZMQError as exc:
            raise ReceiveError(f"failed to receive from {self.endpoint}: {exc}") from exc

        try:
            _topic, payload = from_pub_frames(parts)
        except ValueError as exc:
            raise ReceiveError(str(exc)) from exc

        if len(payload) > max_size:
            raise ReceiveError(f"received {len(payload)} bytes, limit is {max_size}")

        return payload

    def close(self) -> None:
        if self.socket is None:
            return

        self._stop_monitor()
        self.socket.close(linger=0)
        self.socket = None
        self._ready = False


def _cleanup() -> None:
    zmq_context.destroy(linger=0)


atexit.register(_cleanup)
