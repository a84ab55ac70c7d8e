""" The exchange step is the unit of protocol work: send one typed message
    to the air vehicle, or receive one expected typed message from it.

    The two module-level functions :func:`send_message` and
    :func:`receive_message` do the work and raise on failure. The
    :class:`SendStep` and :class:`ReceiveStep` classes wrap them for use in a
    :class:`groundctl.mission.MissionScript`, logging every attempt and
    converting failures into a :class:`StepResult` tagged with the step's
    :class:`Criticality`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Type

from .protocol import codec
from .protocol.message import Message
from .protocol.topic import DEFAULT_NAMESPACE, topic_for
from .transport import Channel, TransportError

logger = logging.getLogger(__name__)


class Criticality(enum.Enum):
    """What a failed step means for the rest of the mission."""

    FATAL = "fatal"
    RECOVERABLE = "recoverable"


class StepStatus(enum.Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class Exchange:
    """ Everything a step needs to talk to the air vehicle: the write and
        read channels, a serializer, and the topic namespace.

        *receive_timeout* is in seconds; None blocks until a message arrives.
        If *resubscribe_on_failure* is set, a failed receive withdraws and
        re-issues the read channel's subscription for the expected topic.
    """

    writer: Channel
    reader: Channel
    serializer: codec.Serializer
    namespace: str = DEFAULT_NAMESPACE
    max_receive_size: int = 65536
    receive_timeout: Optional[float] = 30.0
    resubscribe_on_failure: bool = False


@dataclass
class StepResult:
    """Outcome of one exchange step."""

    name: str
    kind: str
    status: StepStatus
    criticality: Criticality
    message: Optional[Message] = None
    size: int = 0
    error: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is StepStatus.SUCCEEDED

    @property
    def fatal(self) -> bool:
        """True if this step failed and the failure should halt the mission."""
        return not self.succeeded and self.criticality is Criticality.FATAL


def send_message(exchange: Exchange, message: Message, buffer: bytearray) -> int:
    """ Serialize *message* into *buffer* and publish it on the topic for its
        type. Returns the number of bytes published. Raises
        :class:`groundctl.protocol.EncodeError` if the message cannot be
        serialized, in which case nothing is published, or
        :class:`groundctl.transport.PublishError` if the transport refuses it.
    """

    exchange.serializer.serialize(message, buffer)
    topic = topic_for(message, exchange.namespace)
    exchange.writer.publish(topic, buffer)
    return len(buffer)


def receive_message(exchange: Exchange, message: Message, buffer: bytearray) -> int:
    """ Receive the next inbound payload into *buffer* and deserialize it
        into *message*. Returns the number of bytes received. Raises
        :class:`groundctl.transport.ReceiveError` on a transport failure or
        timeout, and :class:`groundctl.protocol.DecodeError` if the payload
        is not a *message*.
    """

    payload = exchange.reader.receive(exchange.max_receive_size, exchange.receive_timeout)

    buffer[:] = payload
    logger.info("Received %d bytes for %s", len(buffer), message.name)

    if not exchange.serializer.deserialize(buffer, message):
        raise codec.DecodeError(f"payload is not a valid {message.name}")

    return len(buffer)


class Step:
    """ Base class for exchange steps. A step constructs a fresh instance of
        *message_type* each time it runs; no message outlives its step.
    """

    kind = "step"
    criticality = Criticality.FATAL

    def __init__(self, message_type: Type[Message], criticality: Optional[Criticality] = None, name: Optional[str] = None):
        self.message_type = message_type

        if criticality is not None:
            self.criticality = criticality

        if name is None:
            name = f"{self.kind} {message_type.type_name()}"

        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message_type.type_name()}, {self.criticality.value})"

    def topic(self, namespace: str = DEFAULT_NAMESPACE) -> str:
        return topic_for(self.message_type, namespace)

    def run(self, exchange: Exchange, buffer: bytearray) -> StepResult:
        raise NotImplementedError

    def _result(self, status, message, size=0, error=""):
        return StepResult(
            name=self.name,
            kind=self.kind,
            status=status,
            criticality=self.criticality,
            message=message,
            size=size,
            error=error,
        )


class SendStep(Step):
    """ Build a *message_type* instance, let *populate* fill it in, and send
        it. Send failures are fatal unless a different *criticality* is given.
    """

    kind = "send"
    criticality = Criticality.FATAL

    def __init__(
        self,
        message_type: Type[Message],
        populate: Optional[Callable[[Message], None]] = None,
        criticality: Optional[Criticality] = None,
        name: Optional[str] = None,
    ):
        super().__init__(message_type, criticality, name)
        self.populate = populate

    def run(self, exchange: Exchange, buffer: bytearray) -> StepResult:
        message = self.message_type()

        if self.populate is not None:
            self.populate(message)

        logger.info("Sending %s", message.name)

        try:
            size = send_message(exchange, message, buffer)
        except (codec.EncodeError, TransportError) as exc:
            logger.error("Failed to send %s: %s", message.name, exc)
            return self._result(StepStatus.FAILED, message, error=str(exc))

        logger.info("Sent %s (%d bytes)", message.name, size)
        return self._result(StepStatus.SUCCEEDED, message, size)


class ReceiveStep(Step):
    """ Wait for the next inbound message and deserialize it as a
        *message_type*. Receive failures are recoverable unless a different
        *criticality* is given; the message in a failed result is not
        populated and should not be read.
    """

    kind = "receive"
    criticality = Criticality.RECOVERABLE

    def run(self, exchange: Exchange, buffer: bytearray) -> StepResult:
        message = self.message_type()

        logger.info("Waiting for %s", message.name)

        try:
            size = receive_message(exchange, message, buffer)
        except (codec.DecodeError, TransportError) as exc:
            logger.warning("Failed to receive %s: %s", message.name, exc)
            if exchange.resubscribe_on_failure:
                self._resubscribe(exchange)
            return self._result(StepStatus.FAILED, message, error=str(exc))

        logger.info("Deserialized %s", message.name)
        return self._result(StepStatus.SUCCEEDED, message, size)

    def _resubscribe(self, exchange: Exchange) -> None:
        topic = self.topic(exchange.namespace)
        logger.info("Re-subscribing to %s", topic)

        try:
            exchange.reader.unsubscribe(topic)
            exchange.reader.subscribe(topic)
        except TransportError as exc:
            logger.warning("Failed to re-subscribe to %s: %s", topic, exc)
