"""Conversion between :class:`Message` instances and their wire form."""

from __future__ import annotations

from typing import Optional

import msgspec

from .factory import Factory
from .message import Message


class EncodeError(Exception):
    """A message could not be converted to bytes."""


class DecodeError(Exception):
    """Bytes could not be converted to the expected message."""


class Serializer:
    """ Encode and decode messages registered with a :class:`Factory`.

        Encoding always validates the message against the declared field
        types and constraints first; a message that holds, say, a negative
        value in an unsigned field is a caller bug and is reported as an
        :class:`EncodeError` rather than put on the wire.

        A :class:`Serializer` holds no state beyond the factory and a
        reusable encoder. It is safe to reuse across exchanges, but not
        intended for simultaneous use from multiple threads.
    """

    def __init__(self, factory: Factory):
        self.factory = factory
        self._encoder = msgspec.json.Encoder()

    def validate(self, message: Message) -> None:
        if isinstance(message, Message):
            pass
        else:
            raise EncodeError(f"not a message: {message!r}")

        name = message.type_name()

        if self.factory.get(name) is not type(message):
            raise EncodeError(f"{name} is not registered with factory {self.factory.series}")

        try:
            msgspec.convert(msgspec.to_builtins(message), type(message))
        except (msgspec.ValidationError, TypeError, ValueError) as exc:
            raise EncodeError(f"{name} violates its encoding contract: {exc}") from exc

    def serialize(self, message: Message, buffer: Optional[bytearray] = None) -> bytes:
        """ Return the encoded form of *message*. If a *buffer* is provided
            it is overwritten with the encoded form, resized as needed; this
            allows one buffer to be reused across many messages.
        """

        self.validate(message)

        try:
            if buffer is None:
                return self._encoder.encode(message)

            self._encoder.encode_into(message, buffer)
        except (msgspec.EncodeError, TypeError, OverflowError) as exc:
            raise EncodeError(f"failed to encode {message.name}: {exc}") from exc

        return bytes(buffer)

    def decode(self, data) -> Message:
        """ Return a new message of whatever registered type *data*
            describes.
        """

        decoder = self.factory.decoder()

        try:
            return decoder.decode(data)
        except msgspec.DecodeError as exc:
            raise DecodeError(str(exc)) from exc

    def deserialize(self, data, message: Message) -> bool:
        """ Populate *message* in place from *data*. Return True on success.
            On failure, including a *data* that describes a different message
            type, return False; the contents of *message* are then undefined
            and should not be used.
        """

        try:
            decoded = self.decode(data)
        except DecodeError:
            return False

        if type(decoded) is not type(message):
            return False

        for field in message.__struct_fields__:
            setattr(message, field, getattr(decoded, field))

        return True


# end of class Serializer
