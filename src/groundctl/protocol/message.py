""" A class representation of a groundctl message. Every message exchanged
    with the air vehicle is an instance of a :class:`Message` subclass; the
    subclass name is the stable type name used for routing and for resolving
    the concrete type of inbound bytes.
"""

from typing import Annotated, ClassVar

import msgspec


# LMCP declares a handful of fixed-width integer types. The constraints
# are enforced when a message is serialized, not when it is constructed.

UInt16 = Annotated[int, msgspec.Meta(ge=0, le=0xFFFF)]
UInt32 = Annotated[int, msgspec.Meta(ge=0, le=0xFFFFFFFF)]
Int32 = Annotated[int, msgspec.Meta(ge=-0x80000000, le=0x7FFFFFFF)]
Int64 = Annotated[int, msgspec.Meta(ge=-0x8000000000000000, le=0x7FFFFFFFFFFFFFFF)]


class Structure(msgspec.Struct, rename='pascal', kw_only=True):
    """ Base class for any structure embedded in a :class:`Message`, such
        as a location or a waypoint. Attribute names are snake_case in
        Python and PascalCase on the wire.
    """


class Message(Structure, tag_field='MessageType', tag=True):
    """ The :class:`Message` is the unit of exchange with the air vehicle.
        The class name of each subclass doubles as the type tag written into
        the encoded form, which is how a :class:`Factory` maps inbound bytes
        back onto the correct concrete class.

        Every field of every subclass must have a default, such that an
        empty instance can be constructed ahead of a receive and populated
        in place.

        :ivar series: The LMCP series this message belongs to.
        :ivar version: The version of the series definition.
    """

    series: ClassVar[str] = 'CMASI'
    version: ClassVar[int] = 3


    @classmethod
    def type_name(cls):
        """ Return the stable name of this message type.
        """

        return cls.__name__


    @property
    def name(self):
        return self.type_name()


# end of class Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
