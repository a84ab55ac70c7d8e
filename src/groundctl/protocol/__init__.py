"""
groundctl Protocol Layer
========================

Typed messages, the registry that resolves inbound bytes to a concrete
message type, the serializer, and the topic naming rule. Nothing in this
package depends on a transport implementation.

    Message Model (message.py, cmasi.py)
        Typed message and structure definitions

    Factory (factory.py)
        Type name -> message class registry

    Codec (codec.py)
        Message <-> bytes

    Topic Router (topic.py)
        Message type -> publish/subscribe topic
"""

from . import message
from . import factory
from . import cmasi
from . import codec
from . import topic

from .codec import DecodeError, EncodeError, Serializer
from .message import Message
from .topic import DEFAULT_NAMESPACE, topic_for


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
