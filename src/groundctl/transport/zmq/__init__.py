"""ZeroMQ transport backend."""

from .channel import ZmqChannel
from . import framing
