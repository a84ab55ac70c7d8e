""" Python implementation of a ground-control endpoint. It directs an air
    vehicle through a scripted mission by publishing typed command messages
    and receiving typed telemetry over a publish/subscribe transport.
"""

# Submodules used by multiple other components.

from . import protocol
from . import transport
from . import config

# Primary public-facing interfaces.

from . import exchange
from . import mission

from .exchange import Criticality, Exchange, ReceiveStep, SendStep
from .mission import MissionScript, Phase, rescue_mission
from .protocol import Message, Serializer, topic_for

__version__ = '0.1.0'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
