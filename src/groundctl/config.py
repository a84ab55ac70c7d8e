""" Runtime settings for the ground station. Each setting has a built-in
    default, which can be overridden by an environment variable, which can
    in turn be overridden by a command-line argument.

    The transport endpoint is described by one address and two ports: the
    publish port, which commands are sent to, and the subscribe port, which
    vehicle telemetry arrives on. The environment supplies both ports in a
    single variable, formatted as ``pub,sub``.
"""

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .protocol.topic import DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)


HOSTNAME_VARIABLE = 'TANGRAM_TRANSPORT_zeromq_transport_HOSTNAME'
PORTS_VARIABLE = 'TANGRAM_TRANSPORT_zeromq_transport_PORTS'


class ConfigError(ValueError):
    """ A configuration value could not be interpreted. Raised by the
        parsing functions here; :func:`resolve` recovers from it by keeping
        the previous value.
    """


@dataclass
class Settings:
    address: str = '127.0.0.1'
    pub_port: int = 6667
    sub_port: int = 6668
    namespace: str = DEFAULT_NAMESPACE
    transport: str = 'zmq'
    receive_timeout: Optional[float] = 30.0
    ready_timeout: float = 5.0
    settle: float = 0.01
    max_receive_size: int = 65536
    resubscribe_on_failure: bool = False
    log_level: int = logging.INFO


def port_number(value):
    """ Interpret *value* as a TCP port number, raising :class:`ConfigError`
        if it is not one.
    """

    try:
        port = int(str(value).strip())
    except ValueError:
        raise ConfigError('port is not an integer: ' + repr(value))

    if 0 < port < 65536:
        pass
    else:
        raise ConfigError('port out of range: ' + str(port))

    return port


def parse_ports(value):
    """ Split a ``pub,sub`` string into a (publish, subscribe) tuple of port
        numbers.
    """

    comma = value.find(',')

    if comma == -1:
        raise ConfigError('unexpected lack of comma in %s: %r' % (PORTS_VARIABLE, value))

    pub_port = port_number(value[:comma])
    sub_port = port_number(value[comma + 1:])

    return pub_port, sub_port


def from_environment(settings, environ):
    """ Apply any relevant environment variables in *environ* to *settings*.
        A malformed port specification is reported and otherwise ignored.
    """

    address = environ.get(HOSTNAME_VARIABLE)
    if address is not None:
        settings.address = address

    ports = environ.get(PORTS_VARIABLE)
    if ports is not None:
        try:
            pub_port, sub_port = parse_ports(ports)
        except ConfigError as error:
            logger.warning('%s; keeping ports %d,%d', error, settings.pub_port, settings.sub_port)
        else:
            settings.pub_port = pub_port
            settings.sub_port = sub_port

    return settings


def _argument_port(value):
    try:
        return port_number(value)
    except ConfigError as error:
        raise argparse.ArgumentTypeError(str(error))


def _argument_timeout(value):
    try:
        timeout = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError('timeout is not a number: ' + repr(value))

    if timeout < 0:
        raise argparse.ArgumentTypeError('timeout cannot be negative')

    return timeout


def parser():
    """ Return the :class:`argparse.ArgumentParser` for the command line.
        The positional arguments are, in order, the address, the subscribe
        port, and the publish port; any that are given override the
        environment.
    """

    description = 'Direct an air vehicle through the rescue mission.'
    parser = argparse.ArgumentParser(prog='groundctl', description=description)

    parser.add_argument('address', nargs='?', help='transport proxy address')
    parser.add_argument('sub_port', nargs='?', type=_argument_port, help='port to receive telemetry on')
    parser.add_argument('pub_port', nargs='?', type=_argument_port, help='port to send commands on')

    parser.add_argument('--namespace', help='topic namespace prefix (default: %s)' % (DEFAULT_NAMESPACE))
    parser.add_argument('--transport', help='transport backend (default: zmq)')
    parser.add_argument('--receive-timeout', type=_argument_timeout,
                        help='seconds to wait for each response, 0 to wait forever')
    parser.add_argument('--ready-timeout', type=_argument_timeout,
                        help='seconds to wait for the transport to connect')
    parser.add_argument('--resubscribe', action='store_true',
                        help='re-subscribe to a topic after a failed receive')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='log debug messages')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='log warnings and errors only')

    return parser


def from_arguments(settings, arguments):
    """ Apply parsed command-line *arguments* to *settings*.
    """

    if arguments.address is not None:
        settings.address = arguments.address
    if arguments.sub_port is not None:
        settings.sub_port = arguments.sub_port
    if arguments.pub_port is not None:
        settings.pub_port = arguments.pub_port

    if arguments.namespace is not None:
        settings.namespace = arguments.namespace
    if arguments.transport is not None:
        settings.transport = arguments.transport

    if arguments.receive_timeout is not None:
        if arguments.receive_timeout == 0:
            settings.receive_timeout = None
        else:
            settings.receive_timeout = arguments.receive_timeout

    if arguments.ready_timeout is not None:
        settings.ready_timeout = arguments.ready_timeout

    if arguments.resubscribe:
        settings.resubscribe_on_failure = True

    if arguments.verbose:
        settings.log_level = logging.DEBUG
    elif arguments.quiet:
        settings.log_level = logging.WARNING

    return settings


def resolve(argv=None, environ=None):
    """ Return a :class:`Settings` instance built from the defaults, then
        *environ* (default: :data:`os.environ`), then *argv* (default: the
        process command line).
    """

    if environ is None:
        environ = os.environ

    settings = Settings()
    settings.transport = environ.get('GROUNDCTL_TRANSPORT', settings.transport)

    from_environment(settings, environ)

    arguments = parser().parse_args(argv)
    from_arguments(settings, arguments)

    return settings


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
