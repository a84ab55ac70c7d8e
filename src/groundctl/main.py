""" Command-line entry point: open the transport, then run the rescue
    mission against it. The process exits 0 if every step of the mission
    was attempted, and 1 if the transport could not be brought up or a
    command could not be sent.
"""

import logging
import sys

from . import config
from . import mission
from . import protocol
from . import transport
from .exchange import Exchange

logger = logging.getLogger(__name__)


def setup_logging(level):

    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def open_channels(settings, writer, reader, topics):
    """ Configure, open, and subscribe the *writer* and *reader* channels,
        strictly in that order, and wait for both to report ready. Raises
        :class:`groundctl.transport.TransportOpenError` on any failure.
    """

    reader.configure(transport.SUBSCRIBE_ADDRESS, settings.address)
    reader.configure(transport.SUBSCRIBE_PORT, settings.sub_port)
    writer.configure(transport.PUBLISH_ADDRESS, settings.address)
    writer.configure(transport.PUBLISH_PORT, settings.pub_port)

    writer.open(transport.Direction.WRITE)
    logger.info('Opened tx transport')
    reader.open(transport.Direction.READ)
    logger.info('Opened rx transport')

    for topic in topics:
        reader.subscribe(topic)
        logger.debug('Subscribed to %s', topic)

    for name, channel in (('tx', writer), ('rx', reader)):
        if channel.wait_ready(settings.ready_timeout):
            pass
        else:
            raise transport.TransportOpenError('%s transport not ready after %.1f sec' % (name, settings.ready_timeout))


def run(settings, writer, reader, script=None):
    """ Run *script* (default: the rescue mission) over the supplied
        channels, and return the process exit code. The channels are closed
        before returning.
    """

    if script is None:
        script = mission.rescue_mission()

    serializer = protocol.Serializer(protocol.factory.default)

    try:
        try:
            open_channels(settings, writer, reader, script.receive_topics(settings.namespace))
        except transport.TransportOpenError as error:
            logger.error('Failed to open transport: %s', error)
            return 1

        exchange = Exchange(
            writer=writer,
            reader=reader,
            serializer=serializer,
            namespace=settings.namespace,
            max_receive_size=settings.max_receive_size,
            receive_timeout=settings.receive_timeout,
            resubscribe_on_failure=settings.resubscribe_on_failure,
        )

        result = script.run(exchange)
    finally:
        writer.close()
        reader.close()

    logger.info('Mission %s: %d sent, %d received', result.status.value, result.sends, result.receives)
    return result.exit_code


def main(argv=None, environ=None):

    settings = config.resolve(argv, environ)
    setup_logging(settings.log_level)

    try:
        writer = transport.channel(settings.transport, settle=settings.settle)
        reader = transport.channel(settings.transport, settle=settings.settle)
    except ValueError as error:
        logger.error('Failed to create transport: %s', error)
        return 1

    return run(settings, writer, reader)


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
