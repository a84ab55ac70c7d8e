import pytest
import zmq

import groundctl
from groundctl import transport


class FakeChannel(transport.Channel):
    """ An in-memory channel. Inbound payloads (or exceptions to raise) are
        served from *inbound* in order; an empty queue behaves like a receive
        timeout. Publish attempts listed in *fail_publish* (counting from 1)
        raise PublishError. Every send and receive is appended to *log*,
        which can be shared between a writer and a reader to check ordering.
    """

    def __init__(self, inbound=(), fail_publish=(), fail_open=False, ready=True, log=None):
        super().__init__()
        self.inbound = list(inbound)
        self.fail_publish = set(fail_publish)
        self.fail_open = fail_open
        self.ready = ready
        self.log = log if log is not None else list()
        self.calls = list()
        self.published = list()
        self.attempts = 0
        self.opened = False
        self.closed = False


    @property
    def is_open(self):
        return self.opened and not self.closed


    def open(self, direction):
        if self.opened:
            raise transport.ChannelStateError('already open')
        if self.fail_open:
            raise transport.TransportOpenError('refused')

        self.direction = transport.Direction(direction)
        self.opened = True
        self.calls.append('open')


    def close(self):
        self.closed = True
        self.calls.append('close')


    def wait_ready(self, timeout=None):
        self.calls.append('wait_ready')
        return self.ready


    def subscribe(self, topic):
        self._require(transport.Direction.READ)
        self.topics.append(topic)
        self.calls.append(('subscribe', topic))


    def unsubscribe(self, topic):
        self._require(transport.Direction.READ)
        self.topics.remove(topic)
        self.calls.append(('unsubscribe', topic))


    def publish(self, topic, data):
        self._require(transport.Direction.WRITE)
        self.attempts += 1

        if self.attempts in self.fail_publish:
            raise transport.PublishError('injected failure on publish %d' % (self.attempts))

        self.published.append((topic, bytes(data)))
        self.log.append(('send', topic))


    def receive(self, max_size, timeout=None):
        self._require(transport.Direction.READ)

        if not self.inbound:
            raise transport.TransportTimeout('nothing to receive')

        item = self.inbound.pop(0)
        self.log.append(('receive',))

        if isinstance(item, Exception):
            raise item

        return item


@pytest.fixture
def serializer():
    return groundctl.protocol.Serializer(groundctl.protocol.factory.default)


@pytest.fixture
def log():
    return list()


@pytest.fixture
def writer(log):
    channel = FakeChannel(log=log)
    channel.open(transport.Direction.WRITE)
    return channel


@pytest.fixture
def reader(log):
    channel = FakeChannel(log=log)
    channel.open(transport.Direction.READ)
    return channel


@pytest.fixture
def exchange(writer, reader, serializer):
    return groundctl.Exchange(writer=writer, reader=reader, serializer=serializer, receive_timeout=0.01)


@pytest.fixture
def zmq_peer():
    """ Yield a function that returns a bound ZeroMQ socket of the requested
        type and its port. All sockets are closed after the test.
    """

    context = zmq.Context.instance()
    sockets = list()

    def peer(socket_type):
        socket = context.socket(socket_type)
        socket.setsockopt(zmq.LINGER, 0)
        port = socket.bind_to_random_port('tcp://127.0.0.1')
        sockets.append(socket)
        return socket, port

    yield peer

    for socket in sockets:
        socket.close(linger=0)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
