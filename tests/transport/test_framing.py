import pytest

from groundctl.transport.zmq import framing


def test_frames():

    frames = framing.to_pub_frames('afrl.cmasi.CameraState', bytearray(b'{}'))
    assert frames == (b'afrl.cmasi.CameraState.', framing.VERSION, b'{}')

    topic, payload = framing.from_pub_frames(frames)
    assert topic == 'afrl.cmasi.CameraState'
    assert payload == b'{}'


def test_trailing_dot():

    assert framing.topic_bytes('afrl.cmasi.CameraAction') == b'afrl.cmasi.CameraAction.'

    # A subscription is a prefix match; the trailing dot keeps one type
    # name from matching another that happens to start with it.

    subscription = framing.topic_bytes('afrl.cmasi.CameraAction')
    other = framing.topic_bytes('afrl.cmasi.CameraActionStatus')
    assert not other.startswith(subscription)


def test_invalid_frames():

    with pytest.raises(ValueError):
        framing.from_pub_frames((b'afrl.cmasi.CameraState.', framing.VERSION))

    with pytest.raises(ValueError):
        framing.from_pub_frames((b'afrl.cmasi.CameraState.', b'a', b'{}'))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
