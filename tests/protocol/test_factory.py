import pytest

import groundctl
from groundctl.protocol import cmasi
from groundctl.protocol.factory import Factory
from groundctl.protocol.message import Message


def test_default_registry():

    factory = groundctl.protocol.factory.default

    expected = ('AirVehicleState', 'CameraAction', 'CameraConfiguration',
                'CameraState', 'GoToWaypointAction', 'MissionCommand')

    assert factory.names() == list(expected)
    assert len(factory) == len(expected)

    for name in expected:
        assert name in factory
        instance = factory.create(name)
        assert instance.name == name
        assert isinstance(instance, Message)

    assert cmasi.CameraState in factory
    assert 'Location3D' not in factory


def test_unknown_type():

    factory = groundctl.protocol.factory.default

    with pytest.raises(KeyError) as error:
        factory.create('HoverAction')

    assert 'HoverAction' in str(error.value)
    assert 'MissionCommand' in str(error.value)
    assert factory.get('HoverAction') is None


def test_register():

    factory = Factory('TEST')
    returned = factory.register(cmasi.CameraState)
    assert returned is cmasi.CameraState

    # Registering the same class twice is harmless.

    factory.register(cmasi.CameraState)
    assert len(factory) == 1

    # A different class with the same type name is not.

    class CameraState(Message):
        payload_id: int = 0

    with pytest.raises(ValueError):
        factory.register(CameraState)

    with pytest.raises(TypeError):
        factory.register(cmasi.Location3D)

    with pytest.raises(TypeError):
        factory.register('CameraState')


def test_read_only():

    factory = Factory('TEST')
    factory.register(cmasi.CameraAction)
    assert factory.frozen == False

    decoder = factory.decoder()
    assert factory.frozen == True
    assert factory.decoder() is decoder

    with pytest.raises(RuntimeError):
        factory.register(cmasi.CameraState)


def test_freeze():

    factory = Factory('TEST')
    factory.freeze()

    with pytest.raises(RuntimeError):
        factory.register(cmasi.CameraAction)

    assert len(factory) == 0


def test_empty_decoder():

    factory = Factory('TEST')

    with pytest.raises(RuntimeError):
        factory.decoder()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
