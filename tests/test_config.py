import logging

import pytest

from groundctl import config


PORTS = config.PORTS_VARIABLE
HOSTNAME = config.HOSTNAME_VARIABLE


def test_defaults():

    settings = config.resolve([], {})

    assert settings.address == '127.0.0.1'
    assert settings.pub_port == 6667
    assert settings.sub_port == 6668
    assert settings.namespace == 'afrl.cmasi'
    assert settings.transport == 'zmq'
    assert settings.receive_timeout == 30.0
    assert settings.resubscribe_on_failure == False
    assert settings.log_level == logging.INFO


def test_environment_ports():

    settings = config.resolve([], {PORTS: '7001,7002'})

    assert settings.pub_port == 7001
    assert settings.sub_port == 7002


def test_malformed_ports(caplog):

    for malformed in ('7001', 'seven,eight', '7001,', '7001,99999'):
        caplog.clear()
        settings = config.resolve([], {PORTS: malformed})

        assert settings.pub_port == 6667
        assert settings.sub_port == 6668

        warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert PORTS in warnings[0].getMessage() or 'port' in warnings[0].getMessage()


def test_missing_comma_message(caplog):

    config.resolve([], {PORTS: '7001'})
    assert 'comma' in caplog.text


def test_environment_hostname():

    settings = config.resolve([], {HOSTNAME: 'proxy.example.org'})
    assert settings.address == 'proxy.example.org'


def test_arguments_override_environment():

    environ = {HOSTNAME: 'proxy.example.org', PORTS: '7001,7002'}

    settings = config.resolve(['10.0.0.5'], environ)
    assert settings.address == '10.0.0.5'
    assert settings.pub_port == 7001
    assert settings.sub_port == 7002

    # Positional order is address, subscribe port, publish port.

    settings = config.resolve(['10.0.0.5', '7100', '7200'], environ)
    assert settings.sub_port == 7100
    assert settings.pub_port == 7200


def test_bad_argument_port():

    with pytest.raises(SystemExit):
        config.resolve(['10.0.0.5', 'seventy'], {})


def test_options():

    arguments = ['--namespace', 'test.ns', '--receive-timeout', '2.5',
                 '--ready-timeout', '1', '--resubscribe', '--verbose']
    settings = config.resolve(arguments, {})

    assert settings.namespace == 'test.ns'
    assert settings.receive_timeout == 2.5
    assert settings.ready_timeout == 1.0
    assert settings.resubscribe_on_failure == True
    assert settings.log_level == logging.DEBUG

    settings = config.resolve(['--receive-timeout', '0', '--quiet'], {})
    assert settings.receive_timeout is None
    assert settings.log_level == logging.WARNING

    with pytest.raises(SystemExit):
        config.resolve(['--receive-timeout', '-1'], {})


def test_transport_selection():

    settings = config.resolve([], {'GROUNDCTL_TRANSPORT': 'other'})
    assert settings.transport == 'other'

    settings = config.resolve(['--transport', 'zmq'], {'GROUNDCTL_TRANSPORT': 'other'})
    assert settings.transport == 'zmq'


def test_parse_ports():

    assert config.parse_ports('1,2') == (1, 2)
    assert config.parse_ports(' 6667 , 6668 ') == (6667, 6668)

    with pytest.raises(config.ConfigError):
        config.parse_ports('6667;6668')

    with pytest.raises(config.ConfigError):
        config.parse_ports('1,2,3')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
