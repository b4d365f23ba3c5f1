import pytest

from tracker_config import DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT, load_config


def test_defaults():
    config = load_config([], environ={})
    assert (config.host, config.port, config.log_level) == (DEFAULT_HOST, DEFAULT_PORT, DEFAULT_LOG_LEVEL)


def test_environment_overrides_defaults():
    environ = {'TRACKER_HOST': '127.0.0.1', 'TRACKER_PORT': '9000', 'TRACKER_LOG_LEVEL': 'debug'}
    config = load_config([], environ=environ)
    assert (config.host, config.port, config.log_level) == ('127.0.0.1', 9000, 'DEBUG')


def test_flags_override_environment():
    config = load_config(['--port', '7000', '--log-level', 'warning'], environ={'TRACKER_PORT': '9000'})
    assert config.port == 7000
    assert config.log_level == 'WARNING'


@pytest.mark.parametrize('port', ['abc', '70000', '-5'])
def test_invalid_port_exits(port):
    with pytest.raises(SystemExit):
        load_config(['--port', port], environ={})
