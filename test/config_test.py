import logging

from vlcrc.config import parse_config
from vlcrc.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT
from vlcrc.convergence import RetryPolicy

CONFIG = """
[vlc]
host = 192.168.1.20
port = 4212
timeout = 2.5

[retry]
attempts = 5
delay = 0.1
backoff = 2
max_delay = 1
deadline = 3

[webserver]
port = 81
"""


def test_defaults(caplog, tmp_path):
    caplog.set_level(logging.DEBUG)

    settings = parse_config(str(tmp_path / "missing.conf"), environ={})

    assert settings.host == DEFAULT_HOST
    assert settings.port == DEFAULT_PORT
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.retry_policy == RetryPolicy()
    assert settings.webserver_host == "0.0.0.0"
    assert settings.webserver_port == 8080
    assert "not found, using defaults" in caplog.text


def test_config_file(tmp_path):
    config = tmp_path / "vlcrc.conf"
    config.write_text(CONFIG)

    settings = parse_config(str(config), environ={})

    assert settings.address() == "192.168.1.20:4212"
    assert settings.timeout == 2.5
    assert settings.retry_policy == RetryPolicy(attempts=5, delay=0.1, backoff=2,
                                                max_delay=1, deadline=3)
    assert settings.webserver_port == 81
    assert settings.webserver_host == "0.0.0.0"


def test_webserver_address(tmp_path):
    config = tmp_path / "vlcrc.conf"
    config.write_text("[webserver]\nhost = 127.0.0.1\nport = 9000\n")

    settings = parse_config(str(config), environ={})

    assert settings.webserver_host == "127.0.0.1"
    assert settings.webserver_port == 9000


def test_no_deadline(tmp_path):
    config = tmp_path / "vlcrc.conf"
    config.write_text("[retry]\nattempts = 3\n")

    policy = parse_config(str(config), environ={}).retry_policy

    assert policy.attempts == 3
    assert policy.deadline is None
    assert policy.delay == RetryPolicy().delay


def test_environment_overrides_file(tmp_path):
    config = tmp_path / "vlcrc.conf"
    config.write_text(CONFIG)

    settings = parse_config(str(config), environ={"VLC_RC_ADDR": "127.0.0.1:9090"})
    assert settings.address() == "127.0.0.1:9090"

    # the port from the file stays if only a host is given
    settings = parse_config(str(config), environ={"VLC_RC_ADDR": "vlc.local"})
    assert settings.address() == "vlc.local:4212"


def test_client(tmp_path):
    config = tmp_path / "vlcrc.conf"
    config.write_text(CONFIG)

    settings = parse_config(str(config), environ={})
    client = settings.client()

    assert client.host == "192.168.1.20"
    assert client.port == 4212
    assert client.timeout == 2.5
    assert client.retry_policy.attempts == 5
    assert not client.is_connected()

    args = settings.control_args()
    assert args["port"] == 4212
    assert args["retry_policy"] is settings.retry_policy
