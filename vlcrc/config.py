'''
Copyright (c) 2020 Modul 9/HiFiBerry

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
'''

'''
Reads the configuration file, e.g.

[vlc]
host = 127.0.0.1
port = 9090
timeout = 1.0

[retry]
attempts = 20
delay = 0.05
backoff = 1.5
max_delay = 0.5
deadline = 5

[webserver]
host = 0.0.0.0
port = 8080

VLC_RC_ADDR=host:port in the environment overrides the [vlc] address.
'''

import configparser
import logging
import os

from vlcrc.client import Client
from vlcrc.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT
from vlcrc.convergence import RetryPolicy
from vlcrc.helpers import parse_address

DEFAULT_CONFIG = "/etc/vlcrc.conf"
ADDRESS_VARIABLE = "VLC_RC_ADDR"


class Settings():

    def __init__(self):
        self.host = DEFAULT_HOST
        self.port = DEFAULT_PORT
        self.timeout = DEFAULT_TIMEOUT
        self.retry_policy = RetryPolicy()
        self.webserver_host = "0.0.0.0"
        self.webserver_port = 8080

    def address(self):
        return "{}:{}".format(self.host, self.port)

    def client(self):
        return Client(self.host, self.port,
                      timeout=self.timeout,
                      retry_policy=self.retry_policy)

    def control_args(self):
        return {
            "host": self.host,
            "port": self.port,
            "timeout": self.timeout,
            "retry_policy": self.retry_policy,
        }


def parse_config(filename=DEFAULT_CONFIG, environ=None):
    settings = Settings()

    config = configparser.ConfigParser()
    config.optionxform = lambda option: option

    if len(config.read(filename)) == 0:
        logging.info("%s not found, using defaults", filename)

    if "vlc" in config.sections():
        settings.host = config.get("vlc", "host", fallback=DEFAULT_HOST)
        settings.port = config.getint("vlc", "port", fallback=DEFAULT_PORT)
        settings.timeout = config.getfloat("vlc", "timeout", fallback=DEFAULT_TIMEOUT)

    if "retry" in config.sections():
        defaults = RetryPolicy()
        deadline = config.get("retry", "deadline", fallback="")
        settings.retry_policy = RetryPolicy(
            attempts=config.getint("retry", "attempts", fallback=defaults.attempts),
            delay=config.getfloat("retry", "delay", fallback=defaults.delay),
            backoff=config.getfloat("retry", "backoff", fallback=defaults.backoff),
            max_delay=config.getfloat("retry", "max_delay", fallback=defaults.max_delay),
            deadline=float(deadline) if deadline.strip() != "" else None)
        logging.debug("retry policy %s", settings.retry_policy)

    # used by "vlcrc serve"
    settings.webserver_host = config.get("webserver", "host",
                                         fallback=settings.webserver_host)
    settings.webserver_port = config.getint("webserver", "port",
                                            fallback=settings.webserver_port)

    if environ is None:
        environ = os.environ

    address = environ.get(ADDRESS_VARIABLE)
    if address:
        settings.host, settings.port = parse_address(address, settings.port)
        logging.info("using %s from %s", settings.address(), ADDRESS_VARIABLE)

    logging.debug("VLC RC address %s", settings.address())
    return settings
