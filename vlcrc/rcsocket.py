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

import logging
import socket

from vlcrc.constants import PROMPT
from vlcrc.errors import VLCConnectionError, VLCIOError

PROMPT_BYTES = PROMPT.encode("utf-8")

# VLC pushes these between replies when the input state changes
STATUS_CHANGE = "status change:"

RECV_SIZE = 4096


class RCSocket():
    """
    A TCP stream to VLC's RC interface that reads replies up to the prompt.

    Every reply VLC sends is terminated by a prompt at the start of a line.
    Reading exactly one prompt per command keeps replies from bleeding into
    the next command. Anything received after the prompt stays buffered.
    """

    def __init__(self, sock, timeout=None):
        self.sock = sock
        self.timeout = timeout
        self.buffer = b""
        self.greeting = None

    @classmethod
    def connect(cls, host, port, timeout):
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise VLCConnectionError("can't connect to {}:{} ({})".format(host, port, e)) from e

        sock.settimeout(timeout)
        rcsocket = cls(sock, timeout)

        # Consume the greeting, this also checks that we're talking to VLC
        try:
            rcsocket.greeting = rcsocket.read_reply()
        except VLCIOError as e:
            rcsocket.close()
            raise VLCConnectionError("no RC greeting from {}:{} ({})".format(host, port, e)) from e

        logging.info("connected to VLC at %s:%s", host, port)
        logging.debug("greeting: %s", rcsocket.greeting)
        return rcsocket

    def is_connected(self):
        return self.sock is not None

    def send(self, line):
        if self.sock is None:
            raise VLCIOError("not connected")

        logging.debug("sending '%s'", line)
        try:
            self.sock.sendall((line + "\n").encode("utf-8"))
        except OSError as e:
            self.close()
            raise VLCIOError("write to VLC failed ({})".format(e)) from e

    def read_reply(self):
        """
        Reads until the next prompt and returns the text in front of it
        """
        if self.sock is None:
            raise VLCIOError("not connected")

        pos = self.find_prompt()
        while pos < 0:
            try:
                chunk = self.sock.recv(RECV_SIZE)
            except OSError as e:
                # a late reply would answer the next command, drop the stream
                self.close()
                raise VLCIOError("read from VLC failed ({})".format(e)) from e

            if not chunk:
                self.close()
                raise VLCIOError("VLC closed the connection")

            self.buffer += chunk
            pos = self.find_prompt()

        data = self.buffer[:pos]
        self.buffer = self.buffer[pos + len(PROMPT_BYTES):]

        lines = []
        for line in data.decode("utf-8", errors="replace").split("\n"):
            line = line.rstrip("\r")
            if line.startswith(STATUS_CHANGE):
                logging.debug("ignoring %s", line)
                continue
            lines.append(line)

        reply = "\n".join(lines).strip()
        logging.debug("received '%s'", reply)
        return reply

    def request(self, line):
        self.send(line)
        return self.read_reply()

    def find_prompt(self):
        """
        Position of the first prompt that starts a line, -1 if there is none yet
        """
        start = 0
        while True:
            pos = self.buffer.find(PROMPT_BYTES, start)
            if pos < 0:
                return -1
            if pos == 0 or self.buffer[pos - 1:pos] == b"\n":
                return pos
            start = pos + 1

    def close(self):
        if self.sock is None:
            return

        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            # peer already gone
            logging.debug("shutdown failed: %s", e)
        finally:
            self.sock.close()
            self.sock = None
            self.buffer = b""
