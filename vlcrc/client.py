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
A client connection to VLC's RC interface.

Typical use:

    from vlcrc import connect

    with connect("127.0.0.1:9090") as player:
        player.set_volume(50)
        for track in player.playlist():
            print(track)
'''

import logging

from vlcrc.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, \
    MIN_VOLUME, MAX_VOLUME, \
    RC_PLAYLIST, RC_STRACK, RC_VOLUME, RC_IS_PLAYING, RC_STATUS, RC_PLAY, \
    RC_PAUSE, RC_STOP, RC_NEXT, RC_PREV, RC_SEEK, RC_GET_TIME, RC_GET_LENGTH, \
    RC_GET_TITLE, RC_FULLSCREEN, \
    STATE_PLAYING, STATE_PAUSED, STATE_STOPPED, STATE_UNDEF
from vlcrc.convergence import RetryPolicy, converge
from vlcrc.errors import VLCIOError, VLCParseError
from vlcrc.helpers import clamp, parse_address
from vlcrc.media import parse_playlist, parse_subtitles, parse_status
from vlcrc.rcsocket import RCSocket

UNKNOWN_COMMAND = "Unknown command"

VLC_STATE_MAP = {
    "playing": STATE_PLAYING,
    "paused": STATE_PAUSED,
    "stopped": STATE_STOPPED,
}


class Client():
    """
    A connection to a VLC player's RC interface
    """

    def __init__(self, host=DEFAULT_HOST, port=DEFAULT_PORT,
                 timeout=DEFAULT_TIMEOUT, retry_policy=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        if retry_policy is None:
            retry_policy = RetryPolicy()
        self.retry_policy = retry_policy
        self.socket = None

    def connect(self):
        if self.is_connected():
            return self

        self.socket = RCSocket.connect(self.host, self.port, self.timeout)
        return self

    def close(self):
        if self.socket is not None:
            self.socket.close()
            self.socket = None
            logging.debug("disconnected from %s:%s", self.host, self.port)

    def is_connected(self):
        return self.socket is not None and self.socket.is_connected()

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return "Client({}:{})".format(self.host, self.port)

    ###
    ### raw commands
    ###

    def command(self, name, *args):
        """
        Sends a command and returns VLC's reply
        """
        if self.socket is None:
            raise VLCIOError("not connected to {}:{}".format(self.host, self.port))

        line = " ".join([name] + [str(arg) for arg in args])
        reply = self.socket.request(line)
        if reply.startswith(UNKNOWN_COMMAND):
            raise VLCParseError("VLC rejected '{}': {}".format(line, reply), reply)

        return reply

    def query(self, name):
        """
        Sends a command and returns the last line of the reply
        """
        lines = [line.strip() for line in self.command(name).splitlines() if line.strip()]
        if len(lines) == 0:
            return ""
        return lines[-1]

    ###
    ### playlist and subtitles
    ###

    def playlist(self):
        return parse_playlist(self.command(RC_PLAYLIST))

    def subtitles(self):
        return parse_subtitles(self.command(RC_STRACK))

    ###
    ### volume
    ###

    def get_volume(self):
        return clamp(self.raw_volume(), MIN_VOLUME, MAX_VOLUME)

    def raw_volume(self):
        """
        Volume as VLC reports it, this can exceed MAX_VOLUME
        """
        value = self.query(RC_VOLUME)
        try:
            return int(round(float(value.replace(",", "."))))
        except ValueError as e:
            raise VLCParseError("unexpected volume '{}'".format(value), value) from e

    def set_volume(self, amount):
        """
        Sets the volume and waits until VLC reports it.

        Values outside MIN_VOLUME..MAX_VOLUME are clamped. Returns the volume
        that was set.
        """
        amount = clamp(int(amount), MIN_VOLUME, MAX_VOLUME)

        def apply():
            self.command(RC_VOLUME, amount)

        # a stale reading above MAX_VOLUME must not pass as MAX_VOLUME
        converge(apply, self.raw_volume, amount,
                 policy=self.retry_policy,
                 name="volume {}".format(amount))
        return amount

    ###
    ### playback
    ###

    def is_playing(self):
        """
        True if a track is playing. This is also True if it is paused.
        """
        value = self.query(RC_IS_PLAYING)
        if value == "1":
            return True
        elif value == "0":
            return False

        raise VLCParseError("unexpected is_playing reply '{}'".format(value), value)

    def status(self):
        return parse_status(self.command(RC_STATUS))

    def get_state(self):
        """
        Playback state, distinguishes paused from playing
        """
        state = self.status().get("state")
        return VLC_STATE_MAP.get(state, STATE_UNDEF)

    def play(self):
        """
        Starts playback and waits until VLC reports it.

        Returns False without doing anything if the playlist is empty.
        """
        if len(self.playlist()) == 0:
            logging.info("playlist is empty, not starting playback")
            return False

        def apply():
            self.command(RC_PLAY)

        converge(apply, self.is_playing, True,
                 policy=self.retry_policy,
                 name=RC_PLAY)
        return True

    def stop(self):
        def apply():
            self.command(RC_STOP)

        converge(apply, self.is_playing, False,
                 policy=self.retry_policy,
                 name=RC_STOP)

    def pause(self):
        """
        Pauses playback, does nothing if the player is stopped
        """
        if not self.is_playing():
            return False

        # "pause" toggles, so resume first to always end up paused
        self.command(RC_PLAY)
        self.command(RC_PAUSE)
        return True

    def next(self):
        self.command(RC_NEXT)

    def prev(self):
        self.command(RC_PREV)

    def fullscreen(self, on):
        self.command(RC_FULLSCREEN, "on" if on else "off")

    ###
    ### position and current track
    ###

    def get_time(self):
        """
        Seconds since the start of the track, None if stopped
        """
        return self.query_seconds(RC_GET_TIME)

    def get_length(self):
        """
        Length of the current track in seconds, None if stopped
        """
        return self.query_seconds(RC_GET_LENGTH)

    def get_title(self):
        title = self.query(RC_GET_TITLE)
        if len(title) == 0:
            return None
        return title

    def forward(self, secs):
        if secs < 0:
            raise ValueError("can't move forward by {} seconds".format(secs))
        self.command(RC_SEEK, "+{}".format(int(secs)))

    def rewind(self, secs):
        if secs < 0:
            raise ValueError("can't move backward by {} seconds".format(secs))
        self.command(RC_SEEK, "-{}".format(int(secs)))

    def seek(self, position):
        """
        Jumps to an absolute position (seconds)
        """
        if position < 0:
            raise ValueError("invalid position {}".format(position))
        self.command(RC_SEEK, int(position))

    def query_seconds(self, name):
        value = self.query(name)
        if len(value) == 0:
            return None

        try:
            return int(value)
        except ValueError as e:
            raise VLCParseError("unexpected {} reply '{}'".format(name, value), value) from e


def connect(address, **kwargs):
    """
    Connects to "host:port" or a (host, port) tuple
    """
    host, port = parse_address(address, DEFAULT_PORT)
    return Client(host, port, **kwargs).connect()
