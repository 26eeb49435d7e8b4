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

from expiringdict import ExpiringDict

from vlcrc.client import Client
from vlcrc.constants import CMD_NEXT, CMD_PREV, CMD_PAUSE, CMD_PLAYPAUSE, CMD_STOP, CMD_PLAY, CMD_SEEK, \
    STATE_PAUSED, STATE_PLAYING, STATE_UNDEF, \
    DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT
from vlcrc.errors import VLCError, VLCIOError, VLCConnectionError
from vlcrc.helpers import map_attributes
from vlcrc.players import PlayerControl


VLC_ATTRIBUTE_MAP={
    "new input": "streamUrl",
    "audio volume": "volume",
    "state": "playerState",
    }

MYNAME = "vlc"

# playlist requests are comparatively expensive, don't repeat them constantly
PLAYLIST_CACHE_SECONDS = 2


class VLCControl(PlayerControl):

    def __init__(self, args={}):
        self.client=None
        self.playername=MYNAME

        self.host=args.get("host", DEFAULT_HOST)
        self.port=int(args.get("port", DEFAULT_PORT))
        self.timeout=float(args.get("timeout", DEFAULT_TIMEOUT))
        self.retry_policy=args.get("retry_policy")

        self.playlist_cache = ExpiringDict(max_len=1,
                                           max_age_seconds=PLAYLIST_CACHE_SECONDS)

        self.connect()


    def connect(self):
        if self.client is not None:
            return self.client

        client = Client(self.host, self.port,
                        timeout=self.timeout,
                        retry_policy=self.retry_policy)
        try:
            client.connect()
            self.client = client
        except VLCError as e:
            logging.warning("can't connect to VLC at %s:%s: %s", self.host, self.port, e)
            self.client = None

        return self.client


    def disconnect(self):
        if self.client is None:
            return

        self.client.close()
        self.client=None
        self.playlist_cache.clear()


    def reconnect(self):
        self.disconnect()
        return self.connect()


    def failed(self, action, e):
        logging.warning("%s failed: %s", action, e)
        if isinstance(e, (VLCIOError, VLCConnectionError)):
            # Connection to VLC is broken, the next call reconnects
            self.disconnect()


    def get_supported_commands(self):
        return [CMD_NEXT, CMD_PREV, CMD_PAUSE, CMD_PLAYPAUSE, CMD_STOP, CMD_PLAY, CMD_SEEK]


    def get_state(self):
        if self.client is None:
            self.connect()

        if self.client is None:
            return STATE_UNDEF

        try:
            return self.client.get_state()
        except VLCError as e:
            self.failed("state", e)
            return STATE_UNDEF


    def get_meta(self):
        if self.client is None:
            self.connect()

        if self.client is None:
            return {}

        md = {
            "playerName": MYNAME,
        }
        try:
            map_attributes(self.client.status(), md, VLC_ATTRIBUTE_MAP)
            if md.get("playerState") in [STATE_PLAYING, STATE_PAUSED]:
                md["title"] = self.client.get_title()
                md["time"] = self.client.get_time()
                md["duration"] = self.client.get_length()
        except VLCError as e:
            self.failed("metadata", e)

        return md


    def get_playlist(self):
        playlist = self.playlist_cache.get("playlist")
        if playlist is not None:
            logging.debug("playlist retrieved from cache")
            return playlist

        if self.client is None:
            self.connect()

        if self.client is None:
            return []

        try:
            playlist = self.client.playlist()
        except VLCError as e:
            self.failed("playlist", e)
            return []

        self.playlist_cache["playlist"] = playlist
        return playlist


    def get_subtitles(self):
        if self.client is None:
            self.connect()

        if self.client is None:
            return []

        try:
            return self.client.subtitles()
        except VLCError as e:
            self.failed("subtitles", e)
            return []


    def send_command(self,command, parameters={}):
        if command not in self.get_supported_commands():
            logging.warning("command %s not supported by %s", command, MYNAME)
            return False

        if self.client is None:
            self.connect()

        if self.client is None:
            return False

        try:
            playstate=None
            if command == CMD_PLAYPAUSE:
                playstate=self.client.get_state()

            if command == CMD_NEXT:
                self.client.next()
            elif command == CMD_PREV:
                self.client.prev()
            elif command == CMD_PAUSE:
                return self.client.pause()
            elif command == CMD_STOP:
                self.client.stop()
            elif command == CMD_PLAY:
                return self.client.play()
            elif command == CMD_SEEK:
                self.seek(parameters)
            elif command == CMD_PLAYPAUSE:
                if playstate == STATE_PLAYING:
                    return self.client.pause()
                else:
                    return self.client.play()

        except (VLCError, ValueError) as e:
            self.failed(command, e)
            return False

        return True


    def seek(self, parameters):
        """
        Seek either to an absolute "position" or by a relative "offset"
        """
        if "position" in parameters:
            self.client.seek(int(parameters["position"]))
        elif "offset" in parameters:
            offset = int(parameters["offset"])
            if offset >= 0:
                self.client.forward(offset)
            else:
                self.client.rewind(-offset)
        else:
            raise ValueError("seek needs a position or an offset")


    def get_volume(self):
        if self.client is None:
            self.connect()

        if self.client is None:
            return None

        try:
            return self.client.get_volume()
        except VLCError as e:
            self.failed("volume", e)
            return None


    def set_volume(self, volume):
        if self.client is None:
            self.connect()

        if self.client is None:
            return None

        try:
            return self.client.set_volume(volume)
        except VLCError as e:
            self.failed("volume {}".format(volume), e)
            return None


    def change_volume(self, change):
        volume = self.get_volume()
        if volume is None:
            return None
        return self.set_volume(volume + change)


    """
    Checks if VLC is reachable and can report a state.
    This does NOT mean it is playing
    """
    def is_active(self):
        return self.client is not None
