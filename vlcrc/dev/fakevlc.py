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
A stand-in for VLC's RC interface, used for development and tests.

It speaks the same line protocol as "vlc --rc-host", keeps a little bit of
player state and can delay state changes ("lag") to mimic VLC reporting
stale values right after a command.
'''

import logging
import socketserver
import threading

from vlcrc.helpers import length_to_seconds

GREETING = "VLC media player 3.0.18 Vetinari\n" \
    "Command Line Interface initialized. Type `help' for help."

DEFAULT_TRACKS = [
    ("Chopin Nocturnes.mp3", "01:50:55"),
    ("Bach (00:00:01).mp3", "00:03:20"),
    ("Satie - Gymnopedie No.1.flac", "00:03:05"),
]

DEFAULT_SUBTITLES = [
    (-1, "Disable"),
    (2, "Track 1 - [English]"),
    (3, "Track 2 - [Deutsch]"),
]

# VLC numbers playlist items after the playlist and media library nodes
FIRST_TRACK_ID = 4


class LaggingValue:
    """
    A value that keeps reporting the old state for a number of reads after
    it has been changed
    """

    def __init__(self, value, lag=0):
        self.value = value
        self.lag = lag
        self.pending = None
        self.countdown = 0

    def set(self, value):
        if self.lag == 0:
            self.value = value
            return

        # repeating the same change doesn't restart the delay
        if self.pending is not None and self.pending == value:
            return

        self.pending = value
        self.countdown = self.lag

    def force(self, value):
        self.value = value
        self.pending = None
        self.countdown = 0

    def get(self):
        if self.pending is not None:
            if self.countdown > 0:
                self.countdown -= 1
                return self.value
            self.value = self.pending
            self.pending = None
        return self.value


class FakeVLCHandler(socketserver.StreamRequestHandler):

    def handle(self):
        fake = self.server.fake
        self.reply(GREETING)
        for raw in self.rfile:
            line = raw.decode("utf-8", errors="replace").strip()
            if line in ["quit", "logout"]:
                break
            self.reply(fake.execute(line))

    def reply(self, output):
        newline = self.server.fake.newline
        data = ""
        if output:
            data = newline.join(output.split("\n")) + newline
        self.wfile.write((data + "> ").encode("utf-8"))


class FakeVLCTCPServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True


class FakeVLCServer(threading.Thread):
    """
    Runs the fake RC interface in a background thread

        with FakeVLCServer(lag=2) as vlc:
            client = Client(*vlc.address)
    """

    def __init__(self, host="127.0.0.1", port=0, lag=0,
                 tracks=None, subtitles=None,
                 reject_volume=False, status_changes=False,
                 newline="\n"):
        super().__init__()
        self.daemon = True

        if tracks is None:
            tracks = DEFAULT_TRACKS
        if subtitles is None:
            subtitles = DEFAULT_SUBTITLES

        self.tracks = list(tracks)
        self.subtitles = list(subtitles)
        self.reject_volume = reject_volume
        self.status_changes = status_changes
        self.newline = newline

        self.volume = LaggingValue(256, lag)
        self.playing = LaggingValue(False, lag)
        self.paused = False
        self.current = 0
        self.position = 0
        self.fullscreen = False
        self.received = []

        self.lock = threading.Lock()
        self.server = FakeVLCTCPServer((host, port), FakeVLCHandler)
        self.server.fake = self

    @property
    def address(self):
        return self.server.server_address[:2]

    def run(self):
        logging.debug("fake VLC listening on %s:%s", *self.address)
        self.server.serve_forever(poll_interval=0.05)

    def stop(self):
        self.server.shutdown()
        self.server.server_close()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()

    def execute(self, line):
        with self.lock:
            self.received.append(line)
            parts = line.split(" ", 1)
            command = parts[0]
            argument = parts[1].strip() if len(parts) > 1 else None

            handler = getattr(self, "rc_" + command, None)
            if handler is None or command == "":
                return "Unknown command `{}'. Type `help' for help.".format(command)

            return handler(argument)

    def is_playing(self):
        """
        The actual play state, ignoring the lag
        """
        if self.playing.pending is not None:
            return self.playing.pending
        return self.playing.value

    ###
    ### RC commands
    ###

    def rc_volume(self, argument):
        if argument is None:
            return str(self.volume.get())

        if not self.reject_volume:
            self.volume.set(int(argument))

        if self.status_changes:
            return "status change: ( audio volume: {} )".format(argument)
        return ""

    def rc_is_playing(self, argument):
        return "1" if self.playing.get() else "0"

    def rc_play(self, argument):
        if len(self.tracks) > 0:
            self.playing.set(True)
            self.paused = False
        return ""

    def rc_pause(self, argument):
        if self.is_playing():
            self.paused = not(self.paused)
        return ""

    def rc_stop(self, argument):
        self.playing.set(False)
        self.paused = False
        self.position = 0
        return ""

    def rc_next(self, argument):
        if len(self.tracks) > 0:
            self.current = (self.current + 1) % len(self.tracks)
            self.position = 0
        return ""

    def rc_prev(self, argument):
        if len(self.tracks) > 0:
            self.current = (self.current - 1) % len(self.tracks)
            self.position = 0
        return ""

    def rc_seek(self, argument):
        if argument is None or not self.is_playing():
            return ""

        if argument[0] in ["+", "-"]:
            position = self.position + int(argument)
        else:
            position = int(argument)

        length = length_to_seconds(self.tracks[self.current][1])
        self.position = max(0, min(position, length))
        return ""

    def rc_get_time(self, argument):
        if not self.is_playing():
            return ""
        return str(self.position)

    def rc_get_length(self, argument):
        if not self.is_playing():
            return ""
        return str(length_to_seconds(self.tracks[self.current][1]))

    def rc_get_title(self, argument):
        if not self.is_playing():
            return ""
        return self.tracks[self.current][0]

    def rc_fullscreen(self, argument):
        self.fullscreen = argument != "off"
        return ""

    def rc_playlist(self, argument):
        lines = ["+----[ Playlist - playlist ]", "| 1 - Playlist"]
        for i, (title, length) in enumerate(self.tracks):
            marker = "*" if i == self.current and self.is_playing() else ""
            lines.append("|   {}{} - {} ({})".format(marker, FIRST_TRACK_ID + i, title, length))
        lines.append("| 2 - Media Library")
        lines.append("+----[ End of playlist ]")
        return "\n".join(lines)

    def rc_strack(self, argument):
        lines = ["+----[ spu-es ]"]
        for index, title in self.subtitles:
            lines.append("| {} - {}{}".format(index, title, " *" if index == -1 else ""))
        lines.append("+----[ end of spu-es ]")
        return "\n".join(lines)

    def rc_status(self, argument):
        lines = []
        if self.is_playing():
            lines.append("( new input: file:///music/{} )".format(self.tracks[self.current][0]))
        lines.append("( audio volume: {} )".format(self.volume.value))
        if not self.is_playing():
            state = "stopped"
        elif self.paused:
            state = "paused"
        else:
            state = "playing"
        lines.append("( state {} )".format(state))
        return "\n".join(lines)
