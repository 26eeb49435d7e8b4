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
Tracks, subtitles and status as reported by VLC's RC interface
'''

import re

from vlcrc.errors import VLCParseError
from vlcrc.helpers import length_to_seconds

TRACK_REGEX = re.compile(r"""
    \|                            # list item delimiter
    \s+
    (?P<current>\*)?              # marks the track that is playing
    (?P<index>\d+)
    \s+-\s+
    (?P<title>.+)
    \s
    \((?P<length>\d\d:\d\d:\d\d)\)
    """, re.VERBOSE)

SUBTITLE_REGEX = re.compile(r"""
    \|                            # list item delimiter
    \s+
    (?P<index>-?\d+)
    \s+-\s+
    (?P<title>.+)
    """, re.VERBOSE)


class Track:
    """
    A media track in VLC's playlist
    """

    def __init__(self, index, title, length, current=False):
        self._index = index
        self._title = title
        self._length = length
        self._current = current

    @property
    def index(self):
        return self._index

    @property
    def title(self):
        return self._title

    @property
    def length(self):
        """
        Length as HH:MM:SS
        """
        return self._length

    @property
    def current(self):
        """
        True for the track VLC is playing
        """
        return self._current

    @property
    def duration(self):
        """
        Length in seconds
        """
        return length_to_seconds(self.length)

    @classmethod
    def from_parts(cls, line):
        """
        Creates a track from a playlist line, None if the line isn't a track
        """
        match = TRACK_REGEX.search(line)
        if match is None:
            return None

        return cls(int(match.group("index")),
                   match.group("title"),
                   match.group("length"),
                   current=match.group("current") is not None)

    @classmethod
    def parse(cls, line):
        track = cls.from_parts(line)
        if track is None:
            raise VLCParseError("not a playlist entry: {}".format(line), line)
        return track

    def __eq__(self, other):
        if not isinstance(other, Track):
            return False

        return self.index == other.index and \
            self.title == other.title and \
            self.length == other.length and \
            self.current == other.current

    def __ne__(self, other):
        return not(self.__eq__(other))

    def __hash__(self):
        return hash((self.index, self.title, self.length, self.current))

    def as_dict(self):
        return {
            "index": self.index,
            "title": self.title,
            "length": self.length,
            "current": self.current,
            "duration": self.duration,
        }

    def __repr__(self):
        return "Track({!r}, {!r}, {!r}, current={!r})".format(
            self.index, self.title, self.length, self.current)

    def __str__(self):
        return "{} - {} ({})".format(self.index, self.title, self.length)


class Subtitle:
    """
    A subtitle track of the current media file, index -1 disables subtitles
    """

    def __init__(self, index, title):
        self._index = index
        self._title = title

    @property
    def index(self):
        return self._index

    @property
    def title(self):
        return self._title

    @classmethod
    def from_parts(cls, line):
        match = SUBTITLE_REGEX.search(line)
        if match is None:
            return None

        return cls(int(match.group("index")), match.group("title"))

    @classmethod
    def parse(cls, line):
        subtitle = cls.from_parts(line)
        if subtitle is None:
            raise VLCParseError("not a subtitle entry: {}".format(line), line)
        return subtitle

    def __eq__(self, other):
        if not isinstance(other, Subtitle):
            return False

        return self.index == other.index and self.title == other.title

    def __ne__(self, other):
        return not(self.__eq__(other))

    def __hash__(self):
        return hash((self.index, self.title))

    def as_dict(self):
        return {"index": self.index, "title": self.title}

    def __repr__(self):
        return "Subtitle({!r}, {!r})".format(self.index, self.title)

    def __str__(self):
        return "{} - {}".format(self.index, self.title)


def parse_playlist(text):
    return [track for track in map(Track.from_parts, text.splitlines())
            if track is not None]


def parse_subtitles(text):
    return [subtitle for subtitle in map(Subtitle.from_parts, text.splitlines())
            if subtitle is not None]


def parse_status(text):
    """
    Parses the reply to "status", e.g.

    ( new input: file:///music/song.mp3 )
    ( audio volume: 256 )
    ( state playing )
    """
    status = {}
    for line in text.splitlines():
        line = line.strip()
        if not(line.startswith("(") and line.endswith(")")):
            continue

        inner = line[1:-1].strip()
        if ":" in inner:
            key, value = inner.split(":", 1)
        elif " " in inner:
            key, value = inner.rsplit(" ", 1)
        else:
            raise VLCParseError("unexpected status line {}".format(line), text)

        key = key.strip()
        value = value.strip()
        if key == "audio volume":
            try:
                value = int(float(value.replace(",", ".")))
            except ValueError as e:
                raise VLCParseError("unexpected volume {}".format(value), text) from e

        status[key] = value

    return status
