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

# Prompt VLC writes when it is ready for the next command
PROMPT = "> "

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9090
DEFAULT_TIMEOUT = 1.0

MIN_VOLUME = 0
MAX_VOLUME = 200

# RC commands
RC_PLAYLIST = "playlist"
RC_STRACK = "strack"
RC_VOLUME = "volume"
RC_IS_PLAYING = "is_playing"
RC_STATUS = "status"
RC_PLAY = "play"
RC_PAUSE = "pause"
RC_STOP = "stop"
RC_NEXT = "next"
RC_PREV = "prev"
RC_SEEK = "seek"
RC_GET_TIME = "get_time"
RC_GET_LENGTH = "get_length"
RC_GET_TITLE = "get_title"
RC_FULLSCREEN = "fullscreen"

CMD_NEXT = "Next"
CMD_PREV = "Previous"
CMD_PAUSE = "Pause"
CMD_PLAYPAUSE = "PlayPause"
CMD_STOP = "Stop"
CMD_PLAY = "Play"
CMD_SEEK = "Seek"

STATE_UNDEF = "undefined"
STATE_PLAYING = "playing"
STATE_PAUSED = "paused"
STATE_STOPPED = "stopped"
