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
import threading

from bottle import Bottle, request, response

from vlcrc.constants import CMD_NEXT, CMD_PREV, CMD_PAUSE, CMD_PLAYPAUSE, CMD_STOP, CMD_PLAY, CMD_SEEK, \
    STATE_PLAYING, STATE_PAUSED

URL_COMMANDS = {
    "next": CMD_NEXT,
    "previous": CMD_PREV,
    "prev": CMD_PREV,
    "pause": CMD_PAUSE,
    "playpause": CMD_PLAYPAUSE,
    "stop": CMD_STOP,
    "play": CMD_PLAY,
    "seek": CMD_SEEK,
}


class VLCWebserver():
    """
    HTTP API for a VLCControl
    """

    def __init__(self,
                 port=8080,
                 host='0.0.0.0',
                 debug=False):
        self.port = port
        self.host = host
        self.debug = debug
        self.bottle = Bottle()
        self.route()
        self.player_control = None
        self.thread = None

    def route(self):
        self.bottle.route('/api/player/status',
                          method="GET",
                          callback=self.playerstatus_handler)
        self.bottle.route('/api/player/playing',
                          method="GET",
                          callback=self.playerplaying_handler)
        self.bottle.route('/api/player/<command>',
                          method="POST",
                          callback=self.playercontrol_handler)
        self.bottle.route('/api/track/playlist',
                          method="GET",
                          callback=self.playlist_handler)
        self.bottle.route('/api/track/subtitles',
                          method="GET",
                          callback=self.subtitles_handler)
        self.bottle.route('/api/volume',
                          method="GET",
                          callback=self.volume_get_handler)
        self.bottle.route('/api/volume',
                          method="POST",
                          callback=self.volume_post_handler)

    def startServer(self):
        self.bottle.run(port=self.port,
                        host=self.host,
                        debug=self.debug,
                        quiet=not(self.debug))

    def set_player_control(self, playercontrol):
        self.player_control = playercontrol

    # ##
    # ## begin URL handlers
    # ##

    def playercontrol_handler(self, command):
        if self.player_control is None:
            response.status = 501
            return "no player control available"

        cmd = URL_COMMANDS.get(command.lower())
        if cmd is None:
            response.status = 404
            return "unknown command {}".format(command)

        parameters = {}
        if cmd == CMD_SEEK:
            parameters = request.json or {}

        try:
            if not(self.player_control.send_command(cmd, parameters)):
                response.status = 500
                return "{} failed".format(command)

        except Exception as e:
            response.status = 500
            return "{} failed with exception {}".format(command, e)

        return "ok"

    def playerstatus_handler(self):

        if self.player_control is None:
            response.status = 501
            return "no player control available"

        return self.player_control.get_meta()

    def playerplaying_handler(self):

        if self.player_control is None:
            response.status = 501
            return "no player control available"

        state = self.player_control.get_state()
        return ({"playing": state == STATE_PLAYING,
                 "paused": state == STATE_PAUSED})

    def playlist_handler(self):

        if self.player_control is None:
            response.status = 501
            return "no player control available"

        return ({"playlist": [t.as_dict() for t in self.player_control.get_playlist()]})

    def subtitles_handler(self):

        if self.player_control is None:
            response.status = 501
            return "no player control available"

        return ({"subtitles": [s.as_dict() for s in self.player_control.get_subtitles()]})

    def volume_get_handler(self):

        if self.player_control is None:
            response.status = 501
            return "no volume control available"

        volume = self.player_control.get_volume()
        if volume is None:
            response.status = 503
            return "volume not available"

        return ({"volume": volume})

    def volume_post_handler(self):

        if self.player_control is None:
            response.status = 501
            return "no volume control available"

        data = request.json
        if data is None or "volume" not in data:
            response.status = 400
            return "volume value missing"

        vol = str(data["volume"])
        try:
            value = int(vol)
        except ValueError:
            response.status = 400
            return "invalid value {}".format(vol)

        if vol[0] in ['+', '-']:
            volume = self.player_control.change_volume(value)
        else:
            volume = self.player_control.set_volume(value)

        if volume is None:
            response.status = 500
            return "setting volume to {} failed".format(vol)

        return ({"volume": volume})

    # ##
    # ## end URL handlers
    # ##

    # ##
    # ##  thread methods
    # ##

    def start(self):
        self.thread = threading.Thread(target=self.startServer, args=())
        self.thread.daemon = True
        self.thread.start()
        logging.info("started web server on port {}".format(self.port))

    def is_alive(self):
        if self.thread is None:
            return True
        else:
            return self.thread.is_alive()
