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

from vlcrc.constants import STATE_UNDEF


class PlayerControl:
    """
    A player that can be controlled with the generic CMD_* commands
    """

    def __init__(self, args={}):
        self.playername = None


    def get_state(self):
        return STATE_UNDEF

    def get_meta(self):
        return {}

    def send_command(self, command, parameters={}):
        return False

    """
    Return a list of the commands that the player supports
    This can be dynamic based on the state of the player
    """
    def get_supported_commands(self):
        return []


    """
    Checks if a player is reachable and can report a state.
    This does NOT mean this player is playing
    """
    def is_active(self):
        return False
