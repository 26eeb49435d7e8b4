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

class VLCError(Exception):
    """
    Base class of all errors raised when talking to VLC
    """


class VLCConnectionError(VLCError):
    """
    The RC interface could not be reached
    """


class VLCIOError(VLCError):
    """
    Reading from or writing to an established connection failed
    """


class VLCParseError(VLCError):
    """
    VLC replied with something the client can't interpret
    """

    def __init__(self, message, reply=None):
        super().__init__(message)
        self.reply = reply


class VLCConvergenceError(VLCError):
    """
    A setter did not show its effect before the retry budget ran out
    """

    def __init__(self, name, expected, observed, attempts):
        super().__init__("{} did not converge to {} after {} attempts (last seen {})".format(
            name, expected, attempts, observed))
        self.name = name
        self.expected = expected
        self.observed = observed
        self.attempts = attempts
