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

"""
A simple function that allows to map attributes to different keys

e.g.

dst={}
map_attributes({"audio volume": 256}, dst, {"audio volume": "volume"})
print(dst)
{"volume": 256}
"""
def map_attributes(src, dst, mapping):
    for key in src:
        if key in mapping:
            dst[mapping[key]]=src[key]


def length_to_seconds(length):
    """
    Converts a HH:MM:SS string to seconds
    """
    if length is None:
        return None

    seconds = 0
    for part in length.split(":"):
        seconds = seconds * 60 + int(part)
    return seconds


def parse_address(address, default_port=None):
    """
    Splits "host:port" into a (host, port) tuple. Tuples are passed through.
    """
    if isinstance(address, (tuple, list)):
        host, port = address
        return host, int(port)

    if address.startswith("["):
        # [::1]:9090
        host, _, port = address[1:].partition("]")
        port = port.lstrip(":")
    elif address.count(":") == 1:
        host, port = address.split(":")
    else:
        host, port = address, ""

    if port == "":
        if default_port is None:
            raise ValueError("no port given in {}".format(address))
        port = default_port

    return host, int(port)


def clamp(value, minimum, maximum):
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value
