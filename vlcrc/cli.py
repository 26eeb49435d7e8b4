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
Command line tool that sends a single command to VLC or runs the web API.

    vlcrc volume 50
    vlcrc -a 127.0.0.1:9090 playlist
    vlcrc serve
'''

import argparse
import logging
import sys
import time

from vlcrc.config import DEFAULT_CONFIG, parse_config
from vlcrc.errors import VLCError
from vlcrc.helpers import parse_address


def on_off(value):
    if value not in ["on", "off"]:
        raise argparse.ArgumentTypeError("expected on or off, got {}".format(value))
    return value == "on"


def create_parser():
    parser = argparse.ArgumentParser(prog="vlcrc",
                                     description="Control VLC through its RC interface")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG,
                        help="configuration file (default: %(default)s)")
    parser.add_argument("-a", "--address",
                        help="host:port of the RC interface")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    volume = commands.add_parser("volume", help="show or set the volume, +N/-N change it")
    volume.add_argument("amount", nargs="?")

    for name, help_text in [("play", "start playback"),
                            ("stop", "stop playback"),
                            ("pause", "pause playback"),
                            ("next", "next track"),
                            ("prev", "previous track"),
                            ("time", "seconds since the start of the track"),
                            ("length", "length of the track in seconds"),
                            ("title", "title of the current track"),
                            ("state", "playing, paused or stopped"),
                            ("playlist", "list the playlist"),
                            ("subtitles", "list subtitle tracks"),
                            ("serve", "run the HTTP API")]:
        commands.add_parser(name, help=help_text)

    for name, help_text in [("forward", "move forward by N seconds"),
                            ("rewind", "move backward by N seconds"),
                            ("seek", "jump to second N")]:
        seek = commands.add_parser(name, help=help_text)
        seek.add_argument("seconds", type=int)

    fullscreen = commands.add_parser("fullscreen", help="switch fullscreen on or off")
    fullscreen.add_argument("on", type=on_off)

    return parser


def run_command(client, args):
    command = args.command

    if command == "volume":
        if args.amount is None:
            print(client.get_volume())
        else:
            amount = int(args.amount)
            if args.amount[0] in ["+", "-"]:
                amount = client.get_volume() + amount
            print(client.set_volume(amount))
    elif command == "play":
        if not client.play():
            logging.warning("playlist is empty")
    elif command == "stop":
        client.stop()
    elif command == "pause":
        client.pause()
    elif command == "next":
        client.next()
    elif command == "prev":
        client.prev()
    elif command == "forward":
        client.forward(args.seconds)
    elif command == "rewind":
        client.rewind(args.seconds)
    elif command == "seek":
        client.seek(args.seconds)
    elif command == "time":
        print_optional(client.get_time())
    elif command == "length":
        print_optional(client.get_length())
    elif command == "title":
        print_optional(client.get_title())
    elif command == "state":
        print(client.get_state())
    elif command == "playlist":
        for track in client.playlist():
            print(("* " if track.current else "  ") + str(track))
    elif command == "subtitles":
        for subtitle in client.subtitles():
            print(subtitle)
    elif command == "fullscreen":
        client.fullscreen(args.on)
    else:
        raise ValueError("unknown command {}".format(command))


def print_optional(value):
    if value is None:
        print("-")
    else:
        print(value)


def serve(settings, debug=False):
    from vlcrc.players.vlccontrol import VLCControl
    from vlcrc.webserver import VLCWebserver

    control = VLCControl(settings.control_args())
    server = VLCWebserver(port=settings.webserver_port,
                          host=settings.webserver_host,
                          debug=debug)
    server.set_player_control(control)
    server.start()

    try:
        while server.is_alive():
            time.sleep(1)
    except KeyboardInterrupt:
        logging.info("interrupted")

    control.disconnect()
    logging.info("web server stopped")
    return 0


def main(argv=None):
    args = create_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(format='%(levelname)s: %(module)s - %(message)s',
                            level=logging.DEBUG)
        logging.debug("enabled verbose logging")
    else:
        logging.basicConfig(format='%(levelname)s: %(module)s - %(message)s',
                            level=logging.INFO)

    settings = parse_config(args.config)
    if args.address is not None:
        settings.host, settings.port = parse_address(args.address, settings.port)

    if args.command == "serve":
        return serve(settings, debug=args.verbose)

    try:
        with settings.client() as client:
            run_command(client, args)
    except VLCError as e:
        logging.error("%s failed: %s", args.command, e)
        return 1
    except ValueError as e:
        logging.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
