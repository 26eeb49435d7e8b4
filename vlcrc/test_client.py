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

import socket
import threading
import time
import unittest

from vlcrc.client import Client, connect
from vlcrc.constants import MAX_VOLUME, STATE_PLAYING, STATE_PAUSED, STATE_STOPPED
from vlcrc.convergence import RetryPolicy
from vlcrc.dev.fakevlc import FakeVLCServer
from vlcrc.errors import VLCConnectionError, VLCConvergenceError, VLCIOError, VLCParseError
from vlcrc.media import Track, Subtitle

FAST = RetryPolicy(attempts=10, delay=0.001, max_delay=0.001)


def unused_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class ClientTest(unittest.TestCase):

    lag = 0

    def setUp(self):
        self.vlc = FakeVLCServer(lag=self.lag)
        self.vlc.start()
        host, port = self.vlc.address
        self.client = Client(host, port, timeout=2, retry_policy=FAST).connect()

    def tearDown(self):
        self.client.close()
        self.vlc.stop()

    def test_greeting(self):
        self.assertIn("Command Line Interface initialized", self.client.socket.greeting)

    def test_get_and_set_volume(self):
        self.assertEqual(self.client.get_volume(), MAX_VOLUME)

        self.assertEqual(self.client.set_volume(25), 25)
        self.assertEqual(self.client.get_volume(), 25)

        self.client.set_volume(0)
        self.assertEqual(self.client.get_volume(), 0)

    def test_volume_range(self):
        for volume in range(0, MAX_VOLUME + 1, 20):
            self.client.set_volume(volume)
            self.assertEqual(self.client.get_volume(), volume)

    def test_volume_clamped(self):
        self.assertEqual(self.client.set_volume(MAX_VOLUME + 50), MAX_VOLUME)
        self.assertEqual(self.vlc.volume.value, MAX_VOLUME)
        self.assertEqual(self.client.set_volume(-3), 0)

    def test_play_and_stop(self):
        self.client.play()
        self.assertTrue(self.client.is_playing())
        self.assertEqual(self.client.get_state(), STATE_PLAYING)

        self.client.stop()
        self.assertFalse(self.client.is_playing())
        self.assertEqual(self.client.get_state(), STATE_STOPPED)

    def test_pause(self):
        # nothing happens when stopped
        self.assertFalse(self.client.pause())
        self.assertNotIn("pause", self.vlc.received)

        self.client.play()
        self.assertTrue(self.client.pause())
        self.assertEqual(self.client.get_state(), STATE_PAUSED)
        # paused still counts as playing
        self.assertTrue(self.client.is_playing())

        # pausing twice doesn't resume
        self.client.pause()
        self.assertEqual(self.client.get_state(), STATE_PAUSED)

    def test_forward_and_rewind(self):
        self.client.play()
        self.client.pause()
        self.assertEqual(self.client.get_time(), 0)

        self.client.forward(10)
        self.assertEqual(self.client.get_time(), 10)

        self.client.rewind(5)
        self.assertEqual(self.client.get_time(), 5)

        self.client.rewind(50)
        self.assertEqual(self.client.get_time(), 0)

        self.client.seek(42)
        self.assertEqual(self.client.get_time(), 42)
        self.assertIn("seek +10", self.vlc.received)
        self.assertIn("seek -5", self.vlc.received)

        with self.assertRaises(ValueError):
            self.client.forward(-1)

    def test_stopped_values(self):
        self.assertIsNone(self.client.get_time())
        self.assertIsNone(self.client.get_length())
        self.assertIsNone(self.client.get_title())

    def test_title_and_length(self):
        self.client.play()
        self.assertEqual(self.client.get_title(), "Chopin Nocturnes.mp3")
        self.assertEqual(self.client.get_length(), 6655)

        self.client.next()
        self.assertEqual(self.client.get_title(), "Bach (00:00:01).mp3")

        self.client.prev()
        self.client.prev()
        self.assertEqual(self.client.get_title(), "Satie - Gymnopedie No.1.flac")

    def test_playlist(self):
        self.client.play()
        playlist = self.client.playlist()
        self.assertEqual(len(playlist), 3)
        self.assertEqual(playlist[0], Track(4, "Chopin Nocturnes.mp3", "01:50:55", current=True))
        self.assertEqual(playlist[1], Track(5, "Bach (00:00:01).mp3", "00:03:20"))

    def test_subtitles(self):
        self.assertEqual(self.client.subtitles(),
                         [Subtitle(-1, "Disable *"),
                          Subtitle(2, "Track 1 - [English]"),
                          Subtitle(3, "Track 2 - [Deutsch]")])

    def test_fullscreen(self):
        self.client.fullscreen(True)
        self.assertTrue(self.vlc.fullscreen)
        self.client.fullscreen(False)
        self.assertFalse(self.vlc.fullscreen)

    def test_unknown_command(self):
        with self.assertRaises(VLCParseError):
            self.client.command("frobnicate")

        # the connection is still usable
        self.assertEqual(self.client.get_volume(), MAX_VOLUME)

    def test_unexpected_reply(self):
        self.client.play()
        with self.assertRaises(VLCParseError):
            # the title is not a number
            self.client.query_seconds("get_title")

    def test_status(self):
        self.client.play()
        status = self.client.status()
        self.assertEqual(status["state"], "playing")
        self.assertEqual(status["audio volume"], 256)
        self.assertEqual(status["new input"], "file:///music/Chopin Nocturnes.mp3")

    def test_closed(self):
        self.client.close()
        self.assertFalse(self.client.is_connected())
        with self.assertRaises(VLCIOError):
            self.client.get_volume()
        # closing twice is fine
        self.client.close()


class LaggingClientTest(ClientTest):
    """
    The same checks against a player that reports stale values after
    state changes
    """

    lag = 3


class EmptyPlaylistTest(unittest.TestCase):

    def test_play_empty_playlist(self):
        with FakeVLCServer(tracks=[]) as vlc:
            with Client(*vlc.address, retry_policy=FAST) as client:
                self.assertFalse(client.play())
                self.assertFalse(client.is_playing())
                self.assertEqual(client.playlist(), [])
                self.assertNotIn("play", vlc.received)


class ConvergenceFailureTest(unittest.TestCase):

    def test_rejected_volume(self):
        with FakeVLCServer(reject_volume=True) as vlc:
            with Client(*vlc.address, retry_policy=RetryPolicy(attempts=4, delay=0)) as client:
                with self.assertRaises(VLCConvergenceError) as cm:
                    client.set_volume(50)

                self.assertEqual(cm.exception.expected, 50)
                # the unclamped reading VLC reported
                self.assertEqual(cm.exception.observed, 256)
                self.assertEqual(cm.exception.attempts, 4)
                self.assertEqual(vlc.received.count("volume 50"), 4)

    def test_stale_volume_above_range(self):
        # VLC starts at 256 which reads as MAX_VOLUME once clamped
        with FakeVLCServer(lag=2) as vlc:
            with Client(*vlc.address, retry_policy=FAST) as client:
                client.set_volume(MAX_VOLUME)
                self.assertEqual(vlc.volume.value, MAX_VOLUME)
                self.assertGreater(vlc.received.count("volume 200"), 1)

    def test_lag_longer_than_budget(self):
        with FakeVLCServer(lag=10) as vlc:
            with Client(*vlc.address, retry_policy=RetryPolicy(attempts=3, delay=0)) as client:
                with self.assertRaises(VLCConvergenceError):
                    client.play()


class ProtocolTest(unittest.TestCase):

    def test_crlf_and_status_changes(self):
        with FakeVLCServer(newline="\r\n", status_changes=True) as vlc:
            with Client(*vlc.address, retry_policy=FAST) as client:
                client.set_volume(70)
                self.assertEqual(client.get_volume(), 70)
                self.assertEqual(client.get_volume(), 70)
                self.assertEqual(len(client.playlist()), 3)

    def test_connect_address(self):
        with FakeVLCServer() as vlc:
            client = connect("{}:{}".format(*vlc.address), retry_policy=FAST)
            try:
                self.assertTrue(client.is_connected())
                self.assertEqual(client.get_volume(), MAX_VOLUME)
            finally:
                client.close()

    def test_connection_refused(self):
        started = time.monotonic()
        with self.assertRaises(VLCConnectionError):
            Client("127.0.0.1", unused_port(), timeout=1).connect()
        self.assertLess(time.monotonic() - started, 5)

    def test_no_greeting(self):
        # a server that accepts connections but never says anything
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.bind(("127.0.0.1", 0))
            server.listen(1)
            with self.assertRaises(VLCConnectionError):
                Client(*server.getsockname(), timeout=0.2).connect()

    def test_slow_reply(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        server.listen(1)

        def serve_slowly():
            conn, _address = server.accept()
            with conn:
                conn.sendall(b"VLC media player\n> ")
                conn.recv(1024)
                time.sleep(0.5)
                try:
                    conn.sendall(b"Some Title\n> ")
                    conn.recv(1024)
                except OSError:
                    pass

        thread = threading.Thread(target=serve_slowly)
        thread.start()
        client = Client(*server.getsockname(), timeout=0.2).connect()
        try:
            with self.assertRaises(VLCIOError):
                client.get_title()
            self.assertFalse(client.is_connected())

            # the late title must not be taken as the volume
            with self.assertRaises(VLCIOError):
                client.get_volume()
        finally:
            client.close()
            thread.join()
            server.close()

    def test_server_gone(self):
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        server.listen(1)

        def serve_once():
            conn, _address = server.accept()
            conn.sendall(b"VLC media player\n> ")
            conn.recv(1024)
            conn.close()

        thread = threading.Thread(target=serve_once)
        thread.start()
        client = Client(*server.getsockname(), timeout=2).connect()
        try:
            with self.assertRaises(VLCIOError):
                client.get_volume()
        finally:
            client.close()
            thread.join()
            server.close()


if __name__ == "__main__":
    unittest.main()
