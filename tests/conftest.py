"""Shared fixtures: an in-memory audio sink and engine builders."""

import logging
import os
import random

import pytest

from musicplayer.engine import EndOfPlaylist, PlaylistEngine
from musicplayer.errors import LoadError
from musicplayer.track import AudioFormat, TrackEntry

MUSIC_DIR = os.path.abspath(os.sep + "music")


class FakeSink:
    """AudioSink that records calls and lets tests end or break tracks."""

    def __init__(self, durations=None, broken=()):
        self.calls = []
        self.durations = durations or {}
        self.broken = set(broken)
        self.loaded = None
        self.playing = False
        self.finished = False
        self.volume = None
        self.released = False
        self._elapsed = 0.0

    def load(self, path):
        self.calls.append(("load", path))
        if os.path.basename(path) in self.broken:
            raise LoadError(path, "corrupt stream")
        self.loaded = path
        self.playing = False
        self.finished = False
        self._elapsed = 0.0
        return self.durations.get(os.path.basename(path))

    def play(self):
        self.calls.append(("play",))
        if self.loaded is not None:
            self.playing = True

    def pause(self):
        self.calls.append(("pause",))
        self.playing = False

    def stop(self):
        self.calls.append(("stop",))
        self.playing = False
        self._elapsed = 0.0

    def seek(self, seconds):
        self.calls.append(("seek", seconds))
        self._elapsed = seconds

    def set_volume(self, level):
        self.calls.append(("set_volume", level))
        self.volume = level

    def is_finished(self):
        self.calls.append(("is_finished",))
        return self.finished

    def elapsed(self):
        return self._elapsed

    def release(self):
        self.calls.append(("release",))
        self.released = True

    # test helpers

    def finish(self):
        self.finished = True
        self.playing = False

    def advance(self, seconds):
        self._elapsed += seconds

    def loads(self):
        return [os.path.basename(c[1]) for c in self.calls if c[0] == "load"]

    def count(self, name):
        return sum(1 for c in self.calls if c[0] == name)


def fake_track(path):
    """Track factory that never touches the disk."""
    return TrackEntry(path=path, title=os.path.basename(path), format=AudioFormat.from_path(path))


def music_path(name):
    return os.path.join(MUSIC_DIR, name)


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def make_engine():
    """make_engine('A.mp3', 'B.wav', ..., sink=None, seed=7, end_of_playlist=...)"""

    def _make(*names, sink=None, seed=7, end_of_playlist=EndOfPlaylist.STOP):
        engine = PlaylistEngine(
            sink if sink is not None else FakeSink(),
            rng=random.Random(seed),
            end_of_playlist=end_of_playlist,
            track_factory=fake_track,
        )
        if names:
            engine.add_tracks([music_path(n) for n in names])
        return engine

    return _make


@pytest.fixture
def clean_logging():
    yield
    logger = logging.getLogger("musicplayer")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
