# musicplayer/player.py
import logging
import os
import threading
import time

import vlc

from .errors import LoadError
from .track import read_tags

logger = logging.getLogger(__name__)


class VLCSink:
    """VLC wrapper for audio playback."""

    def __init__(self, volume=0.5):
        self.instance = vlc.Instance('--no-xlib', '--no-video')  # no video
        self.player = self.instance.media_player_new()
        self.current_media = None
        self._finished = threading.Event()
        self._pending_seek = None
        self._released = False
        # VLC fires this from its own thread; only the Event crosses over
        em = self.player.event_manager()
        em.event_attach(vlc.EventType.MediaPlayerEndReached, lambda e: self._finished.set())
        self.set_volume(volume)

    def load(self, path):
        if not os.path.isfile(path):
            raise LoadError(path, "file not found")
        media = self.instance.media_new(str(path))
        if media is None:
            raise LoadError(path, "unsupported media")
        self.player.stop()
        self.player.set_media(media)
        if self.current_media is not None:
            self.current_media.release()
        self.current_media = media
        self._finished.clear()
        self._pending_seek = None
        length = read_tags(path)[2]
        logger.debug("loaded %s (%s s)", path, length)
        return length

    def play(self):
        if self.current_media is None:
            return
        if self.player.play() == -1:
            raise LoadError(self.current_media.get_mrl(), "vlc could not start playback")
        # VLC is async, give it time to start
        time.sleep(0.05)
        if self._pending_seek is not None:
            self.player.set_time(int(self._pending_seek * 1000))
            self._pending_seek = None

    def pause(self):
        if self.player.is_playing():
            self.player.set_pause(1)

    def stop(self):
        if self._released:
            return
        self.player.stop()
        self._pending_seek = None

    def seek(self, seconds):
        if self.player.is_playing() or self.player.get_state() == vlc.State.Paused:
            self.player.set_time(int(seconds * 1000))
        else:
            self._pending_seek = seconds

    def set_volume(self, level):
        vol = int(max(0.0, min(1.0, float(level))) * 100)
        self.player.audio_set_volume(vol)

    def is_finished(self):
        return self._finished.is_set() or self.player.get_state() == vlc.State.Error

    def elapsed(self):
        if self._pending_seek is not None:
            return self._pending_seek
        t = self.player.get_time()
        return t / 1000.0 if (t and t >= 0) else 0.0

    def release(self):
        if self._released:
            return
        self._released = True
        self.player.stop()
        if self.current_media is not None:
            self.current_media.release()
            self.current_media = None
        self.player.release()
        self.instance.release()
        logger.debug("vlc output released")
