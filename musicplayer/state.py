"""Playback state machine: Stopped / Playing / Paused."""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Status(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass
class PlaybackState:
    status: Status = Status.STOPPED
    current_index: int | None = None
    position: float = 0.0
    shuffle_enabled: bool = False

    @property
    def is_playing(self):
        return self.status is Status.PLAYING

    @property
    def is_paused(self):
        return self.status is Status.PAUSED

    @property
    def is_stopped(self):
        return self.status is Status.STOPPED

    def _set(self, status):
        if status is not self.status:
            logger.debug("status %s -> %s", self.status.value, status.value)
        self.status = status

    def start(self, index):
        """A freshly loaded track starts from the top."""
        self.current_index = index
        self.position = 0.0
        self._set(Status.PLAYING)

    def select(self, index):
        self.current_index = index
        self.position = 0.0

    def pause(self, position=None):
        if not self.is_playing:
            return False
        if position is not None:
            self.position = position
        self._set(Status.PAUSED)
        return True

    def resume(self):
        if not self.is_paused:
            return False
        self._set(Status.PLAYING)
        return True

    def stop(self):
        # keeps current_index: stop forgets "that", not "what"
        self.position = 0.0
        self._set(Status.STOPPED)

    def forget(self):
        self.stop()
        self.current_index = None
