"""
Playlist/playback engine.

PlaylistEngine owns the playlist, the shuffle order and the playback
state, and drives an AudioSink. UI layers call its commands and call
`tick()` periodically so natural track ends trigger auto-advance.
"""

import dataclasses
import logging
import math
import os
from enum import Enum

from .common import SUPPORTED_EXTENSIONS, is_audio_file
from .errors import IndexOutOfRange, InvalidVolume, LoadError, NotPlayable, SeekOutOfBounds
from .playlist import Snapshot
from .shuffle import ShuffleOrder
from .state import PlaybackState, Status
from .track import TrackEntry

logger = logging.getLogger(__name__)


class EndOfPlaylist(Enum):
    """What auto-advance does after the last track of the ordering."""

    STOP = "stop"
    LOOP = "loop"


class PlaylistEngine:
    def __init__(self, sink, rng=None, end_of_playlist=EndOfPlaylist.STOP,
                 track_factory=None, volume=1.0):
        self._sink = sink
        self._tracks: list[TrackEntry] = []
        self._shuffle = ShuffleOrder(rng)
        self._state = PlaybackState()
        self._make_track = track_factory or TrackEntry.from_path
        self._loaded = None  # path currently opened in the sink
        self._duration = None
        self._closed = False
        self.end_of_playlist = EndOfPlaylist(end_of_playlist)
        self.last_error = None
        self.volume = 1.0
        self.set_volume(volume)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __len__(self):
        return len(self._tracks)

    # -- queries ---------------------------------------------------------

    @property
    def tracks(self) -> tuple[TrackEntry, ...]:
        return tuple(self._tracks)

    @property
    def status(self) -> Status:
        return self._state.status

    @property
    def current_index(self) -> int | None:
        return self._state.current_index

    @property
    def current_track(self) -> TrackEntry | None:
        if self._state.current_index is None:
            return None
        return self._tracks[self._state.current_index]

    @property
    def shuffle_enabled(self) -> bool:
        return self._state.shuffle_enabled

    @property
    def shuffle_order(self) -> list[int]:
        return self._shuffle.order

    @property
    def position(self) -> float:
        if self._state.is_playing:
            self._state.position = self._sink.elapsed()
        return self._state.position

    @property
    def duration(self) -> float | None:
        if self._duration is not None:
            return self._duration
        track = self.current_track
        return track.length if track is not None else None

    @property
    def state(self) -> PlaybackState:
        """Copy of the playback state, for rendering."""
        return dataclasses.replace(self._state)

    # -- playlist mutation -----------------------------------------------

    def add_tracks(self, paths, extensions=SUPPORTED_EXTENSIONS) -> int:
        """
        Append the audio files among `paths`, in the order given.

        Non-audio files and paths already in the playlist are skipped.
        Under shuffle the new tracks are queued after the current pass.
        Returns the number of tracks added.
        """
        known = {t.path for t in self._tracks}
        new = []
        for p in paths:
            p = os.fspath(p)
            if not (is_audio_file(p, extensions) and is_audio_file(p)):
                logger.debug("not an audio file: %s", p)
                continue
            path = os.path.abspath(p)
            if path in known:
                logger.debug("already in playlist: %s", path)
                continue
            known.add(path)
            new.append(self._make_track(path))
        if not new:
            return 0

        was_empty = not self._tracks
        self._tracks.extend(new)
        if self._state.shuffle_enabled:
            if was_empty:
                self._shuffle.generate(len(self._tracks), self._state.current_index)
            else:
                self._shuffle.extend(len(new))
        logger.info("added %d track(s), playlist has %d", len(new), len(self._tracks))
        return len(new)

    def remove_track(self, index) -> TrackEntry:
        """Remove a track. Removing the current track stops playback."""
        self._check_index(index)
        current = self.current_track
        if index == self._state.current_index:
            self._unload()
            self._state.forget()
            current = None
            logger.info("removed the current track, playback stopped")
        removed = self._tracks.pop(index)
        if current is not None:
            self._state.current_index = self._tracks.index(current)
        self._reshuffle()
        return removed

    def reorder(self, from_index, to_index) -> None:
        self._check_index(from_index)
        self._check_index(to_index)
        if from_index == to_index:
            return
        current = self.current_track
        entry = self._tracks.pop(from_index)
        self._tracks.insert(to_index, entry)
        if current is not None:
            self._state.current_index = self._tracks.index(current)
        self._reshuffle()

    def move_up(self, index) -> bool:
        self._check_index(index)
        if index == 0:
            return False
        self.reorder(index, index - 1)
        return True

    def move_down(self, index) -> bool:
        self._check_index(index)
        if index == len(self._tracks) - 1:
            return False
        self.reorder(index, index + 1)
        return True

    def clear(self) -> None:
        self._unload()
        self._state.forget()
        self._tracks.clear()
        self._shuffle.clear()

    # -- transport ---------------------------------------------------------

    def play(self, index=None) -> TrackEntry | None:
        """
        Play track `index` from the start, or with no index resume the
        paused track, restart the selected one, or start the first track
        of the active ordering.
        """
        if index is not None:
            self._check_index(index)
            return self._load(index, autostart=True)
        if not self._tracks:
            return None
        if self._state.is_playing:
            return self.current_track
        if self._state.is_paused:
            self._sink.play()
            self._state.resume()
            return self.current_track
        target = self._state.current_index
        if target is None:
            target = self._first_index()
        return self._load(target, autostart=True, start_at=self._state.position)

    def pause(self) -> bool:
        if not self._state.is_playing:
            return False
        position = self._sink.elapsed()
        self._sink.pause()
        return self._state.pause(position)

    def toggle_pause(self):
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def stop(self) -> None:
        self._sink.stop()
        self._state.stop()

    def next(self) -> TrackEntry | None:
        if not self._tracks:
            return None
        return self._move_to(self._step(forward=True), forward=True)

    def previous(self) -> TrackEntry | None:
        if not self._tracks:
            return None
        return self._move_to(self._step(forward=False), forward=False)

    def toggle_shuffle(self, enabled) -> None:
        enabled = bool(enabled)
        if enabled == self._state.shuffle_enabled:
            return
        self._state.shuffle_enabled = enabled
        if enabled:
            self._shuffle.generate(len(self._tracks), self._state.current_index)
        else:
            self._shuffle.clear()
        logger.info("shuffle %s", "on" if enabled else "off")

    def set_volume(self, level) -> None:
        try:
            value = float(level)
        except (TypeError, ValueError):
            raise InvalidVolume(level) from None
        if math.isnan(value) or not 0.0 <= value <= 1.0:
            raise InvalidVolume(level)
        self.volume = value
        self._sink.set_volume(value)

    def seek(self, position) -> None:
        if self._loaded is None or self._state.current_index is None:
            raise NotPlayable("no track is loaded")
        try:
            value = float(position)
        except (TypeError, ValueError):
            raise SeekOutOfBounds(position) from None
        duration = self.duration
        if not math.isfinite(value) or value < 0 or (duration is not None and value > duration):
            raise SeekOutOfBounds(position, duration)
        self._sink.seek(value)
        self._state.position = value

    def tick(self) -> bool:
        """
        Poll the sink. Returns True when a natural track end was handled.

        Only a Playing engine polls; a paused or stopped one has nothing
        in progress.
        """
        if not self._state.is_playing:
            return False
        self._state.position = self._sink.elapsed()
        if not self._sink.is_finished():
            return False
        self._auto_advance()
        return True

    # -- persistence ---------------------------------------------------------

    def to_snapshot(self) -> Snapshot:
        return Snapshot(
            tracks=[t.path for t in self._tracks],
            shuffle_enabled=self._state.shuffle_enabled,
            volume=self.volume,
            last_index=self._state.current_index,
        )

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the playlist and preferences with `snapshot`. Nothing starts playing."""
        self.clear()
        self._state.shuffle_enabled = False
        self.add_tracks(snapshot.tracks)
        last = snapshot.last_index
        if last is not None and 0 <= last < len(snapshot.tracks):
            last_path = os.path.abspath(snapshot.tracks[last])
            for i, t in enumerate(self._tracks):
                if t.path == last_path:
                    self._state.select(i)
                    break
        self.toggle_shuffle(snapshot.shuffle_enabled)
        try:
            self.set_volume(snapshot.volume)
        except InvalidVolume as e:
            logger.warning("ignoring snapshot volume: %s", e)

    def close(self) -> None:
        """Stop output and release the device. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            self._sink.stop()
            self._state.stop()
        finally:
            self._sink.release()
            logger.debug("engine closed")

    # -- internals ---------------------------------------------------------

    def _check_index(self, index):
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._tracks):
            raise IndexOutOfRange(index, len(self._tracks))

    def _reshuffle(self):
        if not self._state.shuffle_enabled:
            return
        if self._tracks:
            self._shuffle.generate(len(self._tracks), self._state.current_index)
        else:
            self._shuffle.clear()

    def _unload(self):
        self._sink.stop()
        self._loaded = None
        self._duration = None

    def _first_index(self):
        if self._state.shuffle_enabled and len(self._shuffle):
            return self._shuffle.order[0]
        return 0

    def _step(self, forward):
        """Neighbour of the current track in the active ordering, wrapping around."""
        current = self._state.current_index
        if current is None:
            return self._first_index()
        if self._state.shuffle_enabled:
            self._shuffle.locate(current)
            return self._shuffle.next_index() if forward else self._shuffle.previous_index()
        step = 1 if forward else -1
        return (current + step) % len(self._tracks)

    def _at_end(self):
        current = self._state.current_index
        if current is None:
            return False
        if self._state.shuffle_enabled:
            self._shuffle.locate(current)
            return self._shuffle.is_at_end()
        return current == len(self._tracks) - 1

    def _move_to(self, index, forward):
        if self._state.is_stopped:
            # nothing audible: just move the selection
            self._state.select(index)
            if self._state.shuffle_enabled:
                self._shuffle.locate(index)
            self._loaded = None
            self._duration = None
            return self._tracks[index]
        return self._load(index, autostart=self._state.is_playing, forward=forward)

    def _load(self, index, autostart, forward=True, wrap=True, start_at=0.0):
        """
        Open track `index` in the sink, skipping tracks that fail to load.

        With `autostart` the track plays, otherwise it is selected and the
        status is left alone (advancing while paused). Each track is tried
        at most once; when none loads the engine stops and the last
        LoadError is raised.
        """
        requested = index
        error = None
        for _ in range(len(self._tracks)):
            track = self._tracks[index]
            try:
                self._duration = self._sink.load(track.path)
                if start_at:
                    self._sink.seek(start_at)
                if autostart:
                    self._sink.play()
            except LoadError as e:
                logger.warning("skipping %s: %s", track.filename, e.reason)
                self.last_error = error = e
                self._state.select(index)
                if not wrap and self._at_end():
                    break
                index = self._step(forward)
                start_at = 0.0
                continue

            self._loaded = track.path
            if self._state.shuffle_enabled:
                self._shuffle.locate(index)
            if autostart:
                self._state.start(index)
            else:
                self._state.select(index)
            self._state.position = start_at
            logger.info("%s: %s", "playing" if autostart else "loaded", track.title)
            return track

        self._unload()
        self._state.stop()
        if wrap:
            self._state.select(requested)
        logger.error("no playable track left")
        raise error

    def _auto_advance(self):
        finished = self.current_track
        logger.info("finished: %s", finished.title if finished else None)
        if self._at_end():
            if self.end_of_playlist is EndOfPlaylist.STOP:
                self._sink.stop()
                self._state.stop()
                logger.info("end of playlist")
                return
            if self._state.shuffle_enabled and len(self._tracks) > 1:
                # new pass, new order
                self._shuffle.generate(len(self._tracks), avoid_first=self._state.current_index)
                target = self._shuffle.order[0]
            else:
                target = self._step(forward=True)
        else:
            target = self._step(forward=True)
        try:
            self._load(target, autostart=True, wrap=self.end_of_playlist is EndOfPlaylist.LOOP)
        except LoadError as e:
            self.last_error = e
