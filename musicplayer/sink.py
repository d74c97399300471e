from __future__ import annotations

from typing import Protocol


class AudioSink(Protocol):
    """Audio output the engine drives.

    Implementations decode and play one file at a time. `load` raises
    `musicplayer.errors.LoadError` for missing, unsupported or corrupt files
    and returns the track length in seconds when it is known.
    """

    def load(self, path: str) -> float | None:
        """Open `path` ready to play from the start; resets the finished flag."""

    def play(self) -> None:
        """Start or resume output of the loaded track."""

    def pause(self) -> None:
        """Hold output, keeping the position."""

    def stop(self) -> None:
        """Halt output and rewind. Safe to call when nothing is loaded."""

    def seek(self, seconds: float) -> None:
        """Jump to `seconds` into the loaded track."""

    def set_volume(self, level: float) -> None:
        """Set output volume, 0.0 to 1.0."""

    def is_finished(self) -> bool:
        """True once the loaded track has played to its natural end."""

    def elapsed(self) -> float:
        """Seconds played of the loaded track."""

    def release(self) -> None:
        """Free the output device. No other call is valid afterwards."""
