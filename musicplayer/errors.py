"""Errors raised by the playback engine and its collaborators."""


class PlayerError(Exception):
    """Base class for every error the player reports to its callers."""


class IndexOutOfRange(PlayerError, IndexError):
    def __init__(self, index, length):
        super().__init__(f"index {index} out of range for playlist of {length}")
        self.index = index
        self.length = length


class InvalidVolume(PlayerError, ValueError):
    def __init__(self, level):
        super().__init__(f"volume must be within 0.0..1.0, got {level!r}")
        self.level = level


class SeekOutOfBounds(PlayerError, ValueError):
    def __init__(self, position, duration=None):
        if duration is None:
            msg = f"cannot seek to {position!r}"
        else:
            msg = f"cannot seek to {position!r}s, track is {duration:.1f}s long"
        super().__init__(msg)
        self.position = position
        self.duration = duration


class NotPlayable(PlayerError):
    pass


class LoadError(PlayerError):
    """A track could not be opened or decoded."""

    def __init__(self, path, reason):
        super().__init__(f"cannot load {path}: {reason}")
        self.path = path
        self.reason = reason


class PersistenceError(PlayerError):
    """Snapshot or config could not be read or written."""

    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
