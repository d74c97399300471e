# musicplayer/track.py
import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from mutagen import File as MutagenFile
from mutagen import MutagenError

from .common import file_extension

logger = logging.getLogger(__name__)


class AudioFormat(Enum):
    MP3 = "mp3"
    WAV = "wav"
    OGG = "ogg"
    FLAC = "flac"
    AAC = "aac"
    M4A = "m4a"
    OPUS = "opus"
    WMA = "wma"

    @classmethod
    def from_path(cls, path):
        try:
            return cls(file_extension(path))
        except ValueError:
            return None


def _first_tag(audio, *keys):
    for key in keys:
        value = audio.get(key)
        if value:
            return value[0] if isinstance(value, (list, tuple)) else str(value)
    return None


def read_tags(path):
    """(title, artist, length) for `path`; untagged or unreadable files get the filename as title."""
    name = os.path.basename(path)
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as e:
        logger.debug("no tags for %s: %s", path, e)
        return name, "Unknown", None
    if audio is None:
        return name, "Unknown", None
    length = getattr(getattr(audio, "info", None), "length", None)
    return (
        _first_tag(audio, "title", "TITLE") or name,
        _first_tag(audio, "artist", "ARTIST") or "Unknown",
        float(length) if length else None,
    )


@dataclass(frozen=True)
class TrackEntry:
    """One playlist item. Identity is the absolute path."""

    path: str
    title: str = field(compare=False)
    format: AudioFormat = field(compare=False)
    artist: str = field(default="Unknown", compare=False)
    length: float | None = field(default=None, compare=False)

    @classmethod
    def from_path(cls, path):
        fmt = AudioFormat.from_path(path)
        if fmt is None:
            raise ValueError(f"unsupported audio file: {path}")
        path = os.path.abspath(path)
        title, artist, length = read_tags(path)
        return cls(path=path, title=title, format=fmt, artist=artist, length=length)

    @property
    def filename(self):
        return os.path.basename(self.path)
