"""Local music player: playlist/playback engine, VLC output and a terminal UI."""

from musicplayer.engine import EndOfPlaylist, PlaylistEngine
from musicplayer.errors import (
    IndexOutOfRange,
    InvalidVolume,
    LoadError,
    NotPlayable,
    PersistenceError,
    PlayerError,
    SeekOutOfBounds,
)
from musicplayer.playlist import Snapshot, load_snapshot, save_snapshot
from musicplayer.shuffle import ShuffleOrder
from musicplayer.state import PlaybackState, Status
from musicplayer.track import AudioFormat, TrackEntry

__version__ = "0.1.0"

__all__ = [
    'AudioFormat',
    'EndOfPlaylist',
    'IndexOutOfRange',
    'InvalidVolume',
    'LoadError',
    'NotPlayable',
    'PersistenceError',
    'PlaybackState',
    'PlayerError',
    'PlaylistEngine',
    'SeekOutOfBounds',
    'ShuffleOrder',
    'Snapshot',
    'Status',
    'TrackEntry',
    'load_snapshot',
    'save_snapshot',
]
