# musicplayer/playlist.py
import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .common import SUPPORTED_EXTENSIONS, is_audio_file, write_json_atomic
from .config import get_data_dir
from .errors import PersistenceError

logger = logging.getLogger(__name__)


def default_playlist_file() -> Path:
    return get_data_dir() / "playlist.json"


def scan_folder(folder, exts=SUPPORTED_EXTENSIONS):
    """Audio files under `folder`, walked in sorted directory/file order."""
    song_files = []
    for root, dirs, files in os.walk(folder):
        dirs.sort()
        for fn in sorted(files):
            if is_audio_file(fn, exts):
                song_files.append(os.path.join(root, fn))
    return song_files


def expand_paths(paths, exts=SUPPORTED_EXTENSIONS):
    """Files pass through as given, folders are replaced by their scan."""
    out = []
    for p in paths:
        if os.path.isdir(p):
            out.extend(scan_folder(p, exts))
        else:
            out.append(os.fspath(p))
    return out


@dataclass
class Snapshot:
    tracks: list[str] = field(default_factory=list)
    shuffle_enabled: bool = False
    volume: float = 1.0
    last_index: int | None = None

    @classmethod
    def from_dict(cls, data, path="<snapshot>"):
        if not isinstance(data, dict):
            raise PersistenceError(path, "snapshot is not an object")
        snap = cls()
        tracks = data.get("tracks", [])
        if not isinstance(tracks, list) or not all(isinstance(t, str) for t in tracks):
            raise PersistenceError(path, "'tracks' must be a list of paths")
        snap.tracks = tracks
        shuffle = data.get("shuffle_enabled", False)
        if not isinstance(shuffle, bool):
            raise PersistenceError(path, "'shuffle_enabled' must be true or false")
        snap.shuffle_enabled = shuffle
        volume = data.get("volume", 1.0)
        if isinstance(volume, bool) or not isinstance(volume, (int, float)):
            raise PersistenceError(path, "'volume' must be a number")
        snap.volume = float(volume)
        last = data.get("last_index")
        if last is not None and (isinstance(last, bool) or not isinstance(last, int)):
            raise PersistenceError(path, "'last_index' must be an integer or null")
        snap.last_index = last
        return snap

    def to_dict(self):
        return asdict(self)


def load_snapshot(path=None) -> Snapshot:
    """Read a snapshot. A missing file is an empty playlist; a broken one raises PersistenceError."""
    path = Path(path) if path else default_playlist_file()
    if not path.exists():
        return Snapshot()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise PersistenceError(path, e) from e
    return Snapshot.from_dict(data, path)


def load_snapshot_or_default(path=None) -> Snapshot:
    try:
        return load_snapshot(path)
    except PersistenceError as e:
        logger.error("could not read playlist, starting empty: %s", e)
        return Snapshot()


def save_snapshot(snapshot: Snapshot, path=None) -> None:
    path = Path(path) if path else default_playlist_file()
    try:
        write_json_atomic(path, snapshot.to_dict())
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(path, e) from e
    logger.debug("saved %d track(s) to %s", len(snapshot.tracks), path)
