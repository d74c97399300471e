# musicplayer/common.py
import contextlib
import json
import os
import tempfile
from pathlib import Path

SUPPORTED_EXTENSIONS = frozenset({"mp3", "wav", "ogg", "flac", "aac", "m4a", "opus", "wma"})


def file_extension(path):
    """Lower-cased extension without the dot, or '' when there is none."""
    ext = os.path.splitext(str(path))[1]
    return ext[1:].lower() if ext else ""


def is_audio_file(path, exts=SUPPORTED_EXTENSIONS):
    ext = file_extension(path)
    return bool(ext) and ext in {e.lower().lstrip(".") for e in exts}


def format_time(seconds):
    if seconds is None:
        return "??:??"
    try:
        s = int(seconds)
        m, s = divmod(s, 60)
        return f"{m:02d}:{s:02d}"
    except (TypeError, ValueError, OverflowError):
        return "??:??"


def write_json_atomic(path, data):
    """Write `data` as JSON next to `path`, then rename over it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp)
        raise
