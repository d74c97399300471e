# musicplayer/config.py
import json
import logging
import os
from pathlib import Path

from .common import write_json_atomic
from .errors import PersistenceError

logger = logging.getLogger(__name__)

APP_NAME = "musicplayer"

DEFAULT_CONFIG = {
    "music_dir": None,
    "volume": 0.5,
    "end_of_playlist": "stop",  # stop|loop
    "log_level": "INFO",
}


def get_config_dir() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_data_dir() -> Path:
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def get_config_file() -> Path:
    return get_config_dir() / "config.json"


def get_config_location_description():
    return f"Configuration is stored at: {get_config_file()}"


def load_config(path=None):
    """Saved settings merged over DEFAULT_CONFIG. Never raises."""
    path = Path(path) if path else get_config_file()
    cfg = dict(DEFAULT_CONFIG)
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                saved = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("config file no good (%s), using defaults", e)
            return cfg
        if isinstance(saved, dict):
            cfg.update(saved)
        else:
            logger.warning("config file %s is not an object, using defaults", path)
    return cfg


def save_config(new_cfg: dict, path=None):
    path = Path(path) if path else get_config_file()
    cfg = load_config(path)  # always start with existing config
    cfg.update(new_cfg)  # merge new values
    try:
        write_json_atomic(path, cfg)
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(path, e) from e
    return cfg
