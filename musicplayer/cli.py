"""Command line entry point: textual UI by default, headless with --cli."""

import argparse
import logging
import os
import sys
import time

from . import __version__
from .config import get_config_location_description, load_config
from .engine import EndOfPlaylist, PlaylistEngine
from .errors import PlayerError
from .log_config import setup_logging
from .playlist import default_playlist_file, expand_paths, load_snapshot_or_default
from .state import Status

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.1


def volume_arg(text):
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError("volume must be between 0.0 and 1.0")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="musicplayer", description="Local music player")
    parser.add_argument("path", nargs="?", help="music file or folder to add")
    parser.add_argument("-c", "--cli", action="store_true",
                        help="play PATH without the terminal UI and exit when done")
    parser.add_argument("--loop", action="store_true",
                        help="start over after the last track instead of stopping")
    parser.add_argument("--shuffle", action="store_true", help="play in shuffled order")
    parser.add_argument("--volume", type=volume_arg, help="volume from 0.0 to 1.0")
    parser.add_argument("--log-level", default=None, help="console log level (default from config)")
    parser.add_argument("--where", action="store_true", help="print the config location and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def make_engine(cfg, args, sink_factory):
    try:
        policy = EndOfPlaylist(cfg.get("end_of_playlist", "stop"))
    except ValueError:
        logger.warning("unknown end_of_playlist %r, using stop", cfg.get("end_of_playlist"))
        policy = EndOfPlaylist.STOP
    if args.loop:
        policy = EndOfPlaylist.LOOP
    engine = PlaylistEngine(sink_factory(), end_of_playlist=policy)
    try:
        engine.set_volume(cfg.get("volume", 0.5))
    except PlayerError as e:
        logger.warning("ignoring configured volume: %s", e)
    return engine


def run_headless(engine, path, interval=TICK_INTERVAL, sleep=time.sleep):
    """Play everything under `path` until playback stops. Returns an exit code."""
    if not path or not os.path.exists(path):
        logger.error("Error: Path is not a file or folder: %s", path)
        return 2
    added = engine.add_tracks(expand_paths([path]))
    if not added:
        logger.error("Error: no audio files in %s", path)
        return 1
    try:
        track = engine.play()
    except PlayerError as e:
        logger.error("Error: %s", e)
        return 1
    logger.info("Playing: %s", track.path)
    current = engine.current_index
    while engine.status is not Status.STOPPED:
        sleep(interval)
        engine.tick()
        if engine.current_index != current and engine.status is Status.PLAYING:
            current = engine.current_index
            logger.info("Playing: %s", engine.current_track.path)
    if engine.last_error is not None:
        logger.warning("last error: %s", engine.last_error)
    return 0


def main(argv=None, sink_factory=None):
    args = build_parser().parse_args(argv)
    if args.where:
        print(get_config_location_description())
        return 0

    cfg = load_config()
    level = args.log_level or cfg.get("log_level", "INFO")
    setup_logging(level, console_output=args.cli)

    if sink_factory is None:
        from .player import VLCSink
        sink_factory = VLCSink

    with make_engine(cfg, args, sink_factory) as engine:
        if args.cli:
            if args.shuffle:
                engine.toggle_shuffle(True)
            if args.volume is not None:
                engine.set_volume(args.volume)
            try:
                return run_headless(engine, args.path)
            except KeyboardInterrupt:
                return 130

        from .cli_playback import run_tui
        if default_playlist_file().exists():
            engine.restore(load_snapshot_or_default())
        if args.path:
            engine.add_tracks(expand_paths([args.path]))
        if args.shuffle:
            engine.toggle_shuffle(True)
        if args.volume is not None:
            engine.set_volume(args.volume)
        run_tui(engine, cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
