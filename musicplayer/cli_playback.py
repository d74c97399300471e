# musicplayer/cli_playback.py
import logging
import os

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, ProgressBar, Static

from .common import format_time
from .config import save_config
from .dialogs import AddFolderDialog
from .engine import EndOfPlaylist
from .errors import PersistenceError, PlayerError
from .playlist import expand_paths, save_snapshot
from .state import Status

logger = logging.getLogger(__name__)

SEEK_STEP = 5.0
VOLUME_STEP = 0.05


class MusicPlayerApp(App):

    CSS = """
    #playlist_panel { width: 55%; }
    #now_panel { padding: 1 2; }
    #title { text-style: bold; }
    #status { width: 40; }
    AddFolderDialog { align: center middle; }
    #dlg_container { width: 60; height: auto; border: round $accent; padding: 1; }
    """
    BINDINGS = [
        ("space", "play_pause", "Play/Pause"),
        ("n", "next", "Next"),
        ("p", "prev", "Previous"),
        ("x", "stop", "Stop"),
        ("s", "shuffle", "Shuffle"),
        ("r", "repeat", "Repeat"),
        ("plus", "volume(1)", "Vol+"),
        ("minus", "volume(-1)", "Vol-"),
        ("right", "seek(1)", "Fwd"),
        ("left", "seek(-1)", "Back"),
        ("d", "remove", "Remove"),
        ("K", "move(-1)", "Move up"),
        ("J", "move(1)", "Move down"),
        ("g", "add_folder", "Add"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, engine, cfg=None, snapshot_path=None, config_path=None):
        super().__init__()
        self.engine = engine
        self.cfg = cfg or {}
        self.music_dir = self.cfg.get("music_dir")
        self.snapshot_path = snapshot_path
        self.config_path = config_path
        self._rendered_index = None
        self._shut_down = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal():
            # left playlist
            with VerticalScroll(id="playlist_panel"):
                self.list_view = ListView()
                yield self.list_view
            # now playing and controls
            with Vertical(id="now_panel"):
                self.lbl_title = Label("No song selected", id="title")
                yield self.lbl_title
                self.lbl_artist = Label("", id="artist")
                yield self.lbl_artist
                self.progress = ProgressBar(total=100, show_eta=False)
                yield self.progress
                with Horizontal():
                    self.lbl_pos = Label("00:00")
                    yield self.lbl_pos
                    yield Static(" / ")
                    self.lbl_len = Label("00:00")
                    yield self.lbl_len
                with Horizontal():
                    yield Button("⏮", id="prev")
                    self.btn_play = Button("▶", id="play")
                    yield self.btn_play
                    yield Button("⏹", id="stop")
                    yield Button("⏭", id="next")
                    self.btn_shuffle = Button("Shuffle", id="shuffle")
                    yield self.btn_shuffle
                    self.btn_repeat = Button("Repeat: Off", id="repeat")
                    yield self.btn_repeat
                self.lbl_volume = Label("", id="volume")
                yield self.lbl_volume
        with Horizontal(id="bottom"):
            self.status = Label("Ready", id="status")
            yield self.status
        yield Footer()

    def on_mount(self):
        self._render_playlist()
        self._refresh_controls()
        if self.engine.current_index is not None:
            self.list_view.index = self.engine.current_index
        self.set_interval(0.2, self._on_tick)

    def _render_playlist(self):
        self.list_view.clear()
        current = self.engine.current_index
        for i, item in enumerate(self.engine.tracks):
            marker = "▶ " if i == current and self.engine.status is not Status.STOPPED else ""
            label = f"{marker}{i + 1:02d}. {item.title} — {item.artist}"
            self.list_view.append(ListItem(Label(label)))
        self._rendered_index = current

    def _refresh_controls(self):
        engine = self.engine
        track = engine.current_track
        if track is not None:
            self.lbl_title.update(track.title)
            self.lbl_artist.update(track.artist)
        else:
            self.lbl_title.update("No song selected")
            self.lbl_artist.update("")
        self.btn_play.label = "⏸" if engine.status is Status.PLAYING else "▶"
        self.btn_shuffle.label = "Shuffle ✓" if engine.shuffle_enabled else "Shuffle"
        loop = engine.end_of_playlist is EndOfPlaylist.LOOP
        self.btn_repeat.label = "Repeat: All" if loop else "Repeat: Off"
        self.lbl_volume.update(f"Volume {int(round(engine.volume * 100))}%")
        self._update_progress_ui()

    def _update_progress_ui(self):
        pos_s = self.engine.position
        len_s = self.engine.duration
        self.lbl_pos.update(format_time(pos_s))
        if len_s:
            self.lbl_len.update(format_time(len_s))
            self.progress.update(progress=min(100, int((pos_s / len_s) * 100)))
        else:
            self.lbl_len.update("??:??")
            self.progress.update(progress=0)

    def _on_tick(self):
        advanced = self.engine.tick()
        if advanced:
            if self.engine.last_error is not None:
                self.status.update(str(self.engine.last_error))
                self.engine.last_error = None
            elif self.engine.status is Status.STOPPED:
                self.status.update("End of playlist")
            self._render_playlist()
            self._refresh_controls()
        else:
            self._update_progress_ui()

    def _run(self, command, *args):
        """Run an engine command, showing failures in the status bar."""
        try:
            result = command(*args)
        except PlayerError as e:
            logger.warning("%s failed: %s", command.__name__, e)
            self.status.update(str(e))
            result = None
        if self.engine.current_index != self._rendered_index:
            self._render_playlist()
        self._refresh_controls()
        return result

    async def on_list_view_selected(self, message: ListView.Selected):
        idx = message.list_view.index
        if idx is not None:
            self._run(self.engine.play, idx)
            self._render_playlist()

    async def action_play_pause(self):
        self._run(self.engine.toggle_pause)
        self._render_playlist()

    async def action_stop(self):
        self._run(self.engine.stop)
        self._render_playlist()

    async def action_next(self):
        self._run(self.engine.next)

    async def action_prev(self):
        self._run(self.engine.previous)

    async def action_shuffle(self):
        self._run(self.engine.toggle_shuffle, not self.engine.shuffle_enabled)

    async def action_repeat(self):
        if self.engine.end_of_playlist is EndOfPlaylist.STOP:
            self.engine.end_of_playlist = EndOfPlaylist.LOOP
        else:
            self.engine.end_of_playlist = EndOfPlaylist.STOP
        self._refresh_controls()

    async def action_volume(self, direction: int):
        level = min(1.0, max(0.0, self.engine.volume + direction * VOLUME_STEP))
        self._run(self.engine.set_volume, round(level, 2))

    async def action_seek(self, direction: int):
        target = max(0.0, self.engine.position + direction * SEEK_STEP)
        duration = self.engine.duration
        if duration is not None:
            target = min(target, duration)
        self._run(self.engine.seek, target)

    async def action_remove(self):
        idx = self.list_view.index
        if idx is None:
            return
        removed = self._run(self.engine.remove_track, idx)
        if removed is not None:
            self.status.update(f"Removed {removed.title}")
        self._render_playlist()

    async def action_move(self, direction: int):
        idx = self.list_view.index
        if idx is None:
            return
        command = self.engine.move_down if direction > 0 else self.engine.move_up
        if self._run(command, idx):
            self._render_playlist()
            self.list_view.index = idx + direction

    async def action_add_folder(self):
        self.run_worker(self._choose_folder(), exclusive=True)

    async def _choose_folder(self):
        dialog = AddFolderDialog(self.music_dir)
        new_path = await self.push_screen(dialog, wait_for_dismiss=True)
        self.apply_folder(new_path)

    def apply_folder(self, path):
        if not path:
            return
        path = os.path.expanduser(path)
        if not os.path.exists(path):
            self.status.update("No such file or folder")
            return
        added = self._run(self.engine.add_tracks, expand_paths([path]))
        if os.path.isdir(path):
            self.music_dir = path
        self.status.update(f"Added {added or 0} track(s)")
        self._render_playlist()

    async def action_quit(self):
        self.shutdown()
        self.exit()

    def save(self):
        try:
            save_snapshot(self.engine.to_snapshot(), self.snapshot_path)
            save_config({
                "music_dir": self.music_dir,
                "volume": self.engine.volume,
                "end_of_playlist": self.engine.end_of_playlist.value,
            }, self.config_path)
        except PersistenceError as e:
            logger.error("could not save: %s", e)
            self.status.update(f"Save failed: {e}")

    def shutdown(self):
        """Save the playlist and config, then release the engine. Runs once."""
        if self._shut_down:
            return
        self._shut_down = True
        try:
            self.save()
        finally:
            self.engine.close()

    def on_unmount(self):
        self.shutdown()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "play": self.action_play_pause,
            "stop": self.action_stop,
            "next": self.action_next,
            "prev": self.action_prev,
            "shuffle": self.action_shuffle,
            "repeat": self.action_repeat,
        }
        action = actions.get(event.button.id)
        if action is not None:
            await action()


def run_tui(engine, cfg=None, snapshot_path=None, config_path=None):
    app = MusicPlayerApp(engine, cfg, snapshot_path, config_path)
    app.run()
