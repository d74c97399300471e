"""Tests for musicplayer.state.PlaybackState transitions."""

from musicplayer.state import PlaybackState, Status


class TestPlaybackState:
    def test_initial(self):
        s = PlaybackState()
        assert s.status is Status.STOPPED
        assert s.current_index is None
        assert s.position == 0.0
        assert not s.shuffle_enabled

    def test_start_resets_position(self):
        s = PlaybackState(position=40.0)
        s.start(2)
        assert s.is_playing
        assert s.current_index == 2
        assert s.position == 0.0

    def test_pause_only_from_playing(self):
        s = PlaybackState()
        assert s.pause(5.0) is False
        assert s.is_stopped
        s.start(0)
        assert s.pause(5.0) is True
        assert s.is_paused
        assert s.position == 5.0
        assert s.pause(9.0) is False
        assert s.position == 5.0

    def test_resume_only_from_paused(self):
        s = PlaybackState()
        assert s.resume() is False
        s.start(0)
        assert s.resume() is False
        s.pause(1.0)
        assert s.resume() is True
        assert s.is_playing
        assert s.position == 1.0

    def test_stop_keeps_index(self):
        s = PlaybackState()
        s.start(3)
        s.pause(12.0)
        s.stop()
        assert s.is_stopped
        assert s.current_index == 3
        assert s.position == 0.0

    def test_select_keeps_status(self):
        s = PlaybackState()
        s.start(0)
        s.pause(3.0)
        s.select(1)
        assert s.is_paused
        assert s.current_index == 1
        assert s.position == 0.0

    def test_forget(self):
        s = PlaybackState()
        s.start(1)
        s.forget()
        assert s.is_stopped
        assert s.current_index is None
