"""Tests for selection-driven playback."""

from unittest.mock import MagicMock

import pytest

from src.exceptions import NoActiveClipError
from src.services.playback_controller import HeadlessMediaElement, PlaybackController


@pytest.fixture
def media():
    return MagicMock(spec=HeadlessMediaElement)


@pytest.fixture
def controller(media):
    return PlaybackController(media)


class TestSelectClip:
    def test_new_source_loads_and_resets(self, controller, media, make_clip):
        controller.select_clip(make_clip("a", url="https://x/a.mp4"))
        controller.toggle_playback()
        controller.on_time_update(3.2)

        controller.select_clip(make_clip("b", url="https://x/b.mp4"))

        assert controller.current_time == 0.0
        assert controller.is_playing is False
        assert controller.state.source == "https://x/b.mp4"
        media.load.assert_called_with("https://x/b.mp4")

    def test_same_source_keeps_position(self, controller, media, make_clip):
        controller.select_clip(make_clip("a", url="https://x/a.mp4"))
        controller.on_time_update(2.0)

        controller.select_clip(make_clip("a-copy", url="https://x/a.mp4"))

        assert controller.current_time == 2.0
        assert controller.selected_clip.id == "a-copy"
        media.load.assert_called_once()

    def test_clear_selection_unloads(self, controller, media, make_clip):
        controller.select_clip(make_clip("a", url="https://x/a.mp4"))
        controller.clear_selection()
        assert controller.selected_clip is None
        assert controller.state.source is None
        media.load.assert_called_with(None)


class TestTogglePlayback:
    def test_without_selection_raises(self, controller, media):
        with pytest.raises(NoActiveClipError):
            controller.toggle_playback()
        media.play.assert_not_called()

    def test_flips_and_drives_media(self, controller, media, make_clip):
        controller.select_clip(make_clip("a", url="https://x/a.mp4"))

        assert controller.toggle_playback() is True
        media.play.assert_called_once()

        assert controller.toggle_playback() is False
        media.pause.assert_called_once()


class TestTimeUpdate:
    def test_updates_displayed_time_only(self, controller, make_clip):
        controller.select_clip(make_clip("a", url="https://x/a.mp4"))
        controller.on_time_update(61.5)
        assert controller.timecode == "00:01:01.500"
        assert controller.is_playing is False

    def test_headless_element_tracks_state(self, make_clip):
        media = HeadlessMediaElement()
        controller = PlaybackController(media)
        controller.select_clip(make_clip("a", url="https://x/a.mp4"))
        controller.toggle_playback()
        assert media.source == "https://x/a.mp4"
        assert media.paused is False
