"""Playback/selection controller for the preview surface.

Mediates between the single active media element and the selected clip.
A change of media source always stops playback and rewinds to 0.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from src.exceptions import NoActiveClipError
from src.schemas.timeline import Clip
from src.utils.timecode import format_timecode

logger = logging.getLogger(__name__)


class MediaElement(Protocol):
    """Transport surface of the preview player."""

    def load(self, url: str | None) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...


class HeadlessMediaElement:
    """Media element with no output, used when nothing renders the preview."""

    def __init__(self) -> None:
        self.source: str | None = None
        self.paused = True

    def load(self, url: str | None) -> None:
        self.source = url
        self.paused = True

    def play(self) -> None:
        self.paused = False

    def pause(self) -> None:
        self.paused = True


@dataclass
class PlaybackState:
    playing: bool = False
    current_time: float = 0.0
    source: str | None = None
    selected_clip_id: str | None = None


class PlaybackController:
    def __init__(self, media: MediaElement | None = None) -> None:
        self._media: MediaElement = media or HeadlessMediaElement()
        self._state = PlaybackState()
        self._selected: Clip | None = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def selected_clip(self) -> Clip | None:
        return self._selected

    @property
    def is_playing(self) -> bool:
        return self._state.playing

    @property
    def current_time(self) -> float:
        return self._state.current_time

    @property
    def timecode(self) -> str:
        return format_timecode(self._state.current_time)

    def select_clip(self, clip: Clip) -> None:
        self._selected = clip
        self._state.selected_clip_id = clip.id
        if clip.url != self._state.source:
            self._load(clip.url)

    def clear_selection(self) -> None:
        self._selected = None
        self._state.selected_clip_id = None
        self._load(None)

    def toggle_playback(self) -> bool:
        """Flip play/pause and drive the media element. Returns the new state."""
        if self._selected is None:
            raise NoActiveClipError()
        if self._state.playing:
            self._media.pause()
        else:
            self._media.play()
        self._state.playing = not self._state.playing
        return self._state.playing

    def on_time_update(self, seconds: float) -> None:
        self._state.current_time = seconds

    def _load(self, url: str | None) -> None:
        if self._state.playing:
            self._media.pause()
        self._media.load(url)
        self._state.source = url
        self._state.current_time = 0.0
        self._state.playing = False
        logger.debug("Preview source changed to %s", url)
