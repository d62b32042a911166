import logging
import time
from typing import Callable, Optional, Tuple

import pygame

from models.errors import PlayerError
from models.playback import PlaybackState
from models.track import Track

logger = logging.getLogger(__name__)

DEFAULT_VOLUME = 0.7


class AudioPlayer:
    """Local playback through pygame.mixer.

    Tracks are resolved from their path with `resolve` so the player can report
    which track it is rendering.
    """

    def __init__(self, resolve: Optional[Callable[[str], Optional[Track]]] = None):
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
        except pygame.error as e:
            raise RuntimeError(f"Could not open audio device: {e}") from e

        self._resolve = resolve or (lambda path: None)
        self._current_path: Optional[str] = None
        self._current_track: Optional[Track] = None
        self._volume: float = DEFAULT_VOLUME
        self._muted: bool = False
        self._state: PlaybackState = PlaybackState.STOPPED
        self._start_time: float = 0
        self._pause_position: float = 0

        pygame.mixer.music.set_volume(self._volume)

    def play(self, path: str) -> None:
        """Load and play an audio file."""
        try:
            pygame.mixer.music.load(path)
            pygame.mixer.music.play()
        except pygame.error as e:
            self._state = PlaybackState.STOPPED
            self._current_path = None
            self._current_track = None
            raise PlayerError(f"Cannot play {path}: {e}") from e

        self._current_path = path
        self._current_track = self._resolve(path)
        self._state = PlaybackState.PLAYING
        self._start_time = time.time()
        self._pause_position = 0
        logger.info(f"Playing {path}")

    def pause(self) -> None:
        """Pause playback."""
        if self._state == PlaybackState.PLAYING:
            pygame.mixer.music.pause()
            self._state = PlaybackState.PAUSED
            self._pause_position = time.time() - self._start_time

    def resume(self) -> None:
        """Resume playback from paused state."""
        if self._state == PlaybackState.PAUSED:
            pygame.mixer.music.unpause()
            self._state = PlaybackState.PLAYING
            self._start_time = time.time() - self._pause_position

    def stop(self) -> None:
        """Stop playback and reset position."""
        pygame.mixer.music.stop()
        self._state = PlaybackState.STOPPED
        self._start_time = 0
        self._pause_position = 0

    def seek(self, delta: float) -> None:
        """Move the play position by `delta` seconds."""
        if self._state == PlaybackState.STOPPED or self._current_path is None:
            return

        target = max(0.0, self.get_position() + delta)
        try:
            pygame.mixer.music.play(start=target)
        except pygame.error as e:
            raise PlayerError(f"Cannot seek in {self._current_path}: {e}") from e

        if self._state == PlaybackState.PAUSED:
            pygame.mixer.music.pause()
            self._pause_position = target
        else:
            self._start_time = time.time() - target

    def set_volume(self, level: float) -> None:
        """Set volume level (0.0 to 1.0)."""
        self._volume = max(0.0, min(1.0, level))
        self._muted = False
        pygame.mixer.music.set_volume(self._volume)

    def get_volume(self) -> float:
        """Return current volume level (0.0 to 1.0)."""
        return self._volume

    def toggle_mute(self) -> None:
        self._muted = not self._muted
        pygame.mixer.music.set_volume(0.0 if self._muted else self._volume)

    def is_muted(self) -> bool:
        return self._muted

    def get_state(self) -> PlaybackState:
        """Return current playback state."""
        return self._state

    def currently_playing(self) -> Optional[Track]:
        """Return the loaded track, or None before anything was played."""
        return self._current_track

    def get_position(self) -> float:
        """Return current playback position in seconds."""
        if self._state == PlaybackState.STOPPED:
            return 0.0
        elif self._state == PlaybackState.PAUSED:
            return self._pause_position
        return time.time() - self._start_time

    def elapsed(self) -> Tuple[float, float]:
        total = self._current_track.duration if self._current_track else 0.0
        position = self.get_position()
        if total:
            position = min(position, total)
        return position, total

    def shutdown(self) -> None:
        pygame.mixer.music.stop()
        pygame.mixer.quit()
