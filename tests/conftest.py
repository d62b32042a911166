import random
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from models.errors import PlayerError
from models.playback import PlaybackState
from models.track import Track
from services.catalog import TrackCatalog


def make_track(title: str, duration: float = 180.0, artist: str = "Unknown", genre: str = "Unknown") -> Track:
    return Track(
        title=title,
        artist=artist,
        genre=genre,
        duration=duration,
        path=f"/music/{title.lower().replace(' ', '_')}.mp3",
    )


class FakePlayer:
    """In-memory Player recording every call."""

    def __init__(self, library: Optional[List[Track]] = None):
        self.library = {track.path: track for track in library or []}
        self.calls: List[Tuple] = []
        self.state = PlaybackState.STOPPED
        self.current: Optional[Track] = None
        self.position = 0.0
        self.volume = 0.5
        self.muted = False
        self.fail_on: Optional[str] = None

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.fail_on == name:
            raise PlayerError(f"{name} failed")

    def play(self, path):
        self._record("play", path)
        self.current = self.library.get(path)
        self.state = PlaybackState.PLAYING
        self.position = 0.0

    def pause(self):
        self._record("pause")
        if self.state == PlaybackState.PLAYING:
            self.state = PlaybackState.PAUSED

    def resume(self):
        self._record("resume")
        if self.state == PlaybackState.PAUSED:
            self.state = PlaybackState.PLAYING

    def stop(self):
        self._record("stop")
        self.state = PlaybackState.STOPPED
        self.position = 0.0

    def seek(self, delta):
        self._record("seek", delta)
        self.position += delta

    def set_volume(self, level):
        self._record("set_volume", level)
        self.volume = level

    def get_volume(self):
        return self.volume

    def toggle_mute(self):
        self._record("toggle_mute")
        self.muted = not self.muted

    def is_muted(self):
        return self.muted

    def get_state(self):
        return self.state

    def currently_playing(self):
        return self.current

    def elapsed(self):
        total = self.current.duration if self.current else 0.0
        return self.position, total

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def tracks():
    """Five tracks with distinct titles, artists and durations."""
    return [
        make_track("Neon Dreams", 263, artist="Synthwave Collective"),
        make_track("Terminal Velocity", 225, artist="Code Warriors"),
        make_track("Pixel Paradise", 312, artist="8-Bit Heroes"),
        make_track("Cyber Sunset", 150, artist="Neon Riders"),
        make_track("Binary Love", 213, artist="Data Romance"),
    ]


@pytest.fixture
def catalog(tracks):
    return TrackCatalog(tracks, rng=random.Random(7))


@pytest.fixture
def player(tracks):
    return FakePlayer(tracks)
