from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable

from models.playback import PlaybackState
from models.track import Track


@runtime_checkable
class Player(Protocol):
    """Playback capability the controller drives.

    Implementations are synchronous; any of these calls may raise PlayerError.
    Volume is a level between 0.0 and 1.0, times are in seconds.
    """

    def play(self, path: str) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def stop(self) -> None: ...

    def seek(self, delta: float) -> None: ...

    def set_volume(self, level: float) -> None: ...

    def get_volume(self) -> float: ...

    def toggle_mute(self) -> None: ...

    def is_muted(self) -> bool: ...

    def get_state(self) -> PlaybackState: ...

    def currently_playing(self) -> Optional[Track]: ...

    def elapsed(self) -> Tuple[float, float]:
        """Return (played, total) seconds for the current track."""
        ...
