"""Transport commands emitted by the input state machine.

The playback controller maps each of these onto Player and Catalog calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from models.track import Track


@dataclass(frozen=True)
class Play:
    track: Track


@dataclass(frozen=True)
class SeekRelative:
    """Seek by `seconds`; negative values seek backwards."""
    seconds: float


@dataclass(frozen=True)
class VolumeDelta:
    """Change the volume by `steps` volume steps (positive is louder)."""
    steps: int


@dataclass(frozen=True)
class TogglePlay:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class NextTrack:
    pass


@dataclass(frozen=True)
class PreviousTrack:
    pass


@dataclass(frozen=True)
class ToggleMute:
    pass


@dataclass(frozen=True)
class CycleRepeat:
    backward: bool = False


@dataclass(frozen=True)
class CycleSort:
    backward: bool = False


@dataclass(frozen=True)
class ShowHelp:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[
    Play, SeekRelative, VolumeDelta, TogglePlay, Stop, NextTrack, PreviousTrack,
    ToggleMute, CycleRepeat, CycleSort, ShowHelp, Quit,
]
