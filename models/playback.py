from __future__ import annotations

from enum import Enum


class PlaybackState(Enum):
    """Status reported by a Player."""
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


class Repeat(Enum):
    """What happens when the playing track reaches its end."""
    THIS_TRACK = "ThisTrack"
    ALL_TRACKS = "AllTracks"
    OFF = "Off"

    @property
    def label(self) -> str:
        return _REPEAT_LABELS[self]

    def next(self) -> Repeat:
        """ThisTrack -> AllTracks -> Off -> ThisTrack."""
        return _cycle(list(Repeat), self, 1)

    def previous(self) -> Repeat:
        return _cycle(list(Repeat), self, -1)


class SortOrder(Enum):
    """Orderings the catalog can apply to the full collection."""
    TITLE_ASC = "TitleAsc"
    TITLE_DESC = "TitleDesc"
    DURATION_ASC = "DurationAsc"
    DURATION_DESC = "DurationDesc"
    SHUFFLE = "Shuffle"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]

    def next(self) -> SortOrder:
        """TitleAsc -> TitleDesc -> DurationAsc -> DurationDesc -> Shuffle -> TitleAsc."""
        return _cycle(list(SortOrder), self, 1)

    def previous(self) -> SortOrder:
        return _cycle(list(SortOrder), self, -1)


_REPEAT_LABELS = {
    Repeat.THIS_TRACK: "RepeatTrack",
    Repeat.ALL_TRACKS: "RepeatList",
    Repeat.OFF: "NoRepeat",
}

_SORT_LABELS = {
    SortOrder.TITLE_ASC: "TitleAscending",
    SortOrder.TITLE_DESC: "TitleDescending",
    SortOrder.DURATION_ASC: "DurationAscending",
    SortOrder.DURATION_DESC: "DurationDescending",
    SortOrder.SHUFFLE: "Shuffle",
}


def _cycle(members, current, step):
    index = members.index(current)
    return members[(index + step) % len(members)]
