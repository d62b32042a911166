from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional

MODIFIERS = ("ctrl", "alt", "shift", "meta", "super", "hyper")


class Region(Enum):
    """Top-level focus of the interface."""
    LIST = "list"
    SEEKER = "seeker"
    VOLUME = "volume"
    ACTION = "action"


class ListMode(Enum):
    """Interaction mode of the track list, meaningful only in the List region."""
    SELECT = "select"
    SEARCH = "search"
    AFTER_SEARCH = "after_search"


class PowerAction(Enum):
    """Entries of the action bar, in display order."""
    PREVIOUS_TRACK = "previous_track"
    TOGGLE_PLAY = "toggle_play"
    NEXT_TRACK = "next_track"
    STOP = "stop"
    REPEAT = "repeat"
    SORT = "sort"

    @property
    def index(self) -> int:
        return list(PowerAction).index(self)

    def shifted(self, step: int) -> PowerAction:
        members = list(PowerAction)
        return members[(self.index + step) % len(members)]


@dataclass(frozen=True)
class Anticipation:
    """Pending first key of a two-key sequence such as "gg".

    `pending` is None when no sequence is in progress.
    """
    pending: Optional[str] = None

    @property
    def is_normal(self) -> bool:
        return self.pending is None


NORMAL = Anticipation()


@dataclass(frozen=True)
class KeyPress:
    """A keyboard event reduced to what the input state machine needs.

    `key` is the key name ("j", "G", "enter", "space", "escape", "backspace", ...),
    `character` the printable character it produces, if any.
    """
    key: str
    character: Optional[str] = None
    modifiers: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, name: str, character: Optional[str] = None) -> KeyPress:
        """Build a KeyPress from a Textual style key name such as "alt+j" or "ctrl+d".

        A lone shift on a letter is folded into the upper-case letter so that
        "shift+g" and "G" are the same key.
        """
        parts = name.split("+")
        modifiers = frozenset(p for p in parts[:-1] if p in MODIFIERS)
        key = parts[-1] or "+"
        if modifiers == {"shift"} and len(key) == 1 and key.isalpha():
            key = key.upper()
            modifiers = frozenset()
        if character is None and not modifiers:
            if len(key) == 1:
                character = key
            elif key == "space":
                character = " "
        if character is not None and not character.isprintable():
            character = None
        return cls(key=key, character=character, modifiers=modifiers)

    @property
    def is_plain(self) -> bool:
        return not self.modifiers

    def is_char(self, char: str) -> bool:
        """True for an unmodified key producing exactly `char`."""
        return self.is_plain and self.character == char

    def is_alt(self, key: str) -> bool:
        return self.modifiers == {"alt"} and self.key == key

    def is_ctrl(self, key: str) -> bool:
        return self.modifiers == {"ctrl"} and self.key == key


@dataclass(frozen=True)
class InputState:
    """Complete state of the input state machine.

    Region, mode and anticipation are independent; the search buffer and the
    highlighted action travel with them so that the whole state is one value.
    """
    region: Region = Region.LIST
    mode: ListMode = ListMode.SELECT
    anticipation: Anticipation = NORMAL
    search_buffer: str = ""
    action: PowerAction = PowerAction.PREVIOUS_TRACK

    def evolve(self, **changes) -> InputState:
        return replace(self, **changes)
