"""Keyboard input state machine.

Each key event is resolved against the (region, mode, anticipation) state in a
fixed order:

1. a pending "g" is resolved (List/Select only),
2. global bindings (mute, play/pause, next, previous), unless typing a search,
3. region bindings (alt + direction), which never change the list mode,
4. the handler of the current region, and for the List region of the current mode.

Handlers move the catalog cursors directly and return at most one transport
command. Anything unmapped is ignored; the machine never raises.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from models import commands
from models.commands import Command
from models.errors import TrackNotFoundError
from models.input_state import (
    NORMAL, Anticipation, InputState, KeyPress, ListMode, PowerAction, Region,
)
from services.catalog import TrackCatalog

logger = logging.getLogger(__name__)

DEFAULT_SEEK_SECONDS = 5.0

Result = Tuple[InputState, Optional[Command]]

GLOBAL_BINDINGS: Dict[str, Callable[[], Command]] = {
    'm': commands.ToggleMute,
    'p': commands.TogglePlay,
    'n': commands.NextTrack,
    'N': commands.PreviousTrack,
}

REGION_BINDINGS: Dict[Tuple[Region, str], Region] = {
    (Region.LIST, 'k'): Region.SEEKER,
    (Region.LIST, 'j'): Region.ACTION,
    (Region.SEEKER, 'j'): Region.LIST,
    (Region.SEEKER, 'k'): Region.ACTION,
    (Region.SEEKER, 'h'): Region.VOLUME,
    (Region.SEEKER, 'l'): Region.VOLUME,
    (Region.VOLUME, 'j'): Region.LIST,
    (Region.VOLUME, 'k'): Region.ACTION,
    (Region.VOLUME, 'h'): Region.SEEKER,
    (Region.VOLUME, 'l'): Region.SEEKER,
    (Region.ACTION, 'j'): Region.SEEKER,
    (Region.ACTION, 'k'): Region.LIST,
}

ACTION_COMMANDS: Dict[PowerAction, Callable[[], Command]] = {
    PowerAction.PREVIOUS_TRACK: commands.PreviousTrack,
    PowerAction.TOGGLE_PLAY: commands.TogglePlay,
    PowerAction.NEXT_TRACK: commands.NextTrack,
    PowerAction.STOP: commands.Stop,
    PowerAction.REPEAT: commands.CycleRepeat,
    PowerAction.SORT: commands.CycleSort,
}

SLASH_KEYS = ('/', 'slash')


def _is_confirm(key: KeyPress) -> bool:
    return key.is_plain and key.key in ('enter', 'space')


def _play_selection(catalog: TrackCatalog) -> Optional[Command]:
    try:
        return commands.Play(catalog.current_selection())
    except TrackNotFoundError:
        logger.debug("Nothing selected, play request ignored")
        return None


def process(state: InputState, key: KeyPress, catalog: TrackCatalog,
            seek_seconds: float = DEFAULT_SEEK_SECONDS) -> Result:
    """Dispatch one key event.

    Returns the new state and the command to carry out, if any.
    """
    if not state.anticipation.is_normal:
        return _resolve_anticipation(state, key, catalog)

    typing = state.region is Region.LIST and state.mode is ListMode.SEARCH

    if not typing and key.is_plain and key.character in GLOBAL_BINDINGS:
        return state, GLOBAL_BINDINGS[key.character]()

    if key.modifiers == {'alt'}:
        after_search = state.region is Region.LIST and state.mode is ListMode.AFTER_SEARCH
        if not (after_search and key.key in ('j', 'k', *SLASH_KEYS)):
            target = REGION_BINDINGS.get((state.region, key.key))
            if target is not None:
                logger.debug(f"Region {state.region.value} -> {target.value}")
                return state.evolve(region=target), None

    if state.region is Region.LIST:
        handler = _LIST_HANDLERS[state.mode]
        return handler(state, key, catalog)
    if state.region is Region.SEEKER:
        return _handle_seeker(state, key, seek_seconds)
    if state.region is Region.VOLUME:
        return _handle_volume(state, key)
    return _handle_action(state, key)


def _resolve_anticipation(state: InputState, key: KeyPress, catalog: TrackCatalog) -> Result:
    if state.anticipation.pending == 'g' and key.is_char('g'):
        catalog.jump_top()
    return state.evolve(anticipation=NORMAL), None


def _handle_select(state: InputState, key: KeyPress, catalog: TrackCatalog) -> Result:
    if key.is_ctrl('d'):
        catalog.page_down()
        return state, None
    if key.is_ctrl('u'):
        catalog.page_up()
        return state, None
    if _is_confirm(key):
        return state, _play_selection(catalog)
    if not key.is_plain:
        return state, None

    char = key.character
    if char == 'j':
        catalog.move_down()
    elif char == 'k':
        catalog.move_up()
    elif char == '/':
        return state.evolve(mode=ListMode.SEARCH, search_buffer=""), None
    elif char == 'g':
        return state.evolve(anticipation=Anticipation('g')), None
    elif char == 'G':
        catalog.jump_bottom()
    elif char == 's':
        catalog.jump_to_playing()
    elif char == 'q':
        return state, commands.Quit()
    elif char == '?':
        return state, commands.ShowHelp()
    return state, None


def _handle_search(state: InputState, key: KeyPress, catalog: TrackCatalog) -> Result:
    if not key.is_plain:
        return state, None

    if key.key == 'enter':
        command = _play_selection(catalog)
        catalog.query("")
        return state.evolve(mode=ListMode.SELECT, search_buffer=""), command
    if key.key == 'escape':
        return state.evolve(mode=ListMode.AFTER_SEARCH), None
    if key.key == 'backspace':
        buffer = state.search_buffer[:-1]
        catalog.query(buffer)
        return state.evolve(search_buffer=buffer), None
    if key.character is not None:
        buffer = state.search_buffer + key.character
        catalog.query(buffer)
        return state.evolve(search_buffer=buffer), None
    return state, None


def _handle_after_search(state: InputState, key: KeyPress, catalog: TrackCatalog) -> Result:
    if key.modifiers == {'alt'}:
        if key.key == 'j':
            catalog.move_down()
        elif key.key == 'k':
            catalog.move_up()
        elif key.key in SLASH_KEYS:
            return state.evolve(mode=ListMode.SEARCH), None
        return state, None
    if not key.is_plain:
        return state, None

    if _is_confirm(key):
        command = _play_selection(catalog)
        catalog.query("")
        return state.evolve(mode=ListMode.SELECT, search_buffer=""), command
    if key.key == 'escape' or key.character == 'q':
        catalog.query("")
        return state.evolve(mode=ListMode.SELECT, search_buffer=""), None

    char = key.character
    if char == 'j':
        catalog.move_down()
    elif char == 'k':
        catalog.move_up()
    elif char == '/':
        return state.evolve(mode=ListMode.SEARCH), None
    return state, None


def _handle_seeker(state: InputState, key: KeyPress, seek_seconds: float) -> Result:
    if not key.is_plain:
        return state, None
    char = key.character
    if char == 'h':
        return state, commands.SeekRelative(-seek_seconds)
    if char == 'l':
        return state, commands.SeekRelative(seek_seconds)
    if char == 'k':
        return state, commands.TogglePlay()
    if char == 'q':
        return state, commands.Quit()
    return state, None


def _handle_volume(state: InputState, key: KeyPress) -> Result:
    if not key.is_plain:
        return state, None
    char = key.character
    if char in ('h', 'j'):
        return state, commands.VolumeDelta(-1)
    if char in ('k', 'l'):
        return state, commands.VolumeDelta(1)
    if char == 'q':
        return state, commands.Quit()
    return state, None


def _handle_action(state: InputState, key: KeyPress) -> Result:
    if key.is_alt('enter'):
        if state.action is PowerAction.REPEAT:
            return state, commands.CycleRepeat(backward=True)
        if state.action is PowerAction.SORT:
            return state, commands.CycleSort(backward=True)
        return state, None
    if _is_confirm(key):
        return state, ACTION_COMMANDS[state.action]()
    if not key.is_plain:
        return state, None
    char = key.character
    if char == 'h':
        return state.evolve(action=state.action.shifted(-1)), None
    if char == 'l':
        return state.evolve(action=state.action.shifted(1)), None
    if char == 'q':
        return state, commands.Quit()
    return state, None


_LIST_HANDLERS = {
    ListMode.SELECT: _handle_select,
    ListMode.SEARCH: _handle_search,
    ListMode.AFTER_SEARCH: _handle_after_search,
}


class InputStateMachine:
    """Holds the current input state and feeds key events through `process`."""

    def __init__(self, catalog: TrackCatalog, seek_seconds: float = DEFAULT_SEEK_SECONDS):
        self.catalog = catalog
        self.seek_seconds = seek_seconds
        self.state = InputState()

    @property
    def region(self) -> Region:
        return self.state.region

    @property
    def mode(self) -> ListMode:
        return self.state.mode

    @property
    def search_buffer(self) -> str:
        return self.state.search_buffer

    def handle(self, key: KeyPress) -> Optional[Command]:
        self.state, command = process(self.state, key, self.catalog, self.seek_seconds)
        if command is not None:
            logger.debug(f"Key {key.key!r} -> {command}")
        return command
