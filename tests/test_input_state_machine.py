import pytest

from models import commands
from models.input_state import InputState, KeyPress, ListMode, PowerAction, Region
from services.catalog import TrackCatalog
from services.input_state_machine import InputStateMachine, process


def press(machine, *names):
    """Feed key names through the machine and return the last command."""
    command = None
    for name in names:
        command = machine.handle(KeyPress.parse(name))
    return command


@pytest.fixture
def machine(catalog):
    return InputStateMachine(catalog)


class TestKeyPress:
    """Tests for key event parsing."""

    def test_plain_letter(self):
        key = KeyPress.parse("j")
        assert key.key == "j"
        assert key.character == "j"
        assert key.is_plain

    def test_modifiers(self):
        key = KeyPress.parse("alt+j")
        assert key.is_alt("j")
        assert key.character is None
        assert KeyPress.parse("ctrl+d").is_ctrl("d")

    def test_shift_letter_is_upper_case(self):
        assert KeyPress.parse("shift+g") == KeyPress.parse("G")

    def test_named_keys(self):
        assert KeyPress.parse("space").character == " "
        assert KeyPress.parse("enter").character is None
        assert KeyPress.parse("slash", "/").is_char("/")
        assert KeyPress.parse("escape", "\x1b").character is None


class TestInitialState:
    """Tests for the starting state."""

    def test_defaults(self, machine):
        assert machine.region is Region.LIST
        assert machine.mode is ListMode.SELECT
        assert machine.state.anticipation.is_normal
        assert machine.search_buffer == ""


class TestSelectMode:
    """Tests for List/Select dispatch."""

    def test_j_and_k_move_with_wrap(self, machine, catalog):
        press(machine, "k")
        assert catalog.selected_index == 4
        press(machine, "j")
        assert catalog.selected_index == 0

    def test_enter_and_space_play_selection(self, machine, tracks):
        assert press(machine, "j", "enter") == commands.Play(tracks[1])
        assert press(machine, "space") == commands.Play(tracks[1])

    def test_play_on_empty_catalog_emits_nothing(self):
        machine = InputStateMachine(TrackCatalog())
        assert press(machine, "enter") is None
        assert press(machine, "j", "k", "G", "s") is None

    def test_gg_jumps_to_top(self, machine, catalog):
        press(machine, "G")
        assert catalog.selected_index == 4
        press(machine, "g")
        assert machine.state.anticipation.pending == "g"
        press(machine, "g")
        assert catalog.selected_index == 0
        assert machine.state.anticipation.is_normal

    def test_g_then_other_key_does_nothing(self, machine, catalog):
        press(machine, "G", "g")
        assert press(machine, "j") is None
        assert catalog.selected_index == 4
        assert machine.state.anticipation.is_normal
        press(machine, "g", "enter")
        assert catalog.selected_index == 4

    def test_g_then_global_key_is_consumed(self, machine):
        assert press(machine, "g", "p") is None
        assert machine.state.anticipation.is_normal

    def test_s_jumps_to_playing(self, machine, catalog, tracks):
        catalog.mark_playing(tracks[2])
        press(machine, "s")
        assert catalog.selected_index == 2

    def test_paging(self, machine, catalog):
        press(machine, "ctrl+d")
        assert catalog.selected_index == 4
        press(machine, "ctrl+u")
        assert catalog.selected_index == 0

    def test_q_quits(self, machine):
        assert press(machine, "q") == commands.Quit()

    def test_question_mark_shows_help(self, machine):
        assert machine.handle(KeyPress.parse("question_mark", "?")) == commands.ShowHelp()

    def test_slash_enters_search(self, machine):
        machine.handle(KeyPress.parse("slash", "/"))
        assert machine.mode is ListMode.SEARCH
        assert machine.search_buffer == ""


class TestSearchMode:
    """Tests for List/Search dispatch."""

    def enter_search(self, machine):
        machine.handle(KeyPress.parse("slash", "/"))

    def test_typing_filters(self, machine, catalog):
        self.enter_search(machine)
        press(machine, "s", "u", "n", "s", "e", "t")
        assert machine.search_buffer == "sunset"
        assert catalog.displayed[0].title == "Cyber Sunset"

    def test_global_keys_are_text_while_typing(self, machine):
        self.enter_search(machine)
        assert press(machine, "p", "n", "m", "q", "N") is None
        assert machine.search_buffer == "pnmqN"
        assert machine.mode is ListMode.SEARCH

    def test_space_is_text(self, machine):
        self.enter_search(machine)
        press(machine, "a", "space", "b")
        assert machine.search_buffer == "a b"

    def test_backspace_requeries(self, machine, catalog, tracks):
        self.enter_search(machine)
        press(machine, "n", "e", "o", "n")
        press(machine, "backspace", "backspace", "backspace", "backspace")
        assert machine.search_buffer == ""
        assert catalog.displayed == tracks

    def test_enter_plays_and_clears(self, machine, catalog, tracks):
        self.enter_search(machine)
        press(machine, "b", "i", "n", "a", "r", "y")
        command = press(machine, "enter")
        assert command == commands.Play(tracks[4])
        assert machine.mode is ListMode.SELECT
        assert machine.search_buffer == ""
        assert catalog.displayed == tracks

    def test_escape_keeps_buffer(self, machine, catalog):
        self.enter_search(machine)
        press(machine, "n", "e", "o", "n")
        shown = catalog.displayed
        press(machine, "escape")
        assert machine.mode is ListMode.AFTER_SEARCH
        assert machine.search_buffer == "neon"
        assert catalog.displayed == shown

    def test_region_binding_keeps_mode(self, machine):
        self.enter_search(machine)
        press(machine, "alt+k")
        assert machine.region is Region.SEEKER
        assert machine.mode is ListMode.SEARCH


class TestAfterSearchMode:
    """Tests for List/AfterSearch dispatch."""

    @pytest.fixture
    def browsing(self, machine):
        machine.handle(KeyPress.parse("slash", "/"))
        press(machine, "n", "e", "o", "n", "space", "l", "o", "v", "e")
        press(machine, "escape")
        return machine

    def test_navigation(self, browsing, catalog):
        press(browsing, "j")
        assert catalog.selected_index == 1
        press(browsing, "alt+k")
        assert catalog.selected_index == 0
        assert browsing.region is Region.LIST

    def test_slash_resumes_search(self, browsing):
        browsing.handle(KeyPress.parse("slash", "/"))
        assert browsing.mode is ListMode.SEARCH
        assert browsing.search_buffer == "neon love"

    @pytest.mark.parametrize("key", ["q", "escape"])
    def test_leave_search(self, browsing, catalog, tracks, key):
        assert press(browsing, key) is None
        assert browsing.mode is ListMode.SELECT
        assert browsing.search_buffer == ""
        assert catalog.displayed == tracks

    @pytest.mark.parametrize("key", ["enter", "space"])
    def test_play_and_leave(self, browsing, catalog, key):
        selected = catalog.current_selection()
        assert press(browsing, key) == commands.Play(selected)
        assert browsing.mode is ListMode.SELECT

    def test_global_keys_fire(self, browsing):
        assert press(browsing, "n") == commands.NextTrack()


class TestGlobalBindings:
    """Tests for bindings that work in every region."""

    @pytest.mark.parametrize("key,expected", [
        ("m", commands.ToggleMute()),
        ("p", commands.TogglePlay()),
        ("n", commands.NextTrack()),
        ("N", commands.PreviousTrack()),
    ])
    def test_in_every_region(self, machine, key, expected):
        assert press(machine, key) == expected
        for region_key in ("alt+k", "alt+h", "alt+k"):
            press(machine, region_key)
            assert press(machine, key) == expected


class TestRegions:
    """Tests for region switching and region handlers."""

    def test_region_cycle(self, machine):
        press(machine, "alt+k")
        assert machine.region is Region.SEEKER
        press(machine, "alt+l")
        assert machine.region is Region.VOLUME
        press(machine, "alt+h")
        assert machine.region is Region.SEEKER
        press(machine, "alt+k")
        assert machine.region is Region.ACTION
        press(machine, "alt+k")
        assert machine.region is Region.LIST
        press(machine, "alt+j")
        assert machine.region is Region.ACTION
        press(machine, "alt+j")
        assert machine.region is Region.SEEKER
        press(machine, "alt+j")
        assert machine.region is Region.LIST

    def test_seeker(self, machine):
        press(machine, "alt+k")
        assert press(machine, "h") == commands.SeekRelative(-5.0)
        assert press(machine, "l") == commands.SeekRelative(5.0)
        assert press(machine, "k") == commands.TogglePlay()
        assert press(machine, "j") is None
        assert press(machine, "q") == commands.Quit()

    def test_seek_step_is_configurable(self, catalog):
        machine = InputStateMachine(catalog, seek_seconds=10)
        press(machine, "alt+k")
        assert press(machine, "l") == commands.SeekRelative(10)

    def test_volume(self, machine):
        press(machine, "alt+k", "alt+l")
        assert press(machine, "h") == commands.VolumeDelta(-1)
        assert press(machine, "j") == commands.VolumeDelta(-1)
        assert press(machine, "k") == commands.VolumeDelta(1)
        assert press(machine, "l") == commands.VolumeDelta(1)

    def test_list_keys_do_nothing_outside_list(self, machine, catalog):
        press(machine, "alt+k")
        press(machine, "G")
        assert catalog.selected_index == 0


class TestActionRegion:
    """Tests for the action bar."""

    @pytest.fixture
    def actions(self, machine):
        press(machine, "alt+j")
        return machine

    def test_cursor_wraps(self, actions):
        assert actions.state.action is PowerAction.PREVIOUS_TRACK
        press(actions, "h")
        assert actions.state.action is PowerAction.SORT
        press(actions, "l", "l")
        assert actions.state.action is PowerAction.TOGGLE_PLAY

    @pytest.mark.parametrize("steps,expected", [
        (0, commands.PreviousTrack()),
        (1, commands.TogglePlay()),
        (2, commands.NextTrack()),
        (3, commands.Stop()),
        (4, commands.CycleRepeat()),
        (5, commands.CycleSort()),
    ])
    def test_perform(self, actions, steps, expected):
        for _ in range(steps):
            press(actions, "l")
        assert press(actions, "enter") == expected
        assert press(actions, "space") == expected

    def test_cycle_back(self, actions):
        assert press(actions, "alt+enter") is None
        press(actions, "h")
        assert press(actions, "alt+enter") == commands.CycleSort(backward=True)
        press(actions, "h")
        assert press(actions, "alt+enter") == commands.CycleRepeat(backward=True)


class TestProcessFunction:
    """Tests for the pure process entry point."""

    def test_returns_new_state(self, catalog):
        state = InputState()
        new_state, command = process(state, KeyPress.parse("alt+k"), catalog)
        assert command is None
        assert new_state.region is Region.SEEKER
        assert state.region is Region.LIST

    def test_unmapped_keys_are_noops(self, catalog):
        state = InputState()
        for name in ("f5", "ctrl+x", "tab", "x", "alt+x"):
            new_state, command = process(state, KeyPress.parse(name), catalog)
            assert command is None
            assert new_state == state
