from textual.widgets import Static
from rich.text import Text

from models.input_state import PowerAction
from models.playback import Repeat, SortOrder
from styles import COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_PRIMARY

ICONS = {
    PowerAction.PREVIOUS_TRACK: "⏮",
    PowerAction.TOGGLE_PLAY: "⏵",
    PowerAction.NEXT_TRACK: "⏭",
    PowerAction.STOP: "⏹",
}


class ActionBar(Static):
    """Action region: transport buttons plus the repeat and sort states."""

    DEFAULT_CSS = """
    ActionBar {
        height: 3;
        border: solid #555555;
        background: #1a1a1a;
        padding: 0 1;
    }

    ActionBar.active {
        border: solid #ff8c00;
    }
    """

    def show_state(self, selected: PowerAction, playing: bool, repeat: Repeat,
                   sort_order: SortOrder, active: bool) -> None:
        labels = dict(ICONS)
        if playing:
            labels[PowerAction.TOGGLE_PLAY] = "⏸"
        labels[PowerAction.REPEAT] = repeat.label
        labels[PowerAction.SORT] = sort_order.label

        result = Text()
        for action in PowerAction:
            if action is selected:
                style = f"{COLOR_HIGHLIGHT} bold underline" if active else f"{COLOR_PRIMARY} underline"
            else:
                style = COLOR_MUTED
            result.append(f" {labels[action]} ", style=style)
            result.append("│", style=COLOR_MUTED)

        self.set_class(active, "active")
        self.update(result)
