from textual.widgets import Static
from textual.reactive import reactive
from textual.containers import Vertical
from textual.app import ComposeResult
from rich.text import Text
from styles import COLOR_BASS, COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_DIM, COLOR_INACTIVE

TITLE = "▌tuneshelf▐"

VOLUME_BAR_WIDTH = 20
DEFAULT_VOLUME_LEVEL = 70


class Header(Vertical):
    """Title line and volume region.

    The volume bar is drawn in the highlight color while the Volume region
    has focus.
    """

    DEFAULT_CSS = """
    Header {
        height: 2;
    }
    """

    volume_level: reactive[int] = reactive(DEFAULT_VOLUME_LEVEL)
    is_muted: reactive[bool] = reactive(False)
    is_active: reactive[bool] = reactive(False)

    def compose(self) -> ComposeResult:
        yield Static(Text(TITLE, style=f"{COLOR_PRIMARY} bold"), id="header-logo")
        yield Static(self._render_volume_bar(), id="header-volume")

    def _render_volume_bar(self) -> Text:
        result = Text()
        label_style = f"{COLOR_HIGHLIGHT} bold" if self.is_active else COLOR_MUTED

        result.append("Volume ", style=label_style)
        result.append("│", style=label_style)

        if self.is_muted:
            for i in range(VOLUME_BAR_WIDTH):
                result.append("─", style=COLOR_INACTIVE)
            result.append("│ ", style=label_style)
            result.append("MUTED", style=f"{COLOR_MUTED} bold")
            return result

        filled_bars = int((self.volume_level / 100) * VOLUME_BAR_WIDTH)
        for i in range(VOLUME_BAR_WIDTH):
            if i < filled_bars:
                if i < VOLUME_BAR_WIDTH * 0.5:
                    result.append("█", style=COLOR_BASS)
                elif i < VOLUME_BAR_WIDTH * 0.75:
                    result.append("█", style=COLOR_PRIMARY)
                else:
                    result.append("█", style=COLOR_HIGHLIGHT)
            else:
                result.append("─", style=COLOR_DIM if self.is_active else COLOR_INACTIVE)

        result.append("│ ", style=label_style)
        result.append(f"{self.volume_level}%", style=f"{COLOR_PRIMARY} bold")
        return result

    def _redraw(self) -> None:
        try:
            volume_widget = self.query_one("#header-volume", Static)
            volume_widget.update(self._render_volume_bar())
        except Exception:
            pass

    def watch_volume_level(self, new_value: int) -> None:
        self._redraw()

    def watch_is_muted(self, new_value: bool) -> None:
        self._redraw()

    def watch_is_active(self, new_value: bool) -> None:
        self._redraw()
