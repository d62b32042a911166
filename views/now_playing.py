from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Static
from rich.text import Text

from models.playback import PlaybackState
from models.track import format_time
from services.player import Player
from styles import COLOR_BASS, COLOR_PRIMARY, COLOR_HIGHLIGHT, COLOR_MUTED, COLOR_INACTIVE

SEEKER_WIDTH = 60


class NowPlayingView(Container):
    """Seeker region: playing track, progress gauge and timer."""

    DEFAULT_CSS = """
    NowPlayingView {
        height: 5;
        border: solid #555555;
        background: #1a1a1a;
    }

    NowPlayingView.active {
        border: solid #ff8c00;
    }
    """

    def __init__(self, audio_player: Player, **kwargs):
        """Initialize NowPlayingView with a player reference."""
        super().__init__(**kwargs)
        self.audio_player = audio_player
        self._title_widget: Static | None = None
        self._seeker_widget: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("No track playing", id="np-title", classes="track-title")
            yield Static(self._render_seeker(0.0, 0.0), id="np-seeker")

    def on_mount(self) -> None:
        self._title_widget = self.query_one("#np-title", Static)
        self._seeker_widget = self.query_one("#np-seeker", Static)
        self.update_progress()

    def update_progress(self) -> None:
        """Update title and gauge from the player."""
        if self._title_widget is None:
            return

        current_track = self.audio_player.currently_playing()
        state = self.audio_player.get_state()
        played, total = self.audio_player.elapsed()

        if current_track and state != PlaybackState.STOPPED:
            title = Text(current_track.title, style=f"{COLOR_PRIMARY} bold")
            title.append(f"  {current_track.artist}", style=COLOR_MUTED)
            title.append(f"  [{state.value}]", style=COLOR_MUTED)
        else:
            title = Text("No track playing", style=COLOR_MUTED)
            played, total = 0.0, 0.0

        self._title_widget.update(title)
        self._seeker_widget.update(self._render_seeker(played, total))

    def _render_seeker(self, played: float, total: float) -> Text:
        ratio = played / total if total > 0 else 0.0
        filled = int(max(0.0, min(1.0, ratio)) * SEEKER_WIDTH)

        result = Text()
        for i in range(SEEKER_WIDTH):
            if i < filled:
                if i < SEEKER_WIDTH * 0.7:
                    result.append("━", style=COLOR_BASS)
                else:
                    result.append("━", style=COLOR_HIGHLIGHT)
            else:
                result.append("─", style=COLOR_INACTIVE)
        result.append(f" {format_time(played)}/{format_time(total)}", style=COLOR_MUTED)
        return result
