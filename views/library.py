from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Label, Static
from rich.text import Text

from models.input_state import ListMode
from services.catalog import TrackCatalog
from styles import COLOR_PRIMARY, COLOR_MUTED, PLAYING_ROW_STYLE

PLAYING_MARKER = "*"

MODE_CLASSES = {
    ListMode.SELECT: "mode-select",
    ListMode.SEARCH: "mode-search",
    ListMode.AFTER_SEARCH: "mode-after-search",
}


class TrackTable(DataTable):
    """Track table driven entirely by the catalog; keys are handled by the app."""

    can_focus = False


class LibraryView(Container):
    """Library view: the displayed tracks as a table plus the search line."""

    DEFAULT_CSS = """
    LibraryView {
        background: #1a1a1a;
        border: solid #555555;
        height: 1fr;
    }

    LibraryView.active.mode-select {
        border: solid #ff8c00;
    }

    LibraryView.active.mode-search {
        border: solid #888888;
    }

    LibraryView.active.mode-after-search {
        border: solid #ffb347;
    }

    LibraryView > Label {
        color: #ff8c00;
        text-style: bold;
    }

    LibraryView > #search-line {
        height: 1;
        display: none;
    }

    LibraryView.searching > #search-line {
        display: block;
    }
    """

    def __init__(self, catalog: TrackCatalog, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.catalog = catalog
        self._rendered_tracks = None
        self._rendered_playing = None

    def compose(self) -> ComposeResult:
        """Compose the library view with the track table."""
        yield Label("🎵 Music Library")
        table = TrackTable(id="track-table", cursor_type="row", zebra_stripes=True)
        table.add_columns("Title", "Artist", "Duration")
        yield table
        yield Static("", id="search-line")

    def refresh_view(self, active: bool, mode: ListMode, search_buffer: str) -> None:
        """Bring the table, cursor and search line in line with the catalog."""
        table = self.query_one("#track-table", TrackTable)
        displayed = self.catalog.displayed
        playing = self.catalog.playing_track

        if displayed != self._rendered_tracks or playing != self._rendered_playing:
            table.clear()
            for track in displayed:
                title = track.title
                style = ""
                if track == playing:
                    title = f"{PLAYING_MARKER}{title}"
                    style = PLAYING_ROW_STYLE
                table.add_row(
                    Text(title, style=style),
                    Text(track.artist, style=style),
                    Text(track.duration_text, style=style),
                )
            self._rendered_tracks = displayed
            self._rendered_playing = playing

        if displayed:
            table.move_cursor(row=self.catalog.selected_index, animate=False)

        self.set_class(active, "active")
        for list_mode, css_class in MODE_CLASSES.items():
            self.set_class(list_mode is mode, css_class)

        searching = mode is not ListMode.SELECT
        self.set_class(searching, "searching")
        if searching:
            line = Text("/", style=COLOR_PRIMARY)
            line.append(search_buffer, style="bold")
            if mode is ListMode.AFTER_SEARCH:
                line.append("  (Esc/q to clear)", style=COLOR_MUTED)
            self.query_one("#search-line", Static).update(line)
