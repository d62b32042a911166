from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_TEXT = """[bold #ff8c00]🎵 tuneshelf - Terminal Music Library[/bold #ff8c00]

[bold]REGIONS[/bold]  (alt + direction)
  List        alt+k Seeker     alt+j Actions
  Seeker      alt+j List       alt+k Actions    alt+h/l Volume
  Volume      alt+j List       alt+k Actions    alt+h/l Seeker
  Actions     alt+j Seeker     alt+k List

[bold]ANYWHERE[/bold]  (except while typing a search)
  p           Play/Pause
  n / N       Next / previous track
  m           Toggle mute
  q           Quit

[bold]LIST[/bold]
  j/k         Move down/up (wraps around)
  ctrl+d/u    Move 7 rows down/up
  gg / G      First / last row
  s           Jump to the playing track
  Enter/Space Play selected track
  /           Search titles
  ?           Show this help

[bold]SEARCH[/bold]
  type        Filter as you type (best 20 matches)
  artist:x    Search artists
  duration:x  Search durations (MM:SS)
  Enter       Play selected track and clear the search
  Esc         Keep results and browse them (j/k, Enter)
  Esc / q     (while browsing) clear the search

[bold]SEEKER[/bold]
  h / l       Seek back / forward, skipping tracks at either end
  k           Play/Pause

[bold]VOLUME[/bold]
  h/j  k/l    Volume down / up

[bold]ACTIONS[/bold]
  h / l       Select action
  Enter       Run action (repeat and sort cycle forward)
  alt+Enter   Cycle repeat or sort backward"""


class HelpScreen(ModalScreen[None]):
    """Modal key reference, scrolled with j/k and closed with Esc, q or ?."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 76;
        height: 85%;
        background: #1a1a1a;
        border: round #ff8c00;
        padding: 0 1;
    }

    HelpScreen #help-body {
        height: 1fr;
    }

    HelpScreen #help-hint {
        height: 1;
        color: #888888;
        text-align: center;
    }
    """

    CLOSE_KEYS = ("escape", "q", "question_mark")

    def compose(self) -> ComposeResult:
        with Vertical():
            with VerticalScroll(id="help-body"):
                yield Static(HELP_TEXT)
            yield Static("j/k scroll · Esc close", id="help-hint")

    def on_key(self, event: events.Key) -> None:
        scroll = self.query_one("#help-body", VerticalScroll)
        if event.key in self.CLOSE_KEYS:
            self.dismiss()
        elif event.key == "j":
            scroll.scroll_down()
        elif event.key == "k":
            scroll.scroll_up()
        else:
            return
        event.stop()
        event.prevent_default()
