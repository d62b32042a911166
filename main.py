from textual.app import App, ComposeResult
from textual import events
import asyncio
import logging
import sys
from pathlib import Path

from models import commands
from models.errors import ConfigurationError
from models.input_state import KeyPress, Region
from models.playback import PlaybackState
from services.audio_player import AudioPlayer
from services.catalog import TrackCatalog
from services.config import AppConfig, load_config
from services.input_state_machine import InputStateMachine
from services.music_library import MusicLibrary
from services.playback_controller import PlaybackController
from views import LibraryView, NowPlayingView
from widgets import ActionBar, Header, HelpScreen

PROGRESS_UPDATE_INTERVAL = 0.5

log_dir = Path.home() / '.local' / 'share' / 'tuneshelf'
log_file = log_dir / 'tuneshelf.log'

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Send all logging to the log file; the terminal belongs to Textual."""
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file)
        ]
    )


class TuneshelfApp(App):
    """Terminal music library browser driving a playback backend."""

    TITLE = "tuneshelf"

    CSS = """
    Screen {
        background: #1a1a1a;
    }
    """

    def __init__(self, config: AppConfig, *args, **kwargs):
        super().__init__(*args, **kwargs)

        logger.info("Starting tuneshelf application")
        self.config = config
        self.music_library = MusicLibrary(config.music_dir)
        self.catalog = TrackCatalog()

        try:
            self.audio_player = AudioPlayer(resolve=self.music_library.get_track_by_path)
        except RuntimeError as e:
            logger.critical(f"Failed to initialize audio player: {e}")
            raise

        self.controller = PlaybackController(
            self.catalog,
            self.audio_player,
            repeat=config.repeat,
            sort_order=config.sorting,
            volume_step=config.volume_step,
        )
        self.input_machine = InputStateMachine(self.catalog, seek_seconds=config.seek_seconds)
        logger.info("Services initialized successfully")

    def compose(self) -> ComposeResult:
        yield Header()
        yield LibraryView(self.catalog, id="library")
        yield ActionBar(id="actions")
        yield NowPlayingView(self.audio_player, id="now_playing")

    def on_mount(self) -> None:
        self.refresh_views()
        self.run_worker(self._scan_library, exclusive=True)
        self.set_interval(self.config.poll_interval, self._tick)
        self.set_interval(PROGRESS_UPDATE_INTERVAL, self._update_progress)

    async def _scan_library(self) -> None:
        """Scan music library in background thread and load it into the catalog."""
        try:
            logger.info("Starting music library scan")
            tracks = await asyncio.to_thread(self.music_library.scan)
        except FileNotFoundError as e:
            logger.error(f"Music directory not found: {e}")
            self.notify(
                f"❌ Music directory not found\n\n{self.config.music_dir}",
                severity="error",
                timeout=10
            )
            return
        except PermissionError as e:
            logger.error(f"Permission denied accessing music directory: {e}")
            self.notify(
                "❌ Cannot access music directory\n\n"
                f"Please check directory permissions for {self.config.music_dir}",
                severity="error",
                timeout=10
            )
            return

        self.catalog.load(tracks)
        self.catalog.sort(self.controller.sort_order)
        self.controller.reconcile()
        self.refresh_views()

        if not tracks:
            self.notify(
                f"No music files found in {self.config.music_dir}",
                severity="warning",
                timeout=8
            )
        else:
            self.notify(f"✓ Loaded {len(tracks)} tracks", severity="information", timeout=3)

    def on_key(self, event: events.Key) -> None:
        """Feed every key press through the input state machine."""
        if isinstance(self.screen, HelpScreen):
            return

        event.stop()
        event.prevent_default()
        key = KeyPress.parse(event.key, event.character)
        command = self.input_machine.handle(key)

        if isinstance(command, commands.Quit):
            self.exit()
            return
        if isinstance(command, commands.ShowHelp):
            self.push_screen(HelpScreen())
            return
        if command is not None:
            error = self.controller.execute(command)
            if error:
                self.notify(f"❌ {error}", severity="error", timeout=3)
        self.refresh_views()

    def _tick(self) -> None:
        error = self.controller.tick()
        if error:
            self.notify(f"❌ {error}", severity="error", timeout=3)

    def _update_progress(self) -> None:
        self.query_one("#now_playing", NowPlayingView).update_progress()
        self.refresh_views()

    def refresh_views(self) -> None:
        """Redraw every region from the catalog, input state and player."""
        machine = self.input_machine
        region = machine.region

        library = self.query_one("#library", LibraryView)
        library.refresh_view(region is Region.LIST, machine.mode, machine.search_buffer)

        actions = self.query_one("#actions", ActionBar)
        actions.show_state(
            machine.state.action,
            self.audio_player.get_state() == PlaybackState.PLAYING,
            self.controller.repeat,
            self.controller.sort_order,
            region is Region.ACTION,
        )

        now_playing = self.query_one("#now_playing", NowPlayingView)
        now_playing.set_class(region is Region.SEEKER, "active")
        now_playing.update_progress()

        header = self.query_one(Header)
        header.volume_level = round(self.audio_player.get_volume() * 100)
        header.is_muted = self.audio_player.is_muted()
        header.is_active = region is Region.VOLUME

    def on_unmount(self) -> None:
        self.audio_player.shutdown()


def main():
    """Entry point for the tuneshelf application.

    Handles initialization errors and provides user-friendly error messages.
    """
    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"\n❌ tuneshelf cannot read its configuration\n\n{e}\n")
        sys.exit(1)

    setup_logging(config.log_level)

    try:
        logger.info("=" * 60)
        logger.info("tuneshelf starting up")
        logger.info("=" * 60)

        app = TuneshelfApp(config)
        app.run()

        logger.info("tuneshelf shut down cleanly")

    except RuntimeError as e:
        logger.critical(f"Fatal error during startup: {e}")
        print("\n❌ tuneshelf cannot start\n")
        print(f"{e}\n")
        print(f"Check {log_file} for more details.\n")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("tuneshelf interrupted by user")
        print("\n\nGoodbye! 👋\n")
        sys.exit(0)
    except Exception as e:
        logger.critical(f"Unexpected fatal error: {type(e).__name__}: {e}", exc_info=True)
        print("\n❌ tuneshelf encountered an unexpected error\n")
        print(f"{type(e).__name__}: {e}\n")
        print(f"Check {log_file} for more details.\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
