from __future__ import annotations

import logging
from typing import Optional

from models import commands
from models.commands import Command
from models.errors import PlayerError
from models.playback import PlaybackState, Repeat, SortOrder
from models.track import Track
from services.catalog import TrackCatalog
from services.player import Player

logger = logging.getLogger(__name__)

DEFAULT_VOLUME_STEP = 1
END_OF_TRACK_TOLERANCE = 0.2


class PlaybackController:
    """Carries out transport commands against a Player and the catalog.

    Owns the repeat and sort sub-states cycled from the action bar. Player
    failures are logged and reported back as a message, never raised.
    """

    def __init__(
        self,
        catalog: TrackCatalog,
        player: Player,
        repeat: Repeat = Repeat.OFF,
        sort_order: SortOrder = SortOrder.TITLE_ASC,
        volume_step: int = DEFAULT_VOLUME_STEP,
    ):
        self.catalog = catalog
        self.player = player
        self.repeat = repeat
        self.sort_order = sort_order
        self.volume_step = volume_step

    def execute(self, command: Command) -> Optional[str]:
        """Run `command`.

        Returns:
            An error message for the user if the player failed, None otherwise.
        """
        try:
            self._dispatch(command)
        except PlayerError as e:
            logger.error(f"Player failed on {command}: {e}")
            return str(e)
        return None

    def _dispatch(self, command: Command) -> None:
        if isinstance(command, commands.Play):
            self.play(command.track)
        elif isinstance(command, commands.TogglePlay):
            self.toggle_play()
        elif isinstance(command, commands.Stop):
            self.player.stop()
        elif isinstance(command, commands.NextTrack):
            self.play_next()
        elif isinstance(command, commands.PreviousTrack):
            self.play_previous()
        elif isinstance(command, commands.SeekRelative):
            self.seek(command.seconds)
        elif isinstance(command, commands.VolumeDelta):
            self.change_volume(command.steps)
        elif isinstance(command, commands.ToggleMute):
            self.player.toggle_mute()
        elif isinstance(command, commands.CycleRepeat):
            self.repeat = self.repeat.previous() if command.backward else self.repeat.next()
            logger.info(f"Repeat set to {self.repeat.value}")
        elif isinstance(command, commands.CycleSort):
            self.sort_order = self.sort_order.previous() if command.backward else self.sort_order.next()
            self.catalog.sort(self.sort_order)
        else:
            logger.debug(f"Command {command} has no transport effect")

    def play(self, track: Track) -> None:
        """Hand `track` to the player, replacing whatever is loaded."""
        state = self.player.get_state()
        if state == PlaybackState.PLAYING:
            self.player.stop()
        elif state == PlaybackState.PAUSED:
            self.player.stop()
            self.player.resume()
        self.player.play(track.path)
        self.catalog.mark_playing(track)

    def toggle_play(self) -> None:
        """Pause when playing, resume when paused, start playing when stopped.

        When stopped, the catalog's playing track is restarted; without one the
        selected track is played.
        """
        state = self.player.get_state()
        if state == PlaybackState.PLAYING:
            self.player.pause()
        elif state == PlaybackState.PAUSED:
            self.player.resume()
        else:
            track = self.catalog.playing_track
            if track is None and not self.catalog.is_empty():
                track = self.catalog.current_selection()
            if track is not None:
                self.play(track)

    def play_next(self) -> None:
        track = self.catalog.next_track()
        if track is not None:
            self.play(track)

    def play_previous(self) -> None:
        track = self.catalog.previous_track()
        if track is not None:
            self.play(track)

    def seek(self, seconds: float) -> None:
        """Seek within the track, or skip when the jump would cross either end."""
        played, total = self.player.elapsed()
        if seconds >= 0:
            if played + seconds < total:
                self.player.seek(seconds)
            else:
                self.play_next()
        else:
            if played + seconds >= 0:
                self.player.seek(seconds)
            else:
                self.play_previous()

    def change_volume(self, steps: int) -> None:
        percent = round(self.player.get_volume() * 100) + steps * self.volume_step
        percent = max(0, min(100, percent))
        self.player.set_volume(percent / 100)

    def reconcile(self) -> None:
        """Point the catalog's playing cursor at what the player is rendering."""
        if self.player.get_state() == PlaybackState.STOPPED:
            return
        track = self.player.currently_playing()
        if track is not None:
            self.catalog.mark_playing(track)

    def tick(self) -> Optional[str]:
        """Periodic update: reconcile and apply the repeat policy at track end."""
        try:
            if self.catalog.playing_index is None:
                self.reconcile()
            if self.player.get_state() != PlaybackState.PLAYING:
                return None
            played, total = self.player.elapsed()
            if total <= 0 or played + END_OF_TRACK_TOLERANCE < total:
                return None

            if self.repeat == Repeat.THIS_TRACK:
                track = self.catalog.playing_track or self.player.currently_playing()
                if track is not None:
                    self.play(track)
            elif self.repeat == Repeat.ALL_TRACKS:
                self.play_next()
            else:
                self.player.stop()
        except PlayerError as e:
            logger.error(f"Player failed during update: {e}")
            return str(e)
        return None
