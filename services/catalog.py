from __future__ import annotations

import functools
import logging
import random
from typing import Callable, Dict, List, Optional

from models.errors import TrackNotFoundError
from models.playback import SortOrder
from models.track import Track
from services import fuzzy

logger = logging.getLogger(__name__)

QUERY_RESULT_LIMIT = 20
PAGE_SIZE = 7

QUERY_FIELDS: Dict[str, Callable[[Track], str]] = {
    'duration': lambda track: track.duration_text,
    'artist': lambda track: track.artist,
}


class TrackCatalog:
    """Holds the track library and the view the user navigates.

    `full` is the authoritative collection. It is reordered by `sort` and never
    filtered. `displayed` is what the table shows: either `full` itself after a
    sort or an empty query, or a ranked subset of it after a query.

    Two cursors are kept apart on purpose. The selection cursor indexes
    `displayed` and follows the arrow keys; the playing cursor indexes `full`
    and is what next/previous walk, whatever filter is active.
    """

    def __init__(self, tracks: Optional[List[Track]] = None, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._full: List[Track] = []
        self._displayed: List[Track] = []
        self._selected: int = 0
        self._playing: Optional[int] = None
        if tracks:
            self.load(tracks)

    @property
    def full(self) -> List[Track]:
        return list(self._full)

    @property
    def displayed(self) -> List[Track]:
        return list(self._displayed)

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def playing_index(self) -> Optional[int]:
        """Index of the playing track in `full`, or None when nothing is playing."""
        return self._playing

    @property
    def playing_track(self) -> Optional[Track]:
        if self._playing is None:
            return None
        return self._full[self._playing]

    def __len__(self) -> int:
        return len(self._full)

    def is_empty(self) -> bool:
        return not self._displayed

    def load(self, tracks: List[Track]) -> None:
        """Replace the library. Resets the view and both cursors."""
        self._full = list(tracks)
        self._displayed = list(self._full)
        self._selected = 0
        self._playing = None
        logger.info(f"Catalog loaded with {len(self._full)} tracks")

    def sort(self, order: SortOrder) -> None:
        """Reorder `full` and show all of it, discarding any active query.

        SortOrder.SHUFFLE sorts with a comparator that answers each comparison at
        random. The result is always a permutation of the library but is not a
        uniformly distributed shuffle.
        """
        playing = self.playing_track
        self._full.sort(**self._sort_arguments(order))
        self._displayed = list(self._full)
        if playing is not None:
            self._playing = self._full.index(playing)
        self._clamp_selection()
        logger.info(f"Catalog sorted by {order.value}")

    def _sort_arguments(self, order: SortOrder) -> dict:
        if order is SortOrder.TITLE_ASC:
            return {'key': lambda t: t.title}
        if order is SortOrder.TITLE_DESC:
            return {'key': lambda t: t.title, 'reverse': True}
        if order is SortOrder.DURATION_ASC:
            return {'key': lambda t: t.duration}
        if order is SortOrder.DURATION_DESC:
            return {'key': lambda t: t.duration, 'reverse': True}
        return {'key': functools.cmp_to_key(self._random_compare)}

    def _random_compare(self, _a: Track, _b: Track) -> int:
        return self._rng.choice((1, -1, 0))

    def query(self, text: str) -> None:
        """Filter and rank the view by `text`.

        "field:value" ranks `value` against one field (`duration` renders as
        "MM:SS", `artist`). An unknown field makes the whole text a title query.
        An empty text shows the full library in its current order. Only the best
        QUERY_RESULT_LIMIT tracks sharing at least one trigram are kept.
        """
        field_name, sep, value = text.partition(':')
        if sep and field_name in QUERY_FIELDS:
            self._displayed = self._best_matches(value, QUERY_FIELDS[field_name])
        elif not text:
            self._displayed = list(self._full)
        else:
            if sep:
                logger.debug(f"Unknown query field '{field_name}', searching titles")
            self._displayed = self._best_matches(text, lambda track: track.title)
        self._selected = 0
        logger.debug(f"Query '{text}' shows {len(self._displayed)} tracks")

    def _best_matches(self, value: str, field: Callable[[Track], str]) -> List[Track]:
        ranked = fuzzy.sort_ranked(
            (track, fuzzy.similarity(value, field(track))) for track in self._full
        )
        return [track for track, score in ranked[:QUERY_RESULT_LIMIT] if score > 0.0]

    def move_up(self) -> None:
        if not self._displayed:
            return
        self._selected = (self._selected - 1) % len(self._displayed)

    def move_down(self) -> None:
        if not self._displayed:
            return
        self._selected = (self._selected + 1) % len(self._displayed)

    def page_up(self, size: int = PAGE_SIZE) -> None:
        """Move the selection `size` rows up; wraps only from the first row."""
        if not self._displayed:
            return
        if self._selected == 0:
            self._selected = len(self._displayed) - 1
        else:
            self._selected = max(0, self._selected - size)

    def page_down(self, size: int = PAGE_SIZE) -> None:
        """Move the selection `size` rows down; wraps only from the last row."""
        if not self._displayed:
            return
        last = len(self._displayed) - 1
        if self._selected == last:
            self._selected = 0
        else:
            self._selected = min(last, self._selected + size)

    def jump_top(self) -> None:
        self._selected = 0

    def jump_bottom(self) -> None:
        self._selected = max(0, len(self._displayed) - 1)

    def jump_to_playing(self) -> None:
        """Select the playing track in the view, or the first row if it is not shown."""
        playing = self.playing_track
        if playing is not None and playing in self._displayed:
            self._selected = self._displayed.index(playing)
        else:
            self._selected = 0

    def current_selection(self) -> Track:
        """Return the selected track.

        Raises:
            TrackNotFoundError: If the view is empty.
        """
        if not self._displayed:
            raise TrackNotFoundError("No track is selected: the view is empty")
        return self._displayed[self._selected]

    def mark_playing(self, track: Optional[Track]) -> None:
        """Point the playing cursor at `track` in `full`, or clear it when absent."""
        if track is not None and track in self._full:
            self._playing = self._full.index(track)
        else:
            self._playing = None
        logger.debug(f"Playing cursor set to {self._playing}")

    def clear_playing(self) -> None:
        self._playing = None

    def next_track(self) -> Optional[Track]:
        """Track after the playing one in `full`, wrapping around.

        Starts from the first track when nothing is playing. Ignores any query.
        """
        if not self._full:
            return None
        if self._playing is None:
            return self._full[0]
        return self._full[(self._playing + 1) % len(self._full)]

    def previous_track(self) -> Optional[Track]:
        """Track before the playing one in `full`, wrapping around.

        Starts from the last track when nothing is playing. Ignores any query.
        """
        if not self._full:
            return None
        if self._playing is None:
            return self._full[-1]
        return self._full[(self._playing - 1) % len(self._full)]

    def find_by_path(self, path: str) -> Track:
        for track in self._full:
            if track.path == path:
                return track
        raise TrackNotFoundError(f"No track with path {path}")

    def _clamp_selection(self) -> None:
        if not self._displayed:
            self._selected = 0
        else:
            self._selected = min(self._selected, len(self._displayed) - 1)
