from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict

UNKNOWN = "Unknown"


def format_time(seconds: float) -> str:
    """Format a number of seconds as a zero-padded "MM:SS" string.

    Minutes are not wrapped into hours, so a 75 minute track renders as "75:00".
    """
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class Track:
    """Represents a music track with metadata.

    Tracks are immutable; two tracks are equal when every field matches.
    The path is the practical identity of a track inside a library.
    """
    title: str
    artist: str
    genre: str
    duration: float  # seconds
    path: str

    @property
    def duration_text(self) -> str:
        """Duration rendered the way it is displayed and searched ("MM:SS")."""
        return format_time(self.duration)

    def with_changes(self, **changes: Any) -> Track:
        """Return a copy of this track with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_file(cls, file_path: Path, metadata: Dict[str, Any]) -> Track:
        """Build a Track from a file path and extracted tag metadata.

        Missing or empty tags fall back to "Unknown", a missing title to the file stem.
        """
        return cls(
            title=metadata.get('title') or file_path.stem,
            artist=metadata.get('artist') or UNKNOWN,
            genre=metadata.get('genre') or UNKNOWN,
            duration=float(metadata.get('duration') or 0.0),
            path=str(file_path),
        )
