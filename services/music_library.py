import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from mutagen import File as MutagenFile

from models.track import Track

logger = logging.getLogger(__name__)


class MusicLibrary:
    """Service for discovering music files and reading their tags."""

    SUPPORTED_EXTENSIONS = {'.mp3', '.flac', '.wav', '.ogg', '.m4a'}
    DEFAULT_MUSIC_DIR = Path.home() / "Music"

    def __init__(self, music_dir: Optional[Path] = None):
        """Initialize MusicLibrary with optional custom music directory.

        Args:
            music_dir: Path to music directory. Defaults to ~/Music if not provided.
        """
        self.music_dir = music_dir or self.DEFAULT_MUSIC_DIR
        self._tracks: List[Track] = []
        self._by_path: Dict[str, Track] = {}

    def scan(self) -> List[Track]:
        """Scan music directory recursively for audio files.

        Returns:
            List of Track objects in directory walk order. Ordering for display
            is left to the catalog.

        Raises:
            FileNotFoundError: If the music directory does not exist.
        """
        if not self.music_dir.exists():
            raise FileNotFoundError(f"Music directory not found: {self.music_dir}")

        tracks = []
        for file_path in sorted(self.music_dir.rglob("*")):
            if file_path.suffix.lower() not in self.SUPPORTED_EXTENSIONS or not file_path.is_file():
                continue
            try:
                metadata = self._extract_metadata(file_path)
            except Exception as e:
                logger.warning(f"Skipping {file_path}: {e}")
                continue
            tracks.append(Track.from_file(file_path, metadata))

        self._tracks = tracks
        self._by_path = {track.path: track for track in tracks}
        logger.info(f"Scanned {len(tracks)} tracks from {self.music_dir}")
        return list(self._tracks)

    def get_tracks(self) -> List[Track]:
        """Return cached track list from the last scan."""
        return list(self._tracks)

    def get_track_by_path(self, path: str) -> Optional[Track]:
        """Retrieve a scanned track by its file path, or None if unknown."""
        return self._by_path.get(path)

    @staticmethod
    def _first_tag(tags, *names: str) -> Optional[str]:
        for name in names:
            if name in tags:
                value = tags[name]
                value = value[0] if isinstance(value, list) else value
                text = str(value).strip()
                if text:
                    return text
        return None

    @classmethod
    def _extract_metadata(cls, file_path: Path) -> Dict[str, Any]:
        """Extract metadata from audio file using mutagen.

        Args:
            file_path: Path to audio file.

        Returns:
            Dictionary containing title, artist, genre, and duration in seconds.
            Missing tags are None and filled in by Track.from_file.

        Raises:
            ValueError: If the file is not a readable audio file.
        """
        audio = MutagenFile(file_path, easy=True)

        if audio is None:
            raise ValueError(f"Could not read audio file: {file_path}")

        title = artist = genre = None
        if audio.tags:
            title = cls._first_tag(audio.tags, 'title', 'TIT2')
            artist = cls._first_tag(audio.tags, 'artist', 'TPE1')
            genre = cls._first_tag(audio.tags, 'genre', 'TCON')

        duration = 0.0
        if audio.info and hasattr(audio.info, 'length'):
            duration = float(audio.info.length)

        return {
            'title': title,
            'artist': artist,
            'genre': genre,
            'duration': duration
        }
