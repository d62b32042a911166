from .catalog import TrackCatalog
from .input_state_machine import InputStateMachine
from .playback_controller import PlaybackController
from .music_library import MusicLibrary

__all__ = [
    'TrackCatalog',
    'InputStateMachine',
    'PlaybackController',
    'MusicLibrary',
]
