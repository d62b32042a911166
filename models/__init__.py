from .track import Track, format_time
from .playback import PlaybackState, Repeat, SortOrder
from .input_state import Region, ListMode, Anticipation, PowerAction, KeyPress, InputState

__all__ = [
    "Track",
    "format_time",
    "PlaybackState",
    "Repeat",
    "SortOrder",
    "Region",
    "ListMode",
    "Anticipation",
    "PowerAction",
    "KeyPress",
    "InputState",
]
