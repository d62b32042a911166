from .header import Header
from .action_bar import ActionBar
from .help_screen import HelpScreen

__all__ = [
    "Header",
    "ActionBar",
    "HelpScreen",
]
