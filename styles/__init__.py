"""Color palette shared by the tuneshelf views and widgets.

Textual CSS blocks repeat the hex values; keep them in sync with this table.
"""

PALETTE = {
    "bass": "#cc5500",
    "primary": "#ff8c00",
    "highlight": "#ffb347",
    "muted": "#888888",
    "dim": "#555555",
    "inactive": "#333333",
}

COLOR_BASS = PALETTE["bass"]
COLOR_PRIMARY = PALETTE["primary"]
COLOR_HIGHLIGHT = PALETTE["highlight"]
COLOR_MUTED = PALETTE["muted"]
COLOR_DIM = PALETTE["dim"]
COLOR_INACTIVE = PALETTE["inactive"]

# Row style of the track the player is rendering.
PLAYING_ROW_STYLE = f"{COLOR_HIGHLIGHT} bold"
