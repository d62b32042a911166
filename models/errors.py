"""Exception hierarchy for tuneshelf."""


class TuneshelfError(Exception):
    """Base exception for tuneshelf."""


class TrackNotFoundError(TuneshelfError, LookupError):
    """No track exists at the requested position or path."""


class ConfigurationError(TuneshelfError):
    """Configuration file could not be read or parsed."""


class PlayerError(TuneshelfError):
    """The playback backend failed to carry out a request."""
