"""Custom exceptions for puzzle-tickets."""


class TrackerError(Exception):
    """Base exception for issue tracker errors."""


class NotFoundError(TrackerError):
    """Issue, project or other tracker resource does not exist."""


class ConfigError(Exception):
    """Project configuration file cannot be read."""
