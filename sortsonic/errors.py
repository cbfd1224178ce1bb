"""Exceptions raised by sortsonic."""


class SortSonicError(Exception):
    """Base class for all sortsonic errors."""


class ValidationError(SortSonicError, ValueError):
    """User input (array size) is not a positive integer."""


class DeviceUnavailable(SortSonicError):
    """The audio mixer could not be opened."""


class ConfigError(SortSonicError):
    """A configuration file is unreadable or has unknown keys."""
