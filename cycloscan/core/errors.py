"""Exception hierarchy for cycloscan."""


class CycloscanError(Exception):
    """Base class for all cycloscan errors."""


class FrontendError(CycloscanError):
    """A frontend is unavailable or could not parse a translation unit."""


class ConfigError(CycloscanError):
    """Configuration could not be loaded or is invalid."""
