"""Exception types raised by showcase."""


class ShowcaseError(Exception):
    """Base class for errors the CLI reports instead of tracing."""


class ConfigError(ShowcaseError):
    """config.yaml could not be parsed or validated."""


class StoreError(ShowcaseError):
    """A record collection could not be loaded."""
