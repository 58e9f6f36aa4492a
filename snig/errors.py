"""Exceptions raised while building a gallery.

Every error is fatal for the run. Metadata problems are not errors: they
degrade to missing fields instead.
"""


class SnigError(Exception):
    """Base class for all gallery build failures."""


class InputNotFound(SnigError):
    """The input directory (or a required support directory) is missing."""


class ConfigError(SnigError):
    """Invalid configuration value."""


class RenderError(SnigError):
    """A single image could not be rendered."""


class DecodeError(RenderError):
    pass


class ScaleError(RenderError):
    pass


class WriteError(RenderError):
    pass


class ArchiveError(SnigError):
    pass
