class HexConvError(Exception):
    """Base class for every fatal error raised by the converter."""


class ConfigurationError(HexConvError):
    """Malformed, missing or out-of-range settings (CLI flags or TOML)."""


class ResourceError(HexConvError):
    """A raster, template or tile-definition file could not be loaded."""


class DelimiterCollisionError(HexConvError):
    """A terrain code would corrupt the map file's delimiters."""
