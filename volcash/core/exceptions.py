"""Custom exceptions raised by volcash processes."""


class VolcashError(Exception):
    """Base class for all volcash exceptions."""


class ConfigurationError(VolcashError, ValueError):
    """Process configuration is missing, malformed, or out of range.

    Raised at construction or setup time, before any field is allocated.
    """


class ShapeMismatchError(VolcashError, ValueError):
    """Field shape is inconsistent with the grid or the emission mask."""
