"""Core data structures."""

from volcash.core.exceptions import ConfigurationError, ShapeMismatchError, VolcashError
from volcash.core.field_var import AirDensity, AshMixingRatio, EmissionMask, FieldVariable
from volcash.core.fields import FieldRegistry, FieldRequest
from volcash.core.grid import ColumnGrid
from volcash.core.models import Process, ProcessParams

__all__ = [
    "AirDensity",
    "AshMixingRatio",
    "ColumnGrid",
    "ConfigurationError",
    "EmissionMask",
    "FieldRegistry",
    "FieldRequest",
    "FieldVariable",
    "Process",
    "ProcessParams",
    "ShapeMismatchError",
    "VolcashError",
]
