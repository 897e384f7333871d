"""Default parameters for the volcanic eruption process."""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Mapping
from typing import Any

import pandas as pd

from volcash.core import clock
from volcash.core.exceptions import ConfigurationError
from volcash.core.field_var import AirDensity, AshMixingRatio
from volcash.core.models import ProcessParams
from volcash.physics import constants

logger = logging.getLogger(__name__)

#: Keys read from a host parameter list. Every other key is ignored.
REQUIRED_KEYS = ("eruption_date", "plume_radius", "emission_level")


@dataclasses.dataclass
class EruptionParams(ProcessParams):
    """Default volcanic eruption process parameters."""

    # ------
    # Source
    # ------

    #: Eruption onset. Any string understood by :func:`clock.parse_timestamp`,
    #: including the model format ``"YYYY-MM-DD-SSSSS"``. Required.
    eruption_date: str | pd.Timestamp | None = None

    #: Latitude of the volcano, [:math:`\deg`]
    volcano_latitude: float = constants.vesuvius_latitude

    #: Longitude of the volcano, [:math:`\deg`]
    volcano_longitude: float = constants.vesuvius_longitude

    #: Horizontal radius of the plume, [:math:`km`]. Required.
    plume_radius: float | None = None

    #: Index of the vertical level receiving the injection. Required.
    emission_level: int | None = None

    # -----------------
    # Emission profile
    # -----------------

    #: Emission rate at eruption onset
    peak_emission_rate: float = constants.peak_emission_rate

    #: Exponential decay rate of the emission, [:math:`day^{-1}`]
    decay_rate: float = constants.emission_decay_rate

    # ---------
    # Numerics
    # ---------

    #: Planetary radius used in the distance computation, [:math:`m`]
    radius_earth: float = constants.radius_earth

    #: Raise if the ambient density is not strictly positive.
    #: Set to False if the host already guarantees a valid density.
    check_density: bool = True

    #: Chunk size along the column dimension for the emission mask. If not None,
    #: the mask is backed by :mod:`dask` and each step is evaluated chunk by chunk.
    column_chunks: int | None = None

    # ------
    # Fields
    # ------

    #: Key of the tracer mixing ratio field
    tracer_name: str = AshMixingRatio.short_name

    #: Key of the ambient density field
    density_name: str = AirDensity.short_name

    @classmethod
    def from_parameter_list(cls, parameter_list: Mapping[str, Any]) -> EruptionParams:
        """Build parameters from a host parameter list.

        Parameters
        ----------
        parameter_list : Mapping[str, Any]
            Key-value parameters. Must contain ``"eruption_date"``, ``"plume_radius"``
            and ``"emission_level"``. Other keys matching a field of
            :class:`EruptionParams` override the defaults; remaining keys are ignored.

        Returns
        -------
        EruptionParams
            Parameters

        Raises
        ------
        ConfigurationError
            If a required key is missing or a value has the wrong type.
        """
        missing = [key for key in REQUIRED_KEYS if parameter_list.get(key) is None]
        if missing:
            msg = f"Missing required eruption parameter(s): {', '.join(missing)}."
            raise ConfigurationError(msg)

        names = {field.name for field in dataclasses.fields(cls)}
        kwargs = {k: v for k, v in parameter_list.items() if k in names}
        ignored = sorted(set(parameter_list).difference(names))
        if ignored:
            logger.debug("Ignoring parameter list keys %s", ignored)

        kwargs["plume_radius"] = _as_float(kwargs["plume_radius"], "plume_radius")
        kwargs["emission_level"] = _as_int(kwargs["emission_level"], "emission_level")
        for key in ("volcano_latitude", "volcano_longitude", "peak_emission_rate", "decay_rate"):
            if key in kwargs:
                kwargs[key] = _as_float(kwargs[key], key)

        return cls(**kwargs)


@dataclasses.dataclass(frozen=True)
class SourceSpec:
    """Location, footprint, and onset of the eruption.

    Validated on construction: an invalid radius, latitude, level index, or
    date raises :class:`ConfigurationError` before any field is allocated.
    The upper bound of :attr:`target_level` depends on the grid and is checked
    with :meth:`validate_level`.
    """

    #: Latitude of the source, [:math:`\deg`]
    latitude: float

    #: Longitude of the source, [:math:`\deg`]
    longitude: float

    #: Horizontal radius of the source, [:math:`km`]
    radius: float

    #: Vertical level index receiving the injection
    target_level: int

    #: Eruption onset
    eruption_start: pd.Timestamp

    def __post_init__(self) -> None:
        radius = _as_float(self.radius, "plume_radius")
        if not radius > 0.0 or not math.isfinite(radius):
            msg = f"Plume radius must be positive and finite, found {self.radius}."
            raise ConfigurationError(msg)

        latitude = _as_float(self.latitude, "volcano_latitude")
        if not -90.0 <= latitude <= 90.0:
            msg = f"Volcano latitude must be in [-90, 90], found {self.latitude}."
            raise ConfigurationError(msg)

        level = _as_int(self.target_level, "emission_level")
        if level < 0:
            msg = f"Emission level must be non-negative, found {self.target_level}."
            raise ConfigurationError(msg)

        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", _as_float(self.longitude, "volcano_longitude"))
        object.__setattr__(self, "target_level", level)
        object.__setattr__(self, "eruption_start", clock.parse_timestamp(self.eruption_start))

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> SourceSpec:
        """Build the source from :class:`EruptionParams` in dictionary form.

        Parameters
        ----------
        params : Mapping[str, Any]
            Process parameters.

        Returns
        -------
        SourceSpec
            Validated source.

        Raises
        ------
        ConfigurationError
            If a required parameter is None or invalid.
        """
        missing = [key for key in REQUIRED_KEYS if params.get(key) is None]
        if missing:
            msg = f"Missing required eruption parameter(s): {', '.join(missing)}."
            raise ConfigurationError(msg)

        return cls(
            latitude=params["volcano_latitude"],
            longitude=params["volcano_longitude"],
            radius=params["plume_radius"],
            target_level=params["emission_level"],
            eruption_start=params["eruption_date"],
        )

    @property
    def location(self) -> tuple[float, float]:
        """Source ``(latitude, longitude)``, [:math:`\\deg`]."""
        return self.latitude, self.longitude

    def validate_level(self, nlevs: int) -> None:
        """Check that :attr:`target_level` is a level index of a grid with ``nlevs`` levels.

        Parameters
        ----------
        nlevs : int
            Number of vertical levels of the grid.

        Raises
        ------
        ConfigurationError
            If :attr:`target_level` is not in ``[0, nlevs)``.
        """
        if not 0 <= self.target_level < nlevs:
            msg = (
                "Emission level out of bounds.\n"
                f" - emission_level: {self.target_level}\n"
                f" - grid num lev: {nlevs}"
            )
            raise ConfigurationError(msg)


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        msg = f"Parameter '{name}' must be a number, found {value!r}."
        raise ConfigurationError(msg)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        msg = f"Parameter '{name}' must be a number, found {value!r}."
        raise ConfigurationError(msg) from exc


def _as_int(value: Any, name: str) -> int:
    out = _as_float(value, name)
    if not out.is_integer():
        msg = f"Parameter '{name}' must be an integer, found {value!r}."
        raise ConfigurationError(msg)
    return int(out)
