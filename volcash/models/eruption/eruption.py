"""Volcanic ash injection process."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

import numpy as np
import xarray as xr

from volcash.core import clock
from volcash.core.field_var import AirDensity, AshMixingRatio, FieldVariable
from volcash.core.grid import ColumnGrid
from volcash.core.models import FieldMapping, Process, update_param_dict
from volcash.models.eruption import emission
from volcash.models.eruption.eruption_params import EruptionParams, SourceSpec
from volcash.utils.types import ArrayLike, DatetimeLike, TimedeltaLike

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class EruptionState:
    """Static data computed once by :func:`setup` and consumed by :func:`step`."""

    #: Eruption source
    source: SourceSpec

    #: Read-only emission mask with dims ``("ncol", "lev")``
    mask: xr.DataArray

    #: Emission rate at eruption onset
    peak_emission_rate: float

    #: Exponential decay rate of the emission, [:math:`day^{-1}`]
    decay_rate: float

    #: Raise on non-positive ambient density
    check_density: bool = True

    @property
    def shape(self) -> tuple[int, int]:
        """Shape ``(ncols, nlevs)`` of the fields handled by :func:`step`."""
        return self.mask.shape

    def emission_rate(self, timestamp: DatetimeLike) -> float:
        """Compute the emission rate at ``timestamp``.

        Parameters
        ----------
        timestamp : DatetimeLike
            Time stamp of interest.

        Returns
        -------
        float
            Emission rate. Zero at or before the eruption onset.
        """
        days = clock.days_between(self.source.eruption_start, timestamp)
        return emission.ash_emission_rate(days, self.peak_emission_rate, self.decay_rate)


def setup(grid: ColumnGrid, config: EruptionParams | Mapping[str, Any]) -> EruptionState:
    """Validate the configuration and build the emission mask.

    Parameters
    ----------
    grid : ColumnGrid
        Grid on which the eruption is simulated.
    config : EruptionParams | Mapping[str, Any]
        Process parameters, or a host parameter list read with
        :meth:`EruptionParams.from_parameter_list`.

    Returns
    -------
    EruptionState
        State consumed by :func:`step`.

    Raises
    ------
    ConfigurationError
        If the configuration is missing a key or holds an invalid value.
    """
    if isinstance(config, EruptionParams):
        params = config.as_dict()
    elif isinstance(config, Mapping):
        params = EruptionParams.from_parameter_list(config).as_dict()
    else:
        msg = f"Eruption configuration must be EruptionParams or a mapping, found {type(config)}"
        raise TypeError(msg)

    source = SourceSpec.from_params(params)
    return _setup(grid, source, params)


def _setup(grid: ColumnGrid, source: SourceSpec, params: Mapping[str, Any]) -> EruptionState:
    mask = emission.build_emission_mask(
        grid,
        source,
        radius_earth=params["radius_earth"],
        column_chunks=params["column_chunks"],
    )
    return EruptionState(
        source=source,
        mask=mask,
        peak_emission_rate=params["peak_emission_rate"],
        decay_rate=params["decay_rate"],
        check_density=params["check_density"],
    )


def step(
    state: EruptionState,
    timestamp: DatetimeLike,
    dt: TimedeltaLike,
    density: ArrayLike,
    tracer: ArrayLike,
) -> ArrayLike:
    """Inject the ash emitted over one time step into ``tracer``.

    The emission rate is evaluated at the *end* of the step, ``timestamp + dt``.

    Parameters
    ----------
    state : EruptionState
        State returned by :func:`setup`.
    timestamp : DatetimeLike
        Time stamp at the beginning of the step.
    dt : TimedeltaLike
        Time step. Bare numbers are interpreted as seconds.
    density : ArrayLike
        Ambient density, shape ``(ncols, nlevs)``. Not modified.
    tracer : ArrayLike
        Tracer mixing ratio, shape ``(ncols, nlevs)``.
        Updated in place when backed by a :class:`numpy.ndarray`.

    Returns
    -------
    ArrayLike
        Updated tracer. This is ``tracer`` itself when the update is done in place,
        otherwise a new (possibly lazy) array.

    Raises
    ------
    ShapeMismatchError
        If ``tracer`` or ``density`` does not match the mask shape.
    """
    step_end = clock.advance(timestamp, dt)
    rate = state.emission_rate(step_end)
    increment = emission.mass_increment(clock.timedelta_to_seconds(dt), rate)
    logger.debug("Step ending %s: emission rate %s, mass increment %s", step_end, rate, increment)

    updated = emission.apply_emission(
        tracer, density, state.mask, increment, check_density=state.check_density
    )
    return _write_back(tracer, updated)


def _write_back(tracer: ArrayLike, updated: ArrayLike) -> ArrayLike:
    """Copy ``updated`` into ``tracer`` if ``tracer`` holds its values in memory."""
    if isinstance(tracer, np.ndarray):
        target = tracer
    elif isinstance(tracer, xr.DataArray) and isinstance(tracer.data, np.ndarray):
        target = tracer.data
    else:
        return updated

    if not target.flags.writeable:
        return updated

    np.copyto(target, np.asarray(updated))
    return tracer


class VolcanicEruption(Process):
    """Inject volcanic ash into the atmosphere.

    The eruption emits at a single vertical level, in every column within
    ``plume_radius`` km of the volcano. The emission rate decays exponentially
    with time since the eruption onset. Each step the ash mass emitted over the
    step is added to the ash mixing ratio, weighted by the ambient air density,
    so that every cell of the footprint receives the same ash mass.

    Parameters
    ----------
    params : EruptionParams | dict[str, Any] | None, optional
        Process parameters. See :class:`EruptionParams` for details.
    **params_kwargs : Any
        Override parameters with keyword arguments.

    Raises
    ------
    ConfigurationError
        If a required parameter is missing or invalid.

    Examples
    --------
    >>> import numpy as np
    >>> from volcash import ColumnGrid, FieldRegistry, VolcanicEruption

    >>> grid = ColumnGrid.from_coords(lat=[40.82, 0.0], lon=[14.43, 0.0], nlevs=72)
    >>> process = VolcanicEruption(eruption_date="2022-03-01", plume_radius=5.0, emission_level=27)
    >>> process.set_grid(grid)
    >>> fields = FieldRegistry(grid)
    >>> _ = fields.request_fields(process)
    >>> fields["rho"][:] = 1.0

    >>> process.run("2022-03-01", 3600.0, fields)
    >>> ash = fields["ash"].values
    >>> np.flatnonzero(ash)
    array([27])
    """

    name = "volcanic_eruption"
    long_name = "Volcanic ash injection"
    default_params = EruptionParams
    input_fields: tuple[FieldVariable, ...] = (AirDensity,)
    updated_fields: tuple[FieldVariable, ...] = (AshMixingRatio,)

    source: SourceSpec
    state: EruptionState | None

    def __init__(
        self, params: EruptionParams | dict[str, Any] | None = None, **params_kwargs: Any
    ) -> None:
        super().__init__(params, **params_kwargs)
        self.source = SourceSpec.from_params(self.params)
        self.state = None

    @classmethod
    def from_parameter_list(cls, parameter_list: Mapping[str, Any]) -> VolcanicEruption:
        """Instantiate the process from a host parameter list.

        See :meth:`EruptionParams.from_parameter_list`.
        """
        return cls(EruptionParams.from_parameter_list(parameter_list))

    def update_params(self, params: dict[str, Any] | None = None, **params_kwargs: Any) -> None:
        """Update parameters and validate the eruption source.

        Any emission mask built by a previous :meth:`set_grid` is discarded.
        If the updated parameters are invalid, :attr:`params`, :attr:`source` and
        the emission mask are left unchanged.

        Raises
        ------
        KeyError
            Unknown parameter passed into process
        ConfigurationError
            If the updated parameters describe an invalid source.
        """
        if not hasattr(self, "source"):
            super().update_params(params, **params_kwargs)
            return

        candidate = dict(self.params)
        update_param_dict(candidate, params or {})
        update_param_dict(candidate, params_kwargs)
        source = SourceSpec.from_params(candidate)

        self.params = candidate
        self.source = source
        if self.state is not None:
            logger.debug("Parameters updated, discarding emission mask of %s", self.name)
        self.state = None

    def field_key(self, variable: FieldVariable) -> str:
        """Return the key of ``variable`` in the host fields, as set by parameters."""
        if variable == AshMixingRatio:
            return self.params["tracer_name"]
        if variable == AirDensity:
            return self.params["density_name"]
        return super().field_key(variable)

    @property
    def mask(self) -> xr.DataArray:
        """Emission mask built by :meth:`set_grid`."""
        return self.require_state().mask

    def require_state(self) -> EruptionState:
        """Return the state built by :meth:`set_grid`.

        Raises
        ------
        RuntimeError
            If :meth:`set_grid` has not been called since the last parameter update.
        """
        if self.state is None:
            msg = f"Call {type(self).__name__}.set_grid(...) before running the process."
            raise RuntimeError(msg)
        return self.state

    def set_grid(self, grid: ColumnGrid) -> None:
        """Attach ``grid`` and build the emission mask.

        Parameters
        ----------
        grid : ColumnGrid
            Grid on which the process runs.

        Raises
        ------
        ConfigurationError
            If ``emission_level`` is not a level of ``grid``.
        """
        self.source = SourceSpec.from_params(self.params)
        self.state = _setup(grid, self.source, self.params)
        self.grid = grid

    def run(self, timestamp: DatetimeLike, dt: TimedeltaLike, fields: FieldMapping) -> None:
        """Inject the ash emitted between ``timestamp`` and ``timestamp + dt``.

        Parameters
        ----------
        timestamp : DatetimeLike
            Time stamp at the beginning of the step.
        dt : TimedeltaLike
            Time step. Bare numbers are interpreted as seconds.
        fields : FieldMapping
            Host fields. The ``params["density_name"]`` field is read and the
            ``params["tracer_name"]`` field is updated.
        """
        state = self.require_state()
        self.verify_fields(fields)

        tracer_name = self.field_key(AshMixingRatio)
        tracer = fields[tracer_name]
        density = fields[self.field_key(AirDensity)]
        updated = step(state, timestamp, dt, density, tracer)
        if updated is not tracer:
            fields[tracer_name] = updated
