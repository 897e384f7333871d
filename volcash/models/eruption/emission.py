"""Emission mask, emission rate, and conservative tracer update.

Each function here operates on all columns at once. Columns are independent:
the mask of a column depends only on its own geometry, and the update of a
cell depends only on the cell values. The functions accept :mod:`numpy` arrays
or :class:`xarray.DataArray`, including :mod:`dask` backed arrays, in which
case each chunk of columns is processed independently.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np
import numpy.typing as npt
import xarray as xr

from volcash.core.exceptions import ShapeMismatchError
from volcash.core.field_var import EmissionMask
from volcash.core.grid import COL_DIM, ColumnGrid
from volcash.models.eruption.eruption_params import SourceSpec
from volcash.physics import constants, geo, units
from volcash.utils.types import ArrayLike

logger = logging.getLogger(__name__)


def source_distance(
    grid: ColumnGrid, source: SourceSpec, radius_earth: float = constants.radius_earth
) -> npt.NDArray[np.floating]:
    """Compute the planar distance from each column to the source.

    Parameters
    ----------
    grid : ColumnGrid
        Grid providing per-column latitude and longitude.
    source : SourceSpec
        Eruption source.
    radius_earth : float, optional
        Planetary radius, [:math:`m`].

    Returns
    -------
    npt.NDArray[np.floating]
        Distance of each column to the source, [:math:`km`]

    See Also
    --------
    :func:`geo.planar_distance`
    """
    return geo.planar_distance(
        grid.lon,
        grid.lat,
        source.longitude,
        source.latitude,
        radius=units.m_to_km(radius_earth),
    )


def build_emission_mask(
    grid: ColumnGrid,
    source: SourceSpec,
    radius_earth: float = constants.radius_earth,
    column_chunks: int | None = None,
) -> xr.DataArray:
    """Build the static emission mask of ``source`` on ``grid``.

    A cell ``(col, lev)`` is in the mask if ``lev`` is :attr:`SourceSpec.target_level`
    and the planar distance from the column to the source is strictly less than
    :attr:`SourceSpec.radius`.

    Parameters
    ----------
    grid : ColumnGrid
        Grid providing per-column latitude and longitude.
    source : SourceSpec
        Eruption source.
    radius_earth : float, optional
        Planetary radius, [:math:`m`].
    column_chunks : int | None, optional
        If not None, return a :mod:`dask` backed mask chunked along the
        column dimension.

    Returns
    -------
    xr.DataArray
        Read-only mask with dims ``("ncol", "lev")``, equal to 1 in the source
        footprint and 0 elsewhere.

    Raises
    ------
    ConfigurationError
        If the source level is not a level of ``grid``. Raised before the mask
        is allocated.
    """
    source.validate_level(grid.nlevs)

    distance = source_distance(grid, source, radius_earth)
    in_plume = distance < source.radius

    mask = grid.zeros(EmissionMask)
    mask.values[in_plume, source.target_level] = 1.0
    mask.values.flags.writeable = False

    mask.attrs.update(
        volcano_latitude=source.latitude,
        volcano_longitude=source.longitude,
        plume_radius=source.radius,
        emission_level=source.target_level,
    )

    n_columns = int(in_plume.sum())
    logger.debug(
        "Emission mask covers %s of %s columns at level %s",
        n_columns,
        grid.ncols,
        source.target_level,
    )
    if not n_columns:
        warnings.warn(
            f"No column of grid '{grid.name}' lies within {source.radius} km of the "
            f"volcano at {source.location}. No ash will be injected."
        )

    if column_chunks is not None:
        mask = mask.chunk({COL_DIM: column_chunks})

    return mask


def ash_emission_rate(
    days_since_eruption: ArrayLike | float,
    peak_emission_rate: float = constants.peak_emission_rate,
    decay_rate: float = constants.emission_decay_rate,
) -> ArrayLike | float:
    r"""Compute the ash emission rate.

    .. math::

        r(d) = r_0 \exp(k d) \quad \text{if } d > 0, \qquad r(d) = 0 \quad \text{otherwise}

    Parameters
    ----------
    days_since_eruption : ArrayLike | float
        Signed time since eruption onset, [:math:`day`]
    peak_emission_rate : float, optional
        Emission rate :math:`r_0` at the onset.
    decay_rate : float, optional
        Exponential decay rate :math:`k`, [:math:`day^{-1}`]. Negative for a decaying emission.

    Returns
    -------
    ArrayLike | float
        Emission rate. Zero before (and at) the onset.

    Examples
    --------
    >>> round(ash_emission_rate(1.0), 1)
    1002.6
    >>> ash_emission_rate(-1.0)
    0.0
    """
    days = np.asarray(days_since_eruption, dtype=float)

    # exp overflows for large negative days; those values are masked out below
    with np.errstate(over="ignore"):
        rate = np.where(days > 0.0, peak_emission_rate * np.exp(days * decay_rate), 0.0)

    if rate.ndim == 0:
        return rate.item()
    return rate


def mass_increment(dt: float, rate: float) -> float:
    """Compute the tracer mass injected in a masked cell over a step of ``dt`` seconds."""
    return dt * rate


def apply_emission(
    tracer: ArrayLike,
    density: ArrayLike,
    mask: ArrayLike,
    increment: float,
    check_density: bool = True,
) -> ArrayLike:
    r"""Inject ``increment`` of tracer mass in each masked cell.

    The tracer is carried as a mixing ratio :math:`q`. The update converts it to
    a mass with the ambient density :math:`\rho`, adds the increment, and converts
    it back:

    .. math::

        q' = \frac{q \rho + \Delta m \, M}{\rho}

    where :math:`M` is the 0/1 mask. Every masked cell receives the same mass
    :math:`\Delta m` regardless of its density.

    Parameters
    ----------
    tracer : ArrayLike
        Tracer mixing ratio with shape ``(ncols, nlevs)``. Not modified.
    density : ArrayLike
        Ambient density with the same shape as ``tracer``.
    mask : ArrayLike
        Emission mask with the same shape as ``tracer``.
    increment : float
        Tracer mass injected in each masked cell.
    check_density : bool, optional
        Raise if ``density`` is not strictly positive. Defaults to True.

    Returns
    -------
    ArrayLike
        Updated mixing ratio.

    Raises
    ------
    ShapeMismatchError
        If ``tracer``, ``density``, and ``mask`` do not share the same shape, or
        if the :class:`xr.DataArray` among them do not share the same dims.
    ValueError
        If ``check_density`` is True and ``density`` contains a non-positive or NaN value.
    """
    if tracer.shape != mask.shape or density.shape != mask.shape:
        msg = (
            f"Tracer {tracer.shape}, density {density.shape}, and emission mask "
            f"{mask.shape} must share the same (ncols, nlevs) shape."
        )
        raise ShapeMismatchError(msg)

    operands = {"tracer": tracer, "density": density, "emission mask": mask}
    dims = {name: da.dims for name, da in operands.items() if isinstance(da, xr.DataArray)}
    if len(set(dims.values())) > 1:
        msg = f"Labelled fields must share the same dims, found {dims}."
        raise ShapeMismatchError(msg)

    if check_density and not bool((density > 0.0).all()):
        raise ValueError(
            "Ambient density must be strictly positive and not NaN to convert mixing ratios."
        )

    tracer_mass = tracer * density
    tracer_mass = tracer_mass + increment * mask
    return tracer_mass / density
