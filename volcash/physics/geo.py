"""Tools for distances on the sphere."""

from __future__ import annotations

import numpy as np

from volcash.physics import constants, units
from volcash.utils.types import ArrayLike


def planar_distance(
    lons0: ArrayLike,
    lats0: ArrayLike,
    lons1: ArrayLike,
    lats1: ArrayLike,
    radius: float = constants.radius_earth,
) -> ArrayLike:
    r"""Calculate a flat-earth distance between (lons0, lats0) and (lons1, lats1).

    The angular separation is approximated by the euclidean norm of the latitude
    and longitude differences, in radians, and scaled by ``radius``:

    .. math::

        d = R \sqrt{\Delta\phi^2 + \Delta\lambda^2}

    Parameters
    ----------
    lons0, lats0 : ArrayLike
        Coordinates of initial points, [:math:`\deg`]
    lons1, lats1 : ArrayLike
        Coordinates of terminal points, [:math:`\deg`]
    radius : float, optional
        Sphere radius. The output has the same length unit as ``radius``.
        Defaults to :attr:`constants.radius_earth`, [:math:`m`].

    Returns
    -------
    ArrayLike
        Distances between corresponding points, in the unit of ``radius``.

    Notes
    -----
    This is a small-angle approximation. The longitude difference is not scaled by
    the cosine of the latitude and the antimeridian is not handled, so the result
    overestimates the great circle distance away from the equator. It is intended
    for distances that are small relative to the radius of the sphere.

    See Also
    --------
    :class:`pyproj.Geod`:
        Performs forward and inverse geodetic, or Great Circle, computations
    """
    d_lats = units.degrees_to_radians(lats1) - units.degrees_to_radians(lats0)
    d_lons = units.degrees_to_radians(lons1) - units.degrees_to_radians(lons0)
    return radius * np.sqrt(d_lats * d_lats + d_lons * d_lons)
