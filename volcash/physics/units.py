"""Unit conversion support."""

from __future__ import annotations

import numpy as np

from volcash.physics import constants
from volcash.utils.types import ArrayScalarLike


def degrees_to_radians(degrees: ArrayScalarLike) -> ArrayScalarLike:
    r"""Convert from degrees to radians.

    Parameters
    ----------
    degrees : ArrayScalarLike
        Degrees values, [:math:`\deg`]

    Returns
    -------
    ArrayScalarLike
        Radians values
    """
    return degrees * (np.pi / 180.0)


def radians_to_degrees(radians: ArrayScalarLike) -> ArrayScalarLike:
    r"""Convert from radians to degrees.

    Parameters
    ----------
    radians : ArrayScalarLike
        degrees values, [:math:`\rad`]

    Returns
    -------
    ArrayScalarLike
        Radian values
    """
    return radians * (180.0 / np.pi)


def m_to_km(m: ArrayScalarLike) -> ArrayScalarLike:
    """Convert length from meters to kilometers.

    Parameters
    ----------
    m : ArrayScalarLike
        length, [:math:`m`]

    Returns
    -------
    ArrayScalarLike
        length, [:math:`km`]
    """
    return m / constants.m_per_km


def km_to_m(km: ArrayScalarLike) -> ArrayScalarLike:
    """Convert length from kilometers to meters.

    Parameters
    ----------
    km : ArrayScalarLike
        length, [:math:`km`]

    Returns
    -------
    ArrayScalarLike
        length, [:math:`m`]
    """
    return km * constants.m_per_km


def seconds_to_days(seconds: ArrayScalarLike) -> ArrayScalarLike:
    """Convert a duration from seconds to days.

    Parameters
    ----------
    seconds : ArrayScalarLike
        duration, [:math:`s`]

    Returns
    -------
    ArrayScalarLike
        duration, [:math:`day`]
    """
    return seconds / constants.seconds_per_day


def days_to_seconds(days: ArrayScalarLike) -> ArrayScalarLike:
    """Convert a duration from days to seconds.

    Parameters
    ----------
    days : ArrayScalarLike
        duration, [:math:`day`]

    Returns
    -------
    ArrayScalarLike
        duration, [:math:`s`]
    """
    return days * constants.seconds_per_day
