"""Time stamp utilities shared by processes and their host driver."""

from __future__ import annotations

import re
from datetime import timedelta

import numpy as np
import pandas as pd

from volcash.core.exceptions import ConfigurationError
from volcash.physics import units
from volcash.utils.types import DatetimeLike, TimedeltaLike

# Model time stamps are written as "YYYY-MM-DD-SSSSS", SSSSS being the seconds of the day
_MODEL_TIMESTAMP = re.compile(r"^(\d{4}-\d{2}-\d{2})-(\d{5})$")


def parse_timestamp(value: DatetimeLike) -> pd.Timestamp:
    """Parse a time stamp.

    Parameters
    ----------
    value : DatetimeLike
        Time stamp. Strings may be any format understood by :class:`pandas.Timestamp`
        or the model format ``"YYYY-MM-DD-SSSSS"``, where ``SSSSS`` is the number of
        seconds since midnight.

    Returns
    -------
    pd.Timestamp
        Parsed, timezone-naive time stamp.

    Raises
    ------
    ConfigurationError
        If ``value`` is missing or cannot be parsed.

    Examples
    --------
    >>> parse_timestamp("2010-01-01-43200")
    Timestamp('2010-01-01 12:00:00')
    """
    if value is None:
        raise ConfigurationError("Time stamp is required, found None.")

    if isinstance(value, str):
        value = value.strip()
        match = _MODEL_TIMESTAMP.match(value)
        if match:
            date, seconds = match.groups()
            if int(seconds) >= 86400:
                msg = f"Seconds of day must be less than 86400 in time stamp '{value}'."
                raise ConfigurationError(msg)
            return _to_timestamp(date) + pd.Timedelta(seconds=int(seconds))

    return _to_timestamp(value)


def _to_timestamp(value: DatetimeLike) -> pd.Timestamp:
    try:
        out = pd.Timestamp(value)
    except (ValueError, TypeError) as exc:
        msg = f"Could not parse time stamp '{value}'."
        raise ConfigurationError(msg) from exc

    if pd.isna(out):
        msg = f"Could not parse time stamp '{value}'."
        raise ConfigurationError(msg)

    return out.tz_localize(None) if out.tz is not None else out


def to_timedelta(dt: TimedeltaLike) -> pd.Timedelta:
    """Convert a time step to :class:`pandas.Timedelta`.

    Parameters
    ----------
    dt : TimedeltaLike
        Time step. Bare numbers are interpreted as seconds.

    Returns
    -------
    pd.Timedelta
        Time step.

    Raises
    ------
    TypeError
        If ``dt`` is a boolean.
    """
    # np.timedelta64 subclasses np.signedinteger
    if isinstance(dt, (np.timedelta64, timedelta)):
        return pd.Timedelta(dt)
    if isinstance(dt, (bool, np.bool_)):
        msg = f"Time step must be a number of seconds or a timedelta, found {dt!r}."
        raise TypeError(msg)
    if isinstance(dt, (int, float, np.integer, np.floating)):
        return pd.Timedelta(seconds=float(dt))
    return pd.Timedelta(dt)


def timedelta_to_seconds(dt: TimedeltaLike) -> float:
    """Return the time step ``dt`` in seconds."""
    return to_timedelta(dt).total_seconds()


def advance(timestamp: DatetimeLike, dt: TimedeltaLike) -> pd.Timestamp:
    """Add the time step ``dt`` to ``timestamp``.

    Parameters
    ----------
    timestamp : DatetimeLike
        Start of the time step.
    dt : TimedeltaLike
        Time step. Bare numbers are interpreted as seconds.

    Returns
    -------
    pd.Timestamp
        End of the time step.
    """
    return parse_timestamp(timestamp) + to_timedelta(dt)


def days_between(start: DatetimeLike, end: DatetimeLike) -> float:
    """Compute the signed number of days from ``start`` to ``end``.

    Parameters
    ----------
    start : DatetimeLike
        Reference time stamp.
    end : DatetimeLike
        Time stamp of interest.

    Returns
    -------
    float
        Fractional days. Negative if ``end`` precedes ``start``.

    Examples
    --------
    >>> days_between("2022-01-01", "2022-01-02T12")
    1.5
    >>> days_between("2022-01-02", "2022-01-01")
    -1.0
    """
    delta = parse_timestamp(end) - parse_timestamp(start)
    return units.seconds_to_days(delta.total_seconds())
