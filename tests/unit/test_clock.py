"""Test volcash.core.clock module."""

from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np
import pandas as pd
import pytest

from volcash import ConfigurationError
from volcash.core import clock


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2022-03-01", pd.Timestamp("2022-03-01")),
        ("2022-03-01T06:30", pd.Timestamp("2022-03-01T06:30")),
        ("2022-03-01-00000", pd.Timestamp("2022-03-01")),
        ("2022-03-01-43200", pd.Timestamp("2022-03-01T12")),
        ("2022-03-01-86399", pd.Timestamp("2022-03-01T23:59:59")),
        (" 2022-03-01 ", pd.Timestamp("2022-03-01")),
        (datetime(2022, 3, 1, 6), pd.Timestamp("2022-03-01T06")),
        (np.datetime64("2022-03-01T06"), pd.Timestamp("2022-03-01T06")),
        (pd.Timestamp("2022-03-01T06"), pd.Timestamp("2022-03-01T06")),
        ("2022-03-01T06:00Z", pd.Timestamp("2022-03-01T06")),
    ],
)
def test_parse_timestamp(value: clock.DatetimeLike, expected: pd.Timestamp) -> None:
    """Check pandas and model time stamp formats are parsed."""
    out = clock.parse_timestamp(value)
    assert out == expected
    assert out.tz is None


@pytest.mark.parametrize("value", [None, "", "not a date", "2022-13-01", "2022-03-01-86400"])
def test_parse_timestamp_errors(value: str | None) -> None:
    """Check missing and malformed time stamps raise a configuration error."""
    with pytest.raises(ConfigurationError):
        clock.parse_timestamp(value)  # type: ignore[arg-type]


def test_to_timedelta() -> None:
    """Check bare numbers are interpreted as seconds."""
    assert clock.to_timedelta(60) == pd.Timedelta(minutes=1)
    assert clock.to_timedelta(1.5) == pd.Timedelta(milliseconds=1500)
    assert clock.to_timedelta(np.float32(30.0)) == pd.Timedelta(seconds=30)
    assert clock.to_timedelta(np.timedelta64(2, "h")) == pd.Timedelta(hours=2)
    assert clock.to_timedelta(pd.Timedelta(days=1)) == pd.Timedelta(days=1)

    assert clock.timedelta_to_seconds(np.timedelta64(1, "D")) == 86400.0
    assert clock.timedelta_to_seconds(0) == 0.0


def test_to_timedelta_not_seconds() -> None:
    """Check timedelta scalars keep their unit and booleans are rejected."""
    assert clock.to_timedelta(np.timedelta64(25, "h")) == pd.Timedelta(hours=25)
    assert clock.to_timedelta(np.timedelta64(90, "s")) == pd.Timedelta(seconds=90)
    assert clock.to_timedelta(timedelta(minutes=5)) == pd.Timedelta(minutes=5)
    assert clock.timedelta_to_seconds(np.timedelta64(25, "h")) == 90000.0

    with pytest.raises(TypeError, match="Time step"):
        clock.to_timedelta(True)


def test_advance() -> None:
    """Check time steps are added to time stamps."""
    assert clock.advance("2022-03-01", 3600) == pd.Timestamp("2022-03-01T01")
    assert clock.advance("2022-03-01-82800", np.timedelta64(2, "h")) == pd.Timestamp(
        "2022-03-02T01"
    )
    assert clock.advance(pd.Timestamp("2022-03-01"), -60.0) == pd.Timestamp("2022-02-28T23:59")


def test_days_between() -> None:
    """Check elapsed days are fractional and signed."""
    assert clock.days_between("2022-03-01", "2022-03-01") == 0.0
    assert clock.days_between("2022-03-01", "2022-03-01T06") == 0.25
    assert clock.days_between("2022-03-01", "2022-03-11") == 10.0
    assert clock.days_between("2022-03-01", "2022-02-28T12") == -0.5

    # leap year
    assert clock.days_between("2024-02-28", "2024-03-01") == 2.0
