"""Test volcash.core.fields module."""

from __future__ import annotations

import numpy as np
import pytest
import xarray as xr

from volcash import (
    AirDensity,
    AshMixingRatio,
    ColumnGrid,
    FieldRegistry,
    FieldRequest,
    ShapeMismatchError,
    VolcanicEruption,
)


def test_field_request() -> None:
    """Check the intent is validated and the key defaults to the short name."""
    request = FieldRequest(AirDensity, "input")
    assert request.name == "rho"
    assert request.grid_name is None

    request = FieldRequest(AshMixingRatio, "updated", "physics", key="so4")
    assert request.name == "so4"

    with pytest.raises(ValueError, match="intent"):
        FieldRequest(AirDensity, "output")


def test_register(vesuvius_grid: ColumnGrid) -> None:
    """Check fields are allocated on the registry grid."""
    registry = FieldRegistry(vesuvius_grid)
    rho = registry.register(AirDensity)
    assert registry["rho"] is rho
    assert rho.shape == (4, 72)
    assert not rho.values.any()

    ash = registry.register(AshMixingRatio, fill_value=1e-9, key="ash_1")
    assert "ash_1" in registry
    assert "ash" not in registry
    np.testing.assert_array_equal(ash.values, 1e-9)
    assert ash.attrs["units"] == "1"


def test_register_data(vesuvius_grid: ColumnGrid) -> None:
    """Check user data is wrapped and annotated."""
    registry = FieldRegistry(vesuvius_grid)

    data = np.ones((4, 72))
    rho = registry.register(AirDensity, data)
    assert isinstance(rho, xr.DataArray)
    assert rho.dims == ("ncol", "lev")
    assert rho.name == "air_density"
    assert rho.attrs["standard_name"] == "air_density"

    da = xr.DataArray(np.zeros((4, 72)), dims=("ncol", "lev"), attrs={"source": "host"})
    ash = registry.register(AshMixingRatio, da)
    assert ash is not da
    assert ash.attrs["short_name"] == "ash"
    assert ash.attrs["source"] == "host"
    assert da.attrs == {"source": "host"}

    # values are shared with the caller
    ash.values[0, 0] = 1.0
    assert da.values[0, 0] == 1.0

    with pytest.raises(ShapeMismatchError):
        registry.register(AirDensity, np.ones((4, 71)))


def test_mapping_protocol(vesuvius_grid: ColumnGrid) -> None:
    """Check the registry behaves as a mutable mapping."""
    registry = FieldRegistry(vesuvius_grid)
    assert len(registry) == 0

    registry["rho"] = np.ones((4, 72))
    assert isinstance(registry["rho"], xr.DataArray)
    assert registry["rho"].name == "rho"
    assert list(registry) == ["rho"]
    assert "rho" in repr(registry)

    with pytest.raises(ShapeMismatchError):
        registry["ash"] = np.ones((72, 4))
    assert "ash" not in registry

    with pytest.raises(KeyError, match="not registered"):
        registry["ash"]  # noqa: B018

    del registry["rho"]
    assert len(registry) == 0


def test_request_fields(vesuvius_grid: ColumnGrid, eruption: VolcanicEruption) -> None:
    """Check requested fields are allocated once."""
    registry = FieldRegistry(vesuvius_grid)
    rho = registry.register(AirDensity, fill_value=1.0)

    requests = registry.request_fields(eruption)
    assert [r.name for r in requests] == ["rho", "ash"]
    assert registry.requests == requests
    assert registry["rho"] is rho
    assert not registry["ash"].values.any()


def test_request_fields_grid_mismatch(eruption: VolcanicEruption) -> None:
    """Check a process on another grid is rejected."""
    grid = ColumnGrid.from_coords(lat=[0.0], lon=[0.0], nlevs=72, name="dynamics")
    registry = FieldRegistry(grid)
    with pytest.raises(ValueError, match="registry grid is 'dynamics'"):
        registry.request_fields(eruption)
    assert len(registry) == 0
