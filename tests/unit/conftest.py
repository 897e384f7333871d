"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from volcash import ColumnGrid, FieldRegistry, VolcanicEruption


@pytest.fixture(scope="module")
def rng() -> np.random.Generator:
    """Get random number generator."""
    return np.random.default_rng(12345)


@pytest.fixture()
def vesuvius_grid() -> ColumnGrid:
    """Four columns around Mount Vesuvius, 72 levels.

    Only the first column lies within 5 km of the volcano.

    Returns
    -------
    ColumnGrid
    """
    lat = [40.82, 40.90, 0.0, 41.0]
    lon = [14.43, 14.50, 0.0, 14.0]
    return ColumnGrid.from_coords(lat=lat, lon=lon, nlevs=72)


@pytest.fixture()
def random_grid(rng: np.random.Generator) -> ColumnGrid:
    """Grid of 500 columns scattered around Mount Vesuvius, 10 levels.

    Returns
    -------
    ColumnGrid
    """
    lat = 40.8214 + rng.uniform(-0.2, 0.2, 500)
    lon = 14.4260 + rng.uniform(-0.2, 0.2, 500)
    return ColumnGrid.from_coords(lat=lat, lon=lon, nlevs=10)


@pytest.fixture()
def eruption_params() -> dict[str, Any]:
    """Parameters of an eruption starting on 2022-03-01 with a 5 km plume at level 27.

    Returns
    -------
    dict[str, Any]
    """
    return {"eruption_date": "2022-03-01", "plume_radius": 5.0, "emission_level": 27}


@pytest.fixture()
def eruption(vesuvius_grid: ColumnGrid, eruption_params: dict[str, Any]) -> VolcanicEruption:
    """Eruption process attached to :func:`vesuvius_grid`.

    Returns
    -------
    VolcanicEruption
    """
    process = VolcanicEruption(eruption_params)
    process.set_grid(vesuvius_grid)
    return process


@pytest.fixture()
def fields(vesuvius_grid: ColumnGrid, eruption: VolcanicEruption) -> FieldRegistry:
    """Host fields requested by :func:`eruption`, with a density decreasing with height.

    Returns
    -------
    FieldRegistry
    """
    registry = FieldRegistry(vesuvius_grid)
    registry.request_fields(eruption)

    rho = np.linspace(1.2, 0.1, vesuvius_grid.nlevs)
    registry["rho"].values[:] = np.broadcast_to(rho, vesuvius_grid.shape)
    registry["ash"].values[:] = 1e-9
    return registry
