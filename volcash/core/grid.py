"""Column grid geometry supplied by the host model."""

from __future__ import annotations

import hashlib
from typing import Any

import numpy as np
import numpy.typing as npt
import xarray as xr

from volcash.core.exceptions import ShapeMismatchError
from volcash.core.field_var import FieldVariable

#: Column dimension name
COL_DIM = "ncol"

#: Vertical level dimension name
LEV_DIM = "lev"


class ColumnGrid:
    """Physics grid made of ``ncols`` independent columns of ``nlevs`` levels.

    Composition around :class:`xarray.Dataset` holding the per-column geometry.
    The dataset must contain a ``"lat"`` and ``"lon"`` coordinate, in degrees,
    along the ``"ncol"`` dimension, and a ``"lev"`` dimension.

    The grid is read-only: processes query it once at setup.

    Parameters
    ----------
    data : xr.Dataset
        Dataset with per-column ``lat`` and ``lon`` and dimensions ``("ncol", "lev")``.
    name : str, optional
        Grid name. Defaults to ``"physics"``.
    copy : bool, optional
        Copy data on construction. Defaults to True.

    Examples
    --------
    >>> from volcash.core.grid import ColumnGrid
    >>> grid = ColumnGrid.from_coords(lat=[40.82, 0.0], lon=[14.43, 0.0], nlevs=72)
    >>> grid.shape
    (2, 72)
    """

    __slots__ = ("data", "name")

    #: Underlying dataset
    data: xr.Dataset

    #: Grid name
    name: str

    #: Dimension order of every field defined on the grid
    dim_order = (COL_DIM, LEV_DIM)

    def __init__(self, data: xr.Dataset, name: str = "physics", copy: bool = True) -> None:
        if not isinstance(data, xr.Dataset):
            raise TypeError("Input 'data' must be an xarray Dataset")

        self.data = data.copy() if copy else data
        self.name = name
        self._validate()

    @classmethod
    def from_coords(
        cls,
        lat: npt.ArrayLike,
        lon: npt.ArrayLike,
        nlevs: int,
        name: str = "physics",
        **attrs: Any,
    ) -> ColumnGrid:
        """Create a :class:`ColumnGrid` from per-column latitude and longitude.

        Parameters
        ----------
        lat : npt.ArrayLike
            Column latitude, [:math:`\\deg`]
        lon : npt.ArrayLike
            Column longitude, [:math:`\\deg`]
        nlevs : int
            Number of vertical levels in each column.
        name : str, optional
            Grid name.
        **attrs : Any
            Attributes attached to the underlying dataset.

        Returns
        -------
        ColumnGrid
            New grid instance.
        """
        lat = np.atleast_1d(np.asarray(lat, dtype=float))
        lon = np.atleast_1d(np.asarray(lon, dtype=float))
        if lat.shape != lon.shape or lat.ndim != 1:
            msg = f"Latitude {lat.shape} and longitude {lon.shape} must be 1D with the same shape"
            raise ValueError(msg)

        ds = xr.Dataset(
            coords={
                "lat": (COL_DIM, lat, {"units": "degrees_north"}),
                "lon": (COL_DIM, lon, {"units": "degrees_east"}),
                LEV_DIM: np.arange(nlevs),
            },
            attrs=attrs,
        )
        return cls(ds, name=name, copy=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__} '{self.name}' with data:\n\n{self.data!r}"

    def _validate(self) -> None:
        """Check dimensions and geometry of :attr:`data`.

        Raises
        ------
        ValueError
            If a dimension or a geometry variable is missing, or if the
            latitude is outside ``[-90, 90]``.
        """
        missing = set(self.dim_order).difference(self.data.dims)
        if missing:
            msg = f"Grid data must contain dimension(s): {sorted(missing)}."
            raise ValueError(msg)

        for key in ("lat", "lon"):
            try:
                da = self.data[key]
            except KeyError as exc:
                msg = f"Grid data must contain geometry variable '{key}'."
                raise ValueError(msg) from exc
            if da.dims != (COL_DIM,):
                msg = f"Geometry variable '{key}' must have dims ('{COL_DIM}',), found {da.dims}."
                raise ValueError(msg)

        lat = self.data["lat"].values
        if np.any(np.abs(lat) > 90.0):
            raise ValueError("Latitude contains values outside [-90, 90].")

    @property
    def ncols(self) -> int:
        """Number of columns."""
        return self.data.sizes[COL_DIM]

    @property
    def nlevs(self) -> int:
        """Number of vertical levels per column."""
        return self.data.sizes[LEV_DIM]

    @property
    def shape(self) -> tuple[int, int]:
        """Shape ``(ncols, nlevs)`` of every field defined on the grid."""
        return self.ncols, self.nlevs

    @property
    def lat(self) -> npt.NDArray[np.floating]:
        """Column latitude, [:math:`\\deg`]."""
        return self.get_geometry_data("lat")

    @property
    def lon(self) -> npt.NDArray[np.floating]:
        """Column longitude, [:math:`\\deg`]."""
        return self.get_geometry_data("lon")

    @property
    def hash(self) -> str:
        """Generate a unique hash for this grid instance.

        Returns
        -------
        str
            Unique hash for grid instance (sha1)
        """
        _hash = self.name + str(self.shape) + self.lat.tobytes().hex() + self.lon.tobytes().hex()
        return hashlib.sha1(bytes(_hash, "utf-8")).hexdigest()

    def get_geometry_data(self, name: str) -> npt.NDArray[np.floating]:
        """Return a read-only view of a per-column geometry variable.

        Parameters
        ----------
        name : str
            Geometry variable, typically ``"lat"`` or ``"lon"`` (degrees).

        Returns
        -------
        npt.NDArray[np.floating]
            1D array of length :attr:`ncols`.

        Raises
        ------
        KeyError
            If ``name`` is not defined on the grid.
        """
        try:
            values = self.data[name].values
        except KeyError as exc:
            available = ", ".join(str(k) for k in self.data.coords)
            msg = f"Geometry data '{name}' not found on grid. Available: {available}."
            raise KeyError(msg) from exc

        view = values.view()
        view.flags.writeable = False
        return view

    def zeros(self, variable: FieldVariable, dtype: npt.DTypeLike = np.float64) -> xr.DataArray:
        """Allocate a zero-initialized field on the grid.

        Parameters
        ----------
        variable : FieldVariable
            Variable describing the field; sets its name and attrs.
        dtype : npt.DTypeLike, optional
            Field dtype. Defaults to ``float64``.

        Returns
        -------
        xr.DataArray
            Field with dims ``("ncol", "lev")``.
        """
        return xr.DataArray(
            np.zeros(self.shape, dtype=dtype),
            dims=self.dim_order,
            coords={"lat": self.data["lat"], "lon": self.data["lon"]},
            name=variable.standard_name,
            attrs=variable.attrs,
        )

    def check_field(self, field: xr.DataArray | np.ndarray, name: str) -> None:
        """Ensure ``field`` is defined on this grid.

        Parameters
        ----------
        field : xr.DataArray | np.ndarray
            Field to check.
        name : str
            Field name, used in the error message.

        Raises
        ------
        ShapeMismatchError
            If the shape of ``field`` is not :attr:`shape`, or if ``field`` is an
            :class:`xr.DataArray` whose dims are not ``("ncol", "lev")``.
        """
        if field.shape != self.shape:
            msg = (
                f"Field '{name}' has shape {field.shape}, "
                f"expected {self.shape} (ncols, nlevs) on grid '{self.name}'."
            )
            raise ShapeMismatchError(msg)

        if isinstance(field, xr.DataArray) and field.dims != self.dim_order:
            msg = f"Field '{name}' has dims {field.dims}, expected {self.dim_order}."
            raise ShapeMismatchError(msg)
