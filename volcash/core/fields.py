"""Host-side field registry."""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import xarray as xr

from volcash.core.field_var import FieldVariable

if TYPE_CHECKING:
    from volcash.core.grid import ColumnGrid
    from volcash.core.models import Process

logger = logging.getLogger(__name__)

#: Allowed field intents
INTENTS = ("input", "updated")


@dataclass(frozen=True)
class FieldRequest:
    """Field declared by a process at setup time."""

    #: Requested variable
    variable: FieldVariable

    #: One of "input" (read only) or "updated" (modified in place)
    intent: str

    #: Name of the grid the field lives on
    grid_name: str | None = None

    #: Key of the field in the host registry. Defaults to the variable short name.
    key: str | None = None

    def __post_init__(self) -> None:
        if self.intent not in INTENTS:
            msg = f"Field intent must be one of {INTENTS}, found '{self.intent}'."
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Key of the requested field in the host registry."""
        return self.key or self.variable.short_name


class FieldRegistry(MutableMapping[str, xr.DataArray]):
    """Store of the fields owned by the host, keyed by :attr:`FieldVariable.short_name`.

    Every field is a :class:`xr.DataArray` with dims ``("ncol", "lev")`` defined
    on :attr:`grid`. Assigning a field of the wrong shape raises
    :class:`ShapeMismatchError`.

    Parameters
    ----------
    grid : ColumnGrid
        Grid shared by every field in the registry.

    Examples
    --------
    >>> from volcash.core.field_var import AirDensity
    >>> from volcash.core.grid import ColumnGrid
    >>> grid = ColumnGrid.from_coords(lat=[0.0, 1.0], lon=[0.0, 1.0], nlevs=3)
    >>> registry = FieldRegistry(grid)
    >>> rho = registry.register(AirDensity, fill_value=1.5)
    >>> float(registry["rho"].sum())
    9.0
    """

    __slots__ = ("_fields", "grid", "requests")

    def __init__(self, grid: ColumnGrid) -> None:
        self.grid = grid
        self.requests: list[FieldRequest] = []
        self._fields: dict[str, xr.DataArray] = {}

    def __repr__(self) -> str:
        keys = ", ".join(self._fields)
        return f"{type(self).__name__} on grid '{self.grid.name}' with fields: [{keys}]"

    def __getitem__(self, key: str) -> xr.DataArray:
        try:
            return self._fields[key]
        except KeyError as exc:
            msg = f"Field '{key}' not registered. Available fields: {', '.join(self._fields)}."
            raise KeyError(msg) from exc

    def __setitem__(self, key: str, value: xr.DataArray | np.ndarray) -> None:
        self.grid.check_field(value, key)
        if not isinstance(value, xr.DataArray):
            value = xr.DataArray(value, dims=self.grid.dim_order, name=key)
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def register(
        self,
        variable: FieldVariable,
        data: xr.DataArray | np.ndarray | None = None,
        fill_value: float = 0.0,
        key: str | None = None,
    ) -> xr.DataArray:
        """Register a field, allocating it if ``data`` is None.

        Parameters
        ----------
        variable : FieldVariable
            Field variable.
        data : xr.DataArray | np.ndarray | None, optional
            Field values. If None, a field filled with ``fill_value`` is allocated.
            A :class:`xr.DataArray` is registered as a shallow copy sharing its values,
            so its attrs are not modified.
        fill_value : float, optional
            Initial value of an allocated field. Defaults to 0.
        key : str, optional
            Registry key. Defaults to :attr:`FieldVariable.short_name`.

        Returns
        -------
        xr.DataArray
            Registered field.
        """
        key = key or variable.short_name
        if data is None:
            field = self.grid.zeros(variable)
            if fill_value:
                field.values[...] = fill_value
        else:
            self.grid.check_field(data, key)
            if isinstance(data, xr.DataArray):
                # shares values with ``data``, attrs are copied
                field = data.copy(deep=False)
                field.attrs.update(variable.attrs)
            else:
                field = xr.DataArray(
                    data,
                    dims=self.grid.dim_order,
                    name=variable.standard_name,
                    attrs=variable.attrs,
                )

        self._fields[key] = field
        logger.debug("Registered field '%s' with shape %s", key, field.shape)
        return field

    def request_fields(self, process: Process) -> list[FieldRequest]:
        """Record the fields declared by ``process`` and allocate the missing ones.

        Parameters
        ----------
        process : Process
            Process whose :meth:`Process.set_grid` has been called.

        Returns
        -------
        list[FieldRequest]
            Requests declared by ``process``.

        Raises
        ------
        ValueError
            If ``process`` runs on a different grid than the registry.
        """
        requests = process.field_requests
        for request in requests:
            if request.grid_name is not None and request.grid_name != self.grid.name:
                msg = (
                    f"Process '{process.name}' requests field '{request.name}' "
                    f"on grid '{request.grid_name}', registry grid is '{self.grid.name}'."
                )
                raise ValueError(msg)
            if request.name not in self._fields:
                self.register(request.variable, key=request.name)

        self.requests.extend(requests)
        return requests
