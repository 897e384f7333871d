"""Atmosphere process data structures."""

from __future__ import annotations

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from dataclasses import dataclass, fields
from typing import Any

import numpy as np
import xarray as xr

from volcash.core.field_var import FieldVariable
from volcash.core.fields import FieldRequest
from volcash.core.grid import ColumnGrid
from volcash.utils.json import NumpyEncoder
from volcash.utils.types import DatetimeLike, TimedeltaLike, type_guard

logger = logging.getLogger(__name__)

#: Fields exchanged with the host on each step, keyed by short name
FieldMapping = MutableMapping[str, xr.DataArray | np.ndarray]

# --------------
# Process Params
# --------------


@dataclass
class ProcessParams:
    """Class for constructing process parameters.

    Implementing classes must still use the ``@dataclass`` operator.
    """

    #: Check that host fields are defined on the process grid on every step
    verify_fields: bool = True

    def as_dict(self) -> dict[str, Any]:
        """Convert object to dictionary.

        We use this method instead of  `dataclasses.asdict`
        to use a shallow/unrecursive copy.
        This will return values as Any instead of dict.

        Returns
        -------
        dict[str, Any]
            Dictionary version of self.
        """
        return {(name := field.name): getattr(self, name) for field in fields(self)}


# ---------
# Processes
# ---------


class Process(ABC):
    """Base class for atmosphere processes driven by a host model.

    The host calls, in order:

    1. :meth:`set_grid` once, to hand over the grid and let the process declare
       the fields it reads and updates (:attr:`input_fields`, :attr:`updated_fields`).
    2. :meth:`initialize` once.
    3. :meth:`run` once per time step.
    4. :meth:`finalize` once.

    Implementing classes must implement :meth:`set_grid` and :meth:`run`.
    """

    __slots__ = ("grid", "params")

    #: Default process parameter dataclass
    default_params: type[ProcessParams] = ProcessParams

    #: Instantiated process parameters, in dictionary form
    params: dict[str, Any]

    #: Grid handed over by the host in :meth:`set_grid`
    grid: ColumnGrid | None

    #: Fields read (and not modified) by :meth:`run`
    input_fields: tuple[FieldVariable, ...] = ()

    #: Fields modified in place by :meth:`run`
    updated_fields: tuple[FieldVariable, ...] = ()

    def __init__(
        self,
        params: ProcessParams | dict[str, Any] | None = None,
        **params_kwargs: Any,
    ) -> None:
        # Load base params, override default and user params
        self._load_params(params, **params_kwargs)
        self.grid = None

    def __repr__(self) -> str:
        params = getattr(self, "params", {})
        return f"{type(self).__name__} process\n\t{self.long_name}\n\tParams: {params}\n"

    @property
    @abstractmethod
    def name(self) -> str:
        """Get process name, used as a key by the host."""

    @property
    @abstractmethod
    def long_name(self) -> str:
        """Get long name descriptor, annotated on :class:`xr.DataArray` outputs."""

    @property
    def hash(self) -> str:
        """Generate a unique hash for process instance.

        Returns
        -------
        str
            Unique hash for process instance (sha1)
        """
        params = json.dumps(self.params, sort_keys=True, cls=NumpyEncoder)
        _hash = self.name + params
        if self.grid is not None:
            _hash += self.grid.hash

        return hashlib.sha1(bytes(_hash, "utf-8")).hexdigest()

    @property
    def field_requests(self) -> list[FieldRequest]:
        """Fields this process needs from the host, with their intent.

        Returns
        -------
        list[FieldRequest]
            One request per variable in :attr:`input_fields` and :attr:`updated_fields`.
        """
        grid_name = self.grid.name if self.grid is not None else None
        requests = [
            FieldRequest(v, "input", grid_name, self.field_key(v)) for v in self.input_fields
        ]
        requests.extend(
            FieldRequest(v, "updated", grid_name, self.field_key(v)) for v in self.updated_fields
        )
        return requests

    def field_key(self, variable: FieldVariable) -> str:
        """Return the key of ``variable`` in the host fields.

        Override to let parameters rename host fields.
        """
        return variable.short_name

    def _load_params(
        self, params: ProcessParams | dict[str, Any] | None = None, **params_kwargs: Any
    ) -> None:
        """Load parameters to process :attr:`params`.

        Load order:

        1. If ``params`` is a :attr:`default_params` instance, use as is. Otherwise
           instantiate as :attr:`default_params`.
        2. ``params`` input dict
        3. ``params_kwargs`` override keys in params

        Parameters
        ----------
        params : dict[str, Any], optional
            Process parameter dictionary or :attr:`default_params` instance.
            Defaults to {}
        **params_kwargs : Any
            Override keys in ``params`` with keyword arguments.

        Raises
        ------
        KeyError
            Unknown parameter passed into process
        TypeError
            ``params`` is a :class:`ProcessParams` of the wrong type
        """
        if isinstance(params, self.default_params):
            base_params = params
            params = None
        elif isinstance(params, ProcessParams):
            msg = f"Process parameters must be of type {self.default_params.__name__} or dict"
            raise TypeError(msg)
        else:
            base_params = self.default_params()

        self.params = base_params.as_dict()
        self.update_params(params, **params_kwargs)

    def update_params(self, params: dict[str, Any] | None = None, **params_kwargs: Any) -> None:
        """Update process parameters on :attr:`params`.

        Parameters
        ----------
        params : dict[str, Any], optional
            Process parameters to update, as dictionary.
            Defaults to {}
        **params_kwargs : Any
            Override keys in ``params`` with keyword arguments.
        """
        update_param_dict(self.params, params or {})
        update_param_dict(self.params, params_kwargs)

    def require_grid(self) -> ColumnGrid:
        """Ensure that :attr:`grid` is a :class:`ColumnGrid`.

        Returns
        -------
        ColumnGrid
            Returns reference to :attr:`grid`.

        Raises
        ------
        RuntimeError
            Raises when :meth:`set_grid` has not been called.
        """
        try:
            return type_guard(self.grid, ColumnGrid)
        except ValueError as exc:
            msg = f"Call {type(self).__name__}.set_grid(...) before running the process."
            raise RuntimeError(msg) from exc

    def verify_fields(self, fields: FieldMapping) -> None:
        """Check that every requested field is present in ``fields`` and defined on :attr:`grid`.

        Does nothing if ``params["verify_fields"]`` is False.

        Parameters
        ----------
        fields : FieldMapping
            Host fields, keyed by :meth:`field_key`.

        Raises
        ------
        KeyError
            A requested field is missing.
        ShapeMismatchError
            A requested field is not defined on :attr:`grid`.
        """
        if not self.params["verify_fields"]:
            return

        grid = self.require_grid()
        for request in self.field_requests:
            key = request.name
            try:
                field = fields[key]
            except KeyError as exc:
                msg = f"Process '{self.name}' requires field '{key}' ({request.intent})."
                raise KeyError(msg) from exc
            grid.check_field(field, key)

    @abstractmethod
    def set_grid(self, grid: ColumnGrid) -> None:
        """Attach the host grid and precompute any static process data.

        Parameters
        ----------
        grid : ColumnGrid
            Grid on which the process runs.
        """

    def initialize(self, run_type: str = "initial") -> None:
        """Initialize process state before the first step.

        Parameters
        ----------
        run_type : str, optional
            One of ``"initial"`` or ``"restart"``.
        """
        if run_type not in ("initial", "restart"):
            msg = f"Unknown run type '{run_type}'. Must be one of 'initial', 'restart'."
            raise ValueError(msg)

    @abstractmethod
    def run(self, timestamp: DatetimeLike, dt: TimedeltaLike, fields: FieldMapping) -> None:
        """Advance the process by one time step.

        Parameters
        ----------
        timestamp : DatetimeLike
            Time stamp at the *beginning* of the step.
        dt : TimedeltaLike
            Time step. Bare numbers are interpreted as seconds.
        fields : FieldMapping
            Host fields, keyed by :meth:`field_key`.
            Fields in :attr:`updated_fields` are modified.
        """

    def finalize(self) -> None:
        """Release process resources at the end of the run."""


def update_param_dict(param_dict: dict[str, Any], new_params: dict[str, Any]) -> None:
    """Update parameter dictionary in place.

    Parameters
    ----------
    param_dict : dict[str, Any]
        Active process parameter dictionary
    new_params : dict[str, Any]
        Process parameters to update, as a dictionary

    Raises
    ------
    KeyError
        Raises when ``new_params`` key is not found in ``param_dict``

    """
    for param, value in new_params.items():
        if param not in param_dict:
            msg = (
                f"Unknown parameter '{param}' passed into process. Possible "
                f"parameters include {', '.join(param_dict)}."
            )
            raise KeyError(msg)

        param_dict[param] = value
