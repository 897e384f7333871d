"""Module containing the fields exchanged between a process and its host."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldVariable:
    """Column field variable defined using CF conventions where possible.

    Used by processes to declare which host fields they read and update.

    References
    ----------
    - `CF Standard Names, version 77
      <https://cfconventions.org/Data/cf-standard-names/77/build/cf-standard-name-table.html>`_
    """

    #: Short variable name.
    short_name: str

    #: CF standard name, if defined.
    #: Otherwise a standard name is chosen for consistency.
    standard_name: str

    #: Long variable name.
    long_name: str | None = None

    #: Canonical CF units, if defined.
    units: str | None = None

    #: Description
    description: str | None = None

    @property
    def attrs(self) -> dict[str, str]:
        """Return a dictionary of field variable attributes.

        Compatible with xr.Dataset or xr.DataArray attrs.

        Returns
        -------
        dict[str, str]
            Dictionary with FieldVariable attributes.
        """

        # return only these keys if they are not None
        keys = ["short_name", "standard_name", "long_name", "units"]
        return {k: getattr(self, k) for k in keys if getattr(self, k, None) is not None}


AirDensity = FieldVariable(
    short_name="rho",
    standard_name="air_density",
    long_name="Air density",
    units="kg m**-3",
    description="Mass of air per unit volume of the grid cell.",
)

AshMixingRatio = FieldVariable(
    short_name="ash",
    standard_name="mass_fraction_of_volcanic_ash_in_air",
    long_name="Volcanic ash mixing ratio",
    units="1",
    description="Mass of volcanic ash divided by the mass of air in the grid cell.",
)

EmissionMask = FieldVariable(
    short_name="emission_mask",
    standard_name="emission_mask",
    long_name="Volcanic ash emission mask",
    units="1",
    description="1 in grid cells receiving the eruption injection, 0 elsewhere.",
)
