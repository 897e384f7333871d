"""Physical and calendar constants."""

from __future__ import annotations

# -------
# General
# -------

# NOTE: Use a decimal point for each float-valued constant. This is important for
# converting to numpy arrays.

#: Radius of Earth :math:`[m]`
radius_earth: float = 6371229.0

#: Number of meters in a kilometer
m_per_km: float = 1000.0

# --------
# Calendar
# --------

#: Number of seconds in a day :math:`[s]`
seconds_per_day: float = 86400.0

# --------
# Eruption
# --------

#: Latitude of Mount Vesuvius :math:`[\deg]`
vesuvius_latitude: float = 40.8214

#: Longitude of Mount Vesuvius :math:`[\deg]`
vesuvius_longitude: float = 14.4260

#: Peak ash emission rate at eruption onset
peak_emission_rate: float = 1.0e4

#: Exponential decay rate of ash emission :math:`[day^{-1}]`
emission_decay_rate: float = -2.3
