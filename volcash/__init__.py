"""
``volcash`` public API.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import logging
from importlib import metadata

import dask

from volcash.core.exceptions import ConfigurationError, ShapeMismatchError, VolcashError
from volcash.core.field_var import AirDensity, AshMixingRatio, EmissionMask, FieldVariable
from volcash.core.fields import FieldRegistry, FieldRequest
from volcash.core.grid import ColumnGrid
from volcash.core.models import Process, ProcessParams
from volcash.models.eruption import EruptionParams, SourceSpec, VolcanicEruption

__version__ = metadata.version("volcash")
__license__ = "Apache-2.0"

log = logging.getLogger(__name__)

# Hardcode the dask warning silence config
dask.config.set({"array.slicing.split_large_chunks": False})


__all__ = [
    "AirDensity",
    "AshMixingRatio",
    "ColumnGrid",
    "ConfigurationError",
    "EmissionMask",
    "EruptionParams",
    "FieldRegistry",
    "FieldRequest",
    "FieldVariable",
    "Process",
    "ProcessParams",
    "ShapeMismatchError",
    "SourceSpec",
    "VolcanicEruption",
    "VolcashError",
]
