"""Volcanic ash injection."""

from volcash.models.eruption.emission import (
    apply_emission,
    ash_emission_rate,
    build_emission_mask,
    mass_increment,
)
from volcash.models.eruption.eruption import EruptionState, VolcanicEruption, setup, step
from volcash.models.eruption.eruption_params import EruptionParams, SourceSpec

__all__ = [
    "EruptionParams",
    "EruptionState",
    "SourceSpec",
    "VolcanicEruption",
    "apply_emission",
    "ash_emission_rate",
    "build_emission_mask",
    "mass_increment",
    "setup",
    "step",
]
