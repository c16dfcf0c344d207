"""Attenuation physics for standoff exposure projection."""

from standoff.physics.attenuation import (
    CUBE_NOMINAL_EXPONENT,
    CYLINDER_NOMINAL_EXPONENT,
    DEFAULT_BUILDUP,
    REFERENCE_DISTANCE_M,
    InvalidInput,
    calculate_n,
    estimate_exposure,
    exposure_profile,
)

__all__ = [
    "CUBE_NOMINAL_EXPONENT",
    "CYLINDER_NOMINAL_EXPONENT",
    "DEFAULT_BUILDUP",
    "REFERENCE_DISTANCE_M",
    "InvalidInput",
    "calculate_n",
    "estimate_exposure",
    "exposure_profile",
]
