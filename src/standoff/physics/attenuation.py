"""
Empirical power-law attenuation for standoff exposure estimates.

Exposure away from a compact source is projected from its contact reading
with an inverse power law measured from an effective self-shielding offset
r_s, corrected for scattered radiation by a buildup factor B:

    X(delta) = X_contact * (r_s / (r_s + delta))^n * B

The exponent n is either a nominal constant for the source shape or is
calibrated from a second reading X_30 taken 0.30 m from the surface:

    n = ln(X_30 / (X_contact * B)) / ln(r_s / (r_s + 0.30))

No spectral, shielding-material or uncertainty modelling is done here.
Lengths are in metres; exposure is in whatever consistent unit the caller
uses.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Sequence

import numpy as np


logger = logging.getLogger(__name__)


REFERENCE_DISTANCE_M = 0.30  # Calibration reading distance from the surface
DEFAULT_BUILDUP = 1.05  # Scatter correction used when none is supplied
CUBE_NOMINAL_EXPONENT = 2.5
CYLINDER_NOMINAL_EXPONENT = 2.0


class InvalidInput(ValueError):
    """
    Raised when a geometry or measurement value is non-physical.

    Attributes:
        parameter: Name of the offending argument
        value: The value that was rejected
        reason: Constraint the value failed, e.g. "> 0"
    """

    def __init__(self, parameter: str, value: Any, reason: str = "> 0"):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"{parameter} must be {reason}, got {value!r}")


def require_real(parameter: str, value: Any, reason: str = "a real number") -> float:
    """Return ``value`` as float, raising InvalidInput unless it is a real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(parameter, value, reason)
    return float(value)


def require_positive(parameter: str, value: float) -> float:
    """Return ``value`` as float, raising InvalidInput unless it is > 0."""
    number = require_real(parameter, value, "a real number > 0")
    if not number > 0:
        raise InvalidInput(parameter, value)
    return number


def require_non_negative(parameter: str, value: float) -> float:
    """Return ``value`` as float, raising InvalidInput unless it is >= 0."""
    number = require_real(parameter, value, "a real number >= 0")
    if not number >= 0:
        raise InvalidInput(parameter, value, ">= 0")
    return number


def calculate_n(
    x_30: float,
    x_contact: float,
    buildup: float,
    r_s: float,
    *,
    reference_distance: float = REFERENCE_DISTANCE_M,
) -> float:
    """
    Calibrate the attenuation exponent from a reference reading.

    Parameters
    ----------
    x_30 : float
        Exposure rate measured at the reference distance (0.30 m)
    x_contact : float
        Exposure rate measured at the source surface
    buildup : float
        Buildup factor B applied to the contact reading
    r_s : float
        Self-shielding distance of the source in metres
    reference_distance : float
        Distance of the reference reading from the surface

    Returns
    -------
    float
        Exponent n for which the power law passes through (0.30, x_30).
        Positive when x_30 < x_contact * B.

    Raises
    ------
    InvalidInput
        If x_30, x_contact, r_s or reference_distance is not > 0, or
        x_contact * buildup is not finite and > 0.
    """
    x_30 = require_positive("x_30", x_30)
    x_contact = require_positive("x_contact", x_contact)
    r_s = require_positive("r_s", r_s)
    reference_distance = require_positive("reference_distance", reference_distance)

    buildup = require_real("buildup", buildup)

    scaled_contact = x_contact * buildup
    if not 0 < scaled_contact < math.inf:
        raise InvalidInput("buildup", buildup, "such that 0 < x_contact * buildup < inf")

    exposure_ratio = x_30 / scaled_contact
    distance_ratio = r_s / (r_s + reference_distance)
    n = math.log(exposure_ratio) / math.log(distance_ratio)

    logger.debug(
        "Calibrated n=%.6g from x_30=%g, x_contact=%g, B=%g, r_s=%g",
        n, x_30, x_contact, buildup, r_s,
    )
    return n


def estimate_exposure(
    delta: float,
    x_contact: float,
    n: float,
    buildup: float,
    r_s: float,
) -> float:
    """
    Project exposure to a standoff distance beyond the surface.

    At ``delta == 0`` the contact reading is returned unchanged; it is the
    calibration anchor, so the buildup factor is not applied there. For any
    ``delta > 0`` the result is ``x_contact * (r_s / (r_s + delta))**n * B``,
    which means the value jumps by a factor B just off the surface.

    Raises
    ------
    InvalidInput
        If delta < 0, x_contact or r_s is not > 0, or any argument is
        not a real number.
    """
    delta = require_non_negative("delta", delta)
    x_contact = require_positive("x_contact", x_contact)
    r_s = require_positive("r_s", r_s)
    n = require_real("n", n)
    buildup = require_real("buildup", buildup)

    if delta == 0:
        return x_contact

    return float(_power_law(np.float64(delta), x_contact, n, buildup, r_s))


def exposure_profile(
    distances: Sequence[float],
    x_contact: float,
    n: float,
    buildup: float,
    r_s: float,
) -> np.ndarray:
    """
    Evaluate :func:`estimate_exposure` over an array of standoff distances.

    Returns an array of the same shape as ``distances``. Zero distances
    return ``x_contact`` exactly.
    """
    deltas = np.asarray(distances)
    if deltas.size and deltas.dtype.kind not in "iuf":
        raise InvalidInput("distances", distances, "a sequence of real numbers")
    deltas = deltas.astype(float)
    x_contact = require_positive("x_contact", x_contact)
    r_s = require_positive("r_s", r_s)
    n = require_real("n", n)
    buildup = require_real("buildup", buildup)

    invalid = ~(deltas >= 0)
    if np.any(invalid):
        raise InvalidInput("delta", float(deltas[invalid][0]), ">= 0")

    exposures = _power_law(deltas, x_contact, n, buildup, r_s)
    return np.where(deltas == 0, x_contact, exposures)


def _power_law(deltas, x_contact: float, n: float, buildup: float, r_s: float):
    # Overflow for extreme exponents yields inf rather than raising.
    with np.errstate(over="ignore"):
        return x_contact * np.power(r_s / (r_s + deltas), n) * buildup
