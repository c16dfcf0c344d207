"""Source geometry models.

Each source shape supplies an effective self-shielding distance r_s and a
nominal attenuation exponent. Projections are delegated to
:mod:`standoff.physics.attenuation`; that module knows nothing about shapes.

Sources are validated on construction and immutable afterwards, so
``contact_exposure > 0`` and ``self_distance > 0`` hold for their lifetime.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple, Type

import numpy as np

from standoff.physics.attenuation import (
    CUBE_NOMINAL_EXPONENT,
    CYLINDER_NOMINAL_EXPONENT,
    DEFAULT_BUILDUP,
    InvalidInput,
    calculate_n,
    estimate_exposure,
    exposure_profile,
    require_positive,
    require_real,
)


logger = logging.getLogger(__name__)


class CylinderOrientation(Enum):
    """Face of a cylinder the standoff distance is measured from."""

    SIDE = "side"  # Radial, r_s = diameter / 2
    TOP = "top"  # Axial, r_s = height / 2


@dataclass(frozen=True)
class ReferenceMeasurement:
    """
    Reading used to calibrate a source-specific exponent.

    Attributes:
        x_30: Exposure rate measured 0.30 m from the surface
        buildup: Buildup factor for scattered radiation
    """

    x_30: float
    buildup: float = DEFAULT_BUILDUP

    def __post_init__(self):
        require_positive("x_30", self.x_30)
        require_real("buildup", self.buildup)


class RadiationSource(ABC):
    """Shared projection behaviour for compact source shapes."""

    shape: ClassVar[str]
    nominal_exponent: ClassVar[float]
    contact_exposure: float

    @property
    @abstractmethod
    def self_distance(self) -> float:
        """Effective self-shielding offset r_s in metres."""

    def _resolve_reference(
        self,
        x_30: Optional[float],
        buildup: Optional[float],
        reference: Optional[ReferenceMeasurement],
    ) -> Tuple[Optional[float], float]:
        if reference is not None:
            if x_30 is not None or buildup is not None:
                raise InvalidInput(
                    "reference", reference, "given alone, not with x_30 or buildup"
                )
            return reference.x_30, reference.buildup
        return x_30, DEFAULT_BUILDUP if buildup is None else buildup

    def estimate_n(
        self,
        x_30: Optional[float] = None,
        buildup: Optional[float] = None,
        *,
        reference: Optional[ReferenceMeasurement] = None,
    ) -> float:
        """
        Attenuation exponent for this source.

        Without a reference reading the shape's nominal exponent is returned.
        With one, the exponent is calibrated from the source's own contact
        exposure and self distance.
        """
        x_30, buildup = self._resolve_reference(x_30, buildup, reference)
        if x_30 is None:
            return self.nominal_exponent
        return calculate_n(x_30, self.contact_exposure, buildup, self.self_distance)

    def exposure_at(
        self,
        delta: float,
        x_30: Optional[float] = None,
        buildup: Optional[float] = None,
        *,
        reference: Optional[ReferenceMeasurement] = None,
    ) -> float:
        """
        Exposure ``delta`` metres beyond the surface.

        The buildup factor defaults to 1.05 when none is supplied, including
        on the nominal-exponent path.
        """
        x_30, buildup = self._resolve_reference(x_30, buildup, reference)
        n = self.estimate_n(x_30, buildup)
        logger.debug(
            "%s projection: delta=%g n=%g B=%g r_s=%g",
            self.shape, delta, n, buildup, self.self_distance,
        )
        return estimate_exposure(delta, self.contact_exposure, n, buildup, self.self_distance)

    def exposure_profile(
        self,
        distances: Sequence[float],
        x_30: Optional[float] = None,
        buildup: Optional[float] = None,
        *,
        reference: Optional[ReferenceMeasurement] = None,
    ) -> np.ndarray:
        """Exposure at each of ``distances``, as :meth:`exposure_at` would give it."""
        x_30, buildup = self._resolve_reference(x_30, buildup, reference)
        n = self.estimate_n(x_30, buildup)
        return exposure_profile(distances, self.contact_exposure, n, buildup, self.self_distance)

    def describe(self) -> Dict[str, Any]:
        """Plain-dict summary of the source for reports."""
        summary: Dict[str, Any] = {"shape": self.shape}
        for f in fields(self):
            value = getattr(self, f.name)
            summary[f.name] = value.value if isinstance(value, Enum) else value
        summary["self_distance"] = self.self_distance
        summary["nominal_exponent"] = self.nominal_exponent
        return summary


@dataclass(frozen=True)
class CubeSource(RadiationSource):
    """Cube of side ``side`` metres, r_s = side / 2."""

    side: float
    contact_exposure: float

    shape: ClassVar[str] = "cube"
    nominal_exponent: ClassVar[float] = CUBE_NOMINAL_EXPONENT

    def __post_init__(self):
        require_positive("side", self.side)
        require_positive("contact_exposure", self.contact_exposure)

    @property
    def self_distance(self) -> float:
        return self.side / 2


@dataclass(frozen=True)
class CylinderSource(RadiationSource):
    """
    Right cylinder viewed from its side or its top.

    Attributes:
        diameter: Cylinder diameter in metres
        height: Cylinder height in metres
        orientation: Face the distance is measured from ("side" or "top")
        contact_exposure: Exposure rate at that face
    """

    diameter: float
    height: float
    orientation: CylinderOrientation
    contact_exposure: float

    shape: ClassVar[str] = "cylinder"
    nominal_exponent: ClassVar[float] = CYLINDER_NOMINAL_EXPONENT

    def __post_init__(self):
        require_positive("diameter", self.diameter)
        require_positive("height", self.height)
        try:
            orientation = CylinderOrientation(self.orientation)
        except ValueError:
            raise InvalidInput(
                "orientation", self.orientation, "one of 'side', 'top'"
            ) from None
        object.__setattr__(self, "orientation", orientation)
        require_positive("contact_exposure", self.contact_exposure)

    @property
    def self_distance(self) -> float:
        if self.orientation is CylinderOrientation.TOP:
            return self.height / 2
        return self.diameter / 2


SOURCE_SHAPES: Dict[str, Type[RadiationSource]] = {
    CubeSource.shape: CubeSource,
    CylinderSource.shape: CylinderSource,
}


def make_source(shape: str, **geometry: Any) -> RadiationSource:
    """
    Build a source from its shape name and keyword geometry.

    Example:
        make_source("cylinder", diameter=0.1, height=0.2,
                    orientation="top", contact_exposure=100)
    """
    try:
        cls = SOURCE_SHAPES[shape]
    except (KeyError, TypeError):
        raise InvalidInput("shape", shape, f"one of {sorted(SOURCE_SHAPES)}") from None

    names = [f.name for f in fields(cls)]
    missing = [name for name in names if name not in geometry]
    if missing:
        raise InvalidInput(missing[0], None, f"given for a {shape} source")
    unknown = sorted(set(geometry) - set(names))
    if unknown:
        raise InvalidInput(unknown[0], geometry[unknown[0]], f"not a {shape} parameter")

    return cls(**geometry)
