"""Source models and configuration."""

from standoff.core.config import DEFAULT_DISTANCES_M, ProjectionConfig
from standoff.core.sources import (
    CubeSource,
    CylinderOrientation,
    CylinderSource,
    RadiationSource,
    ReferenceMeasurement,
    make_source,
)

__all__ = [
    "DEFAULT_DISTANCES_M",
    "ProjectionConfig",
    "RadiationSource",
    "CubeSource",
    "CylinderSource",
    "CylinderOrientation",
    "ReferenceMeasurement",
    "make_source",
]
