"""Standoff exposure-rate projection for compact radioactive sources."""

from importlib.metadata import version

from standoff.core.sources import CubeSource, CylinderSource, RadiationSource
from standoff.physics.attenuation import InvalidInput, calculate_n, estimate_exposure

__all__ = [
    "__version__",
    "CubeSource",
    "CylinderSource",
    "RadiationSource",
    "InvalidInput",
    "calculate_n",
    "estimate_exposure",
]

try:
    __version__ = version("standoff")
except Exception:  # fallback for editable installs before metadata exists
    __version__ = "0.1.0"
