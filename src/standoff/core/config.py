"""Run-time defaults for exposure projections."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from standoff.physics.attenuation import (
    DEFAULT_BUILDUP,
    InvalidInput,
    require_non_negative,
    require_real,
)


DEFAULT_DISTANCES_M: Tuple[float, ...] = (0.0, 0.3, 1.0, 2.0, 3.0)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class ProjectionConfig:
    """
    Defaults applied when a caller does not give them explicitly.

    Attributes:
        buildup: Buildup factor used for projections
        distances: Standoff distances (m) tabulated by reports and the CLI
        log_level: Root logging level name; None leaves the CLI default
    """

    buildup: float = DEFAULT_BUILDUP
    distances: Tuple[float, ...] = field(default_factory=lambda: DEFAULT_DISTANCES_M)
    log_level: Optional[str] = None

    def __post_init__(self):
        self.buildup = require_real("buildup", self.buildup)
        if not math.isfinite(self.buildup):
            raise InvalidInput("buildup", self.buildup, "finite")

        if isinstance(self.distances, (str, bytes)) or not isinstance(self.distances, Iterable):
            raise InvalidInput("distances", self.distances, "a sequence of real numbers")
        self.distances = tuple(require_non_negative("distances", d) for d in self.distances)

        if self.log_level is not None:
            self.log_level = str(self.log_level).upper()
            if self.log_level not in LOG_LEVELS:
                raise InvalidInput("log_level", self.log_level, f"one of {LOG_LEVELS}")

    @property
    def logging_level(self) -> int:
        """Numeric level for ``log_level``; WARNING when it was not set."""
        return getattr(logging, self.log_level or DEFAULT_LOG_LEVEL)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectionConfig":
        if not isinstance(data, dict):
            raise InvalidInput("config", data, "a mapping")
        unknown = sorted(set(data) - {"buildup", "distances", "log_level"})
        if unknown:
            raise InvalidInput(unknown[0], data[unknown[0]], "a known config key")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["distances"] = list(self.distances)
        return data
