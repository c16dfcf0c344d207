"""Scenario read/write helpers for JSON/YAML projection inputs."""

from __future__ import annotations

import importlib.util
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from standoff.core.config import ProjectionConfig
from standoff.core.sources import RadiationSource, ReferenceMeasurement, make_source
from standoff.physics.attenuation import InvalidInput


def _load_yaml_module():
    if importlib.util.find_spec("yaml") is None:
        return None
    import yaml

    return yaml


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _write_text(path: Path, payload: str) -> None:
    path.write_text(payload, encoding="utf-8")


def read_document(path: Path) -> Dict[str, Any]:
    """Read a scenario mapping from JSON or YAML depending on extension."""
    if path.suffix.lower() in {".yml", ".yaml"}:
        yaml = _load_yaml_module()
        if yaml is None:
            raise ImportError("PyYAML is required to read YAML scenarios.")
        try:
            document = yaml.safe_load(_read_text(path))
        except yaml.YAMLError as exc:
            raise InvalidInput(str(path), None, f"valid YAML ({exc})") from exc
    else:
        try:
            document = json.loads(_read_text(path))
        except json.JSONDecodeError as exc:
            raise InvalidInput(str(path), None, f"valid JSON ({exc})") from exc

    if not isinstance(document, dict):
        raise InvalidInput(str(path), type(document).__name__, "a mapping document")
    return document


def write_document(path: Path, payload: Dict[str, Any]) -> None:
    """Write a mapping as JSON or YAML depending on extension."""
    if path.suffix.lower() in {".yml", ".yaml"}:
        yaml = _load_yaml_module()
        if yaml is None:
            raise ImportError("PyYAML is required to write YAML results.")
        _write_text(path, yaml.safe_dump(payload, sort_keys=False))
    else:
        _write_text(path, json.dumps(payload, indent=2))


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = data[key]
    if not isinstance(section, dict):
        raise InvalidInput(key, section, "a mapping")
    return dict(section)


@dataclass
class Scenario:
    """A source, an optional calibration reading and the projection defaults."""

    source: RadiationSource
    reference: Optional[ReferenceMeasurement] = None
    config: ProjectionConfig = field(default_factory=ProjectionConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scenario":
        if not isinstance(data, dict) or "source" not in data:
            raise InvalidInput("source", None, "present in the scenario")

        config = ProjectionConfig.from_dict(data.get("config") or {})

        source_data = _section(data, "source")
        shape = source_data.pop("shape", None)
        source = make_source(shape, **source_data)

        reference = None
        if data.get("reference"):
            ref_data = _section(data, "reference")
            if "x_30" not in ref_data:
                raise InvalidInput("x_30", None, "present in the reference")
            reference = ReferenceMeasurement(
                x_30=ref_data["x_30"],
                buildup=ref_data.get("buildup", config.buildup),
            )
        return cls(source=source, reference=reference, config=config)

    def evaluate(self) -> Dict[str, Any]:
        """Project exposure over the configured distances."""
        if self.reference is not None:
            exposures = self.source.exposure_profile(
                self.config.distances, reference=self.reference
            )
            n = self.source.estimate_n(reference=self.reference)
            buildup = self.reference.buildup
        else:
            exposures = self.source.exposure_profile(
                self.config.distances, buildup=self.config.buildup
            )
            n = self.source.estimate_n()
            buildup = self.config.buildup

        return {
            "source": self.source.describe(),
            "calibrated": self.reference is not None,
            "reference": (
                {"x_30": self.reference.x_30, "buildup": self.reference.buildup}
                if self.reference is not None
                else None
            ),
            "exponent": n,
            "buildup": buildup,
            "distances_m": list(self.config.distances),
            "exposures": [float(x) for x in exposures],
        }


def load_scenario(path: Path) -> Scenario:
    return Scenario.from_dict(read_document(path))
