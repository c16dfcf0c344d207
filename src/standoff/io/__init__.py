"""Scenario file input and result output."""

from standoff.io.scenario import (
    Scenario,
    load_scenario,
    read_document,
    write_document,
)

__all__ = [
    "Scenario",
    "load_scenario",
    "read_document",
    "write_document",
]
