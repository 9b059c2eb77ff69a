"""Reproducible demo support: seeded RNG and starting scenarios."""

from pathway.demo.seeded_rng import SeededRNG, seeded
from pathway.demo.scenarios import (
    DEFAULT_SCENARIOS,
    Scenario,
    build_initial_record,
    default_record,
    get_scenario,
)

__all__ = [
    "SeededRNG",
    "seeded",
    "Scenario",
    "DEFAULT_SCENARIOS",
    "build_initial_record",
    "default_record",
    "get_scenario",
]
