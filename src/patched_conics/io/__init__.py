"""Scenario I/O namespace."""

from .presets import solar_system  # noqa: F401
from .scenario import (  # noqa: F401
    ScenarioDefinition,
    ScenarioRuntime,
    bodies_to_definition,
    load_scenario,
    save_scenario,
    scenario_to_runtime,
    validate_scenario,
)
