"""Scenario files: the starting values of one simulation run."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from pathlib import Path

REGION_NAMES = ("North", "South", "East")

TIME_RANGE = (50, 120)
WATER_LEVEL_RANGE = (0.0, 100.0)
WATER_NEED_RANGE = (50.0, 100.0)
WATER_CAPACITY_RANGE = (100.0, 200.0)

_TIME_HEADER = "Max Simulation Time"
_VALUES_HEADER = "Random Values"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class RegionSpec:
    """Starting values of one region."""

    name: str
    water_level: int
    water_need: int
    water_capacity: int


@dataclass(frozen=True)
class Scenario:
    """The time limit and the regions of a simulation run."""

    simulation_max: int
    regions: tuple[RegionSpec, ...]


def _uniform_int(rng: random.Random, bounds: tuple[float, float]) -> int:
    low, high = bounds
    return int(low + (high - low) * rng.random())


def generate_scenario(rng: random.Random | None = None) -> Scenario:
    """Draw a random time limit and random whole-number values for each region."""
    rng = rng if rng is not None else random.Random()
    simulation_max = rng.randint(*TIME_RANGE)
    regions = tuple(
        RegionSpec(
            name=name,
            water_level=_uniform_int(rng, WATER_LEVEL_RANGE),
            water_need=_uniform_int(rng, WATER_NEED_RANGE),
            water_capacity=_uniform_int(rng, WATER_CAPACITY_RANGE),
        )
        for name in REGION_NAMES
    )
    return Scenario(simulation_max, regions)


def format_scenario(scenario: Scenario) -> str:
    """Render a scenario in the text format of a scenario file."""
    lines = [_TIME_HEADER, str(scenario.simulation_max), _VALUES_HEADER]
    lines.extend(
        f"{r.name},{r.water_level},{r.water_need},{r.water_capacity}"
        for r in scenario.regions
    )
    return "\n".join(lines) + "\n"


def write_scenario(scenario: Scenario, path: str | Path) -> None:
    """Write a scenario file."""
    Path(path).write_text(format_scenario(scenario), encoding="utf-8")


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group(1))


def _parse_region(line: str) -> RegionSpec:
    fields = line.split(",")
    if fields and fields[-1] == "":
        fields.pop()
    if len(fields) < 4:
        raise ValueError(f"region line needs four fields: {line!r}")
    name, level, need, capacity = fields[:4]
    return RegionSpec(name, _to_int(level), _to_int(need), _to_int(capacity))


def parse_scenario(text: str) -> Scenario:
    """Parse the text of a scenario file.

    The first and third lines are headers; the second holds the time limit;
    every later non-empty line is ``name,level,need,capacity``.
    """
    lines = text.splitlines()
    if len(lines) < 2:
        raise ValueError("scenario has no simulation time")
    simulation_max = _to_int(lines[1])
    regions = tuple(_parse_region(line) for line in lines[3:] if line != "")
    return Scenario(simulation_max, regions)


def read_scenario(path: str | Path) -> Scenario:
    """Read and parse a scenario file."""
    return parse_scenario(Path(path).read_text(encoding="utf-8"))