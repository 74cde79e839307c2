"""Regions, water sources, canals and the manager that runs the simulation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from acequia.scenario import Scenario, read_scenario

SECONDS_PER_HOUR = 3600
GALLONS_PER_UNIT = 1000
SOLUTION_NAME = "StudentSolution"


class WaterSourceType(enum.Enum):
    RIVER = enum.auto()
    UNDERGROUND = enum.auto()
    DAM = enum.auto()


@dataclass(eq=False)
class Region:
    """A region with a water level, a need and a capacity."""

    name: str
    water_level: float
    water_need: float
    water_capacity: float
    is_flooded: bool = False
    is_in_drought: bool = False
    overflow: int = 0
    drought: int = 0
    supplied_water: list[WaterSource] = field(default_factory=list, repr=False)

    def update_water_level(self, change: float) -> None:
        """Apply a change in water and update the flood and drought flags."""
        self.water_level += change
        if self.water_level >= self.water_capacity:
            self.water_level = self.water_capacity
            self.is_flooded = True
            self.is_in_drought = False
            self.overflow += 1
        elif self.water_need < self.water_level < self.water_capacity:
            self.is_flooded = False
            self.is_in_drought = False
        elif self.water_level >= 0.2 * self.water_capacity:
            self.is_flooded = False
            self.is_in_drought = False
        else:
            self.is_in_drought = True
            self.is_flooded = False
            self.drought += 1
        if self.water_level < 0:
            self.water_level = 0.0
            self.is_in_drought = True
            self.is_flooded = False

    def add_water_source(self, source: WaterSource) -> None:
        self.supplied_water.append(source)


@dataclass(eq=False)
class WaterSource:
    """A river, aquifer or dam that supplies regions."""

    name: str
    type: WaterSourceType
    water_level: float

    def update_water_level(self, change: float) -> None:
        self.water_level += change


@dataclass(eq=False)
class Canal:
    """A one-way channel that moves water from one region to another."""

    name: str
    source_region: Region
    destination_region: Region
    water_source: WaterSource
    flow_rate: float = 0.0
    is_open: bool = False

    def set_flow_rate(self, rate: float) -> None:
        self.flow_rate = rate

    def toggle_open(self, is_open: bool) -> None:
        self.is_open = is_open

    def update_water(self, seconds: int) -> None:
        """Move water for the given number of seconds if the canal is open."""
        if not self.is_open:
            return
        change = 0.0
        for _ in range(seconds):
            change += self.flow_rate
        amount = change / GALLONS_PER_UNIT
        self.source_region.update_water_level(-amount)
        self.destination_region.update_water_level(amount)


class AcequiaManager:
    """Holds the simulation state, advances time and scores the outcome."""

    def __init__(self) -> None:
        self.regions: list[Region] = []
        self.water_sources: list[WaterSource] = []
        self.canals: list[Canal] = []
        self.leaderboard: dict[str, float] = {}
        self.hour = 0
        self.simulation_max = 0
        self.is_solved = False
        self.solved_time = 0

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> AcequiaManager:
        """Build a manager with the regions of a scenario and the fixed network."""
        if len(scenario.regions) < 3:
            raise ValueError("a scenario needs at least three regions")
        manager = cls()
        manager.simulation_max = scenario.simulation_max
        manager.regions = [
            Region(
                r.name,
                float(r.water_level),
                float(r.water_need),
                float(r.water_capacity),
            )
            for r in scenario.regions
        ]
        manager._build_water_sources()
        manager._build_canals()
        manager._apply_constraints()
        manager.hour = 0
        manager.solved_time = 0
        manager.is_solved = False
        return manager

    @classmethod
    def load(cls, path: str | Path) -> AcequiaManager:
        """Build a manager from a scenario file."""
        return cls.from_scenario(read_scenario(path))

    def _build_water_sources(self) -> None:
        self.water_sources = [
            WaterSource("Rio Grande", WaterSourceType.RIVER, 100.0),
            WaterSource("ABQ Underground Aquifer", WaterSourceType.UNDERGROUND, 200.0),
            WaterSource("Elephant Butte Dam", WaterSourceType.DAM, 150.0),
            WaterSource("Pecos", WaterSourceType.RIVER, 80.0),
        ]
        links = ((0, 0), (1, 0), (0, 1), (1, 2), (0, 3), (2, 3))
        for region_index, source_index in links:
            self.regions[region_index].add_water_source(self.water_sources[source_index])

    def _build_canals(self) -> None:
        north, south, east = self.regions[:3]
        sources = self.water_sources
        self.canals = [
            Canal("Canal A", north, south, sources[0]),
            Canal("Canal B", south, east, sources[2]),
            Canal("Canal C", north, east, sources[3]),
            Canal("Canal D", east, north, sources[2]),
        ]

    def _apply_constraints(self) -> None:
        for region in self.regions:
            region.update_water_level(0)
            region.overflow = 0
            region.drought = 0

    def next_hour(self) -> None:
        """Run every open canal for one hour and check whether the goal is met."""
        for canal in self.canals:
            if canal.is_open:
                canal.update_water(SECONDS_PER_HOUR)
        self.is_solved = self.solved()
        if self.is_solved:
            self.solved_time = self.hour
        self.hour += 1

    def solved(self) -> bool:
        """True when no region is flooded or in drought and every level exceeds its need."""
        return all(
            not r.is_flooded and not r.is_in_drought and r.water_level > r.water_need
            for r in self.regions
        )

    def penalties(self) -> int:
        """Count every overflow and drought event of every region."""
        return sum(r.overflow + r.drought for r in self.regions)

    def get_canal(self, source: Region, destination: Region) -> Canal | None:
        """Return the canal running from source to destination, if there is one."""
        return next(
            (
                c
                for c in self.canals
                if c.source_region is source and c.destination_region is destination
            ),
            None,
        )

    def state_report(self) -> str:
        """Describe the current state of each region."""
        lines = ["Current State: ", "-----------------"]
        lines.extend(
            f"Region: {r.name}, Water Level: {r.water_level:g}, "
            f"Water Need: {r.water_need:g}, "
            f"Flooded: {'Yes' if r.is_flooded else 'No'}, "
            f"Drought: {'Yes' if r.is_in_drought else 'No'}"
            for r in self.regions
        )
        lines.append("------------------")
        return "\n".join(lines) + "\n"

    def evaluate_solution(self) -> str:
        """Score the outcome, record it on the leaderboard and return the report."""
        score = 0.0
        for r in self.regions:
            if not r.is_flooded and not r.is_in_drought and r.water_level >= r.water_need:
                score += 10.0
        score -= self.penalties()
        if self.is_solved:
            score += 50
            message = f"Time solved = {self.solved_time}"
        else:
            message = "Not all regions were solved in time."
        self.leaderboard[SOLUTION_NAME] = score
        return f"{message}\n--------------------\n\n"

    def leaderboard_report(self) -> str:
        """List every recorded score, ordered by name."""
        lines = ["----------------", "Leaderboard: "]
        lines.extend(f"{name}:{score:g}" for name, score in sorted(self.leaderboard.items()))
        return "\n".join(lines) + "\n"