"""A general strategy: every region with water above its need shares the excess."""

from __future__ import annotations

import sys
from typing import TextIO

from acequia.model import SECONDS_PER_HOUR, AcequiaManager

# Water moved in one hour by a canal with a flow rate of 1.
_UNITS_PER_HOUR_AT_FULL_RATE = 3.6
# Kept back from a partial flow so a region never ends just below its need.
_PRECISION_MARGIN = 0.00000001
_SEVERE_DROUGHT = (
    "There is a severe drought and thus not enough water for every region. "
    "Ending simulation"
)


def _hour_report(manager: AcequiaManager) -> str:
    parts = "".join(
        f"{r.name} = {r.water_level:g} Drought: {int(r.is_in_drought)}, "
        for r in manager.regions
    )
    return f"HOUR {manager.hour}: {parts}"


def solve_problems(manager: AcequiaManager, out: TextIO | None = None) -> None:
    """Run the simulation, letting each region pass on only what exceeds its need.

    The north-to-east canal is never used, so water flows around the network
    in one direction. When no canal can be opened the run is carried to its end.
    """
    out = out if out is not None else sys.stdout
    canals = manager.canals
    north_to_east = canals[2]

    while not manager.is_solved and manager.hour != manager.simulation_max:
        print(_hour_report(manager), file=out)

        closed = 0
        for canal in canals:
            source = canal.source_region
            if source.water_level > source.water_need and canal is not north_to_east:
                excess = source.water_level - source.water_need
                if excess < _UNITS_PER_HOUR_AT_FULL_RATE:
                    canal.set_flow_rate(
                        excess / _UNITS_PER_HOUR_AT_FULL_RATE - _PRECISION_MARGIN
                    )
                else:
                    canal.set_flow_rate(1)
                canal.toggle_open(True)
            else:
                canal.toggle_open(False)
                closed += 1
            if closed == len(canals):
                print(_SEVERE_DROUGHT, file=out)
                while manager.hour != manager.simulation_max - 1:
                    manager.next_hour()

        manager.next_hour()


__all__ = ["solve_problems", "SECONDS_PER_HOUR"]