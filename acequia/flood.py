"""A flood strategy: when every region is full, one region takes the excess."""

from __future__ import annotations

import sys
from typing import TextIO

from acequia.model import AcequiaManager, Canal, Region


def _hour_report(manager: AcequiaManager) -> str:
    parts = "".join(f"{r.name} = {r.water_level:g}, " for r in manager.regions)
    return f"HOUR {manager.hour}: {parts}"


def _route(
    north: Region,
    south: Region,
    east: Region,
    north_to_south: Canal,
    south_to_east: Canal,
    north_to_east: Canal,
    east_to_north: Canal,
) -> tuple[str, set[Canal]] | None:
    """Pick which canals to open given which regions are flooded.

    Returns a message and the canals to open, or None when no region is flooded.
    """
    flooded = (north.is_flooded, south.is_flooded, east.is_flooded)
    if flooded == (True, False, False):
        return "North is flooded. Flooding from East", {east_to_north}
    if flooded == (False, True, False):
        return "South is flooded. Flooding from North", {north_to_south}
    if flooded == (False, False, True):
        return "East is flooded. Flooding from South", {south_to_east}
    if flooded == (True, True, True):
        return (
            "All regions are flooded. Opening canals to east region",
            {north_to_east, south_to_east},
        )
    if flooded == (True, True, False):
        opened = {north_to_south}
        if east.water_level < east.water_need:
            opened.add(south_to_east)
        return "North and South are flooded. Flooding South", opened
    if flooded == (True, False, True):
        opened = {east_to_north}
        if south.water_level < south.water_need:
            opened.add(north_to_south)
        return "North and East are flooded. Flooding North", opened
    if flooded == (False, True, True):
        opened = {south_to_east}
        if north.water_level < north.water_need:
            opened.add(east_to_north)
        return "South and East are flooded. Flooding East", opened
    return None


def solve_problems(manager: AcequiaManager, out: TextIO | None = None) -> None:
    """Run the simulation, sacrificing one region when the basin starts over capacity.

    The decision to act is taken once, from the starting totals: only when the
    water of the three regions reaches their combined capacity are canals
    opened, and then each hour the flooded regions drain towards a single one.
    Otherwise the canals stay as they are and time simply runs on.
    """
    out = out if out is not None else sys.stdout
    canals = manager.canals
    north_to_south, south_to_east, north_to_east, east_to_north = canals[:4]
    north = north_to_south.source_region
    south = south_to_east.source_region
    east = north_to_east.destination_region
    basin = (north, south, east)

    total_water = sum(r.water_level for r in basin)
    total_capacity = sum(r.water_capacity for r in basin)
    over_capacity = total_water >= total_capacity

    while not manager.is_solved and manager.hour != manager.simulation_max:
        print(_hour_report(manager), file=out)

        if over_capacity:
            for canal in (north_to_east, north_to_south, south_to_east, east_to_north):
                canal.set_flow_rate(1)
            choice = _route(
                north,
                south,
                east,
                north_to_south,
                south_to_east,
                north_to_east,
                east_to_north,
            )
            if choice is not None:
                message, opened = choice
                print(f"{manager.hour}: {message}", file=out)
                for canal in (north_to_south, south_to_east, north_to_east, east_to_north):
                    canal.toggle_open(canal in opened)

        manager.next_hour()