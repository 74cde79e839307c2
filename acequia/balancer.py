"""A balancing strategy: surplus regions feed regions that fall short of their need."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from acequia.model import AcequiaManager, Canal, Region

_FULL_FLOW_GAP = -3.6
_SLOW_FLOW_GAP = -0.36
_SLOW_RATE = 0.1
_DROUGHT_SHARE = 0.2


@dataclass
class _Gap:
    region: Region
    gap: float


def _reset(canals: list[Canal]) -> None:
    for canal in canals:
        canal.set_flow_rate(0)
        canal.toggle_open(False)


def _fallback(
    surplus: _Gap,
    south_to_east: Canal,
    east_to_north: Canal,
    north_to_south: Canal,
    out: TextIO,
) -> None:
    """Route water the long way round when no canal joins the two regions."""
    if surplus.region.name == "South":
        print("[DEBUG] Fallback: south drains via StE and EtN.", file=out)
        if surplus.gap < _FULL_FLOW_GAP:
            south_to_east.set_flow_rate(1.0)
            east_to_north.set_flow_rate(1.0)
            south_to_east.toggle_open(True)
            east_to_north.toggle_open(True)
        elif surplus.gap < _SLOW_FLOW_GAP:
            east_to_north.set_flow_rate(_SLOW_RATE)
            north_to_south.set_flow_rate(_SLOW_RATE)
            south_to_east.toggle_open(True)
            east_to_north.toggle_open(True)
        else:
            south_to_east.toggle_open(False)
            east_to_north.toggle_open(False)
    else:
        print(
            f"[DEBUG] Fallback: {surplus.region.name} drains via EtN and NtS.",
            file=out,
        )
        if surplus.gap < _FULL_FLOW_GAP:
            east_to_north.set_flow_rate(1.0)
            north_to_south.set_flow_rate(1.0)
            east_to_north.toggle_open(True)
            north_to_south.toggle_open(True)
        elif surplus.gap < _SLOW_FLOW_GAP:
            east_to_north.set_flow_rate(_SLOW_RATE)
            north_to_south.set_flow_rate(_SLOW_RATE)
            east_to_north.toggle_open(True)
            north_to_south.toggle_open(True)
        else:
            east_to_north.toggle_open(False)
            north_to_south.toggle_open(False)


def _split_gaps(manager: AcequiaManager, out: TextIO) -> tuple[list[_Gap], list[_Gap]]:
    deficits: list[_Gap] = []
    surpluses: list[_Gap] = []
    for region in manager.regions:
        gap = region.water_need - region.water_level
        if gap > 0:
            print(f"[DEBUG] {region.name} deficit={gap:g}", file=out)
            deficits.append(_Gap(region, gap))
        else:
            print(f"[DEBUG] {region.name} surplus={gap:g}", file=out)
            surpluses.append(_Gap(region, gap))
    print(
        f"[DEBUG] Total deficits={len(deficits)}, surpluses={len(surpluses)}",
        file=out,
    )
    return deficits, surpluses


def solve_problems(manager: AcequiaManager, out: TextIO | None = None) -> None:
    """Run the simulation, each hour piping water from surplus to deficit regions.

    Canals are reset every hour. Balancing only happens when the network as a
    whole is neither over capacity nor below the drought share of it; debug
    lines are written to ``out`` (standard error by default).
    """
    out = out if out is not None else sys.stderr
    canals = manager.canals
    north_to_south, south_to_east, north_to_east, east_to_north = canals[:4]
    north = north_to_south.source_region
    south = south_to_east.source_region
    east = north_to_east.destination_region
    basin = (north, south, east)

    total_water = sum(r.water_level for r in basin)
    total_capacity = sum(r.water_capacity for r in basin)

    while not manager.is_solved and manager.hour != manager.simulation_max:
        print(f"[DEBUG] ===== Hour {manager.hour} =====", file=out)
        _reset(canals)

        balanced = (
            total_water <= total_capacity
            and not total_water < total_capacity * _DROUGHT_SHARE
        )
        if balanced:
            deficits, surpluses = _split_gaps(manager, out)
            for deficit in deficits:
                for surplus in surpluses:
                    canal = manager.get_canal(surplus.region, deficit.region)
                    if canal is None:
                        print(
                            f"[DEBUG] No direct canal from {surplus.region.name} "
                            f"to {deficit.region.name}. Using fallback.",
                            file=out,
                        )
                        _fallback(surplus, south_to_east, east_to_north, north_to_south, out)
                        continue
                    print(
                        f"[DEBUG] Direct canal from {surplus.region.name} to "
                        f"{deficit.region.name} opened at rate=1.0.",
                        file=out,
                    )
                    if surplus.gap < _FULL_FLOW_GAP:
                        canal.set_flow_rate(1.0)
                        canal.toggle_open(True)
                    elif surplus.gap < _SLOW_FLOW_GAP:
                        canal.set_flow_rate(_SLOW_RATE)
                        canal.toggle_open(True)
                    else:
                        canal.toggle_open(False)

        manager.next_hour()