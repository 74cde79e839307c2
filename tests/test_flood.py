import io

from acequia.flood import solve_problems
from acequia.model import AcequiaManager
from acequia.scenario import RegionSpec, Scenario


def _manager(regions, simulation_max):
    specs = tuple(RegionSpec(*r) for r in regions)
    return AcequiaManager.from_scenario(Scenario(simulation_max, specs))


FULL = [("North", 150, 80, 150), ("South", 120, 60, 120), ("East", 100, 70, 100)]
CALM = [("North", 90, 80, 150), ("South", 70, 60, 120), ("East", 80, 70, 100)]
DRY = [("North", 10, 80, 150), ("South", 10, 60, 120), ("East", 10, 70, 100)]


def test_all_flooded_opens_canals_into_east():
    manager = _manager(FULL, 1)
    out = io.StringIO()
    solve_problems(manager, out)
    nts, ste, nte, etn = manager.canals
    assert [nts.is_open, ste.is_open, nte.is_open, etn.is_open] == [False, True, True, False]
    assert [c.flow_rate for c in manager.canals] == [1, 1, 1, 1]
    assert "0: All regions are flooded. Opening canals to east region" in out.getvalue()


def test_hour_report_lists_regions():
    manager = _manager(FULL, 1)
    out = io.StringIO()
    solve_problems(manager, out)
    first = out.getvalue().splitlines()[0]
    assert first == "HOUR 0: North = 150, South = 120, East = 100, "


def test_after_draining_only_east_is_flooded():
    manager = _manager(FULL, 3)
    out = io.StringIO()
    solve_problems(manager, out)
    north, south, east = manager.regions
    assert not north.is_flooded
    assert east.is_flooded
    assert north.water_level < north.water_capacity
    assert south.water_level < south.water_capacity
    assert "1: East is flooded. Flooding from South" in out.getvalue()
    nts, ste, nte, etn = manager.canals
    assert [nts.is_open, ste.is_open, nte.is_open, etn.is_open] == [False, True, False, False]


def test_flooded_run_goes_to_time_limit():
    manager = _manager(FULL, 5)
    solve_problems(manager, io.StringIO())
    assert manager.hour == 5
    assert manager.is_solved is False
    assert manager.penalties() > 0


def test_north_only_drains_from_north():
    manager = _manager(FULL, 2)
    solve_problems(manager, io.StringIO())
    north = manager.regions[0]
    assert north.water_level < 150
    assert north.water_level > north.water_need


def test_already_solved_stops_after_first_hour():
    manager = _manager(CALM, 50)
    out = io.StringIO()
    solve_problems(manager, out)
    assert manager.is_solved is True
    assert manager.hour == 1
    assert manager.solved_time == 0
    assert all(not c.is_open for c in manager.canals)


def test_dry_basin_leaves_canals_closed():
    manager = _manager(DRY, 4)
    out = io.StringIO()
    solve_problems(manager, out)
    assert manager.hour == 4
    assert all(not c.is_open for c in manager.canals)
    assert [r.water_level for r in manager.regions] == [10, 10, 10]
    assert len(out.getvalue().splitlines()) == 4


def test_zero_time_limit_does_nothing():
    manager = _manager(FULL, 0)
    out = io.StringIO()
    solve_problems(manager, out)
    assert manager.hour == 0
    assert out.getvalue() == ""