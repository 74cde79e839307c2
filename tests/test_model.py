import pytest

from acequia.model import AcequiaManager, Canal, Region, WaterSource, WaterSourceType
from acequia.scenario import RegionSpec, Scenario, format_scenario


def _scenario():
    return Scenario(
        60,
        (
            RegionSpec("North", 53, 49, 55),
            RegionSpec("South", 40, 39, 45),
            RegionSpec("East", 30, 26, 50),
        ),
    )


def _region(level, need=50.0, capacity=100.0):
    return Region("R", level, need, capacity)


def test_region_floods_at_capacity():
    region = _region(90.0)
    region.update_water_level(20.0)
    assert region.water_level == 100.0
    assert region.is_flooded and not region.is_in_drought
    assert region.overflow == 1


def test_region_drought_below_fifth_of_capacity():
    region = _region(30.0)
    region.update_water_level(-15.0)
    assert region.is_in_drought and not region.is_flooded
    assert region.drought == 1


def test_region_between_levels_is_fine():
    region = _region(30.0, need=50.0)
    region.is_flooded = True
    region.update_water_level(0)
    assert not region.is_flooded and not region.is_in_drought
    assert region.drought == 0 and region.overflow == 0


def test_region_never_below_zero():
    region = _region(5.0)
    region.update_water_level(-10.0)
    assert region.water_level == 0.0
    assert region.is_in_drought


def test_water_source_level_changes():
    source = WaterSource("Pecos", WaterSourceType.RIVER, 80.0)
    source.update_water_level(-5.0)
    assert source.water_level == 75.0


def test_closed_canal_moves_nothing():
    a, b = _region(60.0), _region(60.0)
    canal = Canal("c", a, b, WaterSource("s", WaterSourceType.DAM, 1.0))
    canal.set_flow_rate(1.0)
    canal.update_water(3600)
    assert a.water_level == 60.0 and b.water_level == 60.0


def test_open_canal_conserves_water():
    a, b = _region(60.0), _region(60.0)
    canal = Canal("c", a, b, WaterSource("s", WaterSourceType.DAM, 1.0))
    canal.set_flow_rate(1.0)
    canal.toggle_open(True)
    canal.update_water(3600)
    assert a.water_level == pytest.approx(60.0 - 3.6)
    assert a.water_level + b.water_level == pytest.approx(120.0)


def test_manager_network():
    manager = AcequiaManager.from_scenario(_scenario())
    north, south, east = manager.regions
    assert [c.name for c in manager.canals] == ["Canal A", "Canal B", "Canal C", "Canal D"]
    assert manager.get_canal(north, south) is manager.canals[0]
    assert manager.get_canal(east, north) is manager.canals[3]
    assert manager.get_canal(south, north) is None
    assert [s.name for s in east.supplied_water] == ["Pecos"]
    assert [s.name for s in north.supplied_water] == [
        "Rio Grande",
        "ABQ Underground Aquifer",
        "Pecos",
    ]
    assert manager.simulation_max == 60
    assert manager.hour == 0 and not manager.is_solved


def test_manager_needs_three_regions():
    with pytest.raises(ValueError):
        AcequiaManager.from_scenario(Scenario(60, (RegionSpec("North", 1, 2, 3),)))


def test_load_from_file(tmp_path):
    path = tmp_path / "RandomValues.dat"
    path.write_text(format_scenario(_scenario()))
    manager = AcequiaManager.load(path)
    assert [r.name for r in manager.regions] == ["North", "South", "East"]
    assert manager.regions[0].water_level == 53.0


def test_next_hour_solves_good_start():
    manager = AcequiaManager.from_scenario(_scenario())
    assert manager.solved()
    manager.next_hour()
    assert manager.is_solved
    assert manager.hour == 1
    assert manager.solved_time == 0


def test_next_hour_runs_open_canals():
    manager = AcequiaManager.from_scenario(_scenario())
    total = sum(r.water_level for r in manager.regions)
    canal = manager.canals[0]
    canal.set_flow_rate(1.0)
    canal.toggle_open(True)
    manager.next_hour()
    assert manager.regions[0].water_level < 53.0
    assert sum(r.water_level for r in manager.regions) == pytest.approx(total)


def test_penalties_sum_counters():
    manager = AcequiaManager.from_scenario(_scenario())
    assert manager.penalties() == 0
    manager.regions[0].overflow = 2
    manager.regions[2].drought = 3
    assert manager.penalties() == 5


def test_state_report():
    manager = AcequiaManager.from_scenario(_scenario())
    lines = manager.state_report().splitlines()
    assert lines[0] == "Current State: "
    assert lines[2] == "Region: North, Water Level: 53, Water Need: 49, Flooded: No, Drought: No"


def test_evaluate_solved():
    manager = AcequiaManager.from_scenario(_scenario())
    manager.next_hour()
    report = manager.evaluate_solution()
    assert report.startswith("Time solved = 0\n")
    assert manager.leaderboard["StudentSolution"] == 80.0
    assert "StudentSolution:80" in manager.leaderboard_report().splitlines()


def test_evaluate_unsolved():
    manager = AcequiaManager.from_scenario(_scenario())
    report = manager.evaluate_solution()
    assert report.startswith("Not all regions were solved in time.")
    assert manager.leaderboard["StudentSolution"] < 50
    assert manager.leaderboard_report().splitlines()[1] == "Leaderboard: "