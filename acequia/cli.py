"""Command line entry point: create a scenario, run a strategy on it and score it."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Callable, Sequence, TextIO

from acequia import balancer, flood, general
from acequia.model import SOLUTION_NAME, AcequiaManager
from acequia.scenario import Scenario, generate_scenario, write_scenario

Solver = Callable[[AcequiaManager, TextIO], None]

DEFAULT_SCENARIO = "RandomValues.dat"

SOLVERS: dict[str, Solver] = {
    "general": general.solve_problems,
    "balancer": balancer.solve_problems,
    "flood": flood.solve_problems,
}


def run_simulation(
    manager: AcequiaManager, solver: Solver, out: TextIO | None = None
) -> float:
    """Let the solver run the simulation, then report the state and the score.

    Returns the score recorded on the manager's leaderboard.
    """
    out = out if out is not None else sys.stdout
    solver(manager, out)
    out.write(manager.state_report())
    out.write(manager.evaluate_solution())
    out.write(manager.leaderboard_report())
    return manager.leaderboard[SOLUTION_NAME]


def _intro(scenario: Scenario, solver_name: str) -> str:
    lines = ["Current State of the Regions: ", "------------------------------"]
    lines.extend(
        f"Region: {r.name}, Water Level: {r.water_level}, "
        f"Water Need: {r.water_need}, Water Capacity: {r.water_capacity}"
        for r in scenario.regions
    )
    lines.append("------------------------------------------------------------")
    lines.append(f"The simulation will run the '{solver_name}' solution.")
    lines.append(
        "Your code must solve each region's water needs within the following "
        f"simulation time: {scenario.simulation_max}"
    )
    return "\n".join(lines) + "\n"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acequia",
        description="Simulate water sharing between regions linked by canals.",
    )
    parser.add_argument(
        "--scenario",
        default=DEFAULT_SCENARIO,
        help="scenario file to write and run (default: %(default)s)",
    )
    parser.add_argument(
        "--solver",
        choices=sorted(SOLVERS),
        default="general",
        help="strategy that moves the water (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, help="seed for the random scenario")
    parser.add_argument(
        "--reuse",
        action="store_true",
        help="run the existing scenario file instead of drawing a new one",
    )
    parser.add_argument(
        "--yes", action="store_true", help="run without waiting for confirmation"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Draw a scenario, write it to disk, then run and score the chosen strategy."""
    args = _build_parser().parse_args(argv)
    out = sys.stdout
    path = Path(args.scenario)

    if not args.reuse:
        scenario = generate_scenario(random.Random(args.seed))
        try:
            write_scenario(scenario, path)
        except OSError as exc:
            print(f"Could not write {path}: {exc}", file=sys.stderr)
            return 1
        out.write(_intro(scenario, args.solver))

    if not args.yes:
        print(
            "When you are ready to run the simulation, you may press Y to run.",
            file=out,
        )
        print("Press Y to test your solveProblems function.", file=out)
        # Any answer continues to the simulation.
        try:
            input()
        except EOFError:
            pass

    try:
        manager = AcequiaManager.load(path)
    except (OSError, ValueError) as exc:
        print(f"execution failed! {exc}", file=sys.stderr)
        return 1

    run_simulation(manager, SOLVERS[args.solver], out)
    return 0


if __name__ == "__main__":
    sys.exit(main())