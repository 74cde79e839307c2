# acequia

A small simulation for practising water-management strategies. Three
regions (North, South and East) each hold some water, need some water and
can hold only so much. Four one-way canals connect them:

| Canal   | From  | To    |
|---------|-------|-------|
| Canal A | North | South |
| Canal B | South | East  |
| Canal C | North | East  |
| Canal D | East  | North |

Every simulated hour the manager runs each open canal for 3600 seconds at
its flow rate; a flow rate of 1 moves 3.6 units of water in an hour. A
region is flooded when its level reaches its capacity (the level is then
held at the capacity). It is in drought when its level drops below a fifth
of its capacity without being above its need, or when it would go below
zero (the level is then held at zero). The goal is to have every region
above its need, neither flooded nor in drought, before the hour limit.

Four water sources (Rio Grande, ABQ Underground Aquifer, Elephant Butte
Dam, Pecos) are attached to the regions and canals; their levels do not
change during a run.

## Running a round

```
acequia
```

By default this draws a new random scenario, saves it to
`RandomValues.dat`, shows the starting values, waits for you to press
Enter, runs the `general` solver, then prints the final state of the
regions, the score and the leaderboard.

Options:

- `--scenario PATH`: scenario file to write and run (default
  `RandomValues.dat`);
- `--solver {balancer,flood,general}`: strategy that moves the water
  (default `general`);
- `--seed N`: seed for the random scenario, for repeatable runs;
- `--reuse`: run the existing scenario file instead of drawing a new one;
- `--yes`: do not wait for confirmation before running.

The command exits with status 1 if the scenario file cannot be written or
cannot be read.

## Scenario files

A scenario holds a simulation length between 50 and 120 hours and, for each
region, a whole-number water level (0–100), need (50–100) and capacity
(100–200):

```
Max Simulation Time
87
Random Values
North,42,61,153
South,90,77,120
East,13,55,181
```

The first and third lines are headers; the second is the hour limit; each
later non-empty line is `name,level,need,capacity`.

## Scoring

- 10 points for each region that ends neither flooded nor in drought, with
  its water level at or above its need;
- minus one point for every flood or drought event during the run;
- a 50 point bonus, and the hour it happened, if every region met the goal
  before time ran out.

The score is recorded on the manager's leaderboard under the name
`StudentSolution`.

## Using it from Python

`acequia.scenario` generates, formats, writes, parses and reads scenarios
(`generate_scenario`, `format_scenario`, `write_scenario`,
`parse_scenario`, `read_scenario`), as `Scenario` and `RegionSpec` values:

```python
import random
from acequia.scenario import generate_scenario, write_scenario, read_scenario

scenario = generate_scenario(random.Random(7))
write_scenario(scenario, "RandomValues.dat")
same = read_scenario("RandomValues.dat")
```

`acequia.model.AcequiaManager` is built with `from_scenario` or `load`,
and `acequia.cli.run_simulation` runs a solver on it, writes the state,
evaluation and leaderboard reports, and returns the score:

```python
import sys
from acequia.model import AcequiaManager
from acequia.cli import run_simulation
from acequia import general

manager = AcequiaManager.load("RandomValues.dat")
score = run_simulation(manager, general.solve_problems, sys.stdout)
```

The manager exposes `regions`, `canals`, `water_sources`, `hour`,
`simulation_max` and `is_solved`, and the methods `next_hour()`,
`solved()`, `penalties()`, `get_canal(source, destination)`,
`state_report()`, `evaluate_solution()` and `leaderboard_report()`.

Three solvers come with the package, each with the signature
`solve_problems(manager, out)`:

- `acequia.general`: every region with more water than its need opens its
  outgoing canals, passing on at most its excess each hour; the
  North-to-East canal is never used. Progress lines go to standard output.
- `acequia.balancer`: canals are closed every hour; when the starting total
  water lies between a fifth of the total capacity and the total capacity,
  regions in surplus feed regions in deficit through the direct canal, or
  a two-canal route when there is none. Debug lines go to standard error
  by default.
- `acequia.flood`: acts only when the regions start with at least their
  combined capacity; each hour it drains flooded regions towards a single
  region chosen to take the excess.

A solver of your own sets flow rates with `Canal.set_flow_rate`, opens or
closes canals with `Canal.toggle_open`, and calls `manager.next_hour()`
until `manager.is_solved` is true or `manager.hour` reaches
`manager.simulation_max`.

## What it does not do

- The command only runs the three built-in solvers; a solver of your own is
  run from Python with `run_simulation`.
- The leaderboard lives in memory for one run and is not saved anywhere.

## Tests

```
pip install -e ".[test]"
pytest
```