# mosfetbot

Building blocks for an agent that plays a turn-based shuttle strategy game.
The agent reads a JSON observation once per turn, keeps track of what it has
worked out about the map, and hands out jobs to its shuttles.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `mosfetbot.config`: the `Config` dataclass of settings. `load_config(filename)` reads a
  `key=value` properties file. `parse_config_lines(lines)` collects the pairs from lines
  already in memory, and `Config.from_mapping(values)` builds the settings from them. Boolean
  settings are true only for the exact text `true`. `seed`, `prioritization_strategy` and
  `prioritization_tolerance` must hold integers, or a `ValueError` is raised. A port is read
  only when live play is enabled for that player.
- `mosfetbot.logger`: `Logger` and `get_logger()`, which returns the one shared instance.
  Nothing is written until `enable_logging(filename)` opens a file for appending. After that,
  each `log(message)` call writes a line stamped with minutes, seconds and milliseconds, the
  step id and the player name. `close()` closes the file, and the logger can also be used as a
  context manager.
- `mosfetbot.parser`: the observation model, made of `GameState`, `Obs`, `Units`,
  `MapFeatures` and `Info`. `parse(text)` decodes a JSON string and
  `game_state_from_dict(data)` decodes an already-decoded object. Keys that are absent keep
  their defaults, and values of the wrong type raise `TypeError`. `to_string(game_state)`
  gives a tab-indented dump.
- `mosfetbot.value_range`: `Range`, a closed interval of floats with `contains`, `width` and
  `is_point`.
- `mosfetbot.energy_distribution`: `ShuttleEnergyChangeDistribution`. It is one hypothesis
  about a shuttle's energy change between turns, built from movement cost, tile energy, nebula
  reduction, melee sapping and direct or indirect ranged sapping. `compute_energy` returns the
  energy this hypothesis predicts.
- `mosfetbot.constraint_set`: `ConstraintSet` and `ConstraintObservation`. Each turn you
  feed in the points gained over a set of halo tiles. From these the set deduces which tiles
  are vantage points (`identified_vantage_points`) and which are regular tiles
  (`identified_regular_tiles`). `MapGeometry` handles the map's diagonal mirror symmetry.
- `mosfetbot.jobs`: `Job` and its kinds (`RelicMinerJob`, `RelicMiningNavigatorJob`,
  `HaloNodeExplorerJob`, `HaloNodeNavigatorJob`, `TrailblazerNavigatorJob`, `DefenderJob`,
  `RechargeJob`), together with `Applicant`, `JobApplication` and `JobBoard`. Applications
  whose first move lands on one of the applicant's collision-risk tiles are declined as
  `RISKY`. `sort_applications()` orders the rest by priority and distance, measured from the
  shuttle (strategy 0) or from the origin (strategy 1).

## Examples

```python
from mosfetbot.parser import parse

state = parse('{"obs": {"steps": 12, "match_steps": 12}, "player": "player_0"}')
print(state.obs.steps, state.player)  # 12 player_0
```

```python
from mosfetbot.constraint_set import ConstraintSet, MapGeometry

constraints = ConstraintSet(MapGeometry(width=24, height=24))
constraints.add_constraint(0, {25, 26})
print(sorted(constraints.identified_regular_tiles))  # [25, 26, 526, 550]
```

```python
from mosfetbot.jobs import Applicant, JobBoard, RelicMinerJob

board = JobBoard(map_width=24)
job = RelicMinerJob(0, 3, 4)
board.add_job(job)
application = board.apply_for_job(job, Applicant(id=0, x=3, y=4), [0, 0, 0])
application.set_priority(1)
print(application.priority)  # 6001
```

```python
from mosfetbot.energy_distribution import ShuttleEnergyChangeDistribution

change = ShuttleEnergyChangeDistribution(move_cost=2, tile_energy=3)
print(change.compute_energy(100, unit_sap_cost=30, max_energy=400))  # 101
```

## What the package does not do

The package is a library of parts and contains no agent that plays a whole game:

- It has no command and no per-turn loop that reads observations from standard input and
  prints actions.
- It does no path finding and has no shuttle roles that apply for jobs on their own. You
  create applications yourself through `JobBoard.apply_for_job`.
- It tracks neither opponents nor respawns, and it keeps no record of relics.
- It has no visualiser, replay recording or metrics output.