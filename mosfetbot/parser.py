"""Game observation records and their JSON decoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping


def _int(value: Any, name: str) -> int:
    if isinstance(value, (bool, int, float)):
        return int(value)
    raise TypeError(f"{name}: type must be number, but is {type(value).__name__}")


def _ints(value: Any, name: str, depth: int) -> Any:
    """Convert a nested array of the given depth into lists of ints."""
    if depth == 0:
        return _int(value, name)
    if not isinstance(value, list):
        raise TypeError(f"{name}: type must be array, but is {type(value).__name__}")
    return [_ints(item, name, depth - 1) for item in value]


def _section(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def _rows(rows: list[list[int]]) -> str:
    return "".join("\t\t[" + "".join(f"{v}, " for v in row) + "], " for row in rows)


def _flat(values: list[int]) -> str:
    return "".join(f"\t\t{v}, " for v in values)


@dataclass
class Info:
    env_cfg: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Info":
        data = _section(data)
        info = cls()
        if "env_cfg" in data:
            env = data["env_cfg"]
            if not isinstance(env, Mapping):
                raise TypeError(f"env_cfg: type must be object, but is {type(env).__name__}")
            info.env_cfg = {str(k): _int(v, f"env_cfg.{k}") for k, v in env.items()}
        return info

    def __str__(self) -> str:
        body = "".join(f"\t\t{key}: {self.env_cfg[key]}\n" for key in sorted(self.env_cfg))
        return "\n\tenvCfg: \n" + body


@dataclass
class Units:
    position: list[list[list[int]]] = field(default_factory=list)
    energy: list[list[int]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Units":
        data = _section(data)
        units = cls()
        if "position" in data:
            units.position = _ints(data["position"], "position", 3)
        if "energy" in data:
            units.energy = _ints(data["energy"], "energy", 2)
        return units

    def __str__(self) -> str:
        parts = ["\n\tposition: \n"]
        for team in self.position:
            parts.append("\t\t[")
            for pos in team:
                parts.append("[" + "".join(f"{p}, " for p in pos) + "], ")
            parts.append("], ")
        parts.append("\n\tenergy: \n")
        parts.append(_rows(self.energy))
        return "".join(parts)


@dataclass
class MapFeatures:
    energy: list[list[int]] = field(default_factory=list)
    tile_type: list[list[int]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "MapFeatures":
        data = _section(data)
        features = cls()
        if "energy" in data:
            features.energy = _ints(data["energy"], "energy", 2)
        if "tile_type" in data:
            features.tile_type = _ints(data["tile_type"], "tile_type", 2)
        return features

    def __str__(self) -> str:
        return "\n\tenergy: \n" + _rows(self.energy) + "\n\ttileType: \n" + _rows(self.tile_type)


@dataclass
class Obs:
    units: Units = field(default_factory=Units)
    units_mask: list[list[int]] = field(default_factory=list)
    sensor_mask: list[list[int]] = field(default_factory=list)
    map_features: MapFeatures = field(default_factory=MapFeatures)
    relic_nodes_mask: list[int] = field(default_factory=list)
    relic_nodes: list[list[int]] = field(default_factory=list)
    team_points: list[int] = field(default_factory=list)
    team_wins: list[int] = field(default_factory=list)
    steps: int = 0
    match_steps: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Obs":
        data = _section(data)
        obs = cls()
        if "units" in data:
            obs.units = Units.from_dict(data["units"])
        if "units_mask" in data:
            obs.units_mask = _ints(data["units_mask"], "units_mask", 2)
        if "sensor_mask" in data:
            obs.sensor_mask = _ints(data["sensor_mask"], "sensor_mask", 2)
        if "map_features" in data:
            obs.map_features = MapFeatures.from_dict(data["map_features"])
        if "relic_nodes_mask" in data:
            obs.relic_nodes_mask = _ints(data["relic_nodes_mask"], "relic_nodes_mask", 1)
        if "relic_nodes" in data:
            obs.relic_nodes = _ints(data["relic_nodes"], "relic_nodes", 2)
        if "team_points" in data:
            obs.team_points = _ints(data["team_points"], "team_points", 1)
        if "team_wins" in data:
            obs.team_wins = _ints(data["team_wins"], "team_wins", 1)
        if "steps" in data:
            obs.steps = _int(data["steps"], "steps")
        if "match_steps" in data:
            obs.match_steps = _int(data["match_steps"], "match_steps")
        return obs

    def __str__(self) -> str:
        return "".join(
            [
                f"\n\tunits: {self.units}",
                "\n\tunitsMask: \n",
                _rows(self.units_mask),
                "\n\tsensorMask: \n",
                _rows(self.sensor_mask),
                f"\n\tmapFeatures: {self.map_features}",
                "\n\trelicNodesMask: \n",
                _flat(self.relic_nodes_mask),
                "\n\trelicNodes: \n",
                _rows(self.relic_nodes),
                "\n\tteamPoints: \n",
                _flat(self.team_points),
                "\n\tteamWins: \n",
                _flat(self.team_wins),
                f"\n\tsteps: {self.steps}\n",
                f"\tmatchSteps: {self.match_steps}\n",
            ]
        )


@dataclass
class GameState:
    obs: Obs = field(default_factory=Obs)
    remaining_overage_time: int = 0
    player: str = ""
    info: Info = field(default_factory=Info)

    def __str__(self) -> str:
        return (
            f"obs: {self.obs}\n"
            f"remainingOverageTime: {self.remaining_overage_time}\n"
            f"player: {self.player}\n"
            f"info: {self.info}\n"
        )


def game_state_from_dict(data: Any) -> GameState:
    """Build a :class:`GameState` from decoded JSON; absent keys keep defaults."""
    data = _section(data)
    state = GameState()
    if "obs" in data:
        state.obs = Obs.from_dict(data["obs"])
    if "remainingOverageTime" in data:
        state.remaining_overage_time = _int(data["remainingOverageTime"], "remainingOverageTime")
    if "player" in data:
        player = data["player"]
        if not isinstance(player, str):
            raise TypeError(f"player: type must be string, but is {type(player).__name__}")
        state.player = player
    if "info" in data:
        state.info = Info.from_dict(data["info"])
    return state


def parse(text: str) -> GameState:
    """Decode one JSON observation line."""
    return game_state_from_dict(json.loads(text))


def to_string(game_state: GameState) -> str:
    """Render a game state as a multi-line, tab-indented dump."""
    return "\n" + str(game_state)