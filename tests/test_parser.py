import json

import pytest

from mosfetbot.parser import GameState, game_state_from_dict, parse, to_string


@pytest.fixture
def sample():
    return {
        "obs": {
            "units": {
                "position": [[[1, 2], [-1, -1]], [[3, 4], [5, 6]]],
                "energy": [[100, -1], [50, 60]],
            },
            "units_mask": [[1, 0], [1, 1]],
            "sensor_mask": [[1, 1], [0, 1]],
            "map_features": {"energy": [[2, 3], [4, 5]], "tile_type": [[0, 1], [2, -1]]},
            "relic_nodes_mask": [True, False],
            "relic_nodes": [[7, 8], [-1, -1]],
            "team_points": [11, 12],
            "team_wins": [1, 0],
            "steps": 42,
            "match_steps": 41,
        },
        "remainingOverageTime": 60,
        "player": "player_0",
        "info": {"env_cfg": {"max_units": 16, "map_width": 24, "unit_sap_range": 4}},
    }


def test_parse_reads_every_field(sample):
    state = parse(json.dumps(sample))
    assert state.obs.units.position == sample["obs"]["units"]["position"]
    assert state.obs.units.energy == sample["obs"]["units"]["energy"]
    assert state.obs.units_mask == sample["obs"]["units_mask"]
    assert state.obs.sensor_mask == sample["obs"]["sensor_mask"]
    assert state.obs.map_features.tile_type == sample["obs"]["map_features"]["tile_type"]
    assert state.obs.map_features.energy == sample["obs"]["map_features"]["energy"]
    assert state.obs.relic_nodes_mask == [1, 0]
    assert state.obs.relic_nodes == sample["obs"]["relic_nodes"]
    assert state.obs.team_points == [11, 12]
    assert state.obs.team_wins == [1, 0]
    assert state.obs.steps == 42
    assert state.obs.match_steps == 41
    assert state.remaining_overage_time == 60
    assert state.player == "player_0"
    assert state.info.env_cfg == sample["info"]["env_cfg"]


def test_missing_keys_keep_defaults():
    state = game_state_from_dict({"player": "player_1"})
    assert state.player == "player_1"
    assert state.obs.steps == 0
    assert state.obs.units.position == []
    assert state.info.env_cfg == {}


def test_non_object_input_gives_default_state():
    assert parse("[1, 2, 3]") == GameState()


def test_invalid_json_raises():
    with pytest.raises(json.JSONDecodeError):
        parse("{not json")


def test_wrong_type_for_number_raises(sample):
    sample["obs"]["steps"] = "many"
    with pytest.raises(TypeError):
        game_state_from_dict(sample)


def test_wrong_type_for_array_raises(sample):
    sample["obs"]["team_points"] = 5
    with pytest.raises(TypeError):
        game_state_from_dict(sample)


def test_player_must_be_string(sample):
    sample["player"] = 3
    with pytest.raises(TypeError):
        game_state_from_dict(sample)


def test_to_string_sections(sample):
    text = to_string(parse(json.dumps(sample)))
    assert text.startswith("\nobs: \n\tunits: \n\tposition: \n")
    assert "\n\tunitsMask: \n\t\t[1, 0, ], \t\t[1, 1, ], " in text
    assert "\t\t[[1, 2, ], [-1, -1, ], ], " in text
    assert "\n\trelicNodesMask: \n\t\t1, \t\t0, " in text
    assert "\n\tteamPoints: \n\t\t11, \t\t12, " in text
    assert "\n\tsteps: 42\n\tmatchSteps: 41\n" in text
    assert "remainingOverageTime: 60\n" in text
    assert "player: player_0\n" in text
    assert text.endswith("\t\tunit_sap_range: 4\n\n")


def test_to_string_sorts_env_cfg_keys(sample):
    text = to_string(parse(json.dumps(sample)))
    assert text.index("map_width: 24") < text.index("max_units: 16") < text.index("unit_sap_range: 4")