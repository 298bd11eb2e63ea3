"""Agent configuration read from a ``key=value`` properties file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str | None, key: str) -> int:
    """Read the leading integer of ``text``, ignoring what follows it."""
    match = _LEADING_INT.match(text or "")
    if match is None:
        raise ValueError(f"config key {key!r} needs an integer, got {text!r}")
    return int(match.group(1))


def _flag(values: Mapping[str, str], key: str) -> bool:
    return values.get(key) == "true"


@dataclass
class Config:
    """Settings that steer logging, metrics, visualisation and planning."""

    enable_logging: bool = False
    enable_metrics: bool = False
    enable_metric_details: bool = False
    live_play_player0: bool = False
    live_play_player1: bool = False
    record_player0: bool = False
    record_player1: bool = False
    port_player0: int = 0
    port_player1: int = 0
    seed: int = 0
    phase_out_constraints: bool = True
    prioritization_strategy: int = 0
    prioritization_tolerance: int = 3

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "Config":
        """Build a configuration from raw property values.

        Boolean settings are true only for the exact text ``true``. Integer
        settings other than the ports are required; a port is read only when
        live play is enabled for that player.
        """
        live0 = _flag(values, "live_play_player0")
        live1 = _flag(values, "live_play_player1")
        return cls(
            enable_logging=_flag(values, "enable_logging"),
            enable_metrics=_flag(values, "enable_metrics"),
            enable_metric_details=_flag(values, "enable_metric_details"),
            live_play_player0=live0,
            live_play_player1=live1,
            record_player0=_flag(values, "record_player0"),
            record_player1=_flag(values, "record_player1"),
            port_player0=_to_int(values.get("port_player0"), "port_player0") if live0 else 0,
            port_player1=_to_int(values.get("port_player1"), "port_player1") if live1 else 0,
            phase_out_constraints=_flag(values, "phase_out_constraints"),
            prioritization_strategy=_to_int(
                values.get("prioritization_strategy"), "prioritization_strategy"
            ),
            prioritization_tolerance=_to_int(
                values.get("prioritization_tolerance"), "prioritization_tolerance"
            ),
            seed=_to_int(values.get("seed"), "seed"),
        )


def parse_config_lines(lines: Iterable[str]) -> dict[str, str]:
    """Collect ``key=value`` pairs, skipping comments and lines without a value.

    The key is everything before the first ``=``; the value is the rest of the
    line. Later occurrences of a key replace earlier ones.
    """
    values: dict[str, str] = {}
    for raw in lines:
        line = raw.removesuffix("\n")
        if not line or line.startswith("#"):
            continue
        key, separator, value = line.partition("=")
        if not separator or not value:
            continue
        values[key] = value
    return values


def load_config(filename: str) -> Config:
    """Read a properties file and build a :class:`Config` from it."""
    with open(filename, encoding="utf-8", newline="") as handle:
        values = parse_config_lines(handle)
    return Config.from_mapping(values)