"""Deduce relic vantage points from observed point gains over halo tiles.

Each observation says that ``points_value`` of the tiles in a halo set earned a
point. Observations are compared with each other to split them into smaller
ones until tiles are known to be either vantage points (always score) or
regular tiles (never score). The map is diagonally symmetric, so every tile is
stored by its first-half representative; a tile whose mirror is also in the
same observation is recorded once more in the extra mirrored set.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterable

from mosfetbot.logger import get_logger


def set_to_string(values: Iterable[int]) -> str:
    """Render integers in ascending order as ``{a, b, c}``."""
    return "{" + ", ".join(str(value) for value in sorted(values)) + "}"


def _report_problem(log_message: str, error_message: str) -> None:
    get_logger().log(log_message)
    print(error_message, file=sys.stderr)


@dataclass(frozen=True)
class MapGeometry:
    """Map dimensions and the diagonal symmetry between its two halves."""

    width: int
    height: int

    def mirrored_id(self, tile_id: int) -> int:
        """Id of the tile that mirrors ``tile_id`` across the anti-diagonal."""
        x = tile_id % self.width
        y = tile_id // self.width
        mirrored_x = self.height - y - 1
        mirrored_y = self.width - x - 1
        return mirrored_y * self.width + mirrored_x

    def first_half_id(self, tile_id: int) -> int:
        """Canonical representative of a tile and its mirror."""
        return min(tile_id, self.mirrored_id(tile_id))

    def xy_string(self, tile_id: int) -> str:
        return f"({tile_id % self.width}, {tile_id // self.width})"


def _log_observation(message: str) -> None:
    get_logger().log("ConstraintObservation -> " + message)


@dataclass
class ConstraintObservation:
    """``points_value`` of the tiles in ``halo_point_set`` are vantage points."""

    points_value: int
    halo_point_set: set[int]
    extra_mirrored_halo_point_set: set[int] = field(default_factory=set)

    @classmethod
    def from_points(
        cls, points_value: int, points: Iterable[int], geometry: MapGeometry
    ) -> "ConstraintObservation":
        """Build an observation from raw tile ids, folding mirrors onto the first half."""
        halo: set[int] = set()
        extra: set[int] = set()
        for point in sorted(points):
            first_half = geometry.first_half_id(point)
            if first_half in halo:
                extra.add(first_half)
            else:
                halo.add(first_half)
        observation = cls(points_value, halo, extra)
        _log_observation(
            f"Created a new observation from {set_to_string(points)} = {observation}"
        )
        return observation

    def __str__(self) -> str:
        text = f"{self.points_value} @ {set_to_string(self.halo_point_set)}"
        if self.extra_mirrored_halo_point_set:
            text += " | " + set_to_string(self.extra_mirrored_halo_point_set)
        return text

    def _total_size(self) -> int:
        return len(self.halo_point_set) + len(self.extra_mirrored_halo_point_set)

    def is_valid(self) -> bool:
        """Check that the observation is consistent with its own tile sets."""
        if not self.halo_point_set:
            _log_observation("Empty halo point set")
            return False
        if self.points_value < 0:
            _report_problem(
                "ConstraintObservation -> Problem:Points value is negative " + str(self),
                "Problem:Points value is negative ",
            )
            return False
        if self.points_value > self._total_size():
            _report_problem(
                "ConstraintObservation -> Problem:Points value is more than the number "
                "of halo nodes " + str(self),
                "Problem:Points value is higher than nodes ",
            )
            return False
        if not self.extra_mirrored_halo_point_set <= self.halo_point_set:
            _report_problem(
                "ConstraintObservation -> Problem:Mirror point not found in haloPoint "
                + str(self),
                "Problem:Mirror point not found in haloPoint ",
            )
            return False
        return True

    def collect_regular_and_vantage_points(
        self, regular_tiles: set[int], vantage_points: set[int], geometry: MapGeometry
    ) -> None:
        """Add this observation's tiles, and their mirrors, when it is decisive."""
        if self.points_value == 0:
            _log_observation("Regular tiles found: " + set_to_string(self.halo_point_set))
            regular_tiles.update(self.halo_point_set)
            self.insert_all_mirrors(regular_tiles, geometry)
        elif self.points_value == self._total_size():
            _log_observation("Vantage points found: " + set_to_string(self.halo_point_set))
            vantage_points.update(self.halo_point_set)
            self.insert_all_mirrors(vantage_points, geometry)

    def is_subset_observation(self, other: "ConstraintObservation") -> bool:
        """True if both tile sets of ``self`` lie within those of ``other``."""
        return (
            self.halo_point_set <= other.halo_point_set
            and self.extra_mirrored_halo_point_set <= other.extra_mirrored_halo_point_set
        )

    def is_superset_observation(self, other: "ConstraintObservation") -> bool:
        """True if both tile sets of ``self`` contain those of ``other``."""
        return (
            self.halo_point_set >= other.halo_point_set
            and self.extra_mirrored_halo_point_set >= other.extra_mirrored_halo_point_set
        )

    def simplify(self, geometry: MapGeometry) -> list["ConstraintObservation"]:
        """Split on mirrored tiles when only one assignment fits the points value.

        ``2 @ {a, b} | {a}`` can only mean ``a`` scores twice and ``b`` never,
        so it splits into ``0 @ {b}`` and ``2 @ {a} | {a}``. Returns the parts,
        or an empty list when no unique split exists.
        """
        extra = self.extra_mirrored_halo_point_set
        if not extra:
            return []

        match: tuple[int, int] | None = None
        for single in range(len(self.halo_point_set) - len(extra) + 1):
            for double in range(len(extra) + 1):
                if single + 2 * double == self.points_value:
                    if match is not None:
                        return []
                    match = (single, double * 2)

        split_set = self.halo_point_set - extra
        if not split_set:
            return []

        single_value, mirror_value = match if match is not None else (-1, -1)
        normal = ConstraintObservation.from_points(single_value, split_set, geometry)
        mirrored = ConstraintObservation(mirror_value, set(extra), set(extra))
        _log_observation(f"Simplified {self} into {normal} and {mirrored}")
        return [normal, mirrored]

    def insert_all_mirrors(self, target: set[int], geometry: MapGeometry) -> None:
        """Add the mirror of every halo tile to ``target``."""
        target.update(geometry.mirrored_id(point) for point in self.halo_point_set)

    def copy(self) -> "ConstraintObservation":
        return ConstraintObservation(
            self.points_value,
            set(self.halo_point_set),
            set(self.extra_mirrored_halo_point_set),
        )


def _subtract_with_transfer(
    halo: set[int], removed_halo: set[int], extra: set[int], removed_extra: set[int]
) -> tuple[set[int], set[int]]:
    """Difference of both sets, moving mirrors whose base tile vanished into the halo."""
    new_halo = halo - removed_halo
    new_extra = extra - removed_extra
    orphans = new_extra - new_halo
    return new_halo | orphans, new_extra - orphans


class ConstraintSet:
    """Collects observations and derives vantage points and regular tiles."""

    def __init__(self, geometry: MapGeometry, phase_out_constraints: bool = True) -> None:
        self.geometry = geometry
        self.phase_out_constraints = phase_out_constraints
        self.identified_vantage_points: set[int] = set()
        self.identified_regular_tiles: set[int] = set()
        self._master: list[ConstraintObservation] = []

    @staticmethod
    def _log(message: str) -> None:
        get_logger().log("ConstraintSet -> " + message)

    def clear(self) -> None:
        """Forget identified tiles; pending observations are kept."""
        self.identified_vantage_points.clear()
        self.identified_regular_tiles.clear()

    def master_set(self) -> list[ConstraintObservation]:
        """Copies of the observations that are not yet resolved."""
        return [observation.copy() for observation in self._master]

    def _phase_out_older_constraints(self, tile_id: int) -> None:
        tile_id = self.geometry.first_half_id(tile_id)
        self._log(f"Phasing out older constraints for tile {tile_id}")
        kept = []
        for observation in self._master:
            if tile_id in observation.halo_point_set:
                self._log(
                    f"Removing constraint with points value {observation.points_value} "
                    f"and halo point set{set_to_string(observation.halo_point_set)}"
                )
            else:
                kept.append(observation)
        self._master = kept

    def _strip_identified(self, observation: ConstraintObservation) -> None:
        for tiles in (observation.halo_point_set, observation.extra_mirrored_halo_point_set):
            for value in sorted(tiles):
                if value in self.identified_regular_tiles:
                    self._log(f"Prune regular tile {value} - {self.geometry.xy_string(value)}")
                    tiles.discard(value)
                elif value in self.identified_vantage_points:
                    self._log(f"Prune vantage point {value} - {self.geometry.xy_string(value)}")
                    tiles.discard(value)
                    observation.points_value -= 1

    def _prune_constraints(self) -> None:
        """Remove known tiles from pending observations and resolve terminal ones."""
        self._log("Pruning constraints")
        kept: list[ConstraintObservation] = []
        terminal: list[ConstraintObservation] = []
        for observation in self._master:
            self._strip_identified(observation)
            if not observation.halo_point_set:
                self._log("Empty halo point set, removing the constraint")
            elif observation._total_size() == observation.points_value or observation.points_value == 0:
                self._log("Constraint is terminal, removing the constraint")
                terminal.append(observation)
            else:
                kept.append(observation)
        self._master = kept
        for observation in terminal:
            self._add_observation(observation)

    def add_constraint(self, points_value: int, halo_points: Iterable[int]) -> None:
        """Record that ``points_value`` of the tiles ``halo_points`` scored."""
        points = set(halo_points)
        self._log(
            f"Entering constraint with points value {points_value} "
            f"and halo point set{set_to_string(points)}"
        )
        remaining = set()
        for value in sorted(points):
            if value in self.identified_regular_tiles:
                self._log(f"Found as regular tile {value}")
            elif value in self.identified_vantage_points:
                self._log(f"Found as vantage point {value}")
                points_value -= 1
            else:
                remaining.add(value)
        observation = ConstraintObservation.from_points(points_value, remaining, self.geometry)
        self._add_observation(observation)

    def reconsider_normalized_tile(self, tile_id: int) -> None:
        """Reopen a tile whose scoring may have changed, e.g. near a new relic."""
        mirrored = self.geometry.mirrored_id(tile_id)
        regular = self.identified_regular_tiles
        if tile_id in regular or mirrored in regular:
            regular.discard(tile_id)
            regular.discard(mirrored)
            self._log(f"Removing regular tile {tile_id} and {mirrored}")
        elif (
            self.phase_out_constraints
            and tile_id not in self.identified_vantage_points
            and mirrored not in self.identified_vantage_points
        ):
            self._phase_out_older_constraints(tile_id)

    def reconsider_normalized_tiles(self, tile_ids: Iterable[int]) -> None:
        for tile_id in tile_ids:
            self.reconsider_normalized_tile(tile_id)

    def _add_observation(self, observation: ConstraintObservation) -> None:
        if not observation.is_valid():
            return

        self._log(f"Adding observation - {observation}")
        observation.collect_regular_and_vantage_points(
            self.identified_regular_tiles, self.identified_vantage_points, self.geometry
        )

        derived: list[ConstraintObservation] = []
        subset_found = False
        superset_found = False
        remaining: list[ConstraintObservation] = []
        master = self._master

        for position, existing in enumerate(master):
            self._log(f"Comparing observation with {existing}")
            if (
                existing.halo_point_set == observation.halo_point_set
                and existing.extra_mirrored_halo_point_set
                == observation.extra_mirrored_halo_point_set
            ):
                if existing.points_value != observation.points_value:
                    _report_problem(
                        "ConstraintSet -> Problem:The constraint already exists with a "
                        f"different points value{observation.points_value} vs "
                        f"{existing.points_value}",
                        "Problem:The constraint already exists with a different points value",
                    )
                self._log("Constraint already existing, no action")
                self._master = remaining + master[position:]
                return
            if observation.is_subset_observation(existing):
                subset_found = True
                halo, extra = _subtract_with_transfer(
                    existing.halo_point_set,
                    observation.halo_point_set,
                    existing.extra_mirrored_halo_point_set,
                    observation.extra_mirrored_halo_point_set,
                )
                derived.append(
                    ConstraintObservation(
                        existing.points_value - observation.points_value, halo, extra
                    )
                )
                self._log("Erasing the superset " + set_to_string(existing.halo_point_set))
                continue
            if observation.is_superset_observation(existing):
                superset_found = True
                halo, extra = _subtract_with_transfer(
                    observation.halo_point_set,
                    existing.halo_point_set,
                    observation.extra_mirrored_halo_point_set,
                    existing.extra_mirrored_halo_point_set,
                )
                derived.append(
                    ConstraintObservation(
                        observation.points_value - existing.points_value, halo, extra
                    )
                )
            remaining.append(existing)
        self._master = remaining

        if (
            len(observation.halo_point_set) != observation.points_value
            and observation.points_value != 0
        ):
            self._log("This observation is not a terminal, adding it to master set")
            self._master.append(observation.copy())

        simplified = observation.simplify(self.geometry)
        derived.extend(simplified)
        if simplified or subset_found or superset_found:
            for record in derived:
                self._log("Recursing..")
                self._add_observation(record)

        self._prune_constraints()
        self._log("All done")