"""One hypothesis about why a shuttle's energy changed between two steps."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field


def _f32(value: float) -> float:
    """Round to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass
class ShuttleEnergyChangeDistribution:
    """Contributions to an energy change, used to explain an observed value."""

    unit_stack_count: int = 1
    move_cost: int = 0
    tile_energy: int = 0
    nebula_energy_reduction: int = 0
    melee_sap_energies: list[int] = field(default_factory=list)
    ranged_direct_sap_count: int = 0
    ranged_indirect_sap_count: int = 0
    ranged_indirect_sap_drop_off_factor: float = 0.0
    melee_energy_void_factor: float = 0.0
    accurate_results: bool = True
    computed_melee_sap_energy: int = -5000

    def compute_sap_contributions(self) -> int:
        """Energy voided by adjacent opponents; stored and returned."""
        factor = _f32(self.melee_energy_void_factor)
        total = sum(_f32(energy * factor) for energy in self.melee_sap_energies if energy > 0)
        self.computed_melee_sap_energy = math.floor(total)
        return self.computed_melee_sap_energy

    def is_attack(self, melee_sap_energy: int) -> bool:
        return (
            melee_sap_energy > 0
            or self.ranged_direct_sap_count > 0
            or self.ranged_indirect_sap_count > 0
        )

    def compute_energy(self, previous_energy: int, unit_sap_cost: int, max_energy: int) -> int:
        """Energy expected after this step's changes, starting from ``previous_energy``."""
        melee = self.compute_sap_contributions()
        indirect = _f32(
            (self.ranged_indirect_sap_count * unit_sap_cost)
            * _f32(self.ranged_indirect_sap_drop_off_factor)
        )
        energy = (
            previous_energy
            - self.move_cost
            - self.ranged_direct_sap_count * unit_sap_cost
            - math.floor(indirect)
        )
        energy -= _trunc_div(melee, self.unit_stack_count)

        gain = self.tile_energy - self.nebula_energy_reduction
        if energy < 0 and energy + gain < 0 and self.is_attack(melee):
            return energy

        energy += gain
        if energy < 0:
            return 0
        return min(energy, max_energy)

    def __str__(self) -> str:
        return (
            "ShuttleEnergyChangeDistribution: "
            f"moveCost={self.move_cost}, "
            f"tileEnergy={self.tile_energy}, "
            f"nebulaEnergyReduction={self.nebula_energy_reduction}, "
            f"meleeSap={self.computed_melee_sap_energy}, "
            f"meleeSapCount={len(self.melee_sap_energies)}, "
            f"rangedDirectSap={self.ranged_direct_sap_count}, "
            f"rangedIndirectSapCount={self.ranged_indirect_sap_count}, "
            f"rangedIndirectSapDropOffFactor={self.ranged_indirect_sap_drop_off_factor:f}, "
            f"meleeEnergyVoidFactor={self.melee_energy_void_factor:f}, "
            f"unitStackCount={self.unit_stack_count}, "
            f"accurateResults={int(self.accurate_results)}"
        )