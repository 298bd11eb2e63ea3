from mosfetbot.energy_distribution import ShuttleEnergyChangeDistribution


def test_default_melee_energy_marker():
    assert ShuttleEnergyChangeDistribution().computed_melee_sap_energy == -5000


def test_no_change_keeps_energy():
    dist = ShuttleEnergyChangeDistribution()
    assert dist.compute_energy(150, 30, 400) == 150


def test_move_cost_and_tile_energy():
    dist = ShuttleEnergyChangeDistribution(move_cost=2, tile_energy=3)
    assert dist.compute_energy(100, 30, 400) == 101


def test_clamped_to_max_energy():
    dist = ShuttleEnergyChangeDistribution(tile_energy=10)
    assert dist.compute_energy(395, 30, 400) == 400


def test_clamped_to_zero_without_attack():
    dist = ShuttleEnergyChangeDistribution(move_cost=5, tile_energy=-10)
    assert dist.compute_energy(3, 30, 400) == 0


def test_attack_can_go_negative():
    dist = ShuttleEnergyChangeDistribution(ranged_direct_sap_count=1)
    assert dist.compute_energy(10, 30, 400) < 0


def test_direct_sap_cost_subtracted():
    with_sap = ShuttleEnergyChangeDistribution(ranged_direct_sap_count=2)
    without = ShuttleEnergyChangeDistribution()
    assert without.compute_energy(200, 30, 400) - with_sap.compute_energy(200, 30, 400) == 60


def test_indirect_sap_with_full_drop_off_equals_direct():
    indirect = ShuttleEnergyChangeDistribution(
        ranged_indirect_sap_count=1, ranged_indirect_sap_drop_off_factor=1.0
    )
    direct = ShuttleEnergyChangeDistribution(ranged_direct_sap_count=1)
    assert indirect.compute_energy(200, 30, 400) == direct.compute_energy(200, 30, 400)


def test_sap_contributions_ignore_non_positive():
    dist = ShuttleEnergyChangeDistribution(
        melee_sap_energies=[0, -20], melee_energy_void_factor=0.5
    )
    assert dist.compute_sap_contributions() == 0
    assert dist.computed_melee_sap_energy == 0


def test_sap_contributions_full_factor_is_sum():
    dist = ShuttleEnergyChangeDistribution(
        melee_sap_energies=[40, 60], melee_energy_void_factor=1.0
    )
    assert dist.compute_sap_contributions() == 100


def test_melee_split_across_stack():
    single = ShuttleEnergyChangeDistribution(
        melee_sap_energies=[100], melee_energy_void_factor=1.0
    )
    stacked = ShuttleEnergyChangeDistribution(
        melee_sap_energies=[100], melee_energy_void_factor=1.0, unit_stack_count=2
    )
    lost_single = 300 - single.compute_energy(300, 30, 400)
    lost_stacked = 300 - stacked.compute_energy(300, 30, 400)
    assert lost_single == 100
    assert lost_stacked == 50


def test_is_attack():
    dist = ShuttleEnergyChangeDistribution()
    assert dist.is_attack(0) is False
    assert dist.is_attack(1) is True
    assert ShuttleEnergyChangeDistribution(ranged_indirect_sap_count=1).is_attack(0) is True


def test_string_form():
    text = str(ShuttleEnergyChangeDistribution(move_cost=2, accurate_results=False))
    assert text.startswith("ShuttleEnergyChangeDistribution: moveCost=2, ")
    assert "rangedIndirectSapDropOffFactor=0.000000" in text
    assert text.endswith("accurateResults=0")