"""Override applicator: which weapon fields change and which don't."""

import pytest

from weapon_tuner.game.items import ProjectileWeapon
from weapon_tuner.game.weapons import create_item, create_weapon_entity
from weapon_tuner.tuning.applicator import OverrideApplicator


@pytest.fixture
def applicator(store):
    return OverrideApplicator(store)


def ak():
    return create_weapon_entity("rifle.ak")


def test_unknown_weapon_id_is_noop(applicator, store):
    store.set("rifle.ak", "damage", 5.0)
    weapon = create_weapon_entity("smg.mp5")
    before = weapon.to_state()

    applicator.apply(weapon, "smg.mp5")

    assert weapon.to_state() == before


def test_ak_scenario(applicator, store):
    """Damage 1.2 + magsize 40 changes exactly those two fields."""
    store.set("rifle.ak", "damage", 1.2)
    store.set("rifle.ak", "magazinesize", 40)
    weapon = ak()
    before = weapon.to_state()
    assert before["damage_scale"] == 1.0
    assert before["magazine_capacity"] == 30

    applicator.apply(weapon, "rifle.ak")

    after = weapon.to_state()
    assert after["damage_scale"] == 1.2
    assert after["magazine_capacity"] == 40
    for key in before:
        if key not in ("damage_scale", "magazine_capacity"):
            assert after[key] == before[key], key


def test_every_field(applicator, store):
    for field, value in [("damage", 2.0), ("firerate", 0.05), ("projectilespeed", 1.5),
                         ("magazinesize", 100), ("spread", 0.8)]:
        store.set("rifle.ak", field, value)
    weapon = ak()

    applicator.apply(weapon, "rifle.ak")

    assert weapon.damage_scale == 2.0
    assert weapon.repeat_delay == 0.05
    assert weapon.projectile_velocity_scale == 1.5
    assert weapon.primary_magazine.capacity == 100
    assert weapon.aim_cone == 0.8
    assert weapon.hip_aim_cone == 0.8
    # sway untouched by spread
    assert weapon.aim_sway == 0.5
    assert weapon.aim_sway_speed == 1.0


def test_apply_is_idempotent(applicator, store):
    store.set("rifle.ak", "damage", 1.3)
    store.set("rifle.ak", "projectilespeed", 1.3)
    store.set("rifle.ak", "spread", 0.4)
    once, twice = ak(), ak()

    applicator.apply(once, "rifle.ak")
    applicator.apply(twice, "rifle.ak")
    applicator.apply(twice, "rifle.ak")

    assert once.to_state() == twice.to_state()


def test_perfect_accuracy_beats_spread(applicator, store):
    store.set("rifle.ak", "spread", 5.0)
    store.force_perfect_accuracy = True
    weapon = ak()

    applicator.apply(weapon, "rifle.ak")

    assert weapon.aim_cone == 0
    assert weapon.hip_aim_cone == 0
    assert weapon.aim_sway == 0
    assert weapon.aim_sway_speed == 0


def test_perfect_accuracy_needs_a_record(applicator, store):
    """The global flag only acts on weapons that have an override."""
    store.force_perfect_accuracy = True
    weapon = ak()

    applicator.apply(weapon, "rifle.ak")

    assert weapon.hip_aim_cone == 2.0


def test_magazine_missing_is_skipped(applicator, store):
    store.set("rifle.ak", "magazinesize", 40)
    store.set("rifle.ak", "damage", 1.5)
    weapon = ProjectileWeapon(primary_magazine=None)

    applicator.apply(weapon, "rifle.ak")

    assert weapon.primary_magazine is None
    assert weapon.damage_scale == 1.5


def test_smaller_magazine_clamps_loaded_ammo(applicator, store):
    store.set("rifle.ak", "magazinesize", 10)
    weapon = ak()

    applicator.apply(weapon, "rifle.ak")

    assert weapon.primary_magazine.capacity == 10
    assert weapon.primary_magazine.contents == 10


def test_invalid_weapon_is_skipped(applicator, store):
    store.set("rifle.ak", "damage", 1.5)
    weapon = ak()
    weapon.destroy()

    applicator.apply(weapon, "rifle.ak")
    applicator.apply(None, "rifle.ak")
    applicator.apply(object(), "rifle.ak")

    assert weapon.damage_scale == 1.0


def test_apply_item_uses_shortname(applicator, store):
    store.set("pistol.python", "firerate", 0.25)
    item = create_item("pistol.python")

    applicator.apply_item(item)

    assert item.get_held_entity().repeat_delay == 0.25


def test_apply_item_without_held_entity(applicator, store):
    store.set("wood", "damage", 9.0)
    applicator.apply_item(create_item("wood"))
    applicator.apply_item(None)
