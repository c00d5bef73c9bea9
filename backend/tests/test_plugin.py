"""Plugin wiring: which engine events apply tuning, and when."""

import json

from weapon_tuner.game import events
from weapon_tuner.game.items import ItemContainer
from weapon_tuner.game.weapons import create_item
from weapon_tuner.tuning.commands import DENIED
from weapon_tuner.tuning.plugin import WeaponStatTuner


def armed_player(engine, shortname="rifle.ak", player_id=1):
    player = engine.get_player(player_id) or engine.add_player(player_id, "admin")
    item = create_item(shortname)
    engine.give_item(player, item)
    engine.set_active_item(player, item)
    engine.run_pending()
    return player, item


# === Lifecycle ===

def test_load_subscribes_every_event(tuner, engine):
    for name in events.EVENTS:
        assert engine.events.handler_count(name) == 1


def test_unload_detaches_and_saves(engine, store, permissions):
    plugin = WeaponStatTuner(engine, store, permissions)
    plugin.load()
    store.set("rifle.ak", "damage", 1.2)

    plugin.unload()

    for name in events.EVENTS:
        assert engine.events.handler_count(name) == 0
    assert engine.handle_chat(engine.add_player(1), "/tune resetall") == "Unknown command: tune"
    assert json.loads(store.path.read_text(encoding="utf-8"))["Weapons"]["rifle.ak"]["Damage"] == 1.2


def test_load_applies_to_players_already_holding_weapons(engine, store, permissions):
    player, item = armed_player(engine)
    store.set("rifle.ak", "damage", 1.7)

    plugin = WeaponStatTuner(engine, store, permissions)
    plugin.load()

    assert item.get_held_entity().damage_scale == 1.7
    plugin.unload()


# === Trigger protocol ===

def test_deploy_applies_immediately(tuner, engine, store):
    player, item = armed_player(engine)
    store.set("rifle.ak", "firerate", 0.09)

    engine.deploy(player)

    assert item.get_held_entity().repeat_delay == 0.09


def test_craft_applies_next_tick(tuner, engine, store):
    store.set("smg.mp5", "magazinesize", 50)
    player = engine.add_player(1)

    item = engine.finish_craft(player, "smg.mp5")
    weapon = item.get_held_entity()
    assert weapon.primary_magazine.capacity == 30

    engine.update()
    assert weapon.primary_magazine.capacity == 50


def test_added_to_player_container_applies_next_tick(tuner, engine, store):
    store.set("pistol.python", "damage", 1.5)
    player = engine.add_player(1)
    item = create_item("pistol.python")

    engine.give_item(player, item)
    assert item.get_held_entity().damage_scale == 1.0

    engine.run_pending()
    assert item.get_held_entity().damage_scale == 1.5


def test_container_without_player_owner_is_ignored(tuner, engine, store):
    store.set("pistol.python", "damage", 1.5)
    box = ItemContainer(owner=None)
    item = create_item("pistol.python")
    box.insert(item)

    engine.events.emit(events.ITEM_ADDED_TO_CONTAINER, container=box, item=item)
    engine.run_pending()

    assert item.get_held_entity().damage_scale == 1.0


def test_active_item_change_applies_next_tick(tuner, engine, store):
    store.set("rifle.ak", "spread", 0.3)
    player = engine.add_player(1)
    item = create_item("rifle.ak")
    player.inventory.insert(item)

    engine.set_active_item(player, item)
    assert item.get_held_entity().aim_cone == 0.2

    engine.update()
    assert item.get_held_entity().aim_cone == 0.3
    assert item.get_held_entity().hip_aim_cone == 0.3


def test_removed_from_container_reapplies_active(tuner, engine, store):
    player, rifle = armed_player(engine)
    spare = create_item("rifle.bolt")
    engine.give_item(player, spare)
    engine.run_pending()
    store.set("rifle.ak", "damage", 2.5)

    engine.take_item(player, spare)

    assert rifle.get_held_entity().damage_scale == 2.5


# === Commands through chat ===

def test_tune_requires_permission(tuner, engine, store):
    stranger = engine.add_player(99, "stranger")

    assert engine.handle_chat(stranger, "/tune rifle.ak damage 9") == DENIED
    assert store.get("rifle.ak") is None
    assert not store.path.exists()


def test_tune_change_reapplies_to_online_players(tuner, engine, store):
    player, item = armed_player(engine)

    reply = engine.handle_chat(player, "/tune rifle.ak damage 1.2")

    assert reply == "rifle.ak damage set to 1.2."
    assert item.get_held_entity().damage_scale == 1.2


def test_spread_then_perfect_gives_zero_cone(tuner, engine, store):
    player, item = armed_player(engine)

    engine.handle_chat(player, "/tune rifle.ak spread 0.8")
    assert item.get_held_entity().aim_cone == 0.8
    engine.handle_chat(player, "/tune rifle.ak perfect true")
    engine.deploy(player)

    weapon = item.get_held_entity()
    assert weapon.aim_cone == 0
    assert weapon.hip_aim_cone == 0
    assert weapon.aim_sway == 0
    assert weapon.aim_sway_speed == 0


def test_ak_end_to_end(tuner, engine, store):
    """Damage 1.2 / magsize 40 on a fresh AK, other stats left at catalog defaults."""
    player = engine.add_player(1)
    engine.handle_chat(player, "/tune rifle.ak damage 1.2")
    engine.handle_chat(player, "/tune rifle.ak magsize 40")

    item = engine.finish_craft(player, "rifle.ak")
    engine.set_active_item(player, item)
    engine.update()
    engine.deploy(player)

    weapon = item.get_held_entity()
    assert weapon.damage_scale == 1.2
    assert weapon.primary_magazine.capacity == 40
    assert weapon.repeat_delay == 0.1333
    assert weapon.projectile_velocity_scale == 1.0
    assert weapon.aim_cone == 0.2
    assert weapon.hip_aim_cone == 2.0


def test_deploy_with_item_missing_definition(tuner, engine, store):
    """An item without catalog info is skipped, not an error."""
    store.set("rifle.ak", "damage", 2.0)
    player, item = armed_player(engine)
    item.info = None

    tuner.on_weapon_deploy(player, item, item.get_held_entity())

    assert item.get_held_entity().damage_scale == 1.0


def test_disconnected_player_is_not_reapplied(tuner, engine, store):
    player, item = armed_player(engine, player_id=1)
    other, other_item = armed_player(engine, player_id=2)
    engine.remove_player(2)

    engine.handle_chat(player, "/tune rifle.ak damage 1.6")

    assert engine.get_player(2) is None
    assert item.get_held_entity().damage_scale == 1.6
    assert other_item.get_held_entity().damage_scale == 1.0
