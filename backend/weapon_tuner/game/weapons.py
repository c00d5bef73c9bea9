"""
Item catalog: weapon definitions with engine default stats.
"""
from typing import Optional

from .items import AmmoType, Item, ItemDefinition, Magazine, ProjectileWeapon

AMMO_TYPES = {
    "ammo.rifle": AmmoType("ammo.rifle", projectile_velocity=375.0),
    "ammo.pistol": AmmoType("ammo.pistol", projectile_velocity=300.0),
    "ammo.shotgun": AmmoType("ammo.shotgun", projectile_velocity=225.0),
}

WEAPONS = {
    # --- Pistols ---
    "pistol.semiauto": {
        "name": "Semi-Automatic Pistol",
        "category": "pistol",
        "damage_scale": 1.0,
        "repeat_delay": 0.15,
        "projectile_velocity_scale": 1.0,
        "magazine_size": 10,
        "ammo": "ammo.pistol",
        "aim_cone": 0.75,
        "hip_aim_cone": 2.0,
        "aim_sway": 0.5,
        "aim_sway_speed": 1.0,
    },
    "pistol.python": {
        "name": "Python Revolver",
        "category": "pistol",
        "damage_scale": 1.0,
        "repeat_delay": 0.175,
        "projectile_velocity_scale": 1.0,
        "magazine_size": 6,
        "ammo": "ammo.pistol",
        "aim_cone": 0.5,
        "hip_aim_cone": 2.5,
        "aim_sway": 0.5,
        "aim_sway_speed": 1.0,
    },

    # --- Shotguns ---
    "shotgun.pump": {
        "name": "Pump Shotgun",
        "category": "shotgun",
        "damage_scale": 1.0,
        "repeat_delay": 1.1,
        "projectile_velocity_scale": 1.0,
        "magazine_size": 6,
        "ammo": "ammo.shotgun",
        "aim_cone": 0.0,
        "hip_aim_cone": 1.0,
        "aim_sway": 1.0,
        "aim_sway_speed": 1.5,
    },

    # --- SMGs ---
    "smg.mp5": {
        "name": "MP5A4",
        "category": "smg",
        "damage_scale": 1.0,
        "repeat_delay": 0.1,
        "projectile_velocity_scale": 0.8,
        "magazine_size": 30,
        "ammo": "ammo.pistol",
        "aim_cone": 0.5,
        "hip_aim_cone": 2.0,
        "aim_sway": 0.5,
        "aim_sway_speed": 1.0,
    },

    # --- Rifles ---
    "rifle.ak": {
        "name": "Assault Rifle",
        "category": "rifle",
        "damage_scale": 1.0,
        "repeat_delay": 0.1333,
        "projectile_velocity_scale": 1.0,
        "magazine_size": 30,
        "ammo": "ammo.rifle",
        "aim_cone": 0.2,
        "hip_aim_cone": 2.0,
        "aim_sway": 0.5,
        "aim_sway_speed": 1.0,
    },
    "rifle.lr300": {
        "name": "LR-300 Assault Rifle",
        "category": "rifle",
        "damage_scale": 1.0,
        "repeat_delay": 0.12,
        "projectile_velocity_scale": 1.0,
        "magazine_size": 30,
        "ammo": "ammo.rifle",
        "aim_cone": 0.2,
        "hip_aim_cone": 2.0,
        "aim_sway": 0.5,
        "aim_sway_speed": 1.0,
    },
    "rifle.bolt": {
        "name": "Bolt Action Rifle",
        "category": "sniper",
        "damage_scale": 1.0,
        "repeat_delay": 1.7,
        "projectile_velocity_scale": 1.75,
        "magazine_size": 4,
        "ammo": "ammo.rifle",
        "aim_cone": 0.0,
        "hip_aim_cone": 4.0,
        "aim_sway": 2.0,
        "aim_sway_speed": 0.5,
    },
}

# Non-weapon items (no held entity)
ITEMS = {
    "wood": {"name": "Wood", "category": "resource"},
    "bandage": {"name": "Bandage", "category": "medical"},
}


def get_weapon(code: str) -> Optional[dict]:
    """Get weapon definition by shortname, None if it is not a weapon"""
    return WEAPONS.get(code)


def get_item_definition(code: str) -> Optional[ItemDefinition]:
    data = WEAPONS.get(code) or ITEMS.get(code)
    if data is None:
        return None
    return ItemDefinition(code, data["name"], data["category"])


def create_weapon_entity(code: str) -> Optional[ProjectileWeapon]:
    """Fresh held entity with catalog default stats"""
    data = get_weapon(code)
    if data is None:
        return None
    magazine = Magazine(data["magazine_size"], AMMO_TYPES.get(data["ammo"]))
    return ProjectileWeapon(
        damage_scale=data["damage_scale"],
        repeat_delay=data["repeat_delay"],
        projectile_velocity_scale=data["projectile_velocity_scale"],
        primary_magazine=magazine,
        aim_cone=data["aim_cone"],
        hip_aim_cone=data["hip_aim_cone"],
        aim_sway=data["aim_sway"],
        aim_sway_speed=data["aim_sway_speed"],
    )


def create_item(code: str) -> Item:
    """Materialize a catalog entry. Raises KeyError for unknown shortnames."""
    info = get_item_definition(code)
    if info is None:
        raise KeyError(f"Unknown item: {code}")
    return Item(info, create_weapon_entity(code))

