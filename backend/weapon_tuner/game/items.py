"""
Item and held-entity model of the host game.
"""
from typing import List, Optional


class ItemDefinition:
    """Catalog entry an item is created from."""

    def __init__(self, shortname: str, name: str, category: str):
        self.shortname = shortname
        self.name = name
        self.category = category

    def __repr__(self) -> str:
        return f"ItemDefinition({self.shortname!r})"


class AmmoType:
    def __init__(self, shortname: str, projectile_velocity: float):
        self.shortname = shortname
        self.projectile_velocity = projectile_velocity  # m/s at velocity scale 1.0


class Magazine:
    """Ammo-holding part of a weapon"""

    def __init__(self, capacity: int, ammo_type: Optional[AmmoType] = None, contents: Optional[int] = None):
        self.capacity = capacity
        self.ammo_type = ammo_type
        self.contents = capacity if contents is None else contents


class ProjectileWeapon:
    """Held entity of a gun. Stat fields are plain attributes the engine reads when firing."""
    _next_id = 1

    def __init__(
        self,
        damage_scale: float = 1.0,
        repeat_delay: float = 0.1,
        projectile_velocity_scale: float = 1.0,
        primary_magazine: Optional[Magazine] = None,
        aim_cone: float = 0.0,
        hip_aim_cone: float = 0.0,
        aim_sway: float = 0.0,
        aim_sway_speed: float = 0.0,
    ):
        self.id = ProjectileWeapon._next_id
        ProjectileWeapon._next_id += 1

        self.damage_scale = damage_scale
        self.repeat_delay = repeat_delay  # seconds between shots
        self.projectile_velocity_scale = projectile_velocity_scale
        self.primary_magazine = primary_magazine

        # Accuracy
        self.aim_cone = aim_cone
        self.hip_aim_cone = hip_aim_cone
        self.aim_sway = aim_sway
        self.aim_sway_speed = aim_sway_speed

        self.is_destroyed = False

    def destroy(self):
        self.is_destroyed = True

    def to_state(self) -> dict:
        return {
            "damage_scale": self.damage_scale,
            "repeat_delay": self.repeat_delay,
            "projectile_velocity_scale": self.projectile_velocity_scale,
            "magazine_capacity": self.primary_magazine.capacity if self.primary_magazine else None,
            "aim_cone": self.aim_cone,
            "hip_aim_cone": self.hip_aim_cone,
            "aim_sway": self.aim_sway,
            "aim_sway_speed": self.aim_sway_speed,
        }


class Item:
    _next_uid = 1

    def __init__(self, info: ItemDefinition, held_entity: Optional[ProjectileWeapon] = None):
        self.uid = Item._next_uid
        Item._next_uid += 1

        self.info = info
        self._held_entity = held_entity
        self.parent: Optional["ItemContainer"] = None

    def get_held_entity(self) -> Optional[ProjectileWeapon]:
        return self._held_entity

    def __repr__(self) -> str:
        return f"Item({self.info.shortname!r}, uid={self.uid})"


class ItemContainer:
    """A list of items with an optional owner (a player, a box, ...)."""

    def __init__(self, owner=None, capacity: int = 24):
        self.owner = owner
        self.capacity = capacity
        self.items: List[Item] = []

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def insert(self, item: Item) -> bool:
        """Put item into this container, taking it out of its previous one"""
        if self.is_full:
            return False
        if item.parent is not None:
            item.parent.remove(item)
        self.items.append(item)
        item.parent = self
        return True

    def remove(self, item: Item) -> bool:
        if item not in self.items:
            return False
        self.items.remove(item)
        item.parent = None
        return True


class CraftTask:
    def __init__(self, owner, shortname: str):
        self.owner = owner
        self.shortname = shortname
