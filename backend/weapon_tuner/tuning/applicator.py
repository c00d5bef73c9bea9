"""
Writes configured overrides onto live weapon entities.
"""
from typing import Iterable, Optional

from ..game.items import Item, ProjectileWeapon
from ..game.player import PlayerEntity
from .store import OverrideStore


class OverrideApplicator:
    """
    Field-by-field direct assignment, so applying the same record twice is
    the same as applying it once.

    damage           -> weapon.damage_scale (ammo damage tables are left alone)
    fire_rate        -> weapon.repeat_delay
    projectile_speed -> weapon.projectile_velocity_scale, used as a plain multiplier
    magazine_size    -> weapon.primary_magazine.capacity, if there is a magazine
    spread           -> weapon.aim_cone and weapon.hip_aim_cone
    """

    def __init__(self, store: OverrideStore):
        self.store = store

    def apply(self, weapon: Optional[ProjectileWeapon], weapon_id: str):
        if not isinstance(weapon, ProjectileWeapon) or weapon.is_destroyed:
            return

        tuning = self.store.get(weapon_id)
        if tuning is None:
            return

        if tuning.damage is not None:
            weapon.damage_scale = tuning.damage

        if tuning.fire_rate is not None:
            weapon.repeat_delay = tuning.fire_rate

        if tuning.projectile_speed is not None:
            weapon.projectile_velocity_scale = tuning.projectile_speed

        magazine = weapon.primary_magazine
        if tuning.magazine_size is not None and magazine is not None:
            magazine.capacity = tuning.magazine_size
            magazine.contents = min(magazine.contents, magazine.capacity)

        # Global flag wins over per-weapon spread
        if self.store.force_perfect_accuracy:
            weapon.aim_cone = weapon.hip_aim_cone = 0.0
            weapon.aim_sway = weapon.aim_sway_speed = 0.0
        elif tuning.spread is not None:
            weapon.aim_cone = weapon.hip_aim_cone = tuning.spread

    def apply_item(self, item: Optional[Item]):
        if item is None or item.info is None:
            return
        self.apply(item.get_held_entity(), item.info.shortname or "")

    def apply_player(self, player: PlayerEntity):
        """Apply to whatever the player is holding"""
        self.apply_item(player.active_item)

    def apply_all(self, players: Iterable[PlayerEntity]) -> int:
        count = 0
        for player in players:
            if player.active_item is not None:
                self.apply_player(player)
                count += 1
        return count
