"""
Player entity for the game.
"""
from typing import Optional

from .items import Item, ItemContainer, ProjectileWeapon


class PlayerEntity:
    INVENTORY_SIZE = 30

    def __init__(self, player_id: int, username: Optional[str]):
        self.id = player_id
        self.username = username

        # Inventory
        self.inventory = ItemContainer(owner=self, capacity=self.INVENTORY_SIZE)
        self.active_item: Optional[Item] = None

    def get_held_entity(self) -> Optional[ProjectileWeapon]:
        """Weapon entity of the active item, if any"""
        if self.active_item is None:
            return None
        return self.active_item.get_held_entity()

    def owns(self, item: Item) -> bool:
        return item.parent is self.inventory

