"""
Weapon Stat Tuner plugin - hooks the applicator into engine events and
registers the `tune` chat command.
"""
import logging
from functools import partial
from typing import List, Optional

from ..game import events
from ..game.engine import GameEngine
from ..game.items import Item, ItemContainer, ProjectileWeapon
from ..game.permissions import PermissionManager
from ..game.player import PlayerEntity
from .applicator import OverrideApplicator
from .commands import DENIED, PERMISSION, TuneCommand
from .store import OverrideStore

logger = logging.getLogger(__name__)

COMMAND_NAME = "tune"


class WeaponStatTuner:
    def __init__(self, engine: GameEngine, store: OverrideStore, permissions: PermissionManager):
        self.engine = engine
        self.store = store
        self.permissions = permissions
        self.applicator = OverrideApplicator(store)
        self.command = TuneCommand(store, on_change=self.reapply_all)
        self.loaded = False

        self._hooks = (
            (events.WEAPON_DEPLOY, self.on_weapon_deploy),
            (events.ITEM_CRAFT_FINISHED, self.on_item_craft_finished),
            (events.ITEM_ADDED_TO_CONTAINER, self.on_item_added_to_container),
            (events.ITEM_REMOVED_FROM_CONTAINER, self.on_item_removed_from_container),
            (events.ACTIVE_ITEM_CHANGED, self.on_active_item_changed),
        )

    # ============== Lifecycle ==============

    def load(self):
        if self.loaded:
            return
        for event, handler in self._hooks:
            self.engine.events.subscribe(event, handler)
        self.engine.register_command(COMMAND_NAME, self.cmd_tune)
        self.loaded = True

        count = self.reapply_all()
        logger.info(f"[Tuner] Loaded with {len(self.store)} weapon overrides, applied to {count} players")

    def unload(self):
        """Detach from the engine and do the final save"""
        if not self.loaded:
            return
        for event, handler in self._hooks:
            self.engine.events.unsubscribe(event, handler)
        self.engine.unregister_command(COMMAND_NAME)
        self.loaded = False

        try:
            self.store.save()
        except OSError as e:
            logger.error(f"[Tuner] Final save to {self.store.path} failed: {e}")
        logger.info("[Tuner] Unloaded")

    def reapply_all(self) -> int:
        return self.applicator.apply_all(self.engine.players.values())

    # ============== Hooks ==============

    def on_weapon_deploy(self, player: PlayerEntity, item: Optional[Item], weapon: ProjectileWeapon):
        if item is None or item.info is None:
            return
        self.applicator.apply(weapon, item.info.shortname)

    def on_item_craft_finished(self, task, item: Optional[Item]):
        # Crafted item isn't in its container yet
        if item is not None:
            self.engine.next_tick(partial(self.applicator.apply_item, item))

    def on_item_added_to_container(self, container: ItemContainer, item: Optional[Item]):
        if item is not None and isinstance(container.owner, PlayerEntity):
            self.engine.next_tick(partial(self.applicator.apply_item, item))

    def on_item_removed_from_container(self, container: ItemContainer, item: Optional[Item]):
        # The active weapon may have changed
        if isinstance(container.owner, PlayerEntity):
            self.applicator.apply_player(container.owner)

    def on_active_item_changed(self, player: PlayerEntity, old_item: Optional[Item], new_item: Optional[Item]):
        if new_item is not None:
            self.engine.next_tick(partial(self.applicator.apply_item, new_item))

    # ============== Commands ==============

    def cmd_tune(self, player: PlayerEntity, args: List[str]) -> str:
        if not self.permissions.has(player.id, PERMISSION):
            return DENIED
        logger.info(f"[Tuner] {player.username or player.id}: tune {' '.join(args)}")
        return self.command.execute(args)

    def run_command(self, args: List[str]) -> str:
        """Already-authorized entry point (bot admin)"""
        return self.command.execute(args)
