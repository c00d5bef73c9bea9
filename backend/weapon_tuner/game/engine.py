"""
Game engine - tick loop, next-tick callback queue, item operations and chat commands.
"""
import asyncio
import logging
from typing import Callable, Dict, List, Optional

from . import events
from .events import EventDispatcher
from .items import CraftTask, Item, ItemContainer, ProjectileWeapon
from .player import PlayerEntity
from .weapons import create_item

logger = logging.getLogger(__name__)

ChatCommand = Callable[[PlayerEntity, List[str]], str]


class GameEngine:
    """
    Host engine. Everything runs on one asyncio loop; callbacks queued with
    next_tick() run at the start of the following tick.
    """

    TICK_RATE = 20  # 20 ticks per second (50ms per tick)

    def __init__(self):
        self.players: Dict[int, PlayerEntity] = {}
        self.events = EventDispatcher()
        self.tick = 0
        self.running = False
        self._task = None
        self._pending: List[Callable[[], None]] = []
        self._commands: Dict[str, ChatCommand] = {}

    async def start(self):
        """Start the game engine"""
        if self.running:
            return

        self.running = True
        self._task = asyncio.create_task(self._game_loop())
        logger.info(f"[Engine] Started at {self.TICK_RATE} ticks/s")

    async def stop(self):
        """Stop the game engine"""
        self.running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._pending:
            logger.info(f"[Engine] Dropping {len(self._pending)} pending callbacks")
            self._pending.clear()
        logger.info("[Engine] Stopped")

    async def _game_loop(self):
        """Main game loop - runs at fixed tick rate"""
        dt = 1.0 / self.TICK_RATE

        while self.running:
            loop_start = asyncio.get_running_loop().time()

            self.update()

            # Sleep to maintain tick rate
            elapsed = asyncio.get_running_loop().time() - loop_start
            sleep_time = dt - elapsed
            await asyncio.sleep(max(sleep_time, 0))

    def update(self):
        """One tick"""
        self.tick += 1
        self.run_pending()

    # ============== Next tick ==============

    def next_tick(self, callback: Callable[[], None]):
        """Run callback at the start of the next tick, never inline"""
        self._pending.append(callback)

    def run_pending(self) -> int:
        """Run callbacks queued so far. Ones queued while running wait for the next call."""
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception(f"[Engine] Next-tick callback {callback!r} failed")
        return len(callbacks)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # ============== Players ==============

    def add_player(self, player_id: int, username: Optional[str] = None) -> PlayerEntity:
        player = PlayerEntity(player_id, username)
        self.players[player_id] = player
        return player

    def remove_player(self, player_id: int):
        self.players.pop(player_id, None)

    def get_player(self, player_id: int) -> Optional[PlayerEntity]:
        return self.players.get(player_id)

    # ============== Items ==============

    def give_item(self, player: PlayerEntity, item: Item) -> bool:
        """Move item into player's inventory"""
        if player.inventory.is_full:
            return False
        if item.parent is not None:
            self._remove_from_container(item.parent, item)
        player.inventory.insert(item)
        self.events.emit(events.ITEM_ADDED_TO_CONTAINER, container=player.inventory, item=item)
        return True

    def take_item(self, player: PlayerEntity, item: Item) -> bool:
        """Remove item from player's inventory"""
        if not player.owns(item):
            return False
        self._remove_from_container(player.inventory, item)
        return True

    def _remove_from_container(self, container: ItemContainer, item: Item):
        container.remove(item)
        owner = container.owner
        if isinstance(owner, PlayerEntity) and owner.active_item is item:
            owner.active_item = None
            self.events.emit(events.ACTIVE_ITEM_CHANGED, player=owner, old_item=item, new_item=None)
        self.events.emit(events.ITEM_REMOVED_FROM_CONTAINER, container=container, item=item)

    def set_active_item(self, player: PlayerEntity, item: Optional[Item]) -> bool:
        """Put item in player's hands (None = holster)"""
        if item is not None and not player.owns(item):
            return False
        old_item = player.active_item
        if old_item is item:
            return False
        player.active_item = item
        self.events.emit(events.ACTIVE_ITEM_CHANGED, player=player, old_item=old_item, new_item=item)
        return True

    def deploy(self, player: PlayerEntity) -> Optional[ProjectileWeapon]:
        """Draw the active weapon"""
        weapon = player.get_held_entity()
        if weapon is None:
            return None
        self.events.emit(events.WEAPON_DEPLOY, player=player, item=player.active_item, weapon=weapon)
        return weapon

    def finish_craft(self, player: PlayerEntity, shortname: str) -> Item:
        """Complete a craft: event fires first, then the item goes to the crafter's inventory"""
        item = create_item(shortname)
        task = CraftTask(player, shortname)
        self.events.emit(events.ITEM_CRAFT_FINISHED, task=task, item=item)
        if not self.give_item(player, item):
            logger.info(f"[Engine] Inventory of {player.id} full, crafted {shortname} not delivered")
        return item

    # ============== Chat commands ==============

    def register_command(self, name: str, handler: ChatCommand):
        self._commands[name.lower()] = handler

    def unregister_command(self, name: str):
        self._commands.pop(name.lower(), None)

    def handle_chat(self, player: PlayerEntity, text: str) -> Optional[str]:
        """Dispatch '/name args...'. Returns reply text, None for plain chat."""
        text = text.strip()
        if not text.startswith("/"):
            return None
        parts = text[1:].split()
        if not parts:
            return None
        handler = self._commands.get(parts[0].lower())
        if handler is None:
            return f"Unknown command: {parts[0]}"
        return handler(player, parts[1:])
