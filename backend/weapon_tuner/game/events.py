"""
Event dispatcher - plugins subscribe handlers to named engine events.
"""
import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

# Events emitted by the engine and their payload keywords
WEAPON_DEPLOY = "weapon_deploy"                              # player, item, weapon
ITEM_CRAFT_FINISHED = "item_craft_finished"                  # task, item
ITEM_ADDED_TO_CONTAINER = "item_added_to_container"          # container, item
ITEM_REMOVED_FROM_CONTAINER = "item_removed_from_container"  # container, item
ACTIVE_ITEM_CHANGED = "active_item_changed"                  # player, old_item, new_item

EVENTS = (
    WEAPON_DEPLOY,
    ITEM_CRAFT_FINISHED,
    ITEM_ADDED_TO_CONTAINER,
    ITEM_REMOVED_FROM_CONTAINER,
    ACTIVE_ITEM_CHANGED,
)


class EventDispatcher:
    def __init__(self):
        self._handlers: Dict[str, List[Callable[..., None]]] = {}

    def subscribe(self, event: str, handler: Callable[..., None]):
        if event not in EVENTS:
            raise ValueError(f"Unknown event: {event}")
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: Callable[..., None]) -> bool:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def emit(self, event: str, **payload):
        """Call every handler in subscription order. A failing handler doesn't stop the rest."""
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(**payload)
            except Exception:
                logger.exception(f"[Events] Handler {handler!r} failed on {event}")

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))
