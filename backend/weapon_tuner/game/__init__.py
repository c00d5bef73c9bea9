from .weapons import WEAPONS, get_weapon, create_item
from .events import EventDispatcher
from .engine import GameEngine
from .player import PlayerEntity
from .permissions import PermissionManager

__all__ = ['WEAPONS', 'get_weapon', 'create_item', 'EventDispatcher', 'GameEngine', 'PlayerEntity', 'PermissionManager']
