"""
Capability table keyed by player id.
"""
import os
from typing import Dict, Iterable, Set

# Comma-separated player ids that get every capability in DEFAULT_ADMIN_CAPABILITIES
TUNER_ADMIN_IDS = os.getenv("TUNER_ADMIN_IDS", "")

DEFAULT_ADMIN_CAPABILITIES = ("weaponstattuner.admin",)


def parse_admin_ids(raw: str) -> Set[int]:
    ids = set()
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            ids.add(int(part))
    return ids


class PermissionManager:
    def __init__(self):
        self._grants: Dict[int, Set[str]] = {}

    def grant(self, player_id: int, capability: str):
        self._grants.setdefault(player_id, set()).add(capability)

    def revoke(self, player_id: int, capability: str) -> bool:
        caps = self._grants.get(player_id)
        if not caps or capability not in caps:
            return False
        caps.discard(capability)
        return True

    def has(self, player_id: int, capability: str) -> bool:
        return capability in self._grants.get(player_id, ())

    def grant_admins(self, player_ids: Iterable[int], capabilities=DEFAULT_ADMIN_CAPABILITIES):
        for player_id in player_ids:
            for cap in capabilities:
                self.grant(player_id, cap)

    @classmethod
    def from_env(cls) -> "PermissionManager":
        perms = cls()
        perms.grant_admins(parse_admin_ids(TUNER_ADMIN_IDS))
        return perms
