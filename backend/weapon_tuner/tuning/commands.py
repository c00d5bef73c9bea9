"""
`tune` operator command: list / reset / resetall / set one stat.
"""
import logging
import math
from typing import Callable, List, Optional

from .store import OverrideStore, UnknownFieldError

logger = logging.getLogger(__name__)

PERMISSION = "weaponstattuner.admin"
DENIED = "You don't have permission to use this command."

# command word -> record attribute
STAT_FIELDS = {
    "damage": "damage",
    "firerate": "fire_rate",
    "speed": "projectile_speed",
    "magsize": "magazine_size",
    "spread": "spread",
}
FIELD_NAMES = ", ".join(list(STAT_FIELDS) + ["perfect"])

USAGE = (
    "Usage:\n"
    "  tune list <weapon>\n"
    "  tune reset <weapon>\n"
    "  tune resetall\n"
    "  tune <weapon> <stat> <value>\n"
    f"Stats: {FIELD_NAMES}"
)

TRUE_WORDS = {"true", "1", "on", "yes"}
FALSE_WORDS = {"false", "0", "off", "no"}


def parse_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError("expected a number") from None
    if not math.isfinite(value):
        raise ValueError("expected a finite number")
    return value


def parse_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("expected an integer") from None
    if value < 0:
        raise ValueError("expected a non-negative integer")
    return value


def parse_bool(raw: str) -> bool:
    word = raw.lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError("expected true or false")


def format_value(value) -> str:
    if value is None:
        return "default"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class TuneCommand:
    def __init__(self, store: OverrideStore, on_change: Optional[Callable[[], None]] = None):
        self.store = store
        self.on_change = on_change

    def execute(self, args: List[str]) -> str:
        if not args:
            return USAGE

        sub = args[0].lower()
        if sub == "list":
            return self.list_weapon(args[1]) if len(args) == 2 else USAGE
        if sub == "reset":
            return self.reset(args[1]) if len(args) == 2 else USAGE
        if sub == "resetall":
            return self.reset_all() if len(args) == 1 else USAGE
        if len(args) == 3:
            return self.set_stat(args[0], args[1], args[2])
        return USAGE

    def list_weapon(self, weapon_id: str) -> str:
        tuning = self.store.get(weapon_id)
        lines = [f"Tuning for {weapon_id}:"]
        for word, attr in STAT_FIELDS.items():
            value = getattr(tuning, attr) if tuning is not None else None
            lines.append(f"  {word}: {format_value(value)}")
        lines.append(f"Force perfect accuracy: {format_value(self.store.force_perfect_accuracy)}")
        return "\n".join(lines)

    def reset(self, weapon_id: str) -> str:
        if not self.store.remove(weapon_id):
            return f"No override for {weapon_id}."
        return self._commit(f"Removed tuning for {weapon_id}.")

    def reset_all(self) -> str:
        self.store.clear_all()
        return self._commit("All weapon tuning cleared.")

    def set_stat(self, weapon_id: str, stat: str, raw: str) -> str:
        stat = stat.lower()

        if stat == "perfect":
            try:
                enabled = parse_bool(raw)
            except ValueError as e:
                return f"Invalid value '{raw}' for perfect: {e}."
            self.store.force_perfect_accuracy = enabled
            return self._commit(f"Force perfect accuracy set to {format_value(enabled)}.")

        attr = STAT_FIELDS.get(stat)
        if attr is None:
            return f"Unknown stat '{stat}'. Stats: {FIELD_NAMES}"

        parse = parse_int if attr == "magazine_size" else parse_float
        try:
            value = parse(raw)
        except ValueError as e:
            return f"Invalid value '{raw}' for {stat}: {e}."

        try:
            self.store.set(weapon_id, attr, value)
        except UnknownFieldError:
            return f"Unknown stat '{stat}'. Stats: {FIELD_NAMES}"
        except ValueError as e:
            return f"Cannot set {stat} for '{weapon_id}': {e}"
        return self._commit(f"{weapon_id} {stat} set to {format_value(value)}.")

    def _commit(self, reply: str) -> str:
        """Persist right away, then let listeners re-apply"""
        try:
            self.store.save()
        except OSError as e:
            logger.error(f"[Tuner] Failed to save {self.store.path}: {e}")
            return f"Failed to save tuning: {e}"
        if self.on_change is not None:
            self.on_change()
        return reply
