"""
Override store - weapon id -> OverrideRecord, persisted as one JSON document.
"""
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from ..schemas import RECORD_FIELDS, OverrideDocument, OverrideRecord, default_document

logger = logging.getLogger(__name__)

TUNER_CONFIG_PATH = os.getenv("TUNER_CONFIG_PATH", "weapon_stat_tuner.json")


class UnknownFieldError(ValueError):
    def __init__(self, field: str):
        super().__init__(f"Unknown field: {field}")
        self.field = field


def resolve_field(field: str) -> str:
    """'FireRate' / 'firerate' / 'fire_rate' -> 'fire_rate'"""
    key = field.strip().lower()
    for alias, name in RECORD_FIELDS.items():
        if key in (alias.lower(), name):
            return name
    raise UnknownFieldError(field)


class OverrideStore:
    def __init__(self, path: Union[str, Path], document: Optional[OverrideDocument] = None):
        self.path = Path(path)
        self.document = document if document is not None else OverrideDocument()

    @classmethod
    def load(cls, path: Union[str, Path] = TUNER_CONFIG_PATH) -> "OverrideStore":
        """
        Read the config file. Missing or broken content is replaced by the
        default document, which is written back right away.
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
            document = OverrideDocument.model_validate_json(raw)
        except FileNotFoundError:
            logger.info(f"[Tuner] No config at {path}, creating default")
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"[Tuner] Config {path} is invalid, replacing with default: {e}")
        else:
            logger.info(f"[Tuner] Loaded {len(document.weapons)} weapon overrides from {path}")
            return cls(path, document)

        store = cls(path, default_document())
        try:
            store.save()
        except OSError as e:
            logger.error(f"[Tuner] Could not write default config {path}: {e}")
        return store

    def dumps(self) -> str:
        return self.document.model_dump_json(by_alias=True, indent=2) + "\n"

    def save(self):
        """Replace the file with the full document. Raises OSError on failure."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(self.dumps(), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    # ============== Lookup / mutation ==============

    def get(self, weapon_id: str) -> Optional[OverrideRecord]:
        return self.document.weapons.get(weapon_id)

    def set(self, weapon_id: str, field: str, value):
        """Set one field of weapon_id's record, creating the record if needed."""
        if not weapon_id:
            raise ValueError("Weapon id must not be empty")
        name = resolve_field(field)

        record = self.document.weapons.get(weapon_id)
        if record is None:
            record = OverrideRecord()
            setattr(record, name, value)
            self.document.weapons[weapon_id] = record
        else:
            setattr(record, name, value)

    def remove(self, weapon_id: str) -> bool:
        return self.document.weapons.pop(weapon_id, None) is not None

    def clear_all(self):
        self.document.weapons.clear()
        self.document.force_perfect_accuracy = False

    @property
    def force_perfect_accuracy(self) -> bool:
        return self.document.force_perfect_accuracy

    @force_perfect_accuracy.setter
    def force_perfect_accuracy(self, value: bool):
        self.document.force_perfect_accuracy = bool(value)

    def weapon_ids(self) -> List[str]:
        return sorted(self.document.weapons)

    def __len__(self) -> int:
        return len(self.document.weapons)
