"""
Persisted tuning document: weapon overrides + global accuracy flag.
"""
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


# ============== Per-weapon overrides ==============

class OverrideRecord(BaseModel):
    """Sparse stat overrides for one weapon. None = keep engine default."""
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, allow_inf_nan=False)

    damage: Optional[float] = Field(default=None, alias="Damage")
    fire_rate: Optional[float] = Field(default=None, alias="FireRate")  # seconds between shots
    projectile_speed: Optional[float] = Field(default=None, alias="ProjectileSpeed")
    magazine_size: Optional[int] = Field(default=None, ge=0, alias="MagazineSize")
    spread: Optional[float] = Field(default=None, alias="Spread")


# ============== Whole config file ==============

class OverrideDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weapons: Dict[str, OverrideRecord] = Field(default_factory=dict, alias="Weapons")
    force_perfect_accuracy: bool = Field(default=False, alias="ForcePerfectAccuracy")


# field alias -> attribute name, e.g. "FireRate" -> "fire_rate"
RECORD_FIELDS: Dict[str, str] = {
    info.alias: name for name, info in OverrideRecord.model_fields.items()
}


def default_document() -> OverrideDocument:
    """First-run config with two example weapons."""
    return OverrideDocument(
        weapons={
            "rifle.ak": OverrideRecord(
                damage=1.2,
                fire_rate=0.12,
                projectile_speed=1.3,
                magazine_size=40,
                spread=0.5,
            ),
            "pistol.python": OverrideRecord(
                damage=1.5,
                fire_rate=0.25,
                magazine_size=10,
            ),
        },
        force_perfect_accuracy=False,
    )
