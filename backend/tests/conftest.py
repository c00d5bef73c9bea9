import pytest

from weapon_tuner.game.engine import GameEngine
from weapon_tuner.game.permissions import PermissionManager
from weapon_tuner.schemas import OverrideDocument
from weapon_tuner.tuning.plugin import WeaponStatTuner
from weapon_tuner.tuning.store import OverrideStore


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "weapon_stat_tuner.json"


@pytest.fixture
def store(config_path):
    """Empty store bound to a temp file"""
    return OverrideStore(config_path, OverrideDocument())


@pytest.fixture
def engine():
    return GameEngine()


@pytest.fixture
def permissions():
    perms = PermissionManager()
    perms.grant(1, "weaponstattuner.admin")
    return perms


@pytest.fixture
def tuner(engine, store, permissions):
    plugin = WeaponStatTuner(engine, store, permissions)
    plugin.load()
    yield plugin
    plugin.unload()
