from .store import OverrideStore, UnknownFieldError
from .applicator import OverrideApplicator
from .commands import TuneCommand
from .plugin import WeaponStatTuner

__all__ = ['OverrideStore', 'UnknownFieldError', 'OverrideApplicator', 'TuneCommand', 'WeaponStatTuner']
