"""
Weapon Stat Tuner - per-weapon combat stat overrides for the game server.
"""
__version__ = "2.0.0"
