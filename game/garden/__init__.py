"""Emoji garden games - turn-based and continuous butterfly environments"""

from .butterfly_env import ButterflyEnv
from .dodge_env import LaneDodgeEnv
from .roam_env import FreeRoamEnv
from .variants import VARIANT_CONFIGS, make_variant, register_variants

register_variants()

__all__ = [
    'ButterflyEnv',
    'LaneDodgeEnv',
    'FreeRoamEnv',
    'VARIANT_CONFIGS',
    'make_variant',
    'register_variants',
]
