"""Utils package - helper functions and utilities"""

from .constants import *
from .cache_keys import CacheKeys

__all__ = [
    'CacheKeys',
]
