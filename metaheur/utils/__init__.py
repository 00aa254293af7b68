from .seeding import spawn_seeds
from .parameters import merge_config

__all__ = ['spawn_seeds', 'merge_config']
