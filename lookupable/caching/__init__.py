"""
In-process caching of full model collections for identifier lookups.
"""

from .instance_cache import InstanceRegistry, RegistryStats

__all__ = [
    "InstanceRegistry",
    "RegistryStats",
]
