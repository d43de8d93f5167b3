"""
Cached identifier lookups for SQLAlchemy ORM models.
"""

from .lookupable import Lookupable
from .context import LookupContext, init_lookups, teardown_lookups, get_lookup_context, lookup_context
from .caching import InstanceRegistry, RegistryStats
from .interfaces import DeclaresLookupColumn, IConnectionManager, IRecordSource
from .models import SoftDeletes, supports_soft_delete
from .services import DatabaseService
from .errors import LookupableError, ConfigurationError, RecordNotFoundError

__version__ = "1.0.0"

__all__ = [
    "Lookupable",
    "LookupContext",
    "init_lookups",
    "teardown_lookups",
    "get_lookup_context",
    "lookup_context",
    "InstanceRegistry",
    "RegistryStats",
    "DeclaresLookupColumn",
    "IConnectionManager",
    "IRecordSource",
    "SoftDeletes",
    "supports_soft_delete",
    "DatabaseService",
    "LookupableError",
    "ConfigurationError",
    "RecordNotFoundError",
]
