from .database import IConnectionManager, IRecordSource
from .capabilities import DeclaresLookupColumn

__all__ = [
    "IConnectionManager",
    "IRecordSource",
    "DeclaresLookupColumn",
]
