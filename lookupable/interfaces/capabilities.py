"""
Optional capabilities a lookupable model can declare.
"""

from typing import ClassVar


class DeclaresLookupColumn:
    """
    Marker for models that look up by something other than ``identifier``.

    Example:
        class Currency(DeclaresLookupColumn, Lookupable, Base):
            lookup_column = "code"
    """

    lookup_column: ClassVar[str]
