"""Exception hierarchy for lookupable.

    LookupableError          (base)
    +-- ConfigurationError   (model not mapped, no lookup context)
    +-- RecordNotFoundError  (raised by the ``..._or_fail`` lookups)
"""

from typing import List, Optional, Sequence


class LookupableError(Exception):
    """Base exception for all lookupable errors."""

    def __init__(self, message: str = "An unexpected lookup error occurred"):
        self._message = message
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message


class ConfigurationError(LookupableError):
    """Raised when a model or the lookup context is not usable."""


class RecordNotFoundError(LookupableError, LookupError):
    """
    No record matched the requested identifier(s).

    Args:
        model: Name of the model class that was searched
        identifiers: The identifier(s) the caller asked for
    """

    def __init__(self, model: str, identifiers: Sequence[str], message: Optional[str] = None):
        self._model = model
        self._identifiers: List[str] = list(identifiers)
        if message is None:
            message = f"No query results for model [{model}]"
            if self._identifiers:
                message += " " + ", ".join(str(i) for i in self._identifiers)
        super().__init__(message)

    @property
    def model(self) -> str:
        return self._model

    @property
    def identifiers(self) -> List[str]:
        return list(self._identifiers)
