"""
Lookupable mixin - resolve human-facing identifiers to ORM records.

Every record of a model is fetched once into the shared instance registry;
afterwards lookups scan that snapshot instead of querying the database.
The snapshot is never refreshed, so rows written after the first lookup
are invisible until the lookup context is torn down.

Example:
    class Country(Lookupable, Base):
        __tablename__ = "countries"
        id = Column(Integer, primary_key=True)
        identifier = Column(String, unique=True)

    Country.lookup("nl")
    Country.lookup_many(["nl", "be"])
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import inspect

from .config import settings
from .context import get_lookup_context
from .errors import ConfigurationError, RecordNotFoundError
from .interfaces.capabilities import DeclaresLookupColumn
from .models.soft_delete import supports_soft_delete
from .utils.comparison import as_identifier, is_member, loose_equals

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Lookupable")


class Lookupable:
    """Mixin for SQLAlchemy-mapped classes adding cached identifier lookups"""

    @classmethod
    def lookup(cls: Type[T], identifier: str, with_trashed: bool = False) -> Optional[T]:
        """
        Look up a record by its identifier.

        Args:
            identifier: Value of the lookup column
            with_trashed: Also match soft-deleted records

        Returns:
            First matching record, or None
        """
        identifier = as_identifier(identifier)
        column = cls._lookup_column()
        for instance in cls._lookup_instances():
            if not with_trashed and _is_trashed(instance):
                continue
            if loose_equals(_read_path(instance, column), identifier):
                return instance

        logger.debug(f"No {cls.__name__} with {column}={identifier!r}")
        return None

    @classmethod
    def lookup_or_fail(cls: Type[T], identifier: str, with_trashed: bool = False) -> T:
        """
        Look up a record by its identifier, or fail when not found.

        Raises:
            RecordNotFoundError: No record matched
        """
        result = cls.lookup(identifier, with_trashed)
        if result is not None:
            return result
        raise RecordNotFoundError(cls.__name__, [identifier])

    @classmethod
    def lookup_many(cls: Type[T], identifiers: Iterable[str], with_trashed: bool = False) -> List[T]:
        """
        Look up every record whose identifier is in ``identifiers``.

        Matching is exact set membership, unlike lookup(). Records keep the
        order of the cached snapshot.

        Args:
            identifiers: Values of the lookup column
            with_trashed: Also match soft-deleted records

        Returns:
            Matching records (possibly empty)
        """
        wanted = frozenset(identifiers)
        column = cls._lookup_column()
        return [
            instance
            for instance in cls._lookup_instances()
            if (with_trashed or not _is_trashed(instance))
            and is_member(_read_path(instance, column), wanted)
        ]

    @classmethod
    def lookup_many_or_fail(cls: Type[T], identifiers: Iterable[str], with_trashed: bool = False) -> List[T]:
        """
        Look up many records, failing only when none of them is found.

        A partial match is returned as is; it does not raise.

        Raises:
            RecordNotFoundError: The result would be empty
        """
        requested = list(identifiers)
        result = cls.lookup_many(requested, with_trashed)
        if result:
            return result
        raise RecordNotFoundError(cls.__name__, requested)

    @classmethod
    def _lookup_instances(cls) -> Tuple[Any, ...]:
        """Every record of this model, fetched on first use and cached."""
        model = cls._lookupable_class()
        context = get_lookup_context()
        return context.registry.get_or_load(
            model,
            lambda: context.source.fetch_all(model, include_trashed=supports_soft_delete(model)),
        )

    @classmethod
    def _lookup_column(cls) -> str:
        model = cls._lookupable_class()
        if issubclass(model, DeclaresLookupColumn):
            try:
                column = getattr(model, "lookup_column", None)
            except Exception as e:
                logger.debug(f"Could not read {model.__name__}.lookup_column: {e}")
                column = None
            if isinstance(column, str) and column:
                return column
            logger.debug(f"{model.__name__} declares no usable lookup_column, using default")
        return settings.default_lookup_column

    @classmethod
    def _lookupable_class(cls) -> type:
        if inspect(cls, raiseerr=False) is None:
            raise ConfigurationError("Lookupable requires a storage-backed record type")
        return cls


def _is_trashed(instance: Any) -> bool:
    return supports_soft_delete(instance) and instance.trashed()


def _read_path(instance: Any, path: str) -> Any:
    """Read a (possibly dotted) attribute path; missing steps give None."""
    value = instance
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value
