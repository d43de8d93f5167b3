"""
Process-wide lookup context.

Holds the record source and the instance registry that every Lookupable
model shares. Initialise it once at startup with init_lookups() and drop it
with teardown_lookups(); tests usually wrap each case in lookup_context().
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .caching.instance_cache import InstanceRegistry
from .errors import ConfigurationError
from .interfaces.database import IConnectionManager, IRecordSource

logger = logging.getLogger(__name__)


class LookupContext:
    """Record source plus the registry of cached instances"""

    def __init__(
        self,
        source: IRecordSource,
        registry: Optional[InstanceRegistry] = None,
        owns_source: bool = False,
    ):
        self.source = source
        self.registry = registry or InstanceRegistry()
        # Close the source on teardown when the context created it
        self.owns_source = owns_source

    def close(self) -> None:
        self.registry.clear()
        if self.owns_source and isinstance(self.source, IConnectionManager):
            self.source.disconnect()


_context: Optional[LookupContext] = None
_context_lock = threading.Lock()


def init_lookups(
    source: Optional[IRecordSource] = None,
    registry: Optional[InstanceRegistry] = None,
) -> LookupContext:
    """
    Install the process-wide lookup context.

    Args:
        source: Where records are fetched from. Defaults to a DatabaseService
            built from settings and connected here.
        registry: Instance registry to use (a fresh one if None)

    Returns:
        The installed LookupContext
    """
    global _context

    owns_source = False
    if source is None:
        # Imported here so the context can be used without a database
        from .services.database_service import DatabaseService

        database = DatabaseService()
        database.connect()
        source = database
        owns_source = True

    with _context_lock:
        previous, _context = _context, LookupContext(source, registry, owns_source)

    if previous is not None:
        logger.warning("Replacing an existing lookup context")
        previous.close()

    logger.info(f"Lookup context initialized with {type(source).__name__}")
    return _context


def teardown_lookups() -> None:
    """Drop the lookup context and every cached instance."""
    global _context

    with _context_lock:
        previous, _context = _context, None

    if previous is not None:
        previous.close()
        logger.info("Lookup context torn down")


def get_lookup_context() -> LookupContext:
    context = _context
    if context is None:
        raise ConfigurationError("Lookup context not initialized; call init_lookups() first")
    return context


@contextmanager
def lookup_context(
    source: Optional[IRecordSource] = None,
    registry: Optional[InstanceRegistry] = None,
) -> Iterator[LookupContext]:
    """
    Context manager installing a lookup context for the duration of a block.

    Yields:
        LookupContext: The installed context
    """
    context = init_lookups(source, registry)
    try:
        yield context
    finally:
        teardown_lookups()
