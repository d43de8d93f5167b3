"""Soft deletion for SQLAlchemy ORM models"""
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, DateTime, event
from sqlalchemy.orm import ORMExecuteState, with_loader_criteria

# Execution option that lets a query see soft-deleted rows
INCLUDE_TRASHED = "include_trashed"


class SoftDeletes:
    """Mixin adding a ``deleted_at`` column; a row with it set is trashed"""

    deleted_at = Column(DateTime(timezone=True), nullable=True, default=None)

    def trashed(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self) -> None:
        self.deleted_at = None


def supports_soft_delete(model: Any) -> bool:
    """Check whether a model class (or instance) implements SoftDeletes"""
    if isinstance(model, type):
        return issubclass(model, SoftDeletes)
    return isinstance(model, SoftDeletes)


def _exclude_trashed(execute_state: ORMExecuteState) -> None:
    if (
        not execute_state.is_select
        or execute_state.is_column_load
        or execute_state.is_relationship_load
        or execute_state.execution_options.get(INCLUDE_TRASHED, False)
    ):
        return

    execute_state.statement = execute_state.statement.options(
        with_loader_criteria(
            SoftDeletes,
            lambda cls: cls.deleted_at.is_(None),
            include_aliases=True,
        )
    )


def install_soft_delete_filter(session_factory: Any) -> None:
    """
    Hide trashed rows from every ORM select issued through ``session_factory``.

    Pass ``execution_options(include_trashed=True)`` on a statement to see them.
    """
    if not event.contains(session_factory, "do_orm_execute", _exclude_trashed):
        event.listen(session_factory, "do_orm_execute", _exclude_trashed)
