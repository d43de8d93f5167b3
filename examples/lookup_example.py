"""
Example: Cached identifier lookups

Creates an in-memory database with a few countries, then resolves them by
their ISO code. Only the first lookup touches the database.
"""

import logging

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

from lookupable import (
    DatabaseService,
    DeclaresLookupColumn,
    Lookupable,
    RecordNotFoundError,
    SoftDeletes,
    lookup_context,
)

Base = declarative_base()


class Country(DeclaresLookupColumn, SoftDeletes, Lookupable, Base):
    __tablename__ = "countries"
    lookup_column = "iso_code"

    id = Column(Integer, primary_key=True)
    iso_code = Column(String(2), nullable=False, unique=True)
    name = Column(String, nullable=False)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    db = DatabaseService(database_url="sqlite:///:memory:")
    db.connect()
    db.initialize_schema(Base.metadata)

    with db.session_scope() as session:
        session.add_all([
            Country(iso_code="NL", name="Netherlands"),
            Country(iso_code="BE", name="Belgium"),
            Country(iso_code="YU", name="Yugoslavia"),
        ])
        session.flush()
        session.get(Country, 3).soft_delete()

    with lookup_context(db) as context:
        print(f"NL -> {Country.lookup('NL').name}")
        print(f"YU -> {Country.lookup('YU')}")
        print(f"YU (with trashed) -> {Country.lookup('YU', with_trashed=True).name}")
        print(f"NL, BE -> {[c.name for c in Country.lookup_many(['NL', 'BE'])]}")

        try:
            Country.lookup_or_fail("XX")
        except RecordNotFoundError as e:
            print(f"XX -> {e}")

        stats = context.registry.get_stats()
        print(f"Loads: {stats.loads}, hits: {stats.hits}, cached records: {stats.records}")

    db.disconnect()


if __name__ == "__main__":
    main()
