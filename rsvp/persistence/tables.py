"""SQLAlchemy table definitions for the invite store.

The store keeps a single partition of ``id -> encoded record`` pairs with no
secondary indexes; record fields live inside the payload.
"""

from sqlalchemy import Column, LargeBinary, MetaData, Table, Text

# Metadata object for all tables
metadata = MetaData()

invites_table = Table(
    "invites",
    metadata,
    Column("id", Text, primary_key=True),
    Column("payload", LargeBinary, nullable=False),  # rsvp.persistence.codec
)
