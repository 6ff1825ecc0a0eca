# src/social_timer/models/key_value.py
"""Generic key-value storage model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from social_timer.db.session import Base


class KeyValueEntry(Base):
    """A single JSON-encoded value stored under a unique key.

    The counter only ever uses one row, but the table stays generic so the
    storage layer can be treated as an opaque get/set-by-key service.
    """

    __tablename__ = "key_value"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
