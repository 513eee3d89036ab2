"""
SQLAlchemy model for the local key-value store.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from studycards.data.models.base import Base


class KeyValueEntryModel(Base):
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
