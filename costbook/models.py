from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime
from .database import Base


class StoredValue(Base):
    """One key of the local key-value store. Values are serialized text."""
    __tablename__ = "local_store"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
