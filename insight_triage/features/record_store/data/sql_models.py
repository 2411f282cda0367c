from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from insight_triage.core.database.base import Base


def utc_now():
    return datetime.now(timezone.utc)


class CollectionBlobModel(Base):
    """One row per collection key, holding the whole collection as a JSON array."""
    __tablename__ = "insight_collections"

    key = Column(String, primary_key=True)
    payload = Column(Text, nullable=False, default="[]")
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
