"""SQLAlchemy models for the remote history store."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from .session import Base


class ContentRecord(Base):
    __tablename__ = "content_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    backend_id = Column(String(64), unique=True, nullable=False)
    topic = Column(String(200), nullable=False)
    # free-form form values with no cap
    tone = Column(Text, nullable=False)
    audience = Column(Text, nullable=False)
    keywords = Column(String(200), nullable=False, default="")
    video_type = Column(Text, nullable=False)
    title_1 = Column(String(300), nullable=False, default="")
    title_2 = Column(String(300), nullable=False, default="")
    title_3 = Column(String(300), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    hashtags = Column(String(500), nullable=False, default="")
    thumbnail_1 = Column(String(300), nullable=False, default="")
    thumbnail_2 = Column(String(300), nullable=False, default="")
    script = Column(Text, nullable=False, default="")
    # ISO-8601 string as stamped at save time, returned verbatim
    created_at = Column(String(40), nullable=False)
    inserted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
