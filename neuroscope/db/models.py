"""
SQLAlchemy database models for NeuroScope.

- DetectionRecord: one saved verdict in a user's detection history
"""
from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, DateTime, Text, Index
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()

# Pasted text is truncated to this many characters before storage
INPUT_DATA_MAX_CHARS = 1000


def generate_uuid() -> str:
    """Generate a record UUID."""
    return str(uuid.uuid4())


class DetectionRecord(Base):
    """
    Append-only history entry, keyed by the session subject.
    """
    __tablename__ = "detections"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(128), nullable=False, index=True)

    type = Column(String(16), nullable=False)  # text | image | audio | video
    result = Column(String(255), nullable=False)
    confidence = Column(Float, nullable=False)

    input_data = Column(Text, nullable=True)  # truncated text, or file name
    file_name = Column(String(512), nullable=True)
    file_size = Column(Integer, nullable=True)
    file_type = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    __table_args__ = (
        Index("ix_detections_user_created", "user_id", "created_at"),
    )
