"""
Detection history repository.

Append-only: records are inserted and listed per user, never updated.
"""
from typing import Optional, List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from neuroscope.db.models import DetectionRecord, INPUT_DATA_MAX_CHARS
from neuroscope.detection.artifact import Artifact, Verdict
from neuroscope.core.logging import get_logger

logger = get_logger("db.repository")


class DetectionRepository:
    """Repository for DetectionRecord operations."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, user_id: str, **kwargs) -> DetectionRecord:
        """Append a record to a user's history."""
        record = DetectionRecord(user_id=user_id, **kwargs)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info(f"Saved {record.type} detection for user {user_id}")
        return record

    def list_for_user(self, user_id: str, skip: int = 0, limit: int = 50) -> List[DetectionRecord]:
        """List a user's records, newest first."""
        return (
            self.db.query(DetectionRecord)
            .filter(DetectionRecord.user_id == user_id)
            .order_by(desc(DetectionRecord.created_at))
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_for_user(self, user_id: str) -> int:
        return self.db.query(DetectionRecord).filter(DetectionRecord.user_id == user_id).count()


def save_detection(
    db: Session,
    user_id: str,
    artifact: Artifact,
    verdict: Verdict
) -> Optional[DetectionRecord]:
    """
    Save a verdict to the user's history.

    Storage failures are logged and swallowed: history is best-effort and
    never fails the detection itself.
    """
    if artifact.is_text:
        input_data = artifact.raw_content[:INPUT_DATA_MAX_CHARS]
        file_size = None
        file_type = None
    else:
        input_data = artifact.original_name
        file_size = artifact.byte_size
        file_type = artifact.declared_mime_type

    try:
        return DetectionRepository(db).insert(
            user_id=user_id,
            type=verdict.modality.value,
            result=verdict.label,
            confidence=verdict.confidence,
            input_data=input_data,
            file_name=artifact.original_name,
            file_size=file_size,
            file_type=file_type,
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to save detection for user {user_id}: {e}")
        return None
