"""
Database module for NeuroScope detection history.
"""
from neuroscope.db.connection import get_db, init_db
from neuroscope.db.models import Base, DetectionRecord
from neuroscope.db.repository import DetectionRepository, save_detection

__all__ = [
    "get_db",
    "init_db",
    "Base",
    "DetectionRecord",
    "DetectionRepository",
    "save_detection"
]
