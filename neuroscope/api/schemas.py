"""
API Schemas (DTOs) for the detection endpoints.
"""
from datetime import datetime
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field, ConfigDict


class TextDetectionRequest(BaseModel):
    """Pasted text to classify."""
    content: Optional[str] = None


class DetectionResponse(BaseModel):
    """Successful detection."""
    result: str
    confidence: float = Field(ge=0, le=100)
    modality: str
    fallback_used: bool = False


class ErrorResponse(BaseModel):
    """
    Failed detection.

    `error` is the human-readable message; `code` is one of
    WrongType, TooLarge, Empty, MissingInput, DetectionFailed.
    """
    error: str
    code: str


class DetectionRecordDTO(BaseModel):
    """One entry in a user's detection history."""
    id: str
    type: str
    result: str
    confidence: float
    input_data: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HistoryResponse(BaseModel):
    """A page of detection history."""
    items: List[DetectionRecordDTO]
    total: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    classifiers: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
