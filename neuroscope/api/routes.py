"""
FastAPI routes for the detection service.

One POST endpoint per modality. Success bodies carry {result, confidence};
failures carry {error, code} with HTTP 400 (bad input) or 500 (detection
failed).
"""
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from neuroscope.api.schemas import (
    DetectionRecordDTO,
    DetectionResponse,
    ErrorResponse,
    HealthResponse,
    HistoryResponse,
    TextDetectionRequest,
)
from neuroscope.api.session import get_session_subject
from neuroscope.classifiers.registry import build_classifiers
from neuroscope.core.config import settings
from neuroscope.core.logging import get_logger
from neuroscope.db.connection import get_db
from neuroscope.db.repository import DetectionRepository, save_detection
from neuroscope.detection.artifact import Artifact, Uploader
from neuroscope.detection.errors import ClassificationError, ValidationError
from neuroscope.detection.orchestrator import DetectionOrchestrator
from neuroscope.detection.validation import get_upload_rule
from neuroscope.llm.factory import get_llm

logger = get_logger("api.routes")

router = APIRouter()

_orchestrator: Optional[DetectionOrchestrator] = None


def get_orchestrator() -> DetectionOrchestrator:
    """Dependency: the configured orchestrator (built on first use)."""
    global _orchestrator
    if _orchestrator is None:
        classifiers = build_classifiers(llm=get_llm(), config=settings)
        _orchestrator = DetectionOrchestrator(
            classifiers,
            fallback_confidence=settings.fallback_confidence
        )
    return _orchestrator


def _error(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, code=code).model_dump()
    )


async def _run_detection(
    artifact: Artifact,
    orchestrator: DetectionOrchestrator,
    subject: Optional[str],
    db: Session
):
    logger.info(
        f"Detection request: {artifact.modality.value} "
        f"({artifact.byte_size} bytes, {artifact.declared_mime_type or 'no type'})"
    )
    try:
        verdict = await orchestrator.detect(artifact)
    except ValidationError as e:
        return _error(400, e.message, e.code)
    except ClassificationError as e:
        return _error(500, e.message, e.code)

    if subject and settings.history_enabled:
        save_detection(db, subject, artifact, verdict)

    return DetectionResponse(**verdict.to_dict())


def _declared_size(file: UploadFile, uploader: Uploader) -> Optional[int]:
    """Upload size when it is known and already over the uploader's limit."""
    size = getattr(file, "size", None)
    if size is not None and size > get_upload_rule(uploader).max_bytes:
        return size
    return None


async def _read_upload(
    file: UploadFile,
    uploader: Uploader,
    last_modified: Optional[int]
) -> Artifact:
    # Oversized bodies are never read; validation rejects them by size
    oversized = _declared_size(file, uploader)
    content = b"" if oversized is not None else await file.read()
    return Artifact.from_upload(
        content=content,
        mime_type=file.content_type or "",
        uploader=uploader,
        original_name=file.filename,
        last_modified=last_modified,
        byte_size=oversized,
    )


async def _read_text_upload(file: UploadFile) -> Artifact:
    oversized = _declared_size(file, Uploader.TEXT)
    if oversized is not None:
        content = b""
    else:
        content = await file.read()
    return Artifact.from_text(
        content.decode("utf-8-sig", errors="replace"),
        original_name=file.filename,
        mime_type=file.content_type or "",
        byte_size=len(content) if oversized is None else oversized,
    )


@router.post(
    "/detect/text",
    response_model=DetectionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def detect_text(
    request: Optional[TextDetectionRequest] = None,
    orchestrator: DetectionOrchestrator = Depends(get_orchestrator),
    subject: Optional[str] = Depends(get_session_subject),
    db: Session = Depends(get_db)
):
    """Classify pasted text as AI-generated or human-written."""
    if request is None or request.content is None:
        return _error(400, "No content provided", "MissingInput")

    artifact = Artifact.from_text(request.content)
    return await _run_detection(artifact, orchestrator, subject, db)


@router.post(
    "/detect/text/file",
    response_model=DetectionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def detect_text_file(
    file: Optional[UploadFile] = File(None),
    orchestrator: DetectionOrchestrator = Depends(get_orchestrator),
    subject: Optional[str] = Depends(get_session_subject),
    db: Session = Depends(get_db)
):
    """Classify an uploaded text file (.txt, .md, .json)."""
    if file is None:
        return _error(400, "No text file uploaded", "MissingInput")

    artifact = await _read_text_upload(file)
    return await _run_detection(artifact, orchestrator, subject, db)


@router.post(
    "/detect/image",
    response_model=DetectionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def detect_image(
    file: Optional[UploadFile] = File(None),
    last_modified: Optional[int] = Form(None),
    orchestrator: DetectionOrchestrator = Depends(get_orchestrator),
    subject: Optional[str] = Depends(get_session_subject),
    db: Session = Depends(get_db)
):
    """Classify an uploaded image."""
    if file is None:
        return _error(400, "No file uploaded", "MissingInput")

    artifact = await _read_upload(file, Uploader.IMAGE, last_modified)
    return await _run_detection(artifact, orchestrator, subject, db)


@router.post(
    "/detect/audio",
    response_model=DetectionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def detect_audio(
    file: Optional[UploadFile] = File(None),
    last_modified: Optional[int] = Form(None),
    orchestrator: DetectionOrchestrator = Depends(get_orchestrator),
    subject: Optional[str] = Depends(get_session_subject),
    db: Session = Depends(get_db)
):
    """Classify an uploaded audio (or short video) file."""
    if file is None:
        return _error(400, "No audio file uploaded", "MissingInput")

    artifact = await _read_upload(file, Uploader.AUDIO_OR_VIDEO, last_modified)
    return await _run_detection(artifact, orchestrator, subject, db)


@router.post(
    "/detect/video",
    response_model=DetectionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def detect_video(
    file: Optional[UploadFile] = File(None),
    last_modified: Optional[int] = Form(None),
    orchestrator: DetectionOrchestrator = Depends(get_orchestrator),
    subject: Optional[str] = Depends(get_session_subject),
    db: Session = Depends(get_db)
):
    """Classify an uploaded video."""
    if file is None:
        return _error(400, "No video file uploaded", "MissingInput")

    artifact = await _read_upload(file, Uploader.VIDEO, last_modified)
    return await _run_detection(artifact, orchestrator, subject, db)


@router.get("/history", response_model=HistoryResponse, responses={401: {"model": ErrorResponse}})
async def get_history(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    subject: Optional[str] = Depends(get_session_subject),
    db: Session = Depends(get_db)
):
    """List the current user's detections, newest first."""
    if not subject:
        return _error(401, "Please log in to view your history.", "Unauthenticated")

    repo = DetectionRepository(db)
    records = repo.list_for_user(subject, skip=skip, limit=limit or settings.history_page_size)
    return HistoryResponse(
        items=[DetectionRecordDTO.model_validate(r) for r in records],
        total=repo.count_for_user(subject)
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(orchestrator: DetectionOrchestrator = Depends(get_orchestrator)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.version,
        classifiers=orchestrator.describe()
    )
