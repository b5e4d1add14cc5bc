"""
NeuroScope FastAPI application.

API Structure:
- /api/detect/{text,image,audio,video} - Classify submitted content
- /api/detect/text/file - Classify an uploaded text file
- /api/history - Current user's detection history
- /api/health - Service and classifier status
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from neuroscope.api.routes import router as detection_router
from neuroscope.core.config import settings
from neuroscope.core.logging import get_logger

logger = get_logger("main")


def init_database():
    """Initialize history tables.

    Non-blocking: logs error and continues if database unavailable.
    """
    if not settings.history_enabled:
        logger.info("History disabled - skipping database initialization")
        return

    try:
        from neuroscope.db.connection import init_db
        init_db()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        logger.warning("Detection history will not be saved")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    logger.info("Starting NeuroScope service")
    logger.info(f"LLM provider: {settings.llm_provider} ({settings.openai_model})")
    if not settings.session_proxy_secret:
        logger.warning(
            f"SESSION_PROXY_SECRET not set - trusting {settings.session_header} from any client"
        )

    init_database()

    yield

    logger.info("Shutting down NeuroScope service")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Classify text, images, audio and video as AI-generated or human-made",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(detection_router, prefix=settings.api_prefix)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed requests use the same {error, code} body as detection failures."""
    logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "code": "MissingInput"}
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.version,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
