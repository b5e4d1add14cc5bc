"""
Configuration management for NeuroScope detection service.
"""
import os
from typing import Dict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Settings
    app_name: str = "NeuroScope - AI Content Detection"
    version: str = "1.0.0"
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # LLM Settings (inference service behind the service-backed classifiers)
    llm_provider: str = os.getenv("LLM_PROVIDER", "openai")
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "")  # OpenAI-compatible endpoints (e.g. Gemini)
    llm_timeout_sec: float = float(os.getenv("LLM_TIMEOUT_SEC", "30"))

    # Classifier strategy per modality: "service" or "heuristic"
    text_classifier: str = os.getenv("TEXT_CLASSIFIER", "service")
    image_classifier: str = os.getenv("IMAGE_CLASSIFIER", "service")
    audio_classifier: str = os.getenv("AUDIO_CLASSIFIER", "heuristic")
    video_classifier: str = os.getenv("VIDEO_CLASSIFIER", "heuristic")

    # Confidence substituted when the service reply has no usable number
    fallback_confidence: float = 70.0

    # Detection history
    history_enabled: bool = os.getenv("HISTORY_ENABLED", "true").lower() == "true"
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./neuroscope.db")
    history_page_size: int = int(os.getenv("HISTORY_PAGE_SIZE", "50"))

    # Header set by the upstream identity proxy
    session_header: str = os.getenv("SESSION_HEADER", "X-Session-Subject")
    # Shared secret the proxy sends alongside the subject; empty disables the check
    session_proxy_secret: str = os.getenv("SESSION_PROXY_SECRET", "")
    session_secret_header: str = os.getenv("SESSION_SECRET_HEADER", "X-Proxy-Secret")

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_classifier_strategies(config: Settings = None) -> Dict[str, str]:
    """Get the configured classifier strategy for each modality."""
    config = config or settings
    return {
        "text": config.text_classifier.lower(),
        "image": config.image_classifier.lower(),
        "audio": config.audio_classifier.lower(),
        "video": config.video_classifier.lower(),
    }
