import os
from typing import List, Optional

_HF_BASE = "https://api-inference.huggingface.co/models"


class Config:
    """Runtime configuration for the summarization service (inference endpoints + HTTP surface).

    All values are read once at import time; mutate env and re-import to change.
    """

    # Inference provider
    HUGGINGFACE_API_TOKEN: Optional[str] = os.environ.get("HUGGINGFACE_API_TOKEN")
    SUMMARY_API_URL: str = os.environ.get("SUMMARY_API_URL", f"{_HF_BASE}/facebook/bart-large-cnn")
    TRANSLATION_API_URL: str = os.environ.get(
        "TRANSLATION_API_URL", f"{_HF_BASE}/facebook/mbart-large-50-many-to-many-mmt"
    )
    INFERENCE_TIMEOUT: float = float(os.environ.get("INFERENCE_TIMEOUT", "30"))
    MAX_RETRIES: int = int(os.environ.get("MAX_RETRIES", "3"))
    RETRY_DELAY: float = float(os.environ.get("RETRY_DELAY", "5"))

    # Pipeline
    CHUNK_MAX_CHARS: int = int(os.environ.get("CHUNK_MAX_CHARS", "1000"))
    MIN_WORDS: int = int(os.environ.get("MIN_WORDS", "100"))

    # HTTP surface
    APP_ENV: str = os.environ.get("APP_ENV", "production").lower()
    PORT: int = int(os.environ.get("PORT", "3000"))
    RATE_LIMIT_MAX: int = int(os.environ.get("RATE_LIMIT_MAX", "100"))
    RATE_LIMIT_WINDOW_SEC: float = float(os.environ.get("RATE_LIMIT_WINDOW_SEC", str(15 * 60)))
    STATIC_DIR: str = os.environ.get("STATIC_DIR", "public")
    CORS_ORIGINS: List[str] = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Observability
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "info").lower()

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"


config = Config()
