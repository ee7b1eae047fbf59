import os
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parent.parent


class Config:
    """Application configuration."""

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    RELOAD: bool = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

    # Directory served at "/"
    STATIC_DIR: Path = Path(
        os.getenv("STATIC_DIR", str(_REPO_ROOT / "frontend" / "static"))
    ).resolve()

    # CORS settings
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "pretty").lower()


config = Config()
