import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    pass


@dataclass
class Settings:
    database_url: str
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080
    query_model_url: Optional[str] = None
    query_model_timeout: float = 10.0


def load_settings() -> Settings:
    """Read settings from the environment, after loading a local .env if present."""
    if not load_dotenv(os.getenv("ENV_FILE", ".env")):
        logging.getLogger(__name__).info("No .env file found, assuming environment variables are set.")

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ConfigError("DATABASE_URL environment variable is not set.")

    return Settings(
        database_url=database_url,
        allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        query_model_url=os.getenv("QUERY_MODEL_URL") or None,
        query_model_timeout=float(os.getenv("QUERY_MODEL_TIMEOUT", "10")),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        force=True,
    )
