# Runtime configuration read from the environment (.env supported)
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_FILE = "./data.json"
DEFAULT_CHILD_AGE_THRESHOLD = 18
BIRTHDATE_FORMAT = "%m/%d/%Y"


@dataclass(frozen=True)
class Settings:
    """Typed view of the SAFETYNET_* environment variables."""

    data_file: Path
    child_age_threshold: int = DEFAULT_CHILD_AGE_THRESHOLD
    log_level: str = "INFO"
    log_json: bool = False
    frontend_url: str = ""

    @property
    def allowed_origins(self) -> List[str]:
        origins = ["http://localhost:5173", "http://localhost:5174"]
        if self.frontend_url:
            origins.append(self.frontend_url)
        return origins


def _int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_settings() -> Settings:
    """Build Settings from the current environment. Cached; call cache_clear() after env changes."""
    return Settings(
        data_file=Path(os.environ.get("SAFETYNET_DATA_FILE", DEFAULT_DATA_FILE)),
        child_age_threshold=_int(
            os.environ.get("SAFETYNET_CHILD_AGE_THRESHOLD"), DEFAULT_CHILD_AGE_THRESHOLD
        ),
        log_level=os.environ.get("SAFETYNET_LOG_LEVEL", "INFO").upper(),
        log_json=_bool(os.environ.get("SAFETYNET_LOG_JSON")),
        frontend_url=os.environ.get("FRONTEND_URL", ""),
    )


def is_demo_mode() -> bool:
    """True only when DEMO_MODE env var is explicitly 'true' (case-insensitive)."""
    return os.environ.get("DEMO_MODE", "").lower() == "true"
