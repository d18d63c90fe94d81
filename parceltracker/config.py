import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .database import init_database, get_session
from .logger import StructuredLogger, get_logger


def load_env() -> None:
    """Load .env from the working directory if present.

    Variables already set in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    db_path: Path
    log_level: str
    log_dir: Path
    log_file: bool

    @classmethod
    def from_env(cls) -> "Settings":
        load_env()
        return cls(
            db_path=Path(os.environ.get("PARCEL_DB_PATH", "tracker.db")),
            log_level=os.environ.get("PARCEL_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(os.environ.get("PARCEL_LOG_DIR", "logs")),
            log_file=_env_flag("PARCEL_LOG_FILE", True),
        )

    def session(self):
        """Open a session on the configured database, creating the table if needed."""
        init_database(self.db_path)
        return get_session(self.db_path)

    def logger(self) -> StructuredLogger:
        return get_logger(
            level=self.log_level,
            log_dir=self.log_dir,
            enable_file=self.log_file,
        )
