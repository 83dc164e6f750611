import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env(env_path: Optional[Path] = None) -> None:
    """Load .env from project root if present. Existing variables win."""
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


@dataclass
class Settings:
    jobs_file: Path
    applications_file: Path
    db_path: Path
    log_level: str


def get_settings() -> Settings:
    """Read settings from the environment (call load_env first to pick up .env)."""
    return Settings(
        jobs_file=Path(os.getenv("JOBMATCH_JOBS_FILE", "jobs.csv")),
        applications_file=Path(os.getenv("JOBMATCH_APPLICATIONS_FILE", "applications.csv")),
        db_path=Path(os.getenv("JOBMATCH_DB", "data/save.db")),
        log_level=os.getenv("JOBMATCH_LOG_LEVEL", "INFO").upper(),
    )
