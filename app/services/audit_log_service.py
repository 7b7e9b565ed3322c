from datetime import datetime
from pathlib import Path

from app.core.config import get_settings


def _log_file() -> Path:
    return Path(get_settings().log_dir) / "app.log"


def log_event(action: str, details: str) -> None:
    log_file = _log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.utcnow().isoformat(timespec="seconds")
    with log_file.open("a", encoding="utf-8") as stream:
        stream.write(f"[{timestamp}] {action}: {details}\n")
