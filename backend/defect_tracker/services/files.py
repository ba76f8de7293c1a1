import datetime as dt
from pathlib import Path
from defect_tracker.core.config import settings

def ensure_export_dir() -> Path:
    path = Path(settings.EXPORT_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path

def default_export_path(prefix: str, ext: str) -> Path:
    ts = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
    return ensure_export_dir() / f"{prefix}_{ts}.{ext}"
