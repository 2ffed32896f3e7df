# File: localstt/core/config/settings.py

import os
import shutil
from pathlib import Path
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw else None


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    return float(raw) if raw else None


class Settings:
    # --- Paths ---
    # localstt/core/config/settings.py -> localstt/core/config -> localstt/core -> localstt -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent

    # Application-private storage root. Everything we write lives below it.
    STORAGE_ROOT: Path = Path(os.getenv("LOCALSTT_STORAGE_ROOT", str(BASE_DIR / "data")))
    MODELS_DIR: Path = STORAGE_ROOT / "whisper" / "models"
    AUDIO_DIR: Path = STORAGE_ROOT / "whisper" / "audio"

    # Read-only bundle the model checkpoint ships in
    ASSETS_DIR: Path = Path(os.getenv("LOCALSTT_ASSETS_DIR", str(BASE_DIR / "assets")))

    # --- External Tools ---
    # Auto-detect ffmpeg or use env var
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    # None = wait forever
    FFMPEG_TIMEOUT_SECONDS: Optional[float] = _optional_float("FFMPEG_TIMEOUT_SECONDS")

    # --- Model Configuration ---
    MODEL_FILENAME: str = os.getenv("WHISPER_MODEL_FILENAME", "tiny.pt")
    WHISPER_DEVICE: str = "cuda" if os.getenv("USE_CUDA", "false").lower() == "true" else "cpu"
    LANGUAGE_HINT: str = os.getenv("WHISPER_LANGUAGE", "auto")
    INFERENCE_THREADS: int = int(os.getenv("WHISPER_THREADS", "4"))

    # --- Jobs ---
    # None lets ThreadPoolExecutor pick its default
    MAX_WORKERS: Optional[int] = _optional_int("LOCALSTT_MAX_WORKERS")
    # Finished jobs whose status stays queryable
    JOB_STATUS_HISTORY: int = int(os.getenv("LOCALSTT_JOB_STATUS_HISTORY", "256"))

    # --- Pipeline knobs ---
    COPY_BUFFER_SIZE: int = 8192
    RANDOM_NAME_LENGTH: int = 10
    INLINE_NOTICE_MAX_CHARS: int = 45


settings = Settings()
