from concurrent.futures import Future
from threading import Lock
from typing import Optional

from localstt.core.jobs.domain.models import TranscriptionCallback, TranscriptionRequest
from localstt.core.jobs.service.dispatcher import JobDispatcher
from localstt.features.model_provisioning.service.provisioner import ModelProvisioner
from ..data.whisper_adapter import WhisperRecognizer
from ..domain.models import TranscriptionResult
from .orchestrator import TranscriptionOrchestrator

_lock = Lock()
_orchestrator: Optional[TranscriptionOrchestrator] = None
_dispatcher: Optional[JobDispatcher] = None


def get_orchestrator() -> TranscriptionOrchestrator:
    """
    Process-wide pipeline built from settings.
    Holds the one ModelProvisioner (and so the one cached model path).
    """
    global _orchestrator
    with _lock:
        if _orchestrator is None:
            _orchestrator = TranscriptionOrchestrator(
                provisioner=ModelProvisioner(),
                recognizer=WhisperRecognizer()
            )
        return _orchestrator


def get_dispatcher() -> JobDispatcher:
    global _dispatcher
    orchestrator = get_orchestrator()
    with _lock:
        if _dispatcher is None:
            _dispatcher = JobDispatcher(orchestrator)
        return _dispatcher


def request_transcription(path: str, is_video: bool, callback: TranscriptionCallback) -> "Future[TranscriptionResult]":
    """
    Caller-facing async API. Never blocks; `callback(text, error)` fires
    exactly once on a worker thread.
    """
    request = TranscriptionRequest(source_path=path, is_video=is_video, callback=callback)
    return get_dispatcher().submit(request)


def transcribe_file(path: str, is_video: bool = False) -> str:
    """
    Blocking API for scripts and tests without the dispatcher.
    Raises a TranscriptionError subclass on failure.
    """
    return get_orchestrator().transcribe(path, is_video)
