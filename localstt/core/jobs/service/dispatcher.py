# File: localstt/core/jobs/service/dispatcher.py

import logging
from collections import OrderedDict
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from localstt.core.config.settings import settings
from localstt.core.common.enums import JobStatus
from localstt.core.common.errors import InferenceError
from localstt.features.transcription.domain.models import TranscriptionResult
from ..domain.interfaces import IJobRunner
from ..domain.models import TranscriptionRequest

logger = logging.getLogger(__name__)


class JobDispatcher:
    """
    The Central Dispatcher.
    Accepts requests from any thread and runs each one on a pooled worker.
    The request callback fires exactly once, on the worker thread.

    Status is kept for every live job plus the most recent `history`
    finished ones; status() returns None for jobs that have aged out.
    """

    def __init__(self, runner: IJobRunner, max_workers: Optional[int] = None, history: Optional[int] = None):
        self.runner = runner
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.MAX_WORKERS,
            thread_name_prefix="transcribe"
        )
        self._history = history if history is not None else settings.JOB_STATUS_HISTORY
        self._active: Dict[UUID, JobStatus] = {}
        self._finished: "OrderedDict[UUID, JobStatus]" = OrderedDict()
        self._lock = Lock()

    def submit(self, request: TranscriptionRequest) -> "Future[TranscriptionResult]":
        """
        Schedules the request and returns immediately.
        The returned Future resolves to the same result the callback receives.
        """
        self._set_status(request.request_id, JobStatus.PENDING)
        logger.info(f"Job Submitted: {request.request_id} [{request.source_path.name}]")
        return self._executor.submit(self._execute, request)

    def status(self, request_id: UUID) -> Optional[JobStatus]:
        with self._lock:
            return self._active.get(request_id) or self._finished.get(request_id)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "JobDispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.shutdown(wait=True)
        return False

    def _execute(self, request: TranscriptionRequest) -> TranscriptionResult:
        self._set_status(request.request_id, JobStatus.PROCESSING)

        try:
            result = self.runner.run(request)
        except Exception as e:
            logger.exception(f"Job {request.request_id} crashed: {e}")
            error = InferenceError(f"Transcription crashed: {e}")
            error.__cause__ = e
            result = TranscriptionResult.failure(error)

        self._set_status(request.request_id, JobStatus.COMPLETED if result.ok else JobStatus.FAILED)
        self._deliver(request, result)
        return result

    @staticmethod
    def _deliver(request: TranscriptionRequest, result: TranscriptionResult) -> None:
        if request.callback is None:
            return
        try:
            request.callback(result.text, result.error)
        except Exception as e:
            # Delivered once already; a broken callback is the caller's problem
            logger.exception(f"Callback for job {request.request_id} raised: {e}")

    def _set_status(self, request_id: UUID, status: JobStatus) -> None:
        with self._lock:
            if status in (JobStatus.PENDING, JobStatus.PROCESSING):
                self._active[request_id] = status
                return

            self._active.pop(request_id, None)
            self._finished[request_id] = status
            while len(self._finished) > self._history:
                self._finished.popitem(last=False)
