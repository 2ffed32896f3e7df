from abc import ABC, abstractmethod
from localstt.features.transcription.domain.models import TranscriptionResult
from .models import TranscriptionRequest

class IJobRunner(ABC):
    """
    Contract for whatever executes one request end-to-end.
    """

    @abstractmethod
    def run(self, request: TranscriptionRequest) -> TranscriptionResult:
        """
        Executes the request. Must never raise: every failure is
        returned as TranscriptionResult.failure(...).
        """
        pass
