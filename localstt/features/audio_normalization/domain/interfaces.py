from abc import ABC, abstractmethod
from pathlib import Path
from .models import PcmTarget, TranscodeOutcome

class ITranscoder(ABC):
    """
    Contract for the external tool that converts any audio into PCM WAV.
    """
    @abstractmethod
    def transcode(self, input_path: Path, output_path: Path, target: PcmTarget) -> TranscodeOutcome:
        """
        Converts input_path into output_path with the target parameters.

        Raises:
            OSError: the executor could not be launched.
            TimeoutError: the executor exceeded its time budget.
        """
        pass
