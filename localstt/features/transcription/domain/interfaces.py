from abc import ABC, abstractmethod
from pathlib import Path

class ISpeechRecognizer(ABC):
    """
    Contract for the on-device ASR engine.
    Allows us to swap Whisper for another local engine later.
    """
    @abstractmethod
    def transcribe(self, model_path: Path, wav_path: Path, language: str, threads: int) -> str:
        """
        Transcribes a canonical (16 kHz mono PCM) WAV file.

        Args:
            model_path: Checkpoint on local storage.
            wav_path: Canonical WAV input.
            language: Language code, or 'auto' for detection.
            threads: CPU worker threads the engine may use.

        Returns:
            Raw transcript text (untrimmed).
        """
        pass
