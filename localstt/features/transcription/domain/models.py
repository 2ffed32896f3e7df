# File: localstt/features/transcription/domain/models.py
from dataclasses import dataclass
from typing import Optional
from localstt.core.common.errors import TranscriptionError

@dataclass(frozen=True)
class TranscriptionResult:
    """
    Terminal outcome of one request: either text or an error, never both.
    """
    text: Optional[str] = None
    error: Optional[TranscriptionError] = None

    def __post_init__(self):
        if (self.text is None) == (self.error is None):
            raise ValueError("A result carries exactly one of text or error.")

    @classmethod
    def success(cls, text: str) -> "TranscriptionResult":
        return cls(text=text)

    @classmethod
    def failure(cls, error: TranscriptionError) -> "TranscriptionResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
