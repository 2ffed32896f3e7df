from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional
from uuid import UUID, uuid4
from localstt.core.common.errors import TranscriptionError

# Receives (text, None) on success or (None, error) on failure. Exactly once.
TranscriptionCallback = Callable[[Optional[str], Optional[TranscriptionError]], None]

@dataclass(frozen=True)
class TranscriptionRequest:
    """
    DTO for requesting a transcription. Immutable once submitted.
    """
    source_path: Path
    is_video: bool = False
    callback: Optional[TranscriptionCallback] = field(default=None, compare=False, repr=False)
    request_id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        if str(self.source_path).strip() in ("", "."):
            raise ValueError("Source path cannot be empty.")
        # Accept plain strings from callers
        object.__setattr__(self, "source_path", Path(self.source_path))
