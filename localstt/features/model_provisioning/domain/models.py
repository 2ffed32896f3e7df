from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class ModelHandle:
    """
    A model checkpoint that was proven to exist on local storage
    at the time it was handed out.
    """
    path: Path
    verified: bool = True

    def __post_init__(self):
        if not self.path.is_absolute():
            raise ValueError(f"Model path must be absolute: {self.path}")
