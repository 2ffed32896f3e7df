from dataclasses import dataclass

@dataclass(frozen=True)
class PcmTarget:
    """
    Canonical WAV the inference engine expects.
    """
    channels: int = 1
    sample_rate_hz: int = 16000
    codec: str = "pcm_s16le"  # signed 16-bit little-endian
    overwrite: bool = True

@dataclass(frozen=True)
class TranscodeOutcome:
    """
    What the external executor reported. Advisory only:
    the output file itself is the real success signal.
    """
    return_code: int
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.return_code == 0

    def stderr_tail(self, lines: int = 5) -> str:
        return "\n".join(self.stderr.strip().splitlines()[-lines:])
