import random
import string
import logging
from pathlib import Path
from typing import Optional

from localstt.core.config.settings import settings
from localstt.core.common.errors import ConversionError
from localstt.core.temp_artifacts import TempArtifactSet
from ..domain.interfaces import ITranscoder
from ..domain.models import PcmTarget
from ..data.ffmpeg_adapter import FFmpegTranscoder

logger = logging.getLogger(__name__)


def generate_random_name(length: int) -> str:
    """Lowercase alphabetic name. Low collision odds, not cryptographic."""
    return "".join(random.choices(string.ascii_lowercase, k=length))


def is_canonical_wav(path: Path) -> bool:
    return path.suffix.lower() == ".wav"


class FormatNormalizer:
    """
    Turns any audio file into the mono / 16 kHz / 16-bit PCM WAV
    the inference engine reads. WAV inputs pass through untouched.
    """

    def __init__(self,
                 transcoder: Optional[ITranscoder] = None,
                 scratch_dir: Optional[Path] = None,
                 target: Optional[PcmTarget] = None,
                 name_length: Optional[int] = None):
        self.transcoder = transcoder or FFmpegTranscoder()
        self.scratch_dir = Path(scratch_dir) if scratch_dir is not None else settings.AUDIO_DIR
        self.target = target or PcmTarget()
        self.name_length = name_length or settings.RANDOM_NAME_LENGTH

    def normalize(self, audio_path, artifacts: TempArtifactSet) -> Path:
        """
        Returns the path of a canonical WAV for `audio_path`.

        Raises:
            ConversionError: the scratch dir can't be created, the executor
                fails, or the output is missing/empty.
        """
        audio_path = Path(audio_path)
        if is_canonical_wav(audio_path):
            logger.debug(f"Already WAV, skipping conversion: {audio_path}")
            return audio_path

        try:
            self.scratch_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionError(f"Failed to create audio directory {self.scratch_dir}: {e}") from e

        wav_path = self._candidate_path()
        # Registered up front: a failed conversion can still leave a partial file
        artifacts.add(wav_path)

        try:
            outcome = self.transcoder.transcode(audio_path, wav_path, self.target)
        except OSError as e:
            raise ConversionError(f"Audio conversion could not run: {e}") from e

        if not wav_path.exists() or wav_path.stat().st_size == 0:
            raise ConversionError("Audio conversion failed or produced an empty file")

        if not outcome.succeeded:
            raise ConversionError(
                f"Audio conversion exited with status {outcome.return_code}: {outcome.stderr_tail()}"
            )

        logger.info(f"Normalized {audio_path.name} -> {wav_path}")
        return wav_path

    def _candidate_path(self) -> Path:
        while True:
            candidate = self.scratch_dir / f"{generate_random_name(self.name_length)}.wav"
            if not candidate.exists():
                return candidate
