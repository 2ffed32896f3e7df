import subprocess
import logging
from pathlib import Path
from typing import Optional
from localstt.core.config.settings import settings
from ..domain.interfaces import ITranscoder
from ..domain.models import PcmTarget, TranscodeOutcome

logger = logging.getLogger(__name__)

class FFmpegTranscoder(ITranscoder):
    """
    Concrete implementation of ITranscoder using the ffmpeg binary.
    """

    def __init__(self, binary: Optional[str] = None, timeout_seconds: Optional[float] = None):
        self.binary = binary or settings.FFMPEG_BINARY
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.FFMPEG_TIMEOUT_SECONDS

    def build_command(self, input_path: Path, output_path: Path, target: PcmTarget) -> list:
        # -y: Overwrite output
        # -vn: Drop any video stream
        # -acodec/-ac/-ar: 16-bit PCM, mono, 16 kHz
        cmd = [self.binary]
        if target.overwrite:
            cmd.append("-y")
        cmd += [
            "-i", str(input_path),
            "-vn",
            "-acodec", target.codec,
            "-ac", str(target.channels),
            "-ar", str(target.sample_rate_hz),
            str(output_path)
        ]
        return cmd

    def transcode(self, input_path: Path, output_path: Path, target: PcmTarget) -> TranscodeOutcome:
        cmd = self.build_command(input_path, output_path, target)
        logger.info(f"Normalizing audio: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds
            )
        except subprocess.TimeoutExpired as e:
            raise TimeoutError(f"ffmpeg exceeded {self.timeout_seconds}s on {input_path}") from e

        if proc.returncode != 0:
            logger.error(f"FFmpeg exited with {proc.returncode}. STDERR: {proc.stderr}")

        return TranscodeOutcome(return_code=proc.returncode, stderr=proc.stderr or "")
