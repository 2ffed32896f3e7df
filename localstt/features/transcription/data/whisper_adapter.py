# File: localstt/features/transcription/data/whisper_adapter.py
import torch
import logging
from pathlib import Path
from threading import Lock
from typing import Optional
from localstt.core.config.settings import settings
from localstt.core.model_lifecycle.orchestrator import ModelOrchestrator
from localstt.core.model_lifecycle.types import ModelType
from ..domain.interfaces import ISpeechRecognizer

logger = logging.getLogger(__name__)

AUTO_LANGUAGE = "auto"

class WhisperRecognizer(ISpeechRecognizer):
    """
    openai-whisper running a local checkpoint file.
    """
    # Whisper installs kv-cache hooks on the shared model per decode,
    # so two decodes on the same model must not overlap.
    _inference_lock = Lock()

    def __init__(self, device: Optional[str] = None):
        self.orchestrator = ModelOrchestrator()
        self.device = device or settings.WHISPER_DEVICE

    def transcribe(self, model_path: Path, wav_path: Path, language: str, threads: int) -> str:
        checkpoint = str(model_path)
        logger.info(f"Requesting Whisper ({Path(checkpoint).name}) for {wav_path}...")

        def loader():
            import whisper
            logger.debug(f"Loading Whisper checkpoint {checkpoint} on {self.device}...")
            return whisper.load_model(checkpoint, device=self.device)

        model = self.orchestrator.request_model(ModelType.WHISPER, checkpoint, loader)
        use_fp16 = (self.device == "cuda")

        with self._inference_lock:
            torch.set_num_threads(max(1, threads))
            result_raw = model.transcribe(
                str(wav_path),
                language=None if language == AUTO_LANGUAGE else language,
                fp16=use_fp16
            )

        detected = result_raw.get("language", "unknown")
        logger.info(f"Whisper finished {Path(wav_path).name} (language: {detected})")
        return result_raw.get("text", "")
