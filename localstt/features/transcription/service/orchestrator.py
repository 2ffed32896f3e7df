import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from localstt.core.config.settings import settings
from localstt.core.common.enums import ErrorKind
from localstt.core.common.errors import ERRORS_BY_KIND, TranscriptionError
from localstt.core.jobs.domain.interfaces import IJobRunner
from localstt.core.jobs.domain.models import TranscriptionRequest
from localstt.core.temp_artifacts import TempArtifactSet
from localstt.features.model_provisioning.service.provisioner import ModelProvisioner
from localstt.features.audio_extraction.service.extractor import AudioExtractor
from localstt.features.audio_normalization.service.normalizer import FormatNormalizer
from ..domain.interfaces import ISpeechRecognizer
from ..domain.models import TranscriptionResult

logger = logging.getLogger(__name__)


@contextmanager
def stage(kind: ErrorKind, label: str):
    """
    Tags any unexpected exception with the stage it came from.
    Errors that already carry a kind pass through untouched.
    """
    try:
        yield
    except TranscriptionError:
        raise
    except Exception as e:
        raise ERRORS_BY_KIND[kind](f"{label} failed: {e}") from e


class TranscriptionOrchestrator(IJobRunner):
    """
    The top-level coordinator.
    model -> (extract) -> normalize -> infer, with every intermediate
    file removed before control returns.
    """

    def __init__(self,
                 provisioner: ModelProvisioner,
                 recognizer: ISpeechRecognizer,
                 extractor: Optional[AudioExtractor] = None,
                 normalizer: Optional[FormatNormalizer] = None,
                 language: Optional[str] = None,
                 threads: Optional[int] = None):
        self.provisioner = provisioner
        self.recognizer = recognizer
        self.extractor = extractor or AudioExtractor()
        self.normalizer = normalizer or FormatNormalizer()
        self.language = language or settings.LANGUAGE_HINT
        self.threads = threads or settings.INFERENCE_THREADS

    def transcribe(self, source_path, is_video: bool = False) -> str:
        """
        Runs the full pipeline and returns the trimmed transcript.
        Raises a TranscriptionError subclass naming the failed stage.
        """
        source_path = Path(source_path)

        # 1. Model first: nothing else is attempted without it
        with stage(ErrorKind.MODEL_UNAVAILABLE, "Model provisioning"):
            model = self.provisioner.resolve()

        with TempArtifactSet() as artifacts:
            # 2. Working audio
            if is_video:
                with stage(ErrorKind.EXTRACTION_FAILURE, "Audio extraction"):
                    audio_path = self.extractor.extract(source_path, artifacts)
            else:
                audio_path = source_path

            # 3. Canonical WAV
            with stage(ErrorKind.CONVERSION_FAILURE, "Audio conversion"):
                wav_path = self.normalizer.normalize(audio_path, artifacts)

            # 4. Inference
            with stage(ErrorKind.INFERENCE_FAILURE, "Transcription"):
                text = (self.recognizer.transcribe(model.path, wav_path, self.language, self.threads) or "").strip()

        return text

    def run(self, request: TranscriptionRequest) -> TranscriptionResult:
        logger.info(f"Transcribing [{request.request_id}] {request.source_path} (video={request.is_video})")
        try:
            text = self.transcribe(request.source_path, request.is_video)
        except TranscriptionError as e:
            logger.exception(f"Transcription [{request.request_id}] failed ({e.kind.value}): {e}")
            return TranscriptionResult.failure(e)

        logger.info(f"Transcription [{request.request_id}] completed: {len(text)} chars")
        return TranscriptionResult.success(text)
