# File: localstt/core/common/errors.py

from localstt.core.config.settings import settings
from .enums import ErrorKind, ErrorPresentation


class TranscriptionError(RuntimeError):
    """
    Base failure for one transcription request.
    Always carries the stage that failed (kind) and a human-readable message.
    """
    kind: ErrorKind = ErrorKind.INFERENCE_FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def presentation(self) -> ErrorPresentation:
        """Short messages fit an inline notice, longer ones need a dialog."""
        if len(self.message) > settings.INLINE_NOTICE_MAX_CHARS:
            return ErrorPresentation.DIALOG
        return ErrorPresentation.INLINE

    def __str__(self) -> str:
        return self.message


class ModelUnavailableError(TranscriptionError):
    kind = ErrorKind.MODEL_UNAVAILABLE


class NoAudioTrackError(TranscriptionError):
    kind = ErrorKind.NO_AUDIO_TRACK


class ExtractionError(TranscriptionError):
    kind = ErrorKind.EXTRACTION_FAILURE


class ConversionError(TranscriptionError):
    kind = ErrorKind.CONVERSION_FAILURE


class InferenceError(TranscriptionError):
    kind = ErrorKind.INFERENCE_FAILURE


ERRORS_BY_KIND = {
    cls.kind: cls
    for cls in (ModelUnavailableError, NoAudioTrackError, ExtractionError, ConversionError, InferenceError)
}
