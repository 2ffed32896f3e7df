# File: localstt/core/common/enums.py

from enum import Enum, unique

@unique
class ErrorKind(str, Enum):
    MODEL_UNAVAILABLE = "model_unavailable"
    NO_AUDIO_TRACK = "no_audio_track"
    EXTRACTION_FAILURE = "extraction_failure"
    CONVERSION_FAILURE = "conversion_failure"
    INFERENCE_FAILURE = "inference_failure"

@unique
class ErrorPresentation(str, Enum):
    INLINE = "inline"
    DIALOG = "dialog"

@unique
class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
