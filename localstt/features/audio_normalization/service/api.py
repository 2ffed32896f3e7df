from pathlib import Path
from localstt.core.temp_artifacts import TempArtifactSet
from .normalizer import FormatNormalizer

def run_normalization(audio_path: str, artifacts: TempArtifactSet) -> Path:
    """
    Standalone API: converts an audio file to 16 kHz mono PCM WAV.
    The caller owns `artifacts` and therefore the produced file.
    """
    return FormatNormalizer().normalize(Path(audio_path), artifacts)
