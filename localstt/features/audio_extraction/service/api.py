from pathlib import Path
from localstt.core.temp_artifacts import TempArtifactSet
from .extractor import AudioExtractor

def run_extraction(video_path: str, artifacts: TempArtifactSet) -> Path:
    """
    Standalone API: copies the first audio track of a video into its own file.
    The caller owns `artifacts` and therefore the produced file.
    """
    return AudioExtractor().extract(Path(video_path), artifacts)
