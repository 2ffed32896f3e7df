import shutil
import wave
import pytest
from localstt.core.config.settings import settings
from localstt.core.common.errors import ConversionError
from localstt.core.temp_artifacts import TempArtifactSet
from localstt.features.audio_normalization.service.api import run_normalization

pytest.importorskip("av")
pytestmark = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg binary not installed")


@pytest.fixture(autouse=True)
def scratch_in_tmp(monkeypatch, storage_root):
    monkeypatch.setattr(settings, "AUDIO_DIR", storage_root / "audio")
    return storage_root / "audio"


def test_ffmpeg_produces_canonical_wav(write_test_video, tmp_path, scratch_in_tmp):
    source = write_test_video(tmp_path / "lecture.mp4")

    with TempArtifactSet() as artifacts:
        wav_path = run_normalization(str(source), artifacts)

        assert wav_path.parent == scratch_in_tmp
        with wave.open(str(wav_path), "rb") as w:
            assert w.getnchannels() == 1
            assert w.getframerate() == 16000
            assert w.getsampwidth() == 2
            assert w.getnframes() > 0

    assert not wav_path.exists()


def test_undecodable_input_is_a_conversion_failure(tmp_path, scratch_in_tmp):
    junk = tmp_path / "broken.ogg"
    junk.write_bytes(b"not audio at all" * 4)

    with TempArtifactSet() as artifacts:
        with pytest.raises(ConversionError):
            run_normalization(str(junk), artifacts)

    assert list(scratch_in_tmp.iterdir()) == []
