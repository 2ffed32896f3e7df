# File: tests/conftest.py

import io
import os
import sys
import logging
import threading
import pytest
from pathlib import Path

# 1. Add project root to path
sys.path.append(os.getcwd())

from localstt.core.jobs.domain.models import TranscriptionRequest
from localstt.features.audio_extraction.domain.interfaces import (
    IContainerBackend, IContainerReader, IContainerWriter
)
from localstt.features.audio_extraction.domain.models import MediaSample, TrackFormat
from localstt.features.audio_normalization.domain.interfaces import ITranscoder
from localstt.features.audio_normalization.domain.models import TranscodeOutcome
from localstt.features.model_provisioning.domain.interfaces import IAssetStore
from localstt.features.transcription.domain.interfaces import ISpeechRecognizer


# --- FAKE COLLABORATORS ---

class FakeAssetStore(IAssetStore):
    """In-memory asset bundle. `content=None` simulates a missing asset."""

    def __init__(self, content=b"", fail_midway=False):
        self.content = content
        self.fail_midway = fail_midway
        self.open_count = 0
        self._lock = threading.Lock()

    def open(self, name):
        with self._lock:
            self.open_count += 1
        if self.content is None:
            raise FileNotFoundError(f"Bundled asset not found: {name}")
        if self.fail_midway:
            return _BrokenStream(self.content)
        return io.BytesIO(self.content)


class _BrokenStream(io.BytesIO):
    """Hands out one chunk, then fails like a truncated asset."""

    def __init__(self, content):
        super().__init__(content)
        self._reads = 0

    def read(self, size=-1):
        self._reads += 1
        if self._reads > 1:
            raise OSError("Asset read interrupted")
        return super().read(size)


class FakeContainerBackend(IContainerBackend):
    """
    Simulates a container demuxer/muxer.
    Writers create a real file on disk so cleanup can be asserted.
    """

    def __init__(self, tracks=None, samples=None, fail_on=None, fail_release=False):
        self.tracks = tracks if tracks is not None else [
            TrackFormat(mime="video/h264", codec="h264"),
            TrackFormat(mime="audio/aac", codec="aac"),
        ]
        self.samples = samples if samples is not None else [
            MediaSample(data=b"frame-1", presentation_time_us=0, size=7),
            MediaSample(data=b"frame-2", presentation_time_us=23220, size=7),
            MediaSample(data=b"frame-3", presentation_time_us=46440, size=7),
        ]
        self.fail_on = fail_on  # "open_reader" | "open_writer" | "start" | "write"
        self.fail_release = fail_release
        self.events = []
        self.readers = []
        self.writers = []

    def open_reader(self, path):
        if self.fail_on == "open_reader":
            raise OSError(f"Cannot open container {path}")
        reader = FakeReader(self)
        self.readers.append(reader)
        return reader

    def open_writer(self, path, format_name):
        if self.fail_on == "open_writer":
            raise OSError(f"Cannot create container {path}")
        writer = FakeWriter(self, Path(path), format_name)
        self.writers.append(writer)
        return writer


class FakeReader(IContainerReader):
    def __init__(self, backend):
        self.backend = backend
        self.selected = None
        self._queue = []
        self.released = False

    def tracks(self):
        return list(self.backend.tracks)

    def select_track(self, index):
        self.selected = index
        self._queue = list(self.backend.samples)

    def read_sample(self):
        if not self._queue:
            return None
        return self._queue.pop(0)

    def release(self):
        self.released = True
        self.backend.events.append("reader.release")
        if self.backend.fail_release:
            raise OSError("reader release failed")


class FakeWriter(IContainerWriter):
    def __init__(self, backend, path, format_name):
        self.backend = backend
        self.path = path
        self.format_name = format_name
        self.declared = []
        self.written = []
        self.started = False
        self.released = False
        self.path.write_bytes(b"")

    def add_track(self, track_format):
        self.declared.append(track_format)
        self.backend.events.append("writer.add_track")
        return 0

    def start(self):
        if self.backend.fail_on == "start":
            raise OSError("muxer refused to start")
        self.started = True
        self.backend.events.append("writer.start")

    def write_sample(self, track_index, sample):
        if self.backend.fail_on == "write":
            raise OSError("disk full")
        self.written.append((track_index, sample))
        with open(self.path, "ab") as f:
            f.write(sample.data)

    def stop(self):
        if not self.started:
            raise RuntimeError("Writer was never started")
        self.started = False
        self.backend.events.append("writer.stop")

    def release(self):
        self.released = True
        self.backend.events.append("writer.release")
        if self.backend.fail_release:
            raise OSError("writer release failed")


class FakeTranscoder(ITranscoder):
    """
    mode: "ok" | "empty" | "missing" | "nonzero" | "crash"
    """

    def __init__(self, mode="ok", payload=b"RIFF....WAVEfmt "):
        self.mode = mode
        self.payload = payload
        self.calls = []

    def transcode(self, input_path, output_path, target):
        self.calls.append((Path(input_path), Path(output_path), target))
        if self.mode == "crash":
            raise FileNotFoundError("ffmpeg: command not found")
        if self.mode == "missing":
            return TranscodeOutcome(return_code=0)
        if self.mode == "empty":
            Path(output_path).write_bytes(b"")
            return TranscodeOutcome(return_code=0)
        Path(output_path).write_bytes(self.payload)
        if self.mode == "nonzero":
            return TranscodeOutcome(return_code=1, stderr="line 1\nInvalid data found when processing input")
        return TranscodeOutcome(return_code=0)


class FakeRecognizer(ISpeechRecognizer):
    def __init__(self, text=" hello world \n", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def transcribe(self, model_path, wav_path, language, threads):
        self.calls.append({
            "model_path": Path(model_path),
            "wav_path": Path(wav_path),
            "wav_existed": Path(wav_path).exists(),
            "language": language,
            "threads": threads,
        })
        if self.error is not None:
            raise self.error
        return self.text


# --- FIXTURES ---

@pytest.fixture(scope="session", autouse=True)
def debug_logs():
    logging.getLogger("localstt").setLevel(logging.DEBUG)
    yield


@pytest.fixture
def asset_store_cls():
    return FakeAssetStore


@pytest.fixture
def container_backend_cls():
    return FakeContainerBackend


@pytest.fixture
def transcoder_cls():
    return FakeTranscoder


@pytest.fixture
def recognizer_cls():
    return FakeRecognizer


@pytest.fixture
def storage_root(tmp_path):
    """Application-private storage root for one test."""
    root = tmp_path / "storage"
    root.mkdir()
    return root


@pytest.fixture
def make_request():
    def _make(path, is_video=False, callback=None):
        return TranscriptionRequest(source_path=path, is_video=is_video, callback=callback)
    return _make


def _write_test_video(path: Path, with_audio: bool = True, frames: int = 10, audio_frames: int = 16) -> Path:
    """
    Synthesizes a tiny MP4 (mpeg4 video + optional silent AAC audio) with PyAV,
    so the test setup doesn't depend on our own code.
    """
    import av
    from fractions import Fraction

    with av.open(str(path), mode="w") as container:
        video = container.add_stream("mpeg4", rate=10)
        video.width = 64
        video.height = 48
        video.pix_fmt = "yuv420p"

        audio = container.add_stream("aac", rate=16000, layout="mono") if with_audio else None

        for i in range(frames):
            frame = av.VideoFrame(64, 48, "yuv420p")
            for plane in frame.planes:
                plane.update(bytes(plane.buffer_size))
            frame.pts = i
            frame.time_base = Fraction(1, 10)
            for packet in video.encode(frame):
                container.mux(packet)
        for packet in video.encode():
            container.mux(packet)

        if audio is not None:
            for i in range(audio_frames):
                frame = av.AudioFrame(format="fltp", layout="mono", samples=1024)
                for plane in frame.planes:
                    plane.update(bytes(plane.buffer_size))
                frame.sample_rate = 16000
                frame.pts = i * 1024
                frame.time_base = Fraction(1, 16000)
                for packet in audio.encode(frame):
                    container.mux(packet)
            for packet in audio.encode():
                container.mux(packet)
    return path


@pytest.fixture
def write_test_video():
    return _write_test_video
