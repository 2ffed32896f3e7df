import av
import logging
from pathlib import Path
from typing import List, Optional
from av.error import FFmpegError
from ..domain.interfaces import IContainerBackend, IContainerReader, IContainerWriter
from ..domain.models import MediaSample, TrackFormat

logger = logging.getLogger(__name__)


class PyAVContainerReader(IContainerReader):
    """
    Demuxer on top of PyAV (libavformat).
    Reads compressed packets of one selected stream, never decodes.
    """

    def __init__(self, path: Path):
        self.path = path
        try:
            self._container = av.open(str(path), mode="r")
        except FFmpegError as e:
            raise OSError(f"Cannot open container {path}: {e}") from e
        self._packets = None

    def tracks(self) -> List[TrackFormat]:
        formats = []
        for stream in self._container.streams:
            codec = getattr(stream.codec_context, "name", None) or "unknown"
            formats.append(TrackFormat(mime=f"{stream.type}/{codec}", codec=codec, native=stream))
        return formats

    def select_track(self, index: int) -> None:
        stream = self._container.streams[index]
        self._packets = self._container.demux(stream)

    def read_sample(self) -> Optional[MediaSample]:
        if self._packets is None:
            raise OSError("No track selected")

        try:
            for packet in self._packets:
                # Demuxer emits an empty flush packet per stream at EOF
                if packet.dts is None:
                    continue

                pts_us = None
                if packet.pts is not None and packet.time_base:
                    pts_us = int(packet.pts * packet.time_base * 1_000_000)
                return MediaSample(data=packet, presentation_time_us=pts_us, size=packet.size)
        except FFmpegError as e:
            raise OSError(f"Failed reading {self.path}: {e}") from e

        return None

    def release(self) -> None:
        self._container.close()


class PyAVContainerWriter(IContainerWriter):
    """
    Muxer on top of PyAV. Output tracks are cloned from the source stream
    (add_stream_from_template), so packets are copied as-is with their timestamps.
    """

    def __init__(self, path: Path, format_name: str):
        self.path = path
        try:
            self._container = av.open(str(path), mode="w", format=format_name)
        except FFmpegError as e:
            raise OSError(f"Cannot create container {path}: {e}") from e
        self._streams = []
        self._started = False
        self._closed = False

    def add_track(self, track_format: TrackFormat) -> int:
        if self._started:
            raise OSError("Tracks must be declared before start()")
        if track_format.native is None:
            raise OSError(f"Track format {track_format.mime} carries no stream template")

        try:
            stream = self._container.add_stream_from_template(track_format.native)
        except (FFmpegError, ValueError) as e:
            raise OSError(f"Cannot declare {track_format.codec} track in {self.path}: {e}") from e

        self._streams.append(stream)
        return len(self._streams) - 1

    def start(self) -> None:
        try:
            self._container.start_encoding()
        except FFmpegError as e:
            raise OSError(f"Cannot start writing {self.path}: {e}") from e
        self._started = True

    def write_sample(self, track_index: int, sample: MediaSample) -> None:
        packet = sample.data
        packet.stream = self._streams[track_index]
        try:
            self._container.mux(packet)
        except FFmpegError as e:
            raise OSError(f"Failed writing sample to {self.path}: {e}") from e

    def stop(self) -> None:
        if not self._started:
            raise RuntimeError("Writer was never started")

        # Closing writes the trailer
        try:
            self._container.close()
        except FFmpegError as e:
            raise OSError(f"Failed finalizing {self.path}: {e}") from e
        finally:
            self._started = False
            self._closed = True

    def release(self) -> None:
        if not self._closed:
            self._closed = True
            self._container.close()


class PyAVContainerBackend(IContainerBackend):
    def open_reader(self, path: Path) -> IContainerReader:
        return PyAVContainerReader(path)

    def open_writer(self, path: Path, format_name: str) -> IContainerWriter:
        logger.debug(f"Opening {format_name} writer: {path}")
        return PyAVContainerWriter(path, format_name)
