import logging
from pathlib import Path
from typing import Optional

from localstt.core.common.errors import ExtractionError, NoAudioTrackError
from localstt.core.temp_artifacts import TempArtifactSet
from ..domain.interfaces import IContainerBackend, IContainerReader
from ..domain.models import AudioTrackDescriptor, container_for_codec
from ..data.pyav_adapter import PyAVContainerBackend

logger = logging.getLogger(__name__)


class AudioExtractor:
    """
    Copies the first audio track of a video container into a standalone
    audio file. Raw track copy: samples and timestamps go through untouched.
    """

    def __init__(self, backend: Optional[IContainerBackend] = None):
        self.backend = backend or PyAVContainerBackend()

    def extract(self, video_path, artifacts: TempArtifactSet) -> Path:
        """
        Returns the path of the extracted audio file.
        The file is registered in `artifacts` so the caller's cleanup removes it.

        Raises:
            NoAudioTrackError: the container has no audio track.
            ExtractionError: any container read/write failure.
        """
        video_path = Path(video_path)
        logger.info(f"Extracting audio track from: {video_path}")

        reader = None
        writer = None
        writer_started = False
        try:
            reader = self.backend.open_reader(video_path)

            # 1. Pick the first audio track
            track = self.find_audio_track(reader)
            if track is None:
                raise NoAudioTrackError(f"No audio track found in {video_path.name}")

            # 2. Declare the output in the source codec's own container family
            container = container_for_codec(track.format.codec)
            output_path = Path(f"{video_path}.{container.extension}")
            artifacts.add(output_path)

            writer = self.backend.open_writer(output_path, container.format_name)
            out_index = writer.add_track(track.format)
            writer.start()
            writer_started = True

            # 3. Copy samples in source order
            reader.select_track(track.index)
            copied = 0
            while True:
                sample = reader.read_sample()
                if sample is None:
                    break
                writer.write_sample(out_index, sample)
                copied += 1

            logger.info(f"Copied {copied} {track.format.codec} samples to {output_path}")
            return output_path

        except OSError as e:
            logger.error(f"Audio extraction failed for {video_path}: {e}")
            raise ExtractionError(f"Audio extraction failed: {e}") from e

        finally:
            self._release(reader, writer, writer_started)

    @staticmethod
    def find_audio_track(reader: IContainerReader) -> Optional[AudioTrackDescriptor]:
        for index, track_format in enumerate(reader.tracks()):
            if track_format.is_audio:
                return AudioTrackDescriptor(index=index, format=track_format)
        return None

    @staticmethod
    def _release(reader, writer, writer_started: bool) -> None:
        """
        Release-phase errors are logged only; they must not mask the
        exception (or result) of the extraction itself.
        """
        if writer is not None:
            if writer_started:
                try:
                    writer.stop()
                except Exception as e:
                    logger.warning(f"Error stopping container writer: {e}")
            try:
                writer.release()
            except Exception as e:
                logger.warning(f"Error releasing container writer: {e}")

        if reader is not None:
            try:
                reader.release()
            except Exception as e:
                logger.warning(f"Error releasing container reader: {e}")
