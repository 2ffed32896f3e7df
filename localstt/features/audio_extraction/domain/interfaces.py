from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional
from .models import MediaSample, TrackFormat

class IContainerReader(ABC):
    """
    Sequential reader over one media container.
    All failures surface as OSError.
    """
    @abstractmethod
    def tracks(self) -> List[TrackFormat]:
        """Track formats in container order (list index == track index)."""
        pass

    @abstractmethod
    def select_track(self, index: int) -> None:
        """Restricts read_sample() to the given track."""
        pass

    @abstractmethod
    def read_sample(self) -> Optional[MediaSample]:
        """Next sample of the selected track, or None at end of stream."""
        pass

    @abstractmethod
    def release(self) -> None:
        pass

class IContainerWriter(ABC):
    """
    Writer producing a new container file.
    Lifecycle: add_track() -> start() -> write_sample()* -> stop() -> release().
    stop() on a writer that was never started is an error.
    """
    @abstractmethod
    def add_track(self, track_format: TrackFormat) -> int:
        """Declares a track; returns its index in the output."""
        pass

    @abstractmethod
    def start(self) -> None:
        pass

    @abstractmethod
    def write_sample(self, track_index: int, sample: MediaSample) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @abstractmethod
    def release(self) -> None:
        pass

class IContainerBackend(ABC):
    """
    Factory for readers/writers. The demux/remux primitive itself.
    """
    @abstractmethod
    def open_reader(self, path: Path) -> IContainerReader:
        pass

    @abstractmethod
    def open_writer(self, path: Path, format_name: str) -> IContainerWriter:
        pass
