from dataclasses import dataclass, field
from typing import Any, Optional

@dataclass(frozen=True)
class TrackFormat:
    """
    Opaque description of a track's encoding.
    `native` is whatever the container backend needs to declare an
    identical track on the writer side (e.g. the source stream).
    """
    mime: str
    codec: str
    native: Any = field(default=None, compare=False, repr=False)

    @property
    def is_audio(self) -> bool:
        return self.mime.startswith("audio/")

@dataclass(frozen=True)
class AudioTrackDescriptor:
    """
    The track selected for extraction.
    Only valid for the lifetime of the reader it came from.
    """
    index: int
    format: TrackFormat

@dataclass(frozen=True)
class MediaSample:
    """
    One compressed sample unit read from a track.
    """
    data: Any
    presentation_time_us: Optional[int]
    size: int = 0

@dataclass(frozen=True)
class OutputContainer:
    """
    Where a copied track ends up: file extension + muxer name.
    """
    extension: str
    format_name: str


# Native container family per source codec. The track is copied, never re-encoded.
_CONTAINERS_BY_CODEC = {
    "aac": OutputContainer("m4a", "mp4"),
    "alac": OutputContainer("m4a", "mp4"),
    "mp3": OutputContainer("mp3", "mp3"),
    "opus": OutputContainer("ogg", "ogg"),
    "vorbis": OutputContainer("ogg", "ogg"),
    "flac": OutputContainer("flac", "flac"),
}

# Matroska accepts practically any audio codec
FALLBACK_CONTAINER = OutputContainer("mka", "matroska")


def container_for_codec(codec: str) -> OutputContainer:
    return _CONTAINERS_BY_CODEC.get((codec or "").lower(), FALLBACK_CONTAINER)
