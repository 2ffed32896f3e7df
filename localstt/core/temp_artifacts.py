# File: localstt/core/temp_artifacts.py

import logging
from pathlib import Path
from typing import Iterator, List, Union

logger = logging.getLogger(__name__)


class TempArtifactSet:
    """
    Ordered record of every intermediate file created during ONE pipeline run.

    Used as a context manager; on exit every recorded path is deleted,
    whether the run succeeded or not. Deletion is best-effort: failures are
    logged and swallowed so they never replace the run's own outcome.
    """

    def __init__(self):
        self._paths: List[Path] = []
        self._closed = False

    def add(self, path: Union[str, Path]) -> Path:
        """Registers a path for deletion at the end of the run."""
        if self._closed:
            raise RuntimeError("Cannot register artifacts after cleanup.")

        path = Path(path)
        if path not in self._paths:
            self._paths.append(path)
        return path

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path) -> bool:
        return Path(path) in self._paths

    @property
    def closed(self) -> bool:
        return self._closed

    def cleanup(self) -> List[Path]:
        """
        Deletes every recorded path exactly once.
        Returns the paths that could NOT be removed.
        """
        if self._closed:
            return []
        self._closed = True

        leftovers = []
        for path in self._paths:
            try:
                path.unlink(missing_ok=True)
                logger.debug(f"Removed temp artifact: {path}")
            except OSError as e:
                logger.warning(f"Failed to delete temp artifact {path}: {e}")
                leftovers.append(path)

        self._paths = []
        return leftovers

    def __enter__(self) -> "TempArtifactSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        # Never swallow the run's own exception
        return False
