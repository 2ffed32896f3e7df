import os
import logging
import tempfile
from pathlib import Path
from threading import Lock
from typing import Optional

from localstt.core.config.settings import settings
from localstt.core.common.errors import ModelUnavailableError
from ..domain.interfaces import IAssetStore
from ..domain.models import ModelHandle
from ..data.asset_store import LocalAssetStore

logger = logging.getLogger(__name__)


class ModelProvisioner:
    """
    Ensures the acoustic model exists on local storage.

    The first call copies the checkpoint out of the read-only asset store;
    later calls only re-check that the cached file is still there.
    Concurrent first-time callers may each perform the copy. Every copy goes
    to its own temp file and is moved into place atomically, so the result
    is one complete model file and the same path for every caller.
    """

    def __init__(self,
                 asset_store: Optional[IAssetStore] = None,
                 models_dir: Optional[Path] = None,
                 model_filename: Optional[str] = None,
                 buffer_size: Optional[int] = None):
        self.asset_store = asset_store or LocalAssetStore()
        self.models_dir = Path(models_dir) if models_dir is not None else settings.MODELS_DIR
        self.model_filename = model_filename or settings.MODEL_FILENAME
        self.buffer_size = buffer_size or settings.COPY_BUFFER_SIZE

        self._cached_path: Optional[Path] = None
        self._lock = Lock()  # guards the cached reference only, never the copy

    @property
    def target_path(self) -> Path:
        return (self.models_dir / self.model_filename).absolute()

    def resolve(self) -> ModelHandle:
        """
        Returns a handle to a model file that exists right now.
        Raises ModelUnavailableError if it can't be provisioned.
        """
        # 1. Fast path: cached and still on disk
        with self._lock:
            cached = self._cached_path
        if cached is not None and cached.exists():
            return ModelHandle(path=cached)

        # 2. Slow path: (re)provision from the asset store
        target = self.target_path
        try:
            self.models_dir.mkdir(parents=True, exist_ok=True)
            if not target.exists():
                self._copy_from_assets(target)
        except OSError as e:
            with self._lock:
                self._cached_path = None
            logger.error(f"Failed to set up model {self.model_filename}: {e}")
            raise ModelUnavailableError(f"Model not available: {e}") from e

        with self._lock:
            self._cached_path = target
        return ModelHandle(path=target)

    def invalidate(self) -> None:
        """Forgets the cached path; the next resolve() re-checks the disk."""
        with self._lock:
            self._cached_path = None

    def _copy_from_assets(self, target: Path) -> None:
        """
        Streams the bundled checkpoint into target via a sibling temp file.
        The temp file is removed if anything goes wrong.
        """
        logger.info(f"Copying bundled model '{self.model_filename}' to {target}...")

        fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.", suffix=".part")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as dst, self.asset_store.open(self.model_filename) as src:
                for block in iter(lambda: src.read(self.buffer_size), b""):
                    dst.write(block)
            os.replace(tmp_path, target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info(f"Model ready: {target} ({target.stat().st_size} bytes)")
