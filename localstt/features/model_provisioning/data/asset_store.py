from pathlib import Path
from typing import BinaryIO, Optional
from localstt.core.config.settings import settings
from ..domain.interfaces import IAssetStore

class LocalAssetStore(IAssetStore):
    """
    Serves bundled assets from a directory on disk (settings.ASSETS_DIR by default).
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else settings.ASSETS_DIR

    def open(self, name: str) -> BinaryIO:
        asset = self.root / name
        if not asset.is_file():
            raise FileNotFoundError(f"Bundled asset not found: {asset}")
        return open(asset, "rb")
