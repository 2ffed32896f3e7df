from abc import ABC, abstractmethod
from typing import BinaryIO

class IAssetStore(ABC):
    """
    Contract for the read-only bundle the model ships in.
    """
    @abstractmethod
    def open(self, name: str) -> BinaryIO:
        """
        Opens the bundled asset with the given logical name for binary reading.
        Raises OSError if the asset is missing or unreadable.
        """
        pass
