from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheAdapter(ABC):
    """
    Key/value store used to short-circuit disk loads by fingerprint.
    A miss is reported as None.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        pass
