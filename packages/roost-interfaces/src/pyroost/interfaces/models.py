import dataclasses
import enum
from pathlib import Path


class LoadState(enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class _Loading:
    """Marker handed back to re-entrant loads of a node that is mid-load."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "LOADING"

    def __bool__(self) -> bool:
        return False


LOADING = _Loading()


@dataclasses.dataclass(frozen=True)
class Fingerprint:
    # resolved node directory
    path: Path
    # md5 over the sorted "relative_path@timestamp" entries
    digest: str

    @property
    def key(self) -> str:
        return f"{self.path}@{self.digest}"

    def __str__(self) -> str:
        return self.key
