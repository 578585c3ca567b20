from .exceptions import (
    CycleError,
    MalformedInputError,
    NotFoundError,
    RenderError,
    RoostError,
    StrategyExhaustedError,
)
from .models import LOADING, Fingerprint, LoadState
from .result import RewriteResult
from .storage import CacheAdapter

__all__ = [
    "CacheAdapter",
    "CycleError",
    "Fingerprint",
    "LOADING",
    "LoadState",
    "MalformedInputError",
    "NotFoundError",
    "RenderError",
    "RewriteResult",
    "RoostError",
    "StrategyExhaustedError",
]
