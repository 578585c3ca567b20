from dataclasses import dataclass
from typing import Optional


@dataclass
class RewriteResult:
    success: bool
    strategy: str
    value: str = ""
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, strategy: str, value: str) -> "RewriteResult":
        return cls(success=True, strategy=strategy, value=value)

    @classmethod
    def failed(cls, strategy: str, error: Exception) -> "RewriteResult":
        return cls(success=False, strategy=strategy, error=error)
