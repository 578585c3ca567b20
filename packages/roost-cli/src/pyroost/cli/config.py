import os
from pathlib import Path

# Content root used when --root is not given
DEFAULT_ROOT: Path = Path(os.getenv("ROOST_ROOT", "."))

# Log level; ROOST_LOG_LEVEL is upper-cased so "debug" works too
LOG_LEVEL: str = os.getenv("ROOST_LOG_LEVEL", "INFO").upper()
