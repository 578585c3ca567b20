import hashlib
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Tuple

from pyroost.common.paths import relative_path
from pyroost.interfaces.models import Fingerprint

logger = logging.getLogger(__name__)


def format_timestamp(timestamp: float) -> str:
    """ISO-8601 (UTC) with two fractional digits."""
    stamp = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{stamp:%Y-%m-%dT%H:%M:%S}.{stamp.microsecond // 10000:02d}Z"


def iter_files(root: Path) -> Iterator[Path]:
    # os.walk skips directories it cannot list
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def fingerprint_entries(root: Path) -> List[Tuple[str, str]]:
    entries = []
    for entry in iter_files(root):
        try:
            stat = entry.stat()
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {entry}: {e}")
            continue
        timestamp = max(stat.st_ctime, stat.st_mtime)
        entries.append((relative_path(entry, to=root), format_timestamp(timestamp)))
    entries.sort()
    return entries


def fingerprint(path: Path) -> Fingerprint:
    """
    Digest every file under ``path`` by relative path and timestamp.

    Always a full rescan of the subtree; nothing is remembered between calls.
    """
    root = Path(path)
    payload = ", ".join(f"{rel}@{stamp}" for rel, stamp in fingerprint_entries(root))
    digest = hashlib.md5(payload.encode("utf-8")).hexdigest()
    return Fingerprint(path=root, digest=digest)
