import os
import posixpath
import re
from pathlib import Path
from typing import Any, Iterable, Union

PathLike = Union[str, os.PathLike]


def _segments(args: Iterable[Any]) -> list:
    segments = []
    for arg in args:
        if arg is None:
            continue
        if isinstance(arg, (list, tuple)):
            segments.extend(_segments(arg))
            continue
        text = os.fspath(arg) if isinstance(arg, os.PathLike) else str(arg)
        if text:
            segments.append(text)
    return segments


def path_for(*args: Any) -> str:
    """Join the arguments with '/', squeezing repeated separators and resolving '.' and '..'."""
    joined = "/".join(_segments(args))
    joined = re.sub(r"/+", "/", joined)
    if not joined:
        return ""
    leading = joined.startswith("/")
    normalized = posixpath.normpath(joined)
    if normalized == ".":
        return "/" if leading else ""
    if leading and not normalized.startswith("/"):
        normalized = "/" + normalized
    # posix normpath keeps a leading '//' intact
    return re.sub(r"^/+", "/", normalized)


def absolute_path_for(*args: Any) -> str:
    return path_for("/", *args)


def relative_path_for(*args: Any) -> str:
    return path_for(*args).lstrip("/")


def relative_path(path: PathLike, to: PathLike) -> str:
    return Path(os.path.relpath(os.fspath(path), os.fspath(to))).as_posix()


def realpath(path: PathLike) -> Path:
    return Path(os.fspath(path)).expanduser().resolve()


def slug_for(*args: Any, join: str = "-") -> str:
    words = []
    for segment in _segments(args):
        words.extend(re.findall(r"[a-z0-9]+", segment.lower()))
    return join.join(words)
