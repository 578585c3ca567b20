import re
from typing import Any, Callable, Dict, List

from .paths import path_for
from .urls import normalize_url


def _to_bool(value: Any) -> bool:
    return re.fullmatch(r"\s*(f|false|off|no|0)?\s*", str(value), re.IGNORECASE) is None


def _string_or_none(value: Any):
    text = "" if value is None else str(value)
    return text or None


CASTS: Dict[str, Callable[[Any], Any]] = {
    "string": lambda value: str(value),
    "int": lambda value: int(str(value)),
    "string_or_nil": _string_or_none,
    "url": lambda value: normalize_url(value),
    "array": lambda value: re.findall(r"[^,:]+", str(value)),
    "bool": _to_bool,
    "path": lambda value: path_for(value),
}


def cast(which: str, *args: Any) -> Any:
    """
    Coerce string input (typically environment variables).

    ``which`` names a cast; a ``list_of_`` prefix splits the input on commas
    and whitespace and casts every item.
    """
    which = str(which)
    values = re.findall(r"[^,\s]+", ",".join("" if a is None else str(a) for a in args))

    list_of = re.match(r"^list_of_(.+)$", which)
    if list_of:
        which = list_of.group(1)

    try:
        caster = CASTS[which]
    except KeyError:
        raise ValueError(f"unknown cast '{which}'") from None

    if list_of:
        return [caster(value) for value in values]

    if len(values) > 1:
        raise ValueError(f"too many values in {values!r}")
    if which == "bool" and not values:
        return False
    return caster(values[0] if values else "")


def list_of_strings(*args: Any) -> List[str]:
    strings: List[str] = []
    for arg in args:
        if arg is None:
            continue
        if isinstance(arg, (list, tuple, set)):
            strings.extend(list_of_strings(*arg))
        else:
            strings.append(str(arg))
    return strings
