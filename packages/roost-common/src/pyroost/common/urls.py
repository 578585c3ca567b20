from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote_plus, urlsplit, urlunsplit

from .paths import absolute_path_for


def query_string_for(query: Mapping[str, Any], escape: bool = True) -> str:
    """
    Build a query string with one ``key=value`` pair per value.

    Pairs are ordered by their encoded length (stable for equal lengths),
    which keeps the output reproducible for a given mapping.
    """
    esc = (lambda v: quote_plus(str(v))) if escape else (lambda v: str(v))
    pairs: List[str] = []
    for key, values in query.items():
        if not isinstance(values, (list, tuple, set)):
            values = [values]
        for value in _flatten(values):
            value = "" if value is None else str(value)
            if value == "":
                pairs.append(esc(key))
            else:
                pairs.append(f"{esc(key)}={esc(value)}")
    pairs.sort(key=len)
    return "&".join(pairs)


def _flatten(values) -> List[Any]:
    flat: List[Any] = []
    for value in values:
        if isinstance(value, (list, tuple, set)):
            flat.extend(_flatten(value))
        else:
            flat.append(value)
    return flat


def url_for(
    *parts: Any,
    base: str = "/",
    query: Optional[Mapping[str, Any]] = None,
    fragment: Optional[str] = None,
    **params: Any,
) -> str:
    """
    Resolve path parts against ``base``.

    Extra keyword arguments become query parameters unless an explicit
    ``query`` mapping is given.
    """
    uri = urlsplit(str(base))
    path = absolute_path_for(uri.path, *parts)
    if path == "/":
        path = ""

    query_params: Dict[str, Any] = dict(query if query is not None else params)
    query_string = query_string_for(query_params) if query_params else uri.query

    return urlunsplit((uri.scheme, uri.netloc, path, query_string, fragment or uri.fragment))


def normalize_url(url: str) -> str:
    uri = urlsplit(str(url))
    path = absolute_path_for(uri.path)
    return urlunsplit((uri.scheme.lower(), uri.netloc.lower(), path, uri.query, uri.fragment))
