import re
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Iterator, Sequence, Tuple, Union

from .promise import Promise

KeyPathLike = Union[str, Sequence[Any]]


def key_path_for(key: KeyPathLike) -> Tuple[str, ...]:
    """``"a.b"``, ``"a/b"`` and ``("a", "b")`` all address the same nested value."""
    if isinstance(key, str):
        parts = re.split(r"[./]", key)
    else:
        parts = []
        for part in key:
            parts.extend(key_path_for(part) if isinstance(part, (list, tuple)) else [str(part)])
    return tuple(part for part in parts if part)


def _resolve(value: Any) -> Any:
    if isinstance(value, Promise):
        return value.resolve()
    return value


class AttributeMap(MutableMapping):
    """
    Ordered nested mapping of a node's attributes.

    Values may be unresolved Promises; every read path resolves them, so
    callers never see a Promise unless they ask for ``raw()``.
    """

    def __init__(self, data: Mapping = None):
        self._data: Dict[str, Any] = {}
        if data:
            self.update(data)

    # --- MutableMapping ---

    def __getitem__(self, key: str) -> Any:
        return _resolve(self._data[str(key)])

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[str(key)] = self._absorb(value)

    def __delitem__(self, key: str) -> None:
        del self._data[str(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeMap):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeMap({self._data!r})"

    def _absorb(self, value: Any) -> Any:
        if isinstance(value, AttributeMap):
            return value
        if isinstance(value, Mapping):
            return AttributeMap(value)
        return value

    # --- key paths ---

    def has(self, key: KeyPathLike) -> bool:
        node: Any = self
        for part in key_path_for(key):
            if not isinstance(node, AttributeMap) or part not in node._data:
                return False
            node = _resolve(node._data[part])
        return True

    def get(self, key: KeyPathLike, default: Any = None) -> Any:
        path = key_path_for(key)
        if not path:
            return default
        node: Any = self
        for part in path:
            if not isinstance(node, AttributeMap) or part not in node._data:
                return default
            node = _resolve(node._data[part])
        return node

    def raw(self, key: KeyPathLike, default: Any = None) -> Any:
        """Like ``get`` but hands back Promises unresolved."""
        path = key_path_for(key)
        node: Any = self
        for i, part in enumerate(path):
            if not isinstance(node, AttributeMap) or part not in node._data:
                return default
            node = node._data[part]
            if i < len(path) - 1:
                node = _resolve(node)
        return node

    def set(self, key: KeyPathLike, value: Any) -> None:
        path = key_path_for(key)
        if not path:
            raise KeyError(f"empty key path: {key!r}")
        node = self
        for part in path[:-1]:
            child = node._data.get(part)
            if not isinstance(child, AttributeMap):
                child = AttributeMap()
                node._data[part] = child
            node = child
        node[path[-1]] = value

    def promises(self) -> Iterator[Promise]:
        for value in self._data.values():
            if isinstance(value, Promise):
                yield value
            elif isinstance(value, AttributeMap):
                yield from value.promises()

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict with every Promise resolved."""
        result: Dict[str, Any] = {}
        for key, value in self._data.items():
            value = _resolve(value)
            result[key] = value.to_dict() if isinstance(value, AttributeMap) else value
        return result

    def copy(self) -> "AttributeMap":
        clone = AttributeMap()
        for key, value in self._data.items():
            clone._data[key] = value.copy() if isinstance(value, AttributeMap) else value
        return clone
