import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

from pyroost.interfaces.exceptions import CycleError

logger = logging.getLogger(__name__)

KeyPath = Tuple[str, ...]

_UNRESOLVED = object()


class Promise:
    """
    A deferred attribute value. ``resolve()`` runs the computation once and
    memoizes the result; re-entering a key already being resolved in the
    same context raises CycleError.
    """

    __slots__ = ("context", "key", "source", "_compute", "_value")

    def __init__(
        self,
        context: "CycleContext",
        key: Sequence[str],
        compute: Callable[[], Any],
        source: Optional[str] = None,
    ):
        self.context = context
        self.key: KeyPath = tuple(key)
        # node-relative path of the file the value is rendered from
        self.source = source
        self._compute = compute
        self._value: Any = _UNRESOLVED

    @property
    def resolved(self) -> bool:
        return self._value is not _UNRESOLVED

    def resolve(self) -> str:
        if self._value is not _UNRESOLVED:
            return self._value

        stack = self.context.stack
        if self.key in stack:
            raise CycleError(self.context.owner, stack + [self.key])

        stack.append(self.key)
        try:
            value = self._compute()
        finally:
            stack.pop()

        self._value = "" if value is None else str(value)
        return self._value

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else "pending"
        return f"<Promise {'/'.join(self.key)} ({state})>"


class CycleContext:
    """Tracks the key paths being resolved during one load pass of one node."""

    def __init__(self, owner: str):
        self.owner = owner
        self.stack: List[KeyPath] = []
        self.promises: List[Promise] = []

    def promise(self, key: Sequence[str], compute: Callable[[], Any], source: Optional[str] = None) -> Promise:
        promise = Promise(self, key, compute, source)
        self.promises.append(promise)
        return promise

    @property
    def keys(self) -> List[KeyPath]:
        return [promise.key for promise in self.promises]

    def resolve_all(self) -> None:
        for promise in self.promises:
            promise.resolve()
        logger.debug(f"Resolved {len(self.promises)} promises for {self.owner}")
