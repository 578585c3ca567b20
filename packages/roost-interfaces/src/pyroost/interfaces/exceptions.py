from typing import Any, Sequence, Tuple


class RoostError(Exception):
    pass


class NotFoundError(RoostError, LookupError):
    pass


class MalformedInputError(RoostError, ValueError):
    pass


class RenderError(RoostError):
    pass


class CycleError(RoostError):
    def __init__(self, owner: str, chain: Sequence[Tuple[str, ...]]):
        self.owner = owner
        self.chain = list(chain)
        links = " -> ".join("/".join(key) for key in self.chain)
        super().__init__(f"rendering {owner} cycles on {links}")


class StrategyExhaustedError(RoostError):
    def __init__(self, strategies: Sequence[str], last_error: Any = None):
        self.strategies = list(strategies)
        self.last_error = last_error
        message = f"could not expand asset urls via {', '.join(self.strategies)}"
        if last_error is not None:
            message += f" ({last_error})"
        super().__init__(message)
