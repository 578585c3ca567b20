from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

if TYPE_CHECKING:
    from .node import Node
    from .root import Root


class NodeList(list):
    """Ordered, identifier-unique collection of nodes with an identifier index."""

    def __init__(self, root: Optional["Root"] = None, nodes: Iterable["Node"] = ()):
        super().__init__()
        self.root = root
        self.index: Dict[str, "Node"] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: "Node") -> bool:
        if node.identifier in self.index:
            return False
        self.index[node.identifier] = node
        self.append(node)
        return True

    def get(self, identifier: str) -> Optional["Node"]:
        return self.index.get(identifier)

    def where(self, predicate: Callable[["Node"], bool]) -> "NodeList":
        return NodeList(self.root, (node for node in self if predicate(node)))

    def of_type(self, node_type: str) -> "NodeList":
        return self.where(lambda node: node._type == node_type)

    @property
    def identifiers(self) -> List[str]:
        return [node.identifier for node in self]

    @property
    def types(self) -> List[str]:
        return list(dict.fromkeys(node._type for node in self))
