import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from pyroost.common import urls
from pyroost.common.casts import list_of_strings
from pyroost.common.paths import realpath, relative_path, slug_for
from pyroost.interfaces.exceptions import NotFoundError
from pyroost.interfaces.models import LOADING, Fingerprint, LoadState

from .assets import ASSETS_DIR, Asset, AssetResolver
from .attributes import AttributeMap, KeyPathLike
from .cache import safe_read, safe_write
from .fingerprint import fingerprint, iter_files
from .loader import AttributeLoader
from .nodelist import NodeList

if TYPE_CHECKING:
    from .config import RoostConfig
    from .root import Root

logger = logging.getLogger(__name__)

_MISSING = object()


class Node:
    """
    One ``<root>/<type>/<id>`` directory.

    Construction does no I/O. The first attribute access runs the load state
    machine (unloaded -> loading -> loaded); a load that raises puts the node
    back to unloaded so the next access starts over.
    """

    def __init__(self, path: Path, root: "Root"):
        self.path = realpath(path)
        self.root = root
        self._id = self.path.name
        self._type = self.path.parent.name
        self._slug = slug_for(self._id)
        self._state = LoadState.UNLOADED
        self._attributes = AttributeMap()
        self.loaded_from: Optional[str] = None

    # --- identity ---

    @property
    def config(self) -> "RoostConfig":
        return self.root.config

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> str:
        return self.get("type") or self._type

    @property
    def slug(self) -> str:
        return self.get("slug") or self._slug

    @property
    def identifier(self) -> str:
        return f"{self._type}/{self._id}"

    @property
    def relative_path(self) -> str:
        return "/" + relative_path(self.path, to=self.config.root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.attributes == other.attributes

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        return f"<Node {self.identifier}>"

    def __str__(self) -> str:
        return self.identifier

    # --- load state machine ---

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is LoadState.LOADED

    def load(self, then: Optional[Callable[[], Any]] = None) -> Any:
        """
        Make sure attributes are loaded, then return ``then()`` if given.

        While a load of this node is already in progress (a template reading
        its own node), nothing is loaded: ``then()`` runs against the partial
        store, or LOADING is returned.
        """
        if self._state is LoadState.LOADING:
            return then() if then else LOADING

        if self._state is LoadState.UNLOADED:
            self._state = LoadState.LOADING
            try:
                self.loaded_from = self._load_from_cache_or_disk()
            except BaseException:
                self._state = LoadState.UNLOADED
                self._attributes = AttributeMap()
                self.loaded_from = None
                raise
            self._state = LoadState.LOADED

        return then() if then else self.loaded_from

    def reload(self, then: Optional[Callable[[], Any]] = None) -> Any:
        self._state = LoadState.UNLOADED
        self.loaded_from = None
        return self.load(then)

    def fingerprint(self) -> Fingerprint:
        return fingerprint(self.path)

    def _load_from_cache_or_disk(self) -> str:
        key = self.fingerprint().key
        if self._load_from_cache(key):
            return "cache"
        self._load_from_disk(key)
        return "disk"

    def _load_from_cache(self, key: str) -> bool:
        if not self.config.read_from_cache:
            return False

        cached = safe_read(self.config.cache, key)
        if cached is None:
            return False

        self.config.logger.info(f"loading {self.identifier} from cache")
        if isinstance(cached, AttributeMap):
            self._attributes = AttributeLoader(self).restore(cached)
        else:
            self._attributes = AttributeMap(cached)
        return True

    def _load_from_disk(self, key: str) -> None:
        self.config.logger.info(f"loading {self.identifier} from disk")
        self._attributes = AttributeMap()
        AttributeLoader(self).load(self._attributes)
        safe_write(self.config.cache, key, self._attributes)

    # --- attribute access ---

    @property
    def attributes(self) -> AttributeMap:
        return self.load(lambda: self._attributes)

    def get(self, key: KeyPathLike, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def has(self, key: KeyPathLike) -> bool:
        return self.attributes.has(key)

    def field(self, name: str, default: Any = _MISSING) -> Any:
        """
        Top-level attribute by name. A key already in the store is returned
        without forcing a load; only a missing key triggers one.
        """
        key = str(name)
        if key in self._attributes:
            return self._attributes[key]

        def lookup() -> Any:
            if key in self._attributes:
                return self._attributes[key]
            if default is not _MISSING:
                return default
            raise KeyError(f"{self.identifier} has no attribute '{key}'")

        return self.load(lookup)

    def __getitem__(self, name: str) -> Any:
        return self.field(name)

    # --- relationships ---

    def related(self, *names: Any, where: Optional[Callable[["Node"], bool]] = None) -> NodeList:
        return self.load(lambda: self._related(list_of_strings(*names), where))

    def _related(self, which: List[str], where: Optional[Callable[["Node"], bool]]) -> NodeList:
        relationships = self._attributes.get("related") or {}
        nodes = NodeList(self.root)
        if not isinstance(relationships, Mapping):
            logger.warning(f"{self.identifier}: ignoring non-mapping 'related' attribute")
            return nodes
        index = self.root.nodes.index

        for relationship, value in relationships.items():
            if which and relationship not in which:
                continue

            if isinstance(value, Mapping):
                if not value:
                    continue
                node_type, names = next(iter(value.items()))
            else:
                node_type, names = relationship, value

            for name in list_of_strings(names):
                identifier = f"{node_type}/{name}"
                node = index.get(identifier)
                if node is None:
                    logger.warning(f"{self.identifier}: related '{relationship}' names unknown node {identifier}")
                    continue
                node.load(lambda node=node: nodes.add(node))

        return nodes if where is None else nodes.where(where)

    # --- urls & assets ---

    def url(self, **options: Any) -> str:
        options.setdefault("base", self.config.url)
        return urls.url_for(self.relative_path, **options)

    def url_for(self, relative: Any, **options: Any) -> str:
        relative = str(relative)
        target = (self.path / relative).resolve()
        if not target.exists():
            raise NotFoundError(f"{relative!r} does not exist under {self.identifier}")
        options.setdefault("base", self.config.url)
        return urls.url_for(self.relative_path, relative, **options)

    @property
    def asset_dir(self) -> Path:
        return self.path / ASSETS_DIR

    @property
    def asset_path(self) -> str:
        return f"{self.relative_path}/{ASSETS_DIR}"

    @property
    def asset_paths(self) -> List[Path]:
        if not self.asset_dir.is_dir():
            return []
        return sorted(iter_files(self.asset_dir), key=str)

    @property
    def assets(self) -> List[Asset]:
        return [Asset(self, path) for path in self.asset_paths]

    @property
    def asset_urls(self) -> Dict[str, str]:
        """Asset URLs keyed by path below the assets directory."""
        return {asset.relative_path: asset.url for asset in self.assets}

    def asset_for(self, *names: Any) -> Asset:
        return AssetResolver(self).resolve(*names)

    def maybe_asset_for(self, *names: Any) -> Optional[Asset]:
        return AssetResolver(self).maybe_resolve(*names)

    # --- serialization ---

    @property
    def meta_attributes(self) -> Dict[str, Any]:
        return {
            "_identifier": self.identifier,
            "_type": self._type,
            "_id": self._id,
            "_url": self.url(),
            "_asset_urls": self.asset_urls,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.attributes.to_dict()
        data.update(self.meta_attributes)
        return data
