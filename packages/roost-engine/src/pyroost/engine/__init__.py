from .assets import Asset, AssetResolver
from .attributes import AttributeMap
from .cache import MemoryCache, NullCache
from .config import ConfigManager, RoostConfig
from .fingerprint import fingerprint
from .loader import AttributeLoader
from .node import Node
from .nodelist import NodeList
from .promise import CycleContext, Promise
from .rewriter import AssetUrlRewriter
from .root import Root
from .templates import TemplateRenderer

__all__ = [
    "Asset",
    "AssetResolver",
    "AssetUrlRewriter",
    "AttributeLoader",
    "AttributeMap",
    "ConfigManager",
    "CycleContext",
    "MemoryCache",
    "Node",
    "NodeList",
    "NullCache",
    "Promise",
    "Root",
    "RoostConfig",
    "TemplateRenderer",
    "fingerprint",
]
