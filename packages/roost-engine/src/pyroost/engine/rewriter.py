import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from xml.etree import ElementTree as ET

from pyroost.interfaces.exceptions import StrategyExhaustedError
from pyroost.interfaces.result import RewriteResult

logger = logging.getLogger(__name__)

ASSET_VALUE_RE = re.compile(r"\A(?:\./)?(assets/\S+)\s*\Z")
ASSET_ATTRIBUTE_RE = re.compile(r"""(\s*=\s*)(['"])(?:\./)?(assets/[^'"\s]+)\2""")

WRAPPER_TAG = "__roost__"

Strategy = Callable[[str, Any], RewriteResult]


def expand_asset_value(value: Any, node: Any) -> Any:
    if not isinstance(value, str):
        return value
    match = ASSET_VALUE_RE.match(value.strip())
    if not match:
        return value
    return node.url_for(match.group(1).strip())


def expand_asset_values(mapping: Mapping[str, Any], node: Any) -> Dict[str, Any]:
    """Rewrite every asset-looking string of a (nested) mapping into a node URL."""
    expanded: Dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            expanded[key] = expand_asset_values(value, node)
        elif isinstance(value, list):
            expanded[key] = [expand_asset_value(item, node) for item in value]
        else:
            expanded[key] = expand_asset_value(value, node)
    return expanded


def structured_expand(html: str, node: Any) -> RewriteResult:
    try:
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
        root = ET.fromstring(f"<{WRAPPER_TAG}>{html}</{WRAPPER_TAG}>", parser=parser)

        for element in root.iter():
            if not element.attrib:
                continue
            expanded = expand_asset_values(dict(element.attrib), node)
            for key, value in expanded.items():
                element.set(key, value)

        # html serialization keeps end tags on empty non-void elements (<script></script>)
        xml = ET.tostring(root, encoding="unicode", method="html")
    except Exception as e:
        return RewriteResult.failed("structured", e)

    xml = re.sub(rf"\A\s*<{WRAPPER_TAG}\s*/?>\s*", "", xml)
    xml = re.sub(rf"\s*</{WRAPPER_TAG}>\s*\Z", "", xml)
    return RewriteResult.ok("structured", xml.strip())


def lenient_expand(html: str, node: Any) -> RewriteResult:
    def replace(match: "re.Match") -> str:
        _, quote, path = match.groups()
        return f"={quote}{node.url_for(path)}{quote}"

    try:
        return RewriteResult.ok("lenient", ASSET_ATTRIBUTE_RE.sub(replace, str(html)))
    except Exception as e:
        return RewriteResult.failed("lenient", e)


DEFAULT_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("structured", structured_expand),
    ("lenient", lenient_expand),
)


class AssetUrlRewriter:
    """Turns ``assets/...`` references in rendered markup into absolute URLs."""

    def __init__(self, strategies: Optional[Sequence[Tuple[str, Strategy]]] = None):
        self.strategies: List[Tuple[str, Strategy]] = list(strategies or DEFAULT_STRATEGIES)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.strategies]

    def expand(self, html: Any, node: Any) -> str:
        html = "" if html is None else str(html)
        if "assets/" not in html:
            return html

        last_error: Optional[Exception] = None
        for name, strategy in self.strategies:
            result = strategy(html, node)
            if result.success:
                return result.value
            last_error = result.error
            logger.info(f"Asset url strategy '{name}' failed for {getattr(node, 'identifier', node)}: {result.error}")

        raise StrategyExhaustedError(self.names, last_error)
