import logging
from typing import Annotated

import typer
from pyroost.common.messaging import bus
from pyroost.interfaces.exceptions import RoostError

from ..config import DEFAULT_ROOT
from .helpers import find_node, root_context
from .query import RootOption

logger = logging.getLogger(__name__)

cache_app = typer.Typer(name="cache", help="Inspect node fingerprints (the cache keys).")


@cache_app.command("fingerprint")
def cache_fingerprint(
    identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
    root_dir: RootOption = DEFAULT_ROOT,
):
    """Print the cache key of a node's current contents."""
    with root_context(root_dir) as root:
        node = find_node(root, identifier)
        bus.data(node.fingerprint().key)


@cache_app.command("verify")
def cache_verify(
    ctx: typer.Context,
    root_dir: RootOption = DEFAULT_ROOT,
):
    """Load and render every node, printing each fingerprint and reporting failures."""
    with root_context(root_dir) as root:
        bus.info("cache.verify.info.starting", count=len(root.nodes))
        failed = 0
        for node in root.nodes:
            try:
                node.attributes.to_dict()
                bus.data(node.fingerprint().key)
            except RoostError as e:
                failed += 1
                logger.error(f"Rendering {node.identifier} failed", exc_info=True)
                bus.error("cache.verify.error.node", identifier=node.identifier, error=str(e))

        if failed:
            bus.warning("cache.verify.warning.partial", failed=failed, total=len(root.nodes))
            ctx.exit(1)
        bus.success("cache.verify.success", total=len(root.nodes))
