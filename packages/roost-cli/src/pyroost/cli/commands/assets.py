import logging
from typing import Annotated, List, Optional

import typer
from pyroost.common.messaging import bus
from pyroost.interfaces.exceptions import NotFoundError

from ..config import DEFAULT_ROOT
from .helpers import dump, find_node, root_context
from .query import JsonOption, RootOption, UrlOption

logger = logging.getLogger(__name__)


def register(app: typer.Typer):
    @app.command()
    def asset(
        identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
        name: Annotated[List[str], typer.Argument(help="Asset name; '-' and '_' are interchangeable.")],
        root_dir: RootOption = DEFAULT_ROOT,
        url: UrlOption = None,
        show_path: Annotated[bool, typer.Option("--path", help="Print the file path instead of the URL.")] = False,
    ):
        """Resolve an asset by fuzzy name and print its URL."""
        with root_context(root_dir, url=url) as root:
            node = find_node(root, identifier)
            try:
                found = node.asset_for(*name)
            except NotFoundError as e:
                logger.debug(str(e))
                bus.error("assets.error.notFound", identifier=identifier, name="/".join(name))
                raise typer.Exit(1)
            bus.data(str(found.path) if show_path else found.url)

    @app.command("assets")
    def list_assets(
        identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
        root_dir: RootOption = DEFAULT_ROOT,
        url: UrlOption = None,
        json_output: JsonOption = False,
    ):
        """List a node's asset URLs."""
        with root_context(root_dir, url=url) as root:
            node = find_node(root, identifier)
            urls = node.asset_urls
            if not urls:
                bus.info("assets.info.none", identifier=identifier)
                raise typer.Exit()
            bus.data(dump(urls, as_json=json_output))

    @app.command("url")
    def node_url(
        identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
        relative: Annotated[Optional[str], typer.Argument(help="Path below the node directory.")] = None,
        root_dir: RootOption = DEFAULT_ROOT,
        url: UrlOption = None,
    ):
        """Print the public URL of a node, or of a file inside it."""
        with root_context(root_dir, url=url) as root:
            node = find_node(root, identifier)
            bus.data(node.url_for(relative) if relative else node.url())
