import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from pyroost.common.messaging import bus
from rich.console import Console
from rich.syntax import Syntax

from ..config import DEFAULT_ROOT
from .helpers import dump, find_node, root_context

logger = logging.getLogger(__name__)

RootOption = Annotated[
    Path,
    typer.Option("--root", "-r", help="Content root directory.", file_okay=False, dir_okay=True, resolve_path=True),
]
UrlOption = Annotated[Optional[str], typer.Option("--url", help="Base URL for generated links.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Write JSON to stdout.")]


def register(app: typer.Typer):
    @app.command("list")
    def list_nodes(
        node_type: Annotated[Optional[str], typer.Option("--type", "-t", help="Only nodes of this type.")] = None,
        root_dir: RootOption = DEFAULT_ROOT,
        json_output: JsonOption = False,
    ):
        """List node identifiers under the content root."""
        with root_context(root_dir) as root:
            nodes = root.nodes.of_type(node_type) if node_type else root.nodes
            if not nodes:
                bus.info("query.info.noNodes", root=root.path)
                raise typer.Exit()
            if json_output:
                bus.data(dump(nodes.identifiers, as_json=True))
            else:
                bus.data("\n".join(nodes.identifiers))

    @app.command()
    def show(
        identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
        root_dir: RootOption = DEFAULT_ROOT,
        url: UrlOption = None,
        json_output: JsonOption = False,
    ):
        """Print every attribute of a node, rendered, plus its meta attributes."""
        with root_context(root_dir, url=url) as root:
            node = find_node(root, identifier)
            data = node.to_dict()
            if json_output:
                bus.data(dump(data, as_json=True))
            else:
                Console().print(Syntax(dump(data, as_json=False), "yaml", word_wrap=True))

    @app.command()
    def get(
        identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
        key: Annotated[str, typer.Argument(help="Attribute key path, e.g. 'bio' or 'links.home'.")],
        root_dir: RootOption = DEFAULT_ROOT,
        url: UrlOption = None,
        json_output: JsonOption = False,
    ):
        """Print a single attribute."""
        with root_context(root_dir, url=url) as root:
            node = find_node(root, identifier)
            if not node.has(key):
                bus.error("query.error.keyNotFound", identifier=identifier, key=key)
                raise typer.Exit(1)
            value = node.get(key)
            if hasattr(value, "to_dict"):
                value = value.to_dict()
            bus.data(dump(value, as_json=json_output))

    @app.command()
    def related(
        identifier: Annotated[str, typer.Argument(help="Node identifier, 'type/id'.")],
        names: Annotated[Optional[List[str]], typer.Argument(help="Relationship names to follow.")] = None,
        root_dir: RootOption = DEFAULT_ROOT,
        json_output: JsonOption = False,
    ):
        """List the nodes a node declares under 'related'."""
        with root_context(root_dir) as root:
            node = find_node(root, identifier)
            nodes = node.related(*(names or []))
            if not nodes:
                bus.info("query.info.noRelated", identifier=identifier)
                raise typer.Exit()
            bus.data(dump(nodes.identifiers, as_json=True) if json_output else "\n".join(nodes.identifiers))
