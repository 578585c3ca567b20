import logging
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from markdown_it import MarkdownIt

from pyroost.interfaces.exceptions import RenderError

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = {".md", ".markdown"}


class TemplateRenderer:
    """
    Renders one attribute file with a node as context.

    Every file goes through jinja2 first (``node`` and ``attributes`` are in
    scope); Markdown files are then converted to HTML.
    """

    def __init__(self, search_path: Optional[Path] = None, markdown: Optional[MarkdownIt] = None):
        self.search_path = search_path
        self.markdown = markdown or MarkdownIt("commonmark")

    def _environment(self, template_dir: Path) -> Environment:
        search = [str(template_dir)]
        if self.search_path is not None:
            search.append(str(self.search_path))
        return Environment(
            loader=FileSystemLoader(search),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def context_for(self, node: Any) -> Dict[str, Any]:
        return {"node": node, "attributes": node.attributes}

    def render(self, path: Path, node: Any) -> str:
        path = Path(path)
        try:
            source = path.read_text("utf-8")
        except UnicodeDecodeError as e:
            raise RenderError(f"{path} is not a text file: {e}") from e
        except OSError as e:
            raise RenderError(f"could not read {path}: {e}") from e

        try:
            template = self._environment(path.parent).from_string(source)
            text = template.render(**self.context_for(node))
        except TemplateError as e:
            raise RenderError(f"rendering {path} failed: {e}") from e

        if path.suffix.lower() in MARKDOWN_SUFFIXES:
            text = self.markdown.render(text)

        logger.debug(f"Rendered {path} ({len(text)} chars)")
        return text
