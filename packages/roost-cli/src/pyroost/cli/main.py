import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pyroost.common.messaging import bus

from .commands import assets, cache, query
from .logger_config import setup_logging
from .rendering import TyperRenderer

# The CLI renderer is injected into the shared message bus once, here.
bus.set_renderer(TyperRenderer())

logger = logging.getLogger(__name__)


app = typer.Typer(
    add_completion=False,
    name="roost",
    help="Roost: browse a directory tree as lazily rendered, content-addressed nodes.",
)


@app.callback()
def main(
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only print data, warnings and errors.")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Override ROOST_LOG_LEVEL.")] = None,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write logs to this file instead of stderr.")] = None,
):
    bus.set_renderer(TyperRenderer(quiet=quiet))
    if log_level or log_file:
        try:
            setup_logging(level=log_level, log_file=log_file)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--log-level")


app.add_typer(cache.cache_app)

query.register(app)
assets.register(app)


if __name__ == "__main__":
    app()
