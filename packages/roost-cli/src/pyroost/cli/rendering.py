import typer


class TyperRenderer:
    """Status lines go to stderr in colour; ``data`` goes to stdout untouched."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def _status(self, message: str, colour: str) -> None:
        typer.secho(message, fg=colour, err=True)

    def success(self, message: str) -> None:
        if not self.quiet:
            self._status(message, typer.colors.GREEN)

    def info(self, message: str) -> None:
        if not self.quiet:
            self._status(message, typer.colors.BLUE)

    def warning(self, message: str) -> None:
        self._status(message, typer.colors.YELLOW)

    def error(self, message: str) -> None:
        self._status(message, typer.colors.RED)

    def data(self, data_string: str) -> None:
        typer.echo(data_string)
