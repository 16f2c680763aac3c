"""Console diagnostics for bundle-autoupdate."""

from typing import Protocol

from rich.console import Console


class Logger(Protocol):
    """Logging capability injected into the Gemfile model, dependencies and runners."""

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def command(self, cmd: str) -> None: ...


class ConsoleLogger:
    """Logger that prints to stdout through a rich Console."""

    ERROR_PREFIX = "  BAUError "
    COMMAND_PREFIX = "    > "

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _print(self, msg: str, prefix: str = "", style: str | None = None) -> None:
        # Gemfile lines contain brackets that rich would read as markup
        self.console.print(
            prefix + msg.rstrip("\r\n"), style=style, markup=False, highlight=False, soft_wrap=True
        )

    def info(self, msg: str) -> None:
        self._print(msg)

    def warn(self, msg: str) -> None:
        self._print(msg, self.ERROR_PREFIX, style="yellow")

    def error(self, msg: str) -> None:
        self._print(msg, self.ERROR_PREFIX, style="red")

    def command(self, cmd: str) -> None:
        self._print(cmd, self.COMMAND_PREFIX, style="cyan")
