"""CLI application for bundle-autoupdate."""

import typer
from rich.console import Console

from autoupdate.config import Settings
from autoupdate.log import ConsoleLogger
from autoupdate.updater import AutoUpdater

console = Console()

app = typer.Typer(
    name="bundle-autoupdate",
    help="bundle-autoupdate - Upgrade and re-pin the gems in a Gemfile",
    add_completion=False,
)


@app.command()
def update(
    no_update: bool = typer.Option(
        False,
        "-noupdate",
        help="Skip 'bundle update' and pin the Gemfile to the current Gemfile.lock",
    ),
) -> None:
    """Relax Gemfile constraints, run bundle update, then pin to the resolved versions."""

    try:
        settings = Settings()
        updater = AutoUpdater(settings=settings, logger=ConsoleLogger(console))

        if not updater.run(update=not no_update):
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
