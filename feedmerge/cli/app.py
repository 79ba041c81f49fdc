"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .build import build_command
from .init import init_command
from .show import show_command
from .sources import sources_app

app = typer.Typer(
    name="feedmerge",
    help="feedmerge - merge article, podcast and video feeds into one ranked collection",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("build")(build_command)
app.command("show")(show_command)
app.add_typer(sources_app, name="sources", help="Manage feed sources")


if __name__ == "__main__":
    app()
