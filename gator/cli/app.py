"""Main CLI application."""

from pathlib import Path
from typing import Callable, Dict, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..db import close_connection_pool
from ..errors import GatorError
from ..log import setup_logging
from .dispatch import Command, Dispatcher, build_command_table
from .errors import CommandError
from .init import init_command
from .state import AppState

# Load .env file if it exists
load_dotenv()

console = Console()


def _dispatch(ctx: typer.Context, name: str, *args, **kwargs) -> None:
    dispatcher: Dispatcher = ctx.obj
    try:
        dispatcher.dispatch(name, *args, **kwargs)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(1)
    except FileNotFoundError as e:
        console.print(f"[red]❌ {escape(str(e))}. Run 'gator init' first.[/red]")
        raise typer.Exit(1)
    except (CommandError, GatorError, ValueError) as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)


def register(ctx: typer.Context, name: str = typer.Argument(..., help="User name")) -> None:
    """Create a user and log in as them."""
    _dispatch(ctx, "register", name)


def login(ctx: typer.Context, name: str = typer.Argument(..., help="User name")) -> None:
    """Log in as an existing user."""
    _dispatch(ctx, "login", name)


def reset(ctx: typer.Context) -> None:
    """Delete all users, feeds, follows and posts."""
    _dispatch(ctx, "reset")


def users(ctx: typer.Context) -> None:
    """List registered users."""
    _dispatch(ctx, "users")


def agg(
    ctx: typer.Context,
    interval: Optional[str] = typer.Argument(
        None,
        help="Time between requests, e.g. 30s, 1m, 1h30m. Default: poller.interval from config",
    ),
    cycles: Optional[int] = typer.Option(
        None,
        "--cycles",
        "-n",
        min=1,
        help="Stop after this many poll cycles (default: run until interrupted)",
    ),
) -> None:
    """Poll feeds forever, storing new posts."""
    _dispatch(ctx, "agg", interval, cycles)


def addfeed(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Feed name"),
    url: str = typer.Argument(..., help="Feed URL"),
) -> None:
    """Add a feed and follow it."""
    _dispatch(ctx, "addfeed", name, url)


def feeds(ctx: typer.Context) -> None:
    """List all feeds."""
    _dispatch(ctx, "feeds")


def follow(ctx: typer.Context, url: str = typer.Argument(..., help="Feed URL")) -> None:
    """Follow an existing feed."""
    _dispatch(ctx, "follow", url)


def following(ctx: typer.Context) -> None:
    """List followed feeds."""
    _dispatch(ctx, "following")


def unfollow(ctx: typer.Context, url: str = typer.Argument(..., help="Feed URL")) -> None:
    """Stop following a feed."""
    _dispatch(ctx, "unfollow", url)


def browse(
    ctx: typer.Context,
    limit: int = typer.Argument(2, help="Number of posts to show"),
) -> None:
    """Show the newest posts from followed feeds."""
    _dispatch(ctx, "browse", limit)


_CLI_COMMANDS: Dict[str, Callable[..., None]] = {
    "register": register,
    "login": login,
    "reset": reset,
    "users": users,
    "agg": agg,
    "addfeed": addfeed,
    "feeds": feeds,
    "follow": follow,
    "following": following,
    "unfollow": unfollow,
    "browse": browse,
}


def create_app(
    table: Optional[Dict[str, Command]] = None,
    state_factory: Callable[[Optional[Path]], AppState] = AppState.from_path,
) -> typer.Typer:
    """Build the typer application for the commands in ``table``."""
    if table is None:
        table = build_command_table()

    app = typer.Typer(
        name="gator",
        help="gator - RSS feed aggregator",
        no_args_is_help=True,
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config: Optional[Path] = typer.Option(
            None,
            "--config",
            help="Config file (default: $GATOR_CONFIG or ~/.config/gator/config.yaml)",
        ),
        log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING..."),
    ) -> None:
        state = state_factory(config)
        if log_level is None:
            try:
                log_level = state.config.config.logging.level
            except (FileNotFoundError, ValueError):
                log_level = "INFO"
        setup_logging(log_level)
        ctx.obj = Dispatcher(table, state)

    app.command("init")(init_command)
    for name in table:
        if name in _CLI_COMMANDS:
            app.command(name)(_CLI_COMMANDS[name])

    return app


def main() -> None:
    try:
        create_app()()
    finally:
        close_connection_pool()


if __name__ == "__main__":
    main()
