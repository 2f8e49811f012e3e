"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, default_config_path, save_config
from ..db import init_database, validate_connection

console = Console()


def resolve_config_path(ctx: typer.Context) -> Path:
    """Path chosen by the global --config option, else the default."""
    dispatcher = ctx.obj
    if dispatcher is not None:
        return dispatcher.state.config.config_path
    return default_config_path()


def init_command(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Where to write the config file (default: --config, $GATOR_CONFIG or ~/.config/gator/config.yaml)",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("gator", "--db-name", help="Database name"),
    db_user: str = typer.Option("gator", "--db-user", help="Database user"),
    interval: str = typer.Option("1m", "--interval", help="Default time between poll cycles"),
    skip_db: bool = typer.Option(False, "--skip-db", help="Only write the config file"),
) -> None:
    """Write a config file and create the database schema."""
    console.print(Panel.fit("🐊 gator - Initialization", style="bold blue"))

    if config_path is None:
        config_path = resolve_config_path(ctx)

    try:
        config = ConfigModel(
            postgres={
                "host": db_host,
                "port": db_port,
                "database": db_name,
                "user": db_user,
                "password_env": "GATOR_DB_PASSWORD",
            },
            poller={"interval": interval},
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid settings: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if skip_db:
        return

    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = config.postgres.model_dump()

    if not validate_connection(db_config):
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via environment variable: [bold]export GATOR_DB_PASSWORD=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print("✅ Database connection successful")

    console.print("\n[bold]Initializing database schema...[/bold]")
    try:
        init_database(db_config)
        console.print("✅ Database schema initialized")
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ gator initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Register: [bold]gator register <name>[/bold]\n"
            f"2. Add a feed: [bold]gator addfeed <name> <url>[/bold]\n"
            f"3. Collect posts: [bold]gator agg 1m[/bold]",
            style="green",
        )
    )
