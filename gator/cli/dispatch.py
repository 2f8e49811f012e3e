"""Command table and dispatcher."""

from dataclasses import dataclass
from typing import Any, Callable, Dict

from ..errors import NotFoundError
from ..models import User
from . import handlers
from .errors import CommandError
from .state import AppState


@dataclass(frozen=True)
class Command:
    """A named handler and how the dispatcher should call it."""

    name: str
    handler: Callable[..., Any]
    requires_user: bool = False
    needs_connection: bool = True


def build_command_table() -> Dict[str, Command]:
    """Build the table of commands available to the dispatcher."""
    commands = [
        Command("register", handlers.handle_register),
        Command("login", handlers.handle_login),
        Command("reset", handlers.handle_reset),
        Command("users", handlers.handle_users),
        Command("agg", handlers.handle_agg, needs_connection=False),
        Command("feeds", handlers.handle_feeds),
        Command("addfeed", handlers.handle_addfeed, requires_user=True),
        Command("follow", handlers.handle_follow, requires_user=True),
        Command("following", handlers.handle_following, requires_user=True),
        Command("unfollow", handlers.handle_unfollow, requires_user=True),
        Command("browse", handlers.handle_browse, requires_user=True),
    ]
    return {command.name: command for command in commands}


def require_user(state: AppState, conn) -> User:
    """Resolve the logged in user or fail."""
    name = state.config.current_user_name
    if not name:
        raise CommandError("No user logged in. Run 'gator register <name>' or 'gator login <name>'.")
    try:
        return state.users.get_user(conn, name)
    except NotFoundError as e:
        raise CommandError(f"Error looking up currently logged in user {name}: {e}") from e


class Dispatcher:
    """Run commands from a table against one AppState."""

    def __init__(self, table: Dict[str, Command], state: AppState) -> None:
        self.table = table
        self.state = state

    def dispatch(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Run a command.

        Opens a connection, and for commands that require one resolves the
        logged in user before the handler runs and passes it in. Commands
        that manage their own connections get only the state.
        """
        command = self.table.get(name)
        if command is None:
            raise CommandError(f"No such command: {name}")

        if not command.needs_connection:
            return command.handler(self.state, *args, **kwargs)

        with self.state.connect() as conn:
            if command.requires_user:
                user = require_user(self.state, conn)
                return command.handler(self.state, conn, user, *args, **kwargs)
            return command.handler(self.state, conn, *args, **kwargs)
