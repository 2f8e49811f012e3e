"""CLI errors."""


class CommandError(Exception):
    """A command could not run; the message is shown to the user."""
