"""Key commands bound to a filter session."""

from dataclasses import dataclass, field
from typing import Any, Callable, Tuple, Union


@dataclass(frozen=True)
class DirectCommand:
    """A command invoked with the target only."""

    fn: Callable[..., Any]


@dataclass(frozen=True)
class BoundCommand:
    """A command invoked with the target followed by pre-bound arguments."""

    fn: Callable[..., Any]
    args: Tuple[Any, ...] = field(default_factory=tuple)


Command = Union[DirectCommand, BoundCommand]


def as_command(value: Union[Command, Callable[..., Any]]) -> Command:
    """Wrap a plain callable as a DirectCommand."""
    if isinstance(value, (DirectCommand, BoundCommand)):
        return value
    if callable(value):
        return DirectCommand(value)
    raise TypeError(f"Not a command: {value!r}")


def invoke(command: Command, target: Any) -> Any:
    """
    Run a command against a target.

    Args:
        command: The command to run
        target: Object passed as the first argument

    Returns:
        Whatever the command returns
    """
    if isinstance(command, BoundCommand):
        return command.fn(target, *command.args)
    if isinstance(command, DirectCommand):
        return command.fn(target)
    raise TypeError(f"Not a command: {command!r}")
