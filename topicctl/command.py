"""Parsing and checking of interactive command lines."""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass, field


class CommandError(ValueError):
    """Raised when a command has the wrong arguments or flags."""


@dataclass
class ReplCommand:
    """Positional arguments and ``--key[=value]`` flags from one input line."""

    args: list[str] = field(default_factory=list)
    flags: dict[str, str] = field(default_factory=dict)

    def get_bool_value(self, key: str) -> bool:
        """Return whether a flag is set to true; a bare flag counts as true."""
        if key not in self.flags:
            return False
        value = self.flags[key]
        return value in ("true", "")

    def check_args(
        self,
        min_args: int,
        max_args: int,
        allowed_flags: Container[str] | None = None,
    ) -> None:
        """Raise CommandError if the argument count or any flag is not allowed."""
        if min_args == max_args:
            if len(self.args) != min_args:
                raise CommandError(f"Expected {min_args} args")
        elif not min_args <= len(self.args) <= max_args:
            raise CommandError(f"Expected between {min_args} and {max_args} args")

        for key in self.flags:
            if allowed_flags is None or key not in allowed_flags:
                raise CommandError(f"Flag {key} not recognized")


def parse_repl_inputs(text: str) -> ReplCommand:
    """Split an input line on spaces into arguments and flags.

    A component starting with ``--`` is a flag unless it is the very first one.
    """
    command = ReplCommand()

    for position, component in enumerate(text.split(" ")):
        if not component:
            continue
        if position > 0 and component.startswith("--"):
            key, _, value = component[2:].partition("=")
            command.flags[key] = value
        else:
            command.args.append(component)

    return command