# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Name → command factory mapping, filled once at startup."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from .command import Command

CommandFactory = Callable[[], Command]


def normalize_name(name: str) -> str:
    return name.strip().lower()


class CommandRegistry:
    """Case-insensitive registry of command factories, iterated in name order.

    A factory is any zero-argument callable returning a new :class:`Command`;
    usually the command class itself.
    """

    def __init__(self) -> None:
        self._factories: dict[str, CommandFactory] = {}

    def register(self, name: str, factory: CommandFactory) -> None:
        key = normalize_name(name)
        if not key:
            raise ValueError("command name must be a non-empty string")
        if not callable(factory):
            raise TypeError(f"factory for command {key!r} is not callable: {factory!r}")
        if key in self._factories:
            raise ValueError(f"command {key!r} is already registered")
        self._factories[key] = factory

    def get(self, name: str) -> CommandFactory | None:
        return self._factories.get(normalize_name(name))

    def create(self, name: str) -> Command | None:
        """Instantiate the command registered as *name*, or ``None`` if unknown."""
        factory = self.get(name)
        if factory is None:
            return None
        command = factory()
        if not isinstance(command, Command):
            raise TypeError(
                f"factory for command {normalize_name(name)!r} returned "
                f"{type(command).__name__}, not a Command"
            )
        return command

    def names(self) -> list[str]:
        return sorted(self._factories)

    def items(self) -> Iterator[tuple[str, CommandFactory]]:
        for name in self.names():
            yield name, self._factories[name]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._factories

    def __len__(self) -> int:
        return len(self._factories)
