# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Command dispatch: name → command → parse → user data → handle → flush.

A host program either passes its pieces to :class:`Dispatcher` directly::

    Dispatcher("greeter", {"greet": GreetCommand},
               user_data_path=default_user_data_path("greeter")).main()

or subclasses it and overrides the hooks (``register_commands``,
``user_data_path``, ``initialize_user_data``).

Only :meth:`Dispatcher.main` exits the process; :meth:`Dispatcher.run`
returns the exit status so the dispatcher can be embedded and tested.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TextIO

from .command import Command, CommandAbort, OptionParseError, UsageRequested
from .lib._util.ansi import supports_color, violet
from .lib._util.fs import ensure_dir
from .lib.core import config as _config
from .lib.store.properties import PropertyStore
from .lib.store.user_data import UserData
from .lib.util.logging_utils import _log_debug
from .registry import CommandFactory, CommandRegistry, normalize_name

HELP_COMMAND = "help"
LISTING_NAME_WIDTH = 20


class UserDataUnavailable(RuntimeError):
    """No backing file is configured and the policy forbids running without one."""


class Dispatcher:
    """Resolves, runs and persists one sub-command invocation."""

    #: Program name used in usage text; defaults to the basename of ``sys.argv[0]``.
    program_name: str | None = None

    def __init__(
        self,
        name: str | None = None,
        commands: Mapping[str, CommandFactory] | None = None,
        *,
        user_data_path: Path | str | None = None,
        user_data_factory: Callable[[PropertyStore], UserData] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
        missing_user_data: str | None = None,
        noisy: bool | None = None,
        verbose: bool | None = None,
    ) -> None:
        if name is not None:
            self.program_name = name
        if missing_user_data is not None and missing_user_data not in (
            _config.MISSING_USER_DATA_POLICIES
        ):
            raise ValueError(
                f"missing_user_data must be one of {_config.MISSING_USER_DATA_POLICIES}, "
                f"got {missing_user_data!r}"
            )
        self._commands = dict(commands or {})
        self._user_data_path = Path(user_data_path) if user_data_path is not None else None
        self._user_data_factory = user_data_factory
        self._out = out
        self._err = err
        self._missing_user_data = missing_user_data
        self._noisy = noisy
        self._verbose = verbose
        self._registry: CommandRegistry | None = None

    # ---------- Host hooks ----------

    def register_commands(self, registry: CommandRegistry) -> None:
        """Populate *registry*.  Called once, on first use."""
        for name, factory in self._commands.items():
            registry.register(name, factory)

    def user_data_path(self) -> Path | None:
        """Backing file for user data, or ``None`` to run without one."""
        return self._user_data_path

    def initialize_user_data(self, properties: PropertyStore) -> UserData:
        """Wrap freshly loaded *properties* into the live :class:`UserData`."""
        if self._user_data_factory is not None:
            return self._user_data_factory(properties)
        return UserData(properties)

    # ---------- Settings ----------

    @property
    def program(self) -> str:
        if self.program_name:
            return self.program_name
        return Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "subctl"

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    @property
    def registry(self) -> CommandRegistry:
        if self._registry is None:
            registry = CommandRegistry()
            self.register_commands(registry)
            self._registry = registry
        return self._registry

    def _is_noisy(self) -> bool:
        return self._noisy if self._noisy is not None else _config.get_noisy()

    def _is_verbose(self) -> bool:
        return self._verbose if self._verbose is not None else _config.get_verbose()

    def _missing_user_data_policy(self) -> str:
        if self._missing_user_data is not None:
            return self._missing_user_data
        return _config.get_missing_user_data_policy()

    def noisy(self, message: str) -> None:
        """Print an informational *message* to the output sink unless noisy mode is off."""
        if self._is_noisy():
            print(message, file=self.out)

    # ---------- Help ----------

    def print_listing(self) -> None:
        """Print every registered command with its description, sorted by name."""
        color_enabled = supports_color(self.err)
        lines = ["Available commands:"]
        for name in self.registry.names():
            command = self.registry.create(name)
            description = command.description if command is not None else ""
            lines.append(f"{violet(f'{name:<{LISTING_NAME_WIDTH}}', color_enabled)}{description}")
        print("\n".join(lines), file=self.err)

    def _create(self, name: str) -> Command | None:
        command = self.registry.create(name)
        if command is None:
            return None
        command.bind(
            name=normalize_name(name),
            program=self.program,
            out=self._out,
            err=self._err,
            verbose=self._is_verbose(),
        )
        return command

    def help(self, name: str) -> int:
        """Print the usage of command *name* without running it."""
        command = self._create(name)
        if command is None:
            print(f"Unknown command: {name}", file=self.err)
            self.print_listing()
            return 1
        command.print_usage(self.err)
        return 0

    # ---------- User data ----------

    def open_user_data(self, path: Path | None) -> UserData:
        """Load the live user data from *path*, or an in-memory store when *path* is None."""
        if path is None:
            if self._missing_user_data_policy() == "error":
                raise UserDataUnavailable(f"{self.program}: no user data file is configured")
            _log_debug(f"{self.program}: running with ephemeral user data")
            properties = PropertyStore()
        else:
            if not path.exists():
                self.noisy(f"Creating {path}")
                ensure_dir(path.parent)
                path.touch()
            properties = PropertyStore.load(path)
            _log_debug(f"{self.program}: loaded {len(properties)} properties from {path}")
        user_data = self.initialize_user_data(properties)
        if not isinstance(user_data, UserData):
            raise TypeError(
                f"initialize_user_data() returned {type(user_data).__name__}, not UserData"
            )
        return user_data

    # ---------- Dispatch ----------

    def run(self, argv: Sequence[str]) -> int:
        """Dispatch *argv* (without the program name) and return the exit status."""
        argv = list(argv)
        if not argv:
            self.print_listing()
            return 0

        cmd_name = argv[0]
        if normalize_name(cmd_name) == HELP_COMMAND:
            if len(argv) > 1:
                return self.help(argv[1])
            if HELP_COMMAND not in self.registry:
                self.print_listing()
                return 0

        command = self._create(cmd_name)
        if command is None:
            _log_debug(f"{self.program}: unknown command {cmd_name!r}")
            print(f"Unknown command: {cmd_name}", file=self.err)
            self.print_listing()
            return 1

        try:
            args = command.parse(argv[1:])
        except OptionParseError as e:
            print(str(e), file=self.err)
            command.print_usage(self.err)
            return 1

        path = self.user_data_path()
        path = Path(path) if path is not None else None
        try:
            user_data = self.open_user_data(path)
        except _config.InvalidConfigError as e:
            print(str(e), file=self.err)
            return 1
        command.bind_user_data(user_data)

        _log_debug(f"{self.program}: running {command.name}")
        try:
            command.handle(args)
        except UsageRequested as e:
            if e.message:
                print(e.message, file=self.err)
            command.print_usage(self.err)
            return e.status
        except CommandAbort as e:
            if e.message:
                print(e.message, file=self.err)
            return e.status

        if path is not None and user_data.is_dirty:
            self.noisy(f"Saving to {path}")
            user_data.properties.flush(path)
            _log_debug(f"{self.program}: saved {len(user_data.properties)} properties to {path}")
        return 0

    def main(self, argv: Sequence[str] | None = None) -> None:
        """Run as a process entry point: dispatch and exit with the resulting status."""
        raise SystemExit(self.run(sys.argv[1:] if argv is None else argv))
