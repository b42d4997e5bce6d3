# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Base class for sub-commands.

A command is single-shot: the dispatcher creates it, binds its name, output
sinks and user data, calls :meth:`Command.handle` once and drops it.

Commands never exit the process.  :meth:`Command.die` and
:meth:`Command.usage` raise :class:`CommandAbort` subclasses which the
dispatcher turns into a message and an exit status.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, TextIO

from .lib.store.user_data import UserData

USAGE_WIDTH = 78


class CommandAbort(Exception):
    """A command stopped on purpose with a message for the user."""

    def __init__(self, message: str | None = None, status: int = 1) -> None:
        super().__init__(message or "")
        self.message = message
        self.status = status


class CommandFailed(CommandAbort):
    """Raised by :meth:`Command.die`."""


class UsageRequested(CommandAbort):
    """Raised by :meth:`Command.usage`; the dispatcher also prints the command's usage."""


class CommandNotBound(RuntimeError):
    """A command attribute was used before the dispatcher bound it."""


class OptionParseError(Exception):
    """The arguments did not match the command's option schema."""


class CommandArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises :class:`OptionParseError` instead of exiting."""

    def error(self, message: str):  # type: ignore[override]
        raise OptionParseError(message)


def _usage_formatter(prog: str) -> argparse.HelpFormatter:
    return argparse.RawDescriptionHelpFormatter(prog, width=USAGE_WIDTH)


class Command:
    """One sub-command: description, option schema and :meth:`handle`.

    Subclasses must implement :meth:`handle`; they usually also set
    ``description`` and override :meth:`configure_parser`::

        class GreetCommand(Command):
            description = "Say hello"

            def configure_parser(self, parser):
                parser.add_argument("--name", required=True)

            def handle(self, args):
                self.out(f"Hello, {args.name}!")
    """

    description: str = ""

    def __init__(self) -> None:
        self._name: str | None = None
        self._program: str = ""
        self._user_data: UserData | None = None
        self._out: TextIO | None = None
        self._err: TextIO | None = None
        self.verbose_enabled = True

    # ---------- Binding (done by the dispatcher) ----------

    def bind(
        self,
        *,
        name: str,
        program: str,
        out: TextIO | None = None,
        err: TextIO | None = None,
        verbose: bool = True,
    ) -> None:
        """Assign the dispatch-time attributes: name, program name and sinks."""
        self._name = name
        self._program = program
        self._out = out
        self._err = err
        self.verbose_enabled = verbose

    def bind_user_data(self, user_data: UserData) -> None:
        self._user_data = user_data

    @property
    def name(self) -> str:
        """Name under which the command was looked up."""
        if self._name is None:
            raise CommandNotBound(f"{type(self).__name__} has no name assigned")
        return self._name

    @property
    def program(self) -> str:
        return self._program

    @property
    def user_data(self) -> UserData:
        """Settings of the running program."""
        if self._user_data is None:
            raise CommandNotBound(f"{type(self).__name__} has no user data assigned")
        return self._user_data

    @property
    def out_stream(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err_stream(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    # ---------- Schema and help ----------

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        """Declare this command's options on *parser*.  Default: none."""

    def usage_line(self) -> str:
        """Text after the program name in the usage header.

        Defaults to the command name; commands taking positional
        arguments should override it.
        """
        return self.name

    def extra_help(self) -> str:
        """Additional help text printed after the options.  Default: empty."""
        return ""

    def build_parser(self) -> CommandArgumentParser:
        """Return a fresh parser for this command's options."""
        parser = CommandArgumentParser(
            prog=f"{self._program} {self.name}".strip(),
            usage=f"{self._program} {self.usage_line()}".strip(),
            description=self.description or None,
            epilog=self.extra_help() or None,
            formatter_class=_usage_formatter,
            add_help=False,
            allow_abbrev=False,
        )
        # usage goes to arbitrary sinks; keep it free of ANSI codes (3.14+)
        parser.color = False
        self.configure_parser(parser)
        return parser

    def parse(self, argv: list[str]) -> argparse.Namespace:
        """Parse *argv* against the option schema, raising :class:`OptionParseError`."""
        return self.build_parser().parse_args(argv)

    def format_usage(self) -> str:
        return self.build_parser().format_help()

    def print_usage(self, stream: TextIO | None = None) -> None:
        (stream or self.err_stream).write(self.format_usage())

    # ---------- Execution ----------

    def handle(self, args: argparse.Namespace) -> None:
        """Execute the command on the parsed *args*."""
        raise NotImplementedError(f"{type(self).__name__} does not implement handle()")

    def die(self, message: str, status: int = 1) -> NoReturn:
        """Stop the command; the dispatcher prints *message* and exits with *status*."""
        raise CommandFailed(message, status)

    def usage(self, message: str | None = None) -> NoReturn:
        """Stop the command; the dispatcher prints *message* (if any) and this command's usage."""
        raise UsageRequested(message)

    # ---------- Output ----------

    def out(self, message: str) -> None:
        print(message, file=self.out_stream)

    def warn(self, message: str) -> None:
        print(message, file=self.err_stream)

    def verbose(self, message: str) -> None:
        """Like :meth:`out`, but only when verbose output is enabled."""
        if self.verbose_enabled:
            self.out(message)
