# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Inspect or edit the stored user data of a subctl-based program."""

from __future__ import annotations

import argparse
from pathlib import Path

from ...command import Command
from ...lib.core.config import default_user_data_path
from ...lib.store.properties import PropertyStore
from ...lib.store.user_data import UserData


def _parse_assignment(text: str) -> tuple[str, str] | None:
    field, sep, value = text.partition("=")
    if not sep or not field:
        return None
    return field, value


class UserDataCommand(Command):
    description = "Show or set the stored user data of a program"

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("program", help="Program whose user data to open")
        parser.add_argument("component", nargs="?", help="Only show (or set) this component")
        parser.add_argument(
            "--set",
            dest="assignments",
            action="append",
            default=[],
            metavar="FIELD=VALUE",
            help="Store FIELD=VALUE in the component (repeatable)",
        )
        parser.add_argument(
            "--file",
            type=Path,
            default=None,
            help="Backing file to use instead of the program's default location",
        )

    def usage_line(self) -> str:
        return f"{self.name} <program> [component] [--set FIELD=VALUE ...] [--file PATH]"

    def extra_help(self) -> str:
        return (
            "Without a component every stored component is listed.  The default\n"
            "file is <config root>/<program>/user-data.properties."
        )

    def handle(self, args: argparse.Namespace) -> None:
        path = args.file or default_user_data_path(args.program)

        if args.assignments:
            if not args.component:
                self.usage("--set requires a component")
            fields: dict[str, str | None] = {}
            for text in args.assignments:
                parsed = _parse_assignment(text)
                if parsed is None:
                    self.die(f"Invalid assignment {text!r} (expected FIELD=VALUE)")
                field, value = parsed
                fields[field] = value
            user_data = UserData(PropertyStore.load(path))
            user_data.store(args.component, fields)
            user_data.properties.flush(path)
            self.verbose(f"Saved {len(fields)} field(s) of '{args.component}' to {path}")
            return

        if not path.is_file():
            self.die(f"No user data for '{args.program}' at {path}")
        user_data = UserData(PropertyStore.load(path))

        if args.component:
            values = user_data.fetch(args.component)
            if not values:
                self.out(f"No fields stored for component '{args.component}'")
                return
            for field in sorted(values):
                self.out(f"{field}={values[field]}")
            return

        components = user_data.components()
        if not components:
            self.out(f"No user data stored in {path}")
            return
        self.out(f"User data for '{args.program}' ({path}):")
        for component in components:
            self.out(f"[{component}]")
            prefix = component + "."
            for key in sorted(user_data.properties):
                if key.rpartition(".")[0] == component:
                    self.out(f"  {key[len(prefix):]} = {user_data.properties[key]}")
