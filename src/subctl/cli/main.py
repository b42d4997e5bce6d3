#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

from ..dispatcher import Dispatcher
from ..registry import CommandRegistry
from .commands.info import ConfigCommand
from .commands.user_data import UserDataCommand


class SubctlCli(Dispatcher):
    """The ``subctl`` tool itself; keeps no user data of its own."""

    program_name = "subctl"

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("missing_user_data", "ephemeral")
        super().__init__(**kwargs)

    def register_commands(self, registry: CommandRegistry) -> None:
        registry.register("config", ConfigCommand)
        registry.register("user-data", UserDataCommand)


def main() -> None:
    SubctlCli().main()


if __name__ == "__main__":
    main()
