# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Informational command: global config locations and effective settings."""

from __future__ import annotations

import argparse
import os

from ...command import Command
from ...lib._util.ansi import gray as _gray, supports_color as _supports_color, yes_no as _yes_no
from ...lib.core.config import (
    InvalidConfigError,
    config_root as _config_root,
    get_missing_user_data_policy as _get_missing_user_data_policy,
    get_noisy as _get_noisy,
    get_verbose as _get_verbose,
    global_config_path as _global_config_path,
    global_config_search_paths as _global_config_search_paths,
    state_root as _state_root,
)


class ConfigCommand(Command):
    description = "Show configuration paths and effective settings"

    def handle(self, args: argparse.Namespace) -> None:
        color_enabled = _supports_color(self.out_stream)

        self.out("Configuration (read):")
        gcfg = _global_config_path()
        self.out(
            f"- Global config file: {_gray(str(gcfg), color_enabled)} "
            f"(exists: {_yes_no(gcfg.is_file(), color_enabled)})"
        )
        paths = _global_config_search_paths()
        if len(paths) > 1:
            self.out("- Global config search order:")
            for p in paths:
                self.out(
                    f"  • {_gray(str(p), color_enabled)} "
                    f"(exists: {_yes_no(p.is_file(), color_enabled)})"
                )

        croot = _config_root()
        self.out(
            f"- Config root (user data files): {_gray(str(croot), color_enabled)} "
            f"(exists: {_yes_no(croot.is_dir(), color_enabled)})"
        )

        self.out("Writable locations (write):")
        sroot = _state_root()
        self.out(
            f"- State root: {_gray(str(sroot), color_enabled)} "
            f"(exists: {_yes_no(sroot.is_dir(), color_enabled)})"
        )
        self.out(f"- Debug log: {_gray(str(sroot / 'subctl.log'), color_enabled)}")

        self.out("Settings:")
        self.out(f"- output.noisy: {_yes_no(_get_noisy(), color_enabled)}")
        self.out(f"- output.verbose: {_yes_no(_get_verbose(), color_enabled)}")
        try:
            missing = _get_missing_user_data_policy()
        except InvalidConfigError as e:
            self.die(str(e))
        self.out(f"- user_data.missing: {missing}")

        self.out("Environment overrides (if set):")
        for var in (
            "SUBCTL_CONFIG_FILE",
            "SUBCTL_CONFIG_DIR",
            "SUBCTL_STATE_DIR",
            "XDG_CONFIG_HOME",
        ):
            val = os.environ.get(var)
            if val is not None:
                self.out(f"- {var}={_gray(val, color_enabled)}")
